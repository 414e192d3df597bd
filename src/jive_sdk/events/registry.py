# Event registry - handler tables for tile definition, system and local events.
# Created: 2026-02-12

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


def _event_name(event: str | Enum) -> str:
    return event.value if isinstance(event, Enum) else str(event)


async def _settle(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class DefinitionListeners:
    """``category -> event -> handlers``, one slot per handler reference.

    Categories are tile definition names. Adding a handler that is already
    registered for the same category and event is a no-op.
    """

    def __init__(self) -> None:
        self._map: dict[str, dict[str, list[Handler]]] = {}

    def add(self, category: str, event: str, handler: Handler) -> bool:
        """Register ``handler``. Returns False if it was already present."""
        handlers = self._map.setdefault(category, {}).setdefault(event, [])
        if handler in handlers:
            return False
        handlers.append(handler)
        return True

    def get(self, category: str, event: str) -> list[Handler] | None:
        return self._map.get(category, {}).get(event)

    def clear(self) -> None:
        self._map.clear()


class SystemListeners:
    """``event -> handlers``; several subsystems may contribute to one event."""

    def __init__(self) -> None:
        self._map: dict[str, list[Handler]] = {}

    def add(self, event: str, handler: Handler) -> None:
        self._map.setdefault(event, []).append(handler)

    def get(self, event: str) -> list[Handler] | None:
        return self._map.get(event)

    def clear(self) -> None:
        self._map.clear()


class LocalEmitter:
    """In-process emitter. Listeners run in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Handler]] = {}

    def on(self, event: str, listener: Handler) -> None:
        self._listeners.setdefault(event, []).append(listener)

    def listeners(self, event: str) -> list[Handler]:
        return list(self._listeners.get(event, []))

    async def emit(self, event: str, context: Any = None) -> bool:
        """Invoke every listener for ``event``. Returns True if any listened.

        A failing listener is logged and does not stop the ones after it.
        """
        listeners = self.listeners(event)
        for listener in listeners:
            try:
                await _settle(listener(context))
            except Exception:
                logger.exception("Listener for %s failed", event)
        return bool(listeners)

    def remove_all_listeners(self) -> None:
        self._listeners.clear()


class EventRegistry:
    """Process-wide event table.

    Usage:
        events = EventRegistry()
        events.add_system_listener("newInstance", on_new_instance)
        events.add_definition_listener("newInstance", "my-tile", on_tile_instance)
        await events.fire("newInstance", context, category="my-tile")
        await events.emit("registeredJiveInstanceSuccess", community)
    """

    def __init__(self) -> None:
        self.definitions = DefinitionListeners()
        self.system = SystemListeners()
        self.emitter = LocalEmitter()

    def add_definition_listener(
        self,
        event: str | Enum,
        category: str,
        handler: Handler,
        description: str | None = None,
    ) -> None:
        """Add a tile-contributed handler; duplicates per category are ignored."""
        name = _event_name(event)
        logger.debug("Registered event for %s: '%s' %s", category, name, description or "")
        if not self.definitions.add(category, name, handler):
            logger.warning(
                "Event %s eventListener %s already exists; ignoring event listener add.",
                name,
                category,
            )

    def add_system_listener(
        self, event: str | Enum, handler: Handler, description: str | None = None
    ) -> None:
        """Add a system-level handler. The same event may have many."""
        name = _event_name(event)
        logger.debug("Registered system event %s: %s", name, description or "no description")
        self.system.add(name, handler)

    def add_local_listener(self, event: str | Enum, handler: Handler) -> None:
        """Subscribe ``handler(context, event)`` to the local emitter."""
        name = _event_name(event)

        def listener(context: Any) -> Any:
            return handler(context, name)

        self.emitter.on(name, listener)

    def lookup(self, category: str, event: str | Enum) -> list[Handler] | None:
        """Handlers registered for ``category`` and ``event``, or None."""
        return self.definitions.get(category, _event_name(event))

    def system_handlers(self, event: str | Enum) -> list[Handler] | None:
        return self.system.get(_event_name(event))

    async def fire(
        self, event: str | Enum, context: Any = None, category: str | None = None
    ) -> list[Any]:
        """Run the handler chain for an event and collect the results.

        With ``category`` the tile definition handlers run, otherwise the
        system handlers. Handlers run in the order they were added; an error
        stops the chain and propagates.
        """
        name = _event_name(event)
        if category is not None:
            handlers = self.lookup(category, name)
        else:
            handlers = self.system_handlers(name)

        results = []
        for handler in list(handlers or []):
            results.append(await _settle(handler(context)))
        return results

    async def emit(self, event: str | Enum, context: Any = None) -> bool:
        return await self.emitter.emit(_event_name(event), context)

    def reset(self) -> None:
        """Remove all handlers, including the baseline catalog."""
        self.definitions.clear()
        self.system.clear()
        self.emitter.remove_all_listeners()
