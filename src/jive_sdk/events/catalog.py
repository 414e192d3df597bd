# Baseline event catalog - framework handlers registered at startup.
# Created: 2026-02-12

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Protocol

from jive_sdk.errors import ConfigurationError
from jive_sdk.events.names import GlobalEvents, TileEvents
from jive_sdk.events.registry import EventRegistry, Handler

logger = logging.getLogger(__name__)

FRAMEWORK = "Framework handler"


class TileServices(Protocol):
    """Tile operations the baseline handlers delegate to.

    Implemented by the add-on service (data pusher, comments, tile
    registration). Each method receives values taken from the event context.
    """

    async def push_data(self, tile_instance: Any, data: Any) -> Any: ...

    async def push_activity(self, tile_instance: Any, activity: Any) -> Any: ...

    async def push_comment(self, tile_instance: Any, comments_url: str, comment: Any) -> Any: ...

    async def comment_on_activity(self, activity: Any, comment: Any) -> Any: ...

    async def comment_on_activity_by_external_id(
        self, extstream: Any, external_activity_id: str, comment: Any
    ) -> Any: ...

    async def fetch_comments_on_activity(self, activity: Any, opts: Any) -> Any: ...

    async def fetch_all_comments_for_ext_stream(self, extstream: Any, opts: Any) -> Any: ...

    async def registration(self, context: Any) -> Any: ...

    async def unregistration(self, context: Any) -> Any: ...

    async def get_paginated(self, extstream: Any, comments_url: str) -> Any: ...

    async def fetch_extended_properties(self, instance: Any) -> Any: ...

    async def push_extended_properties(self, instance: Any, props: Any) -> Any: ...

    async def remove_extended_properties(self, instance: Any) -> Any: ...


@dataclass(frozen=True)
class BaseEvent:
    event: str
    handler: Handler
    description: str | None = FRAMEWORK


def _log_push(kind: str) -> Handler:
    def handler(context: dict[str, Any]) -> None:
        instance = context.get("theInstance") or {}
        response = context.get("response")
        logger.info(
            "%s push to %s %s %s",
            kind,
            instance.get("url"),
            getattr(response, "status_code", ""),
            instance.get("name"),
        )

    return handler


def _log_lifecycle(message: str) -> Handler:
    def handler(context: Any) -> None:
        logger.info("%s: %s", message, context)

    return handler


def build_base_events(
    services: TileServices,
    register: Callable[[dict[str, Any]], Awaitable[Any]],
) -> list[BaseEvent]:
    """Build the framework handler list.

    Args:
        services: Tile operations the push/comment/property events delegate to.
        register: Coroutine processing a client app registration block.
    """
    s = services
    return [
        BaseEvent(GlobalEvents.NEW_INSTANCE.value, _log_lifecycle("A new instance was created")),
        BaseEvent(GlobalEvents.INSTANCE_UPDATED.value, _log_lifecycle("An instance was updated")),
        BaseEvent(
            GlobalEvents.INSTANCE_REMOVED.value, _log_lifecycle("Instance has been destroyed")
        ),
        BaseEvent(GlobalEvents.DATA_PUSHED.value, _log_push("Data")),
        BaseEvent(GlobalEvents.ACTIVITY_PUSHED.value, _log_push("Activity")),
        BaseEvent(GlobalEvents.COMMENT_PUSHED.value, _log_push("Comment")),
        BaseEvent(
            TileEvents.PUSH_DATA_TO_JIVE.value,
            lambda ctx: s.push_data(ctx.get("tileInstance"), ctx.get("data")),
        ),
        BaseEvent(
            TileEvents.PUSH_ACTIVITY_TO_JIVE.value,
            lambda ctx: s.push_activity(ctx.get("tileInstance"), ctx.get("activity")),
        ),
        BaseEvent(
            TileEvents.PUSH_COMMENT_TO_JIVE.value,
            lambda ctx: s.push_comment(
                ctx.get("tileInstance"), ctx.get("commentsURL"), ctx.get("comment")
            ),
        ),
        BaseEvent(
            TileEvents.COMMENT_ON_ACTIVITY.value,
            lambda ctx: s.comment_on_activity(ctx.get("activity"), ctx.get("comment")),
        ),
        BaseEvent(
            TileEvents.COMMENT_ON_ACTIVITY_BY_EXTERNAL_ID.value,
            lambda ctx: s.comment_on_activity_by_external_id(
                ctx.get("extstream"), ctx.get("externalActivityID"), ctx.get("comment")
            ),
        ),
        BaseEvent(
            TileEvents.FETCH_COMMENTS_ON_ACTIVITY.value,
            lambda ctx: s.fetch_comments_on_activity(ctx.get("activity"), ctx.get("opts")),
        ),
        BaseEvent(
            TileEvents.FETCH_ALL_COMMENTS_FOR_EXT_STREAM.value,
            lambda ctx: s.fetch_all_comments_for_ext_stream(ctx.get("extstream"), ctx.get("opts")),
        ),
        BaseEvent(TileEvents.INSTANCE_REGISTRATION.value, s.registration, None),
        BaseEvent(TileEvents.INSTANCE_UNREGISTRATION.value, s.unregistration, None),
        BaseEvent(TileEvents.CLIENT_APP_REGISTRATION.value, register),
        BaseEvent(
            TileEvents.GET_PAGINATED_RESULTS.value,
            lambda ctx: s.get_paginated(ctx.get("extstream"), ctx.get("commentsURL")),
        ),
        BaseEvent(
            TileEvents.GET_EXTERNAL_PROPS.value,
            lambda ctx: s.fetch_extended_properties(ctx.get("instance")),
        ),
        BaseEvent(
            TileEvents.SET_EXTERNAL_PROPS.value,
            lambda ctx: s.push_extended_properties(ctx.get("instance"), ctx.get("props")),
        ),
        BaseEvent(
            TileEvents.DELETE_EXTERNAL_PROPS.value,
            lambda ctx: s.remove_extended_properties(ctx.get("instance")),
        ),
    ]


def register_base_events(
    registry: EventRegistry,
    services: TileServices,
    register: Callable[[dict[str, Any]], Awaitable[Any]],
) -> None:
    """Add the baseline catalog to ``registry`` as system listeners."""
    for base in build_base_events(services, register):
        registry.add_system_listener(base.event, base.handler, base.description)


class UnconfiguredTileServices:
    """Stand-in used when the add-on service supplies no TileServices.

    Every operation raises, so a tile event fired without a backing
    implementation fails loudly instead of doing nothing.
    """

    def __getattr__(self, name: str) -> Callable[..., Awaitable[Any]]:
        if name.startswith("_"):
            raise AttributeError(name)

        async def unavailable(*args: Any, **kwargs: Any) -> Any:
            raise ConfigurationError(f"No tile services configured for {name}")

        return unavailable
