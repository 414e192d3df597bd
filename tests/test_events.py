# Tests for events/registry.py and events/catalog.py
# Created: 2026-02-13

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from jive_sdk.config import Settings
from jive_sdk.errors import ConfigurationError, JiveSDKError
from jive_sdk.events.catalog import UnconfiguredTileServices, build_base_events
from jive_sdk.events.names import GLOBAL_EVENTS, PUSH_QUEUE_EVENTS, GlobalEvents, TileEvents
from jive_sdk.events.registry import EventRegistry
from jive_sdk.persistence.memory import MemoryPersistence
from jive_sdk.sdk import JiveSDK


@pytest.fixture
def registry():
    return EventRegistry()


def _handler():
    return MagicMock(return_value=None)


class TestDefinitionListeners:
    def test_duplicate_handler_suppressed(self, registry, caplog):
        handler = _handler()
        registry.add_definition_listener("newInstance", "my-tile", handler)
        with caplog.at_level(logging.WARNING):
            registry.add_definition_listener("newInstance", "my-tile", handler)

        assert registry.lookup("my-tile", "newInstance") == [handler]
        assert "already exists" in caplog.text

    def test_distinct_handlers_kept_in_order(self, registry):
        first, second = _handler(), _handler()
        registry.add_definition_listener("newInstance", "my-tile", first)
        registry.add_definition_listener("newInstance", "my-tile", second)
        assert registry.lookup("my-tile", "newInstance") == [first, second]

    def test_same_handler_other_category(self, registry):
        handler = _handler()
        registry.add_definition_listener("newInstance", "tile-a", handler)
        registry.add_definition_listener("newInstance", "tile-b", handler)
        assert registry.lookup("tile-a", "newInstance") == [handler]
        assert registry.lookup("tile-b", "newInstance") == [handler]

    def test_lookup_missing(self, registry):
        assert registry.lookup("nope", "newInstance") is None
        registry.add_definition_listener("newInstance", "my-tile", _handler())
        assert registry.lookup("my-tile", "instanceRemoved") is None

    def test_enum_and_string_names_match(self, registry):
        handler = _handler()
        registry.add_definition_listener(GlobalEvents.NEW_INSTANCE, "my-tile", handler)
        assert registry.lookup("my-tile", "newInstance") == [handler]


class TestSystemListeners:
    def test_duplicates_permitted(self, registry):
        handler = _handler()
        registry.add_system_listener("dataPushed", handler)
        registry.add_system_listener("dataPushed", handler)
        assert len(registry.system_handlers("dataPushed")) == 2

    async def test_fire_invokes_all_in_order(self, registry):
        calls = []
        registry.add_system_listener("dataPushed", lambda ctx: calls.append(("a", ctx)))
        registry.add_system_listener("dataPushed", lambda ctx: calls.append(("b", ctx)))

        await registry.fire("dataPushed", {"x": 1})

        assert calls == [("a", {"x": 1}), ("b", {"x": 1})]

    async def test_fire_awaits_async_handlers(self, registry):
        handler = AsyncMock(return_value="pushed")
        registry.add_system_listener(TileEvents.PUSH_DATA_TO_JIVE, handler)

        results = await registry.fire("pushDataToJive", {"data": 1})

        assert results == ["pushed"]
        handler.assert_awaited_once_with({"data": 1})

    async def test_fire_definition_handlers(self, registry):
        system = _handler()
        tile = _handler()
        registry.add_system_listener("newInstance", system)
        registry.add_definition_listener("newInstance", "my-tile", tile)

        await registry.fire("newInstance", {"id": 1}, category="my-tile")

        tile.assert_called_once_with({"id": 1})
        system.assert_not_called()

    async def test_fire_without_handlers(self, registry):
        assert await registry.fire("nothing") == []

    async def test_handler_error_propagates(self, registry):
        after = _handler()
        registry.add_system_listener("dataPushed", MagicMock(side_effect=RuntimeError("boom")))
        registry.add_system_listener("dataPushed", after)

        with pytest.raises(RuntimeError, match="boom"):
            await registry.fire("dataPushed", {})
        after.assert_not_called()


class TestLocalListeners:
    async def test_handler_receives_context_and_event(self, registry):
        handler = _handler()
        registry.add_local_listener("registeredJiveInstanceSuccess", handler)

        assert await registry.emit("registeredJiveInstanceSuccess", {"jiveUrl": "x"}) is True
        handler.assert_called_once_with({"jiveUrl": "x"}, "registeredJiveInstanceSuccess")

    async def test_fifo_order(self, registry):
        order = []
        registry.add_local_listener("e", lambda ctx, ev: order.append(1))
        registry.add_local_listener("e", lambda ctx, ev: order.append(2))
        await registry.emit("e")
        assert order == [1, 2]

    async def test_failing_listener_does_not_stop_others(self, registry):
        after = _handler()
        registry.add_local_listener("e", MagicMock(side_effect=RuntimeError("boom")))
        registry.add_local_listener("e", after)

        await registry.emit("e", 1)

        after.assert_called_once_with(1, "e")

    async def test_emit_without_listeners(self, registry):
        assert await registry.emit("nobody") is False


class TestReset:
    async def test_reset_clears_everything(self, registry):
        local = _handler()
        registry.add_definition_listener("newInstance", "my-tile", _handler())
        registry.add_system_listener("newInstance", _handler())
        registry.add_local_listener("newInstance", local)

        registry.reset()

        assert registry.lookup("my-tile", "newInstance") is None
        assert registry.system_handlers("newInstance") is None
        await registry.emit("newInstance", {})
        local.assert_not_called()

    def test_baseline_not_restored(self, tmp_path):
        sdk = JiveSDK(
            settings=Settings(config_dir=tmp_path),
            persistence=MemoryPersistence(),
            transport=MagicMock(),
        )
        assert sdk.events.system_handlers("newInstance") is not None

        sdk.events.reset()

        assert sdk.events.system_handlers("newInstance") is None
        assert sdk.events.system_handlers("clientAppRegistration") is None


class TestBaseCatalog:
    def test_event_lists(self):
        assert "registeredJiveInstanceSuccess" in GLOBAL_EVENTS
        assert PUSH_QUEUE_EVENTS == ("pushDataToJive", "pushActivityToJive", "pushCommentToJive")

    def test_every_event_registered(self, tmp_path):
        sdk = JiveSDK(
            settings=Settings(config_dir=tmp_path),
            persistence=MemoryPersistence(),
            transport=MagicMock(),
        )
        for event in list(GlobalEvents)[:6] + list(TileEvents):
            assert sdk.events.system_handlers(event), event

    async def test_tile_events_delegate_to_services(self):
        services = AsyncMock()
        registry = EventRegistry()
        for base in build_base_events(services, AsyncMock()):
            registry.add_system_listener(base.event, base.handler, base.description)

        await registry.fire("pushDataToJive", {"tileInstance": "ti", "data": {"d": 1}})
        services.push_data.assert_awaited_once_with("ti", {"d": 1})

        await registry.fire(
            "pushCommentToJive", {"tileInstance": "ti", "commentsURL": "u", "comment": "c"}
        )
        services.push_comment.assert_awaited_once_with("ti", "u", "c")

        await registry.fire(
            "commentOnActivityByExternalID",
            {"extstream": "es", "externalActivityID": "ext-1", "comment": "c"},
        )
        services.comment_on_activity_by_external_id.assert_awaited_once_with("es", "ext-1", "c")

        await registry.fire("setExternalProps", {"instance": "i", "props": {"p": 1}})
        services.push_extended_properties.assert_awaited_once_with("i", {"p": 1})

        await registry.fire("unregistration", {"id": 9})
        services.unregistration.assert_awaited_once_with({"id": 9})

    async def test_client_app_registration_delegates_to_register(self):
        register = AsyncMock(return_value="community")
        registry = EventRegistry()
        for base in build_base_events(AsyncMock(), register):
            registry.add_system_listener(base.event, base.handler, base.description)

        assert await registry.fire("clientAppRegistration", {"jiveUrl": "x"}) == ["community"]
        register.assert_awaited_once_with({"jiveUrl": "x"})

    async def test_lifecycle_handlers_log(self, caplog):
        registry = EventRegistry()
        for base in build_base_events(AsyncMock(), AsyncMock()):
            registry.add_system_listener(base.event, base.handler, base.description)

        with caplog.at_level(logging.INFO, logger="jive_sdk.events.catalog"):
            await registry.fire("dataPushed", {"theInstance": {"url": "https://t", "name": "tile"}})

        assert "Data push to https://t" in caplog.text

    async def test_unconfigured_services_raise(self):
        registry = EventRegistry()
        for base in build_base_events(UnconfiguredTileServices(), AsyncMock()):
            registry.add_system_listener(base.event, base.handler, base.description)

        with pytest.raises(ConfigurationError, match="push_data"):
            await registry.fire("pushDataToJive", {})
        assert issubclass(ConfigurationError, JiveSDKError)
