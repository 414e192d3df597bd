"""Tile and system event dispatch."""

from jive_sdk.events.catalog import TileServices, register_base_events
from jive_sdk.events.names import GLOBAL_EVENTS, PUSH_QUEUE_EVENTS, GlobalEvents, TileEvents
from jive_sdk.events.registry import EventRegistry

__all__ = [
    "GLOBAL_EVENTS",
    "PUSH_QUEUE_EVENTS",
    "EventRegistry",
    "GlobalEvents",
    "TileEvents",
    "TileServices",
    "register_base_events",
]
