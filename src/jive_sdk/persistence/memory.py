# In-memory persistence, the default for tests and development.
# Created: 2026-02-11

from __future__ import annotations

import copy
from typing import Any


def matches(record: dict[str, Any], criteria: dict[str, Any]) -> bool:
    return all(record.get(k) == v for k, v in criteria.items())


class MemoryPersistence:
    """Stores records in process memory. Nothing survives a restart."""

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}

    async def save(self, collection: str, key: str, record: dict[str, Any]) -> dict[str, Any]:
        self._collections.setdefault(collection, {})[key] = copy.deepcopy(record)
        return record

    async def find(self, collection: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        records = self._collections.get(collection, {}).values()
        return [copy.deepcopy(r) for r in records if matches(r, criteria)]
