# Persistence protocol - the interface community storage backends implement.
# Created: 2026-02-11

from typing import Any, Protocol


class PersistenceProtocol(Protocol):
    """Key/value record storage grouped by collection.

    Implement this to back the SDK with a real database (MongoDB, Postgres, ...).
    """

    async def save(self, collection: str, key: str, record: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace the record stored under ``key``."""
        ...

    async def find(self, collection: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        """Return records whose fields equal every value in ``criteria``."""
        ...
