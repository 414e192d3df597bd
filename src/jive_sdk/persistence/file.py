"""JSON file persistence.

Storage layout:
~/.jive-sdk/persistence/
    community.json      # {key: record} for the "community" collection

Design notes:
- One JSON file per collection, loaded lazily into an in-memory index
- Atomic writes using temp file + rename
- Files are chmod 0600 since records carry client secrets and tokens
"""

import json
import logging
import os
import stat
from pathlib import Path
from typing import Any

from jive_sdk.config import Settings, get_config_dir
from jive_sdk.persistence.memory import matches

logger = logging.getLogger(__name__)


class FilePersistence:
    """File-backed persistence for single-node add-on services."""

    def __init__(self, base_path: Path | None = None, settings: Settings | None = None):
        if base_path is None:
            base_path = get_config_dir(settings) / "persistence"
        self.base_path = base_path
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._cache: dict[str, dict[str, dict[str, Any]]] = {}

    def _path(self, collection: str) -> Path:
        return self.base_path / f"{collection}.json"

    def _load(self, collection: str) -> dict[str, dict[str, Any]]:
        if collection in self._cache:
            return self._cache[collection]

        path = self._path(collection)
        data: dict[str, dict[str, Any]] = {}
        if path.exists():
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            logger.debug("Loaded %d %s records from %s", len(data), collection, path)
        self._cache[collection] = data
        return data

    def _write(self, collection: str, data: dict[str, dict[str, Any]]) -> None:
        path = self._path(collection)
        temp_path = path.with_suffix(".tmp")
        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.chmod(temp_path, stat.S_IRUSR | stat.S_IWUSR)
            temp_path.replace(path)
        except OSError:
            if temp_path.is_file():
                temp_path.unlink()
            raise

    async def save(self, collection: str, key: str, record: dict[str, Any]) -> dict[str, Any]:
        data = self._load(collection)
        updated = {**data, key: json.loads(json.dumps(record))}
        self._write(collection, updated)
        self._cache[collection] = updated
        logger.debug("Saved %s record %s", collection, key)
        return record

    async def find(self, collection: str, criteria: dict[str, Any]) -> list[dict[str, Any]]:
        data = self._load(collection)
        return [json.loads(json.dumps(r)) for r in data.values() if matches(r, criteria)]
