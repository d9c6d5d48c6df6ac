"""
File preference store
One JSON file per key with atomic replacement
"""

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from ...core.exceptions import PersistenceError
from ...core.logging import get_logger
from ...domain.ports.storage_port import IPreferenceStore

logger = get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_\-]+$")


class FilePreferenceStore(IPreferenceStore):
    """
    File preference store

    Writes go to a temp file first and are moved into place, so a crash
    never leaves a half-written blob. File I/O runs in the default executor.
    """

    def __init__(self, data_dir: str = "data"):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._lock = asyncio.Lock()

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise PersistenceError(f"Invalid storage key: {key!r}", key=key)
        return self.data_dir / f"{key}.json"

    async def save(self, key: str, payload: dict[str, Any]) -> None:
        path = self._path(key)
        temp_file = path.with_suffix(".tmp")

        async with self._lock:
            loop = asyncio.get_running_loop()
            try:
                await loop.run_in_executor(None, self._write_json_file, temp_file, payload)
                temp_file.replace(path)
            except (OSError, TypeError, ValueError) as e:
                raise PersistenceError(f"Failed to save {key}: {e}", key=key) from e

    async def load(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        if not path.exists():
            return None

        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(None, self._read_json_file, path)
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Failed to load {key}: {e}", key=key) from e
        return data if isinstance(data, dict) else None

    async def delete(self, key: str) -> bool:
        path = self._path(key)
        async with self._lock:
            if not path.exists():
                return False
            path.unlink()
            logger.debug(f"Deleted preference blob {key}")
            return True

    @staticmethod
    def _read_json_file(path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def _write_json_file(path: Path, data: dict) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, separators=(",", ":"))
