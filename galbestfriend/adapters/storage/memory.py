"""
In-memory preference store
"""

import copy
from typing import Any

from ...domain.ports.storage_port import IPreferenceStore


class MemoryPreferenceStore(IPreferenceStore):
    """Process-local store for tests and sessions without a data directory"""

    def __init__(self):
        self._blobs: dict[str, dict[str, Any]] = {}

    async def save(self, key: str, payload: dict[str, Any]) -> None:
        self._blobs[key] = copy.deepcopy(payload)

    async def load(self, key: str) -> dict[str, Any] | None:
        blob = self._blobs.get(key)
        return copy.deepcopy(blob) if blob is not None else None

    async def delete(self, key: str) -> bool:
        return self._blobs.pop(key, None) is not None
