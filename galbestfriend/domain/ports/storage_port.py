"""
Preference store port
Best-effort key-value persistence for user preferences
"""

from abc import ABC, abstractmethod
from typing import Any


class IPreferenceStore(ABC):
    """
    Preference store interface

    A single JSON-compatible blob per key. Callers treat every failure as
    non-fatal.
    """

    @abstractmethod
    async def save(self, key: str, payload: dict[str, Any]) -> None:
        """
        Store a blob

        Args:
            key: storage key
            payload: JSON-compatible dict
        """

    @abstractmethod
    async def load(self, key: str) -> dict[str, Any] | None:
        """
        Read a blob

        Returns:
            dict | None: stored blob, None if absent
        """

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a blob; returns whether it existed"""
