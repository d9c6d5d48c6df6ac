"""
Preference persistence
Best-effort save and restore of the user profile blob
"""

import asyncio
import time
from collections.abc import Callable
from typing import Any

from ...core.logging import get_logger
from ..models.profile import COLOR_THEMES, UserProfile
from ..ports.storage_port import IPreferenceStore

logger = get_logger(__name__)

STATE_KEY = "galBestfriend_state"


class PreferencePersistence:
    """
    Saves ``{user, timestamp}`` under a fixed key

    Every storage failure is logged at debug level and otherwise ignored;
    the chat never depends on persistence.
    """

    def __init__(self, store: IPreferenceStore, key: str = STATE_KEY):
        self.store = store
        self.key = key

    @staticmethod
    def snapshot(profile: UserProfile) -> dict[str, Any]:
        return {"user": profile.to_dict(), "timestamp": int(time.time() * 1000)}

    async def save(self, profile: UserProfile) -> bool:
        try:
            await self.store.save(self.key, self.snapshot(profile))
            return True
        except Exception as e:
            logger.debug(f"Preference save ignored: {e!r}")
            return False

    async def restore(self, profile: UserProfile) -> bool:
        """Apply the saved color theme to ``profile``; nothing else is restored"""
        try:
            state = await self.store.load(self.key)
        except Exception as e:
            logger.debug(f"Preference load ignored: {e!r}")
            return False

        if not isinstance(state, dict):
            return False
        user = state.get("user")
        theme = user.get("color_theme") if isinstance(user, dict) else None
        if theme not in COLOR_THEMES:
            return False
        profile.color_theme = theme
        return True


class PreferenceAutosaver:
    """Periodically saves the current profile in a background task"""

    def __init__(
        self,
        persistence: PreferencePersistence,
        profile_getter: Callable[[], UserProfile | None],
        interval: float = 30.0,
    ):
        self.persistence = persistence
        self.profile_getter = profile_getter
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.running:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def save_now(self) -> bool:
        profile = self.profile_getter()
        if profile is None:
            return False
        return await self.persistence.save(profile)

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            await self.save_now()
