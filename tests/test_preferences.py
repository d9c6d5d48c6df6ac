"""
Preference persistence and storage adapter tests
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from galbestfriend.adapters.storage import FilePreferenceStore, MemoryPreferenceStore
from galbestfriend.core.exceptions import PersistenceError
from galbestfriend.domain.models.profile import UserProfile
from galbestfriend.domain.services.preferences import (
    STATE_KEY,
    PreferenceAutosaver,
    PreferencePersistence,
)


class TestPreferencePersistence:
    def setup_method(self):
        self.store = MemoryPreferenceStore()
        self.persistence = PreferencePersistence(self.store)

    @pytest.mark.asyncio
    async def test_save_writes_snapshot(self):
        saved = await self.persistence.save(UserProfile(name="Sam", color_theme="sage"))

        state = await self.store.load(STATE_KEY)
        assert saved is True
        assert state["user"]["name"] == "Sam"
        assert state["user"]["color_theme"] == "sage"
        assert isinstance(state["timestamp"], int)

    @pytest.mark.asyncio
    async def test_restore_applies_only_color_theme(self):
        await self.persistence.save(UserProfile(name="Sam", tone_level=5, color_theme="ocean"))
        fresh = UserProfile()

        restored = await self.persistence.restore(fresh)

        assert restored is True
        assert fresh.color_theme == "ocean"
        assert fresh.name == ""
        assert fresh.tone_level == 3

    @pytest.mark.asyncio
    async def test_restore_ignores_unknown_theme(self):
        await self.store.save(STATE_KEY, {"user": {"color_theme": "neon"}, "timestamp": 1})
        fresh = UserProfile()

        assert await self.persistence.restore(fresh) is False
        assert fresh.color_theme == "rose"

    @pytest.mark.asyncio
    async def test_restore_with_nothing_saved(self):
        assert await self.persistence.restore(UserProfile()) is False

    @pytest.mark.asyncio
    async def test_store_failures_are_swallowed(self):
        store = Mock()
        store.save = AsyncMock(side_effect=PersistenceError("disk full"))
        store.load = AsyncMock(side_effect=OSError("unreadable"))
        persistence = PreferencePersistence(store)

        assert await persistence.save(UserProfile()) is False
        assert await persistence.restore(UserProfile()) is False


class TestFilePreferenceStore:
    @pytest.mark.asyncio
    async def test_save_load_delete(self, tmp_path):
        store = FilePreferenceStore(str(tmp_path))

        await store.save("galBestfriend_state", {"user": {"name": "Sam"}})

        assert (tmp_path / "galBestfriend_state.json").exists()
        assert not (tmp_path / "galBestfriend_state.tmp").exists()
        assert await store.load("galBestfriend_state") == {"user": {"name": "Sam"}}
        assert await store.delete("galBestfriend_state") is True
        assert await store.delete("galBestfriend_state") is False
        assert await store.load("galBestfriend_state") is None

    @pytest.mark.asyncio
    async def test_invalid_key(self, tmp_path):
        store = FilePreferenceStore(str(tmp_path))

        with pytest.raises(PersistenceError):
            await store.save("../escape", {})

    @pytest.mark.asyncio
    async def test_corrupt_file(self, tmp_path):
        store = FilePreferenceStore(str(tmp_path))
        (tmp_path / "state.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(PersistenceError):
            await store.load("state")


class TestPreferenceAutosaver:
    @pytest.mark.asyncio
    async def test_periodic_save(self):
        store = MemoryPreferenceStore()
        profile = UserProfile(name="Sam")
        autosaver = PreferenceAutosaver(PreferencePersistence(store), lambda: profile, interval=0.01)

        autosaver.start()
        assert autosaver.running
        await asyncio.sleep(0.05)
        await autosaver.stop()

        assert not autosaver.running
        state = await store.load(STATE_KEY)
        assert state["user"]["name"] == "Sam"

    @pytest.mark.asyncio
    async def test_save_now_without_profile(self):
        autosaver = PreferenceAutosaver(PreferencePersistence(MemoryPreferenceStore()), lambda: None)

        assert await autosaver.save_now() is False
        await autosaver.stop()
