"""
Chat session tests
"""

import asyncio
from unittest.mock import AsyncMock, Mock

import pytest

from galbestfriend.core.config import CompanionSettings
from galbestfriend.core.exceptions import SessionBusyError, ValidationError
from galbestfriend.domain.models.conversation import Role
from galbestfriend.domain.models.profile import FocusArea, ResponseStyle, UserProfile
from galbestfriend.domain.ports.reply_port import IReplyHandler
from galbestfriend.domain.services.crafter import ResponseCrafter
from galbestfriend.domain.services.session import (
    STATUS_READY,
    ChatSession,
    pacing_delay,
    regeneration_tone,
)


class StaticReplyHandler(IReplyHandler):
    """Returns a fixed reply and records the contexts it saw"""

    def __init__(self, text="From the proxy"):
        self.text = text
        self.calls = []

    async def reply(self, message, context):
        self.calls.append((message, context))
        return self.text


class FailingReplyHandler(IReplyHandler):
    async def reply(self, message, context):
        raise RuntimeError("upstream down")


class SlowReplyHandler(IReplyHandler):
    async def reply(self, message, context):
        await asyncio.sleep(1)
        return "too late"


class BlockingReplyHandler(IReplyHandler):
    def __init__(self):
        self.release = asyncio.Event()

    async def reply(self, message, context):
        await self.release.wait()
        return "finally"


class TestHelpers:
    def test_pacing_delay_bounds(self):
        assert pacing_delay("") == pytest.approx(0.8)
        assert pacing_delay("a" * 20) == pytest.approx(1.1)
        assert pacing_delay("a" * 1000) == 2.5

    @pytest.mark.parametrize("level,expected", [(1, 2), (2, 3), (3, 4), (4, 3), (5, 4)])
    def test_regeneration_tone(self, level, expected):
        assert regeneration_tone(level) == expected


class TestChatSessionLocal:
    """Replies from the local crafter"""

    def setup_method(self):
        self.sleep = AsyncMock()

    def _session(self, profile, openers, **kwargs):
        settings = kwargs.pop("settings", CompanionSettings(reply_timeout=0.5))
        return ChatSession(profile, settings=settings, openers=openers, sleep=self.sleep, **kwargs)

    def test_start_adds_greeting_and_prompt(self, profile, openers):
        session = self._session(profile, openers)

        turns = session.start()

        assert len(turns) == 2
        assert turns[0].content.startswith("Hey Sam!")
        assert all(turn.role is Role.ASSISTANT for turn in session.history)

    def test_start_without_situation_only_greets(self, openers):
        session = self._session(UserProfile(tone_level=5), openers)

        turns = session.start()

        assert [t.content for t in turns] == ["Hey friend. Let's get into it — what's happening?"]

    @pytest.mark.asyncio
    async def test_local_reply_is_paced(self, profile, openers):
        session = self._session(profile, openers)

        reply = await session.send_message("  I'm so angry, he ignored me  ")

        assert reply.source == "local"
        assert session.history[-2].role is Role.USER
        assert session.history[-2].content == "I'm so angry, he ignored me"
        assert session.history[-1] is reply.turn
        self.sleep.assert_awaited_once_with(pacing_delay(reply.text))
        assert session.is_typing is False
        assert session.status == STATUS_READY

    @pytest.mark.asyncio
    async def test_pacing_disabled(self, profile, openers, companion_settings):
        session = self._session(profile, openers, settings=companion_settings)

        await session.send_message("hello")

        self.sleep.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_advice_request_is_validated(self, profile, openers, companion_settings):
        session = self._session(profile, openers, settings=companion_settings)

        reply = await session.send_message("Should I text him back?")

        assert reply.validation is not None
        assert session.pending_response == reply.text
        assert session.pending_validation is reply.validation

        session.accept_response()

        assert session.pending_response is None
        assert session.pending_validation is None
        assert session.history[-1].content == reply.text

    @pytest.mark.asyncio
    async def test_short_statement_not_validated(self, profile, openers, companion_settings):
        session = self._session(profile, openers, settings=companion_settings)

        reply = await session.send_message("hey")

        assert reply.validation is None
        assert session.pending_validation is None

    @pytest.mark.asyncio
    async def test_blank_message_rejected(self, profile, openers):
        session = self._session(profile, openers)

        with pytest.raises(ValidationError):
            await session.send_message("   ")

        assert session.history == []

    @pytest.mark.asyncio
    async def test_analysis_window_is_bounded(self, profile, openers, companion_settings):
        session = self._session(profile, openers, settings=companion_settings)

        for i in range(7):
            await session.send_message(f"message {i}")

        assert len(session.analysis_window) == 5


class TestChatSessionExternal:
    """Delegation to a registered reply handler"""

    @pytest.mark.asyncio
    async def test_external_reply_used(self, profile, openers, companion_settings):
        handler = StaticReplyHandler()
        session = ChatSession(profile, settings=companion_settings, openers=openers)
        session.start()
        session.connect(handler)

        reply = await session.send_message("Should I text him back?")

        assert reply.source == "external"
        assert reply.text == "From the proxy"
        assert reply.validation is None
        message, context = handler.calls[0]
        assert message == "Should I text him back?"
        assert context.history[-1].role is Role.USER
        assert context.history[-1].content == message
        assert context.tone_level == 3
        assert context.situation == "romantic"

    @pytest.mark.asyncio
    async def test_history_forwarded_is_truncated(self, profile, openers, companion_settings):
        handler = StaticReplyHandler()
        session = ChatSession(profile, settings=companion_settings, openers=openers, reply_handler=handler)

        for i in range(8):
            await session.send_message(f"message {i}")

        _, context = handler.calls[-1]
        assert len(context.history) == 10
        assert context.history[-1].content == "message 7"

    @pytest.mark.asyncio
    async def test_failure_falls_back_to_local(self, profile, openers, companion_settings):
        session = ChatSession(
            profile, settings=companion_settings, openers=openers, reply_handler=FailingReplyHandler()
        )

        reply = await session.send_message("hello there")

        assert reply.source == "local"
        assert reply.text
        assert session.is_typing is False
        assert len(session.history) == 2

    @pytest.mark.asyncio
    async def test_timeout_falls_back_to_local(self, profile, openers):
        settings = CompanionSettings(pacing_enabled=False, reply_timeout=0.05)
        session = ChatSession(profile, settings=settings, openers=openers, reply_handler=SlowReplyHandler())

        reply = await session.send_message("hello there")

        assert reply.source == "local"
        assert session.status == STATUS_READY

    @pytest.mark.asyncio
    async def test_blank_external_reply_falls_back(self, profile, openers, companion_settings):
        session = ChatSession(
            profile, settings=companion_settings, openers=openers,
            reply_handler=StaticReplyHandler(text="   "),
        )

        reply = await session.send_message("hello there")

        assert reply.source == "local"

    @pytest.mark.asyncio
    async def test_second_send_while_pending_is_busy(self, profile, openers):
        handler = BlockingReplyHandler()
        settings = CompanionSettings(pacing_enabled=False, reply_timeout=5)
        session = ChatSession(profile, settings=settings, openers=openers, reply_handler=handler)

        first = asyncio.create_task(session.send_message("first"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        assert session.is_busy
        assert session.is_typing
        with pytest.raises(SessionBusyError):
            await session.send_message("second")
        with pytest.raises(SessionBusyError):
            await session.request_new_response()

        handler.release.set()
        reply = await first

        assert reply.text == "finally"
        assert [t.content for t in session.history] == ["first", "finally"]
        assert not session.is_busy


class TestRegeneration:
    @pytest.mark.asyncio
    async def test_regenerate_replaces_last_reply(self, openers, companion_settings):
        profile = UserProfile(name="Sam", tone_level=5)
        crafter = Mock(wraps=ResponseCrafter())
        session = ChatSession(profile, settings=companion_settings, openers=openers, crafter=crafter)
        session.start()
        await session.send_message("Should I text him back?")
        turns_before = len(session.history)

        reply = await session.request_new_response()

        assert profile.tone_level == 4
        assert crafter.craft.call_count == 2
        assert len(session.history) == turns_before
        assert session.history[-1] is reply.turn
        assert session.history[-2].content == "Should I text him back?"
        assert reply.text.startswith("Here's my take")

    @pytest.mark.asyncio
    async def test_regenerate_without_user_message(self, profile, openers, companion_settings):
        session = ChatSession(profile, settings=companion_settings, openers=openers)
        session.start()

        result = await session.request_new_response()

        assert result is None
        assert profile.tone_level == 3
        assert len(session.history) == 1


class TestSettings:
    def setup_method(self):
        self.session = ChatSession(UserProfile(), settings=CompanionSettings(pacing_enabled=False))

    def test_set_tone_level(self):
        self.session.set_tone_level(5)
        assert self.session.profile.tone_level == 5

        with pytest.raises(ValidationError):
            self.session.set_tone_level(7)

    def test_set_style_and_focus(self):
        self.session.set_response_style("brief")
        self.session.set_focus_area(FocusArea.PRACTICAL)

        assert self.session.profile.response_style is ResponseStyle.BRIEF
        assert self.session.profile.focus_area is FocusArea.PRACTICAL

        with pytest.raises(ValidationError):
            self.session.set_response_style("poetic")
        with pytest.raises(ValidationError):
            self.session.set_focus_area("spiritual")

    def test_update_settings_is_all_or_nothing(self):
        with pytest.raises(ValidationError):
            self.session.update_settings(tone_level=5, response_style="brief", focus_area="spiritual")

        assert self.session.profile.tone_level == 3
        assert self.session.profile.response_style is ResponseStyle.CONVERSATIONAL

        self.session.update_settings(tone_level=1, focus_area="perspective")

        assert self.session.profile.tone_level == 1
        assert self.session.profile.focus_area is FocusArea.PERSPECTIVE
        assert self.session.profile.response_style is ResponseStyle.CONVERSATIONAL

    def test_color_theme(self):
        assert self.session.set_color_theme("ocean") is True
        assert self.session.set_color_theme("neon") is False
        assert self.session.profile.color_theme == "ocean"

    def test_to_dict(self):
        data = self.session.to_dict()

        assert data["status"] == STATUS_READY
        assert data["history"] == []
        assert data["pending_validation"] is None
