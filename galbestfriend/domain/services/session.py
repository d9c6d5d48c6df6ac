"""
Chat session orchestrator
Owns one conversation: history, typing state, delegation and maker-checker
"""

import asyncio
import uuid
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from ...core.config import CompanionSettings
from ...core.exceptions import SessionBusyError, ValidationError
from ...core.logging import get_logger, log_business_event
from ..models.conversation import ChatContext, ConversationTurn, Role
from ..models.profile import (
    COLOR_THEMES,
    MAX_TONE_LEVEL,
    MIN_TONE_LEVEL,
    FocusArea,
    ResponseStyle,
    UserProfile,
    is_valid_tone_level,
    parse_enum,
)
from ..models.validation import ValidationResult
from ..ports.reply_port import IReplyHandler
from .crafter import ResponseCrafter
from .openers import OpenerGenerator
from .validator import run_validation_checks, should_validate

logger = get_logger(__name__)

STATUS_READY = "Ready to listen"
STATUS_THINKING = "Thinking..."

SOURCE_EXTERNAL = "external"
SOURCE_LOCAL = "local"

MIN_PACING_DELAY = 0.8
MAX_PACING_DELAY = 2.5
PACING_PER_CHAR = 0.015


def pacing_delay(text: str) -> float:
    """Seconds the typing indicator stays up before a local reply appears"""
    return min(MIN_PACING_DELAY + len(text) * PACING_PER_CHAR, MAX_PACING_DELAY)


def regeneration_tone(level: int) -> int:
    """Tone used for a regenerated reply: step toward the middle from above, else up"""
    return level - 1 if level > 3 else level + 1


@dataclass
class ChatReply:
    """A reply that was appended to the history"""

    text: str
    source: str
    turn: ConversationTurn
    validation: ValidationResult | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "reply": self.text,
            "source": self.source,
            "turn": self.turn.to_dict(),
            "validation": self.validation.to_dict() if self.validation else None,
        }


class ChatSession:
    """
    One user's chat

    Single owner, single reply in flight. Sending or regenerating while
    a reply is pending raises SessionBusyError. An external reply handler
    is tried first when registered; any failure or timeout falls back to
    the local crafter. Only local replies go through the maker-checker.
    """

    def __init__(
        self,
        profile: UserProfile,
        settings: CompanionSettings | None = None,
        crafter: ResponseCrafter | None = None,
        reply_handler: IReplyHandler | None = None,
        openers: OpenerGenerator | None = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        session_id: str | None = None,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.profile = profile
        self.settings = settings or CompanionSettings()
        self.crafter = crafter or ResponseCrafter()
        self.reply_handler = reply_handler
        self.openers = openers or OpenerGenerator()
        self._sleep = sleep

        self.history: list[ConversationTurn] = []
        self.analysis_window: deque = deque(maxlen=self.settings.analysis_window)
        self.pending_response: str | None = None
        self.pending_validation: ValidationResult | None = None
        self.is_typing = False
        self.status = STATUS_READY
        self._lock = asyncio.Lock()

    # ===== Lifecycle =====

    def start(self) -> list[ConversationTurn]:
        """Reset the conversation and add the greeting turns"""
        self.history = []
        self.analysis_window.clear()
        self.pending_response = None
        self.pending_validation = None
        turns = [self._append(Role.ASSISTANT, text) for text in self.openers.openers(self.profile)]
        log_business_event(logger, "session_started", session_id=self.session_id)
        return turns

    def connect(self, reply_handler: IReplyHandler | None) -> None:
        """Register (or clear) the external reply handler"""
        self.reply_handler = reply_handler

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    # ===== Messages =====

    async def send_message(self, text: str) -> ChatReply:
        """
        Append a user message and produce exactly one reply

        Raises:
            ValidationError: blank message
            SessionBusyError: a reply is still pending
        """
        message = (text or "").strip()
        if not message:
            raise ValidationError("Message must not be empty", field="message")
        if self.is_busy:
            raise SessionBusyError(session_id=self.session_id)

        async with self._lock:
            self._append(Role.USER, message)
            return await self._generate(message)

    def accept_response(self) -> None:
        """Acknowledge the validated reply"""
        self.pending_response = None
        self.pending_validation = None

    async def request_new_response(self) -> ChatReply | None:
        """
        Replace the latest companion reply

        Removes the most recent assistant turn, shifts the tone one step and
        answers the last user message again. Returns None when there is no
        user message to answer.
        """
        if self.is_busy:
            raise SessionBusyError(session_id=self.session_id)

        async with self._lock:
            self._remove_last_assistant_turn()
            self.pending_response = None
            self.pending_validation = None

            last_user = next(
                (turn for turn in reversed(self.history) if turn.role is Role.USER), None
            )
            if last_user is None:
                return None

            previous = self.profile.tone_level
            self.profile.tone_level = regeneration_tone(previous)
            log_business_event(
                logger,
                "reply_regenerated",
                session_id=self.session_id,
                tone_from=previous,
                tone_to=self.profile.tone_level,
            )
            return await self._generate(last_user.content)

    # ===== Settings =====

    def set_tone_level(self, level: int) -> None:
        self.profile.tone_level = self._checked_tone_level(level)

    def set_response_style(self, value: str | ResponseStyle) -> None:
        self.profile.response_style = self._checked_response_style(value)

    def set_focus_area(self, value: str | FocusArea) -> None:
        self.profile.focus_area = self._checked_focus_area(value)

    def update_settings(
        self,
        tone_level: int | None = None,
        response_style: str | ResponseStyle | None = None,
        focus_area: str | FocusArea | None = None,
    ) -> None:
        """
        Apply several settings at once

        Every given value is checked before any is written, so a rejected
        update leaves the profile untouched.

        Raises:
            ValidationError: first invalid value
        """
        updates = {}
        if tone_level is not None:
            updates["tone_level"] = self._checked_tone_level(tone_level)
        if response_style is not None:
            updates["response_style"] = self._checked_response_style(response_style)
        if focus_area is not None:
            updates["focus_area"] = self._checked_focus_area(focus_area)

        for name, value in updates.items():
            setattr(self.profile, name, value)

    @staticmethod
    def _checked_tone_level(level: int) -> int:
        if not is_valid_tone_level(level):
            raise ValidationError(
                f"Tone level must be between {MIN_TONE_LEVEL} and {MAX_TONE_LEVEL}",
                field="tone_level",
                value=level,
            )
        return level

    @staticmethod
    def _checked_response_style(value: str | ResponseStyle) -> ResponseStyle:
        style = parse_enum(ResponseStyle, value, None)
        if style is None:
            raise ValidationError("Unknown response style", field="response_style", value=value)
        return style

    @staticmethod
    def _checked_focus_area(value: str | FocusArea) -> FocusArea:
        focus = parse_enum(FocusArea, value, None)
        if focus is None:
            raise ValidationError("Unknown focus area", field="focus_area", value=value)
        return focus

    def set_color_theme(self, theme: str) -> bool:
        """Apply a theme; unknown names are ignored"""
        if theme not in COLOR_THEMES:
            return False
        self.profile.color_theme = theme
        return True

    def build_context(self) -> ChatContext:
        return ChatContext.from_profile(self.profile, self.history, self.settings.history_window)

    # ===== Internals =====

    async def _generate(self, message: str) -> ChatReply:
        if self.reply_handler is not None:
            reply = await self._try_external(message)
            if reply is not None:
                return reply
        return await self._generate_local(message)

    async def _try_external(self, message: str) -> ChatReply | None:
        context = self.build_context()
        self._set_typing(True)
        try:
            text = await asyncio.wait_for(
                self.reply_handler.reply(message, context),
                timeout=self.settings.reply_timeout,
            )
            if not isinstance(text, str) or not text.strip():
                raise ValueError("Reply handler returned no text")
        except Exception as e:
            logger.warning(
                f"External reply failed, using local reply: {e!r}",
                extra={"session_id": self.session_id, "error_type": type(e).__name__},
            )
            return None
        finally:
            self._set_typing(False)

        turn = self._append(Role.ASSISTANT, text)
        log_business_event(logger, "reply_generated", session_id=self.session_id, source=SOURCE_EXTERNAL)
        return ChatReply(text=text, source=SOURCE_EXTERNAL, turn=turn)

    async def _generate_local(self, message: str) -> ChatReply:
        text = self.crafter.craft(message, self.profile, self.analysis_window)

        validation = None
        if should_validate(message, self.settings.validation_length_threshold):
            validation = run_validation_checks(text, self.profile.tone_level)

        if self.settings.pacing_enabled:
            self._set_typing(True)
            try:
                await self._sleep(pacing_delay(text))
            finally:
                self._set_typing(False)

        turn = self._append(Role.ASSISTANT, text)
        if validation is not None:
            self.pending_response = text
            self.pending_validation = validation

        log_business_event(
            logger,
            "reply_generated",
            session_id=self.session_id,
            source=SOURCE_LOCAL,
            validated=validation is not None,
        )
        return ChatReply(text=text, source=SOURCE_LOCAL, turn=turn, validation=validation)

    def _append(self, role: Role, content: str) -> ConversationTurn:
        turn = ConversationTurn(role=role, content=content)
        self.history.append(turn)
        return turn

    def _remove_last_assistant_turn(self) -> ConversationTurn | None:
        for index in range(len(self.history) - 1, -1, -1):
            if self.history[index].role is Role.ASSISTANT:
                return self.history.pop(index)
        return None

    def _set_typing(self, typing: bool) -> None:
        self.is_typing = typing
        self.status = STATUS_THINKING if typing else STATUS_READY

    def to_dict(self) -> dict[str, Any]:
        return {
            "session_id": self.session_id,
            "profile": self.profile.to_dict(),
            "history": [turn.to_dict() for turn in self.history],
            "is_typing": self.is_typing,
            "status": self.status,
            "pending_validation": (
                self.pending_validation.to_dict() if self.pending_validation else None
            ),
        }
