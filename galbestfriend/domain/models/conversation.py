"""
Conversation model
Session-local turns and the context handed to an external reply handler
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .profile import DEFAULT_TONE_LEVEL, UserProfile, is_valid_tone_level


class Role(Enum):
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def wire_value(self) -> str:
        """Role name used by the chat proxy ("ai" for the companion)"""
        return "ai" if self is Role.ASSISTANT else "user"

    @classmethod
    def from_wire(cls, value: str) -> "Role":
        return cls.ASSISTANT if value in ("ai", "assistant") else cls.USER


@dataclass
class ConversationTurn:
    """A single message in the chat"""

    role: Role
    content: str
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def timestamp(self) -> str:
        """Display-formatted time"""
        return self.created_at.strftime("%H:%M")

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "content": self.content,
            "timestamp": self.timestamp,
        }

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role.wire_value, "content": self.content}


def last_turns(history: list[ConversationTurn], window: int) -> list[ConversationTurn]:
    """Most recent ``window`` turns in their original order"""
    if window <= 0:
        return []
    return list(history[-window:])


@dataclass
class ChatContext:
    """
    Everything an external reply handler needs for one call

    Handlers keep no memory of their own, so the recent history travels
    with every request.
    """

    tone_level: int
    response_style: str
    focus_area: str
    situation: str | None = None
    belief: str | None = None
    life_stage: str | None = None
    user_name: str = ""
    history: list[ConversationTurn] = field(default_factory=list)

    @classmethod
    def from_profile(
        cls, profile: UserProfile, history: list[ConversationTurn], window: int = 10
    ) -> "ChatContext":
        return cls(
            tone_level=profile.tone_level,
            response_style=profile.response_style.value,
            focus_area=profile.focus_area.value,
            situation=profile.situation.value if profile.situation else None,
            belief=profile.belief.value if profile.belief else None,
            life_stage=profile.life_stage.value if profile.life_stage else None,
            user_name=profile.name,
            history=last_turns(history, window),
        )

    def to_wire(self) -> dict[str, Any]:
        """JSON body shape expected by the chat proxy"""
        return {
            "toneLevel": self.tone_level,
            "responseStyle": self.response_style,
            "focusArea": self.focus_area,
            "situation": self.situation,
            "belief": self.belief,
            "lifeStage": self.life_stage,
            "userName": self.user_name,
            "history": [turn.to_wire() for turn in self.history],
        }

    @classmethod
    def from_wire(cls, data: dict[str, Any] | None) -> "ChatContext":
        """Lenient parse of a proxy request context; bad values become defaults"""
        data = data or {}
        tone_level = data.get("toneLevel")
        if not is_valid_tone_level(tone_level):
            tone_level = DEFAULT_TONE_LEVEL

        history = []
        for item in data.get("history") or []:
            if isinstance(item, dict) and isinstance(item.get("content"), str):
                history.append(
                    ConversationTurn(Role.from_wire(item.get("role", "")), item["content"])
                )

        def _text(key: str) -> str | None:
            value = data.get(key)
            return value if isinstance(value, str) and value else None

        return cls(
            tone_level=tone_level,
            response_style=_text("responseStyle") or "conversational",
            focus_area=_text("focusArea") or "emotional",
            situation=_text("situation"),
            belief=_text("belief"),
            life_stage=_text("lifeStage"),
            user_name=_text("userName") or "",
            history=history,
        )
