"""
Profile model
Onboarding preferences, tone buckets and cosmetic themes
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

MIN_TONE_LEVEL = 1
MAX_TONE_LEVEL = 5
DEFAULT_TONE_LEVEL = 3


class Situation(Enum):
    """What kind of relationship the user came to talk about"""
    FRIENDSHIP = "friendship"
    ROMANTIC = "romantic"
    FAMILY = "family"
    SELF = "self"


class Belief(Enum):
    """Worldview, used to personalise the LLM prompt"""
    SPIRITUAL = "spiritual"
    RELIGIOUS = "religious"
    SECULAR = "secular"
    MIXED = "mixed"


class LifeStage(Enum):
    """Age bucket"""
    TEENS = "teens"
    EARLY_20S = "early20s"
    LATE_20S = "late20s"
    THIRTIES = "30s"
    FORTY_PLUS = "40plus"


class ResponseStyle(Enum):
    """How replies are put together"""
    CONVERSATIONAL = "conversational"
    STRUCTURED = "structured"
    BRIEF = "brief"


class FocusArea(Enum):
    """What replies emphasise"""
    EMOTIONAL = "emotional"
    PRACTICAL = "practical"
    PERSPECTIVE = "perspective"


class ToneBucket(Enum):
    """
    Coarse tone used for phrase-bank lookup

    Two levels map to GENTLE, two to BALANCED and only level 5 to DIRECT.
    """
    GENTLE = "gentle"
    BALANCED = "balanced"
    DIRECT = "direct"


# Mood-boosting color themes (cosmetic only)
COLOR_THEMES: dict[str, dict[str, Any]] = {
    "rose": {"name": "Rose", "mood": "warm & nurturing", "h": 355, "s": 25, "l": 35},
    "coral": {"name": "Coral", "mood": "energizing & uplifting", "h": 16, "s": 65, "l": 55},
    "lavender": {"name": "Lavender", "mood": "calming & peaceful", "h": 270, "s": 35, "l": 50},
    "sage": {"name": "Sage", "mood": "grounding & balanced", "h": 140, "s": 25, "l": 45},
    "ocean": {"name": "Ocean", "mood": "serene & refreshing", "h": 200, "s": 45, "l": 45},
    "sunshine": {"name": "Sunshine", "mood": "joyful & optimistic", "h": 45, "s": 75, "l": 50},
}
DEFAULT_COLOR_THEME = "rose"

# Shown next to the tone slider during onboarding
TONE_PREVIEW_TEXTS: dict[int, str] = {
    1: "\"I hear you, and what you're feeling is completely valid. Take your time — I'm here whenever you're ready to talk more.\"",
    2: "\"That sounds really hard. Let's work through this together at whatever pace feels right for you.\"",
    3: "\"I totally get why that's bothering you. Let's think through this together and figure out what feels right for you.\"",
    4: "\"Okay, let's dig into this. I want to help you see the full picture — even the parts that might be uncomfortable.\"",
    5: "\"Real talk? I'm going to be honest with you because I care. Let's look at what's really going on here.\"",
}

E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], value: Any, default: E | None) -> E | None:
    """Parse a raw value into ``enum_cls``, falling back to ``default``"""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            return default
    return default


def is_valid_tone_level(level: Any) -> bool:
    return isinstance(level, int) and not isinstance(level, bool) and MIN_TONE_LEVEL <= level <= MAX_TONE_LEVEL


def tone_bucket(level: int) -> ToneBucket:
    """Map a 1-5 tone level to its bucket (<=2 gentle, 3-4 balanced, 5 direct)"""
    if level <= 2:
        return ToneBucket.GENTLE
    if level <= 4:
        return ToneBucket.BALANCED
    return ToneBucket.DIRECT


@dataclass
class UserProfile:
    """
    Preferences collected by onboarding

    Mutable during a session through the settings panel.
    """

    name: str = ""
    situation: Situation | None = None
    belief: Belief | None = None
    life_stage: LifeStage | None = None
    tone_level: int = DEFAULT_TONE_LEVEL
    response_style: ResponseStyle = ResponseStyle.CONVERSATIONAL
    focus_area: FocusArea = FocusArea.EMOTIONAL
    color_theme: str = DEFAULT_COLOR_THEME

    def __post_init__(self):
        if not is_valid_tone_level(self.tone_level):
            raise ValueError(
                f"tone_level must be between {MIN_TONE_LEVEL} and {MAX_TONE_LEVEL}"
            )
        self.name = (self.name or "").strip()

    @property
    def tone(self) -> ToneBucket:
        return tone_bucket(self.tone_level)

    @property
    def display_name(self) -> str:
        return self.name or "friend"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "situation": self.situation.value if self.situation else None,
            "belief": self.belief.value if self.belief else None,
            "life_stage": self.life_stage.value if self.life_stage else None,
            "tone_level": self.tone_level,
            "response_style": self.response_style.value,
            "focus_area": self.focus_area.value,
            "color_theme": self.color_theme,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        """Build from stored or client data; unknown values fall back to defaults"""
        tone_level = data.get("tone_level", DEFAULT_TONE_LEVEL)
        if not is_valid_tone_level(tone_level):
            tone_level = DEFAULT_TONE_LEVEL
        color_theme = data.get("color_theme")
        return cls(
            name=data.get("name") or "",
            situation=parse_enum(Situation, data.get("situation"), None),
            belief=parse_enum(Belief, data.get("belief"), None),
            life_stage=parse_enum(LifeStage, data.get("life_stage"), None),
            tone_level=tone_level,
            response_style=parse_enum(
                ResponseStyle, data.get("response_style"), ResponseStyle.CONVERSATIONAL
            ),
            focus_area=parse_enum(FocusArea, data.get("focus_area"), FocusArea.EMOTIONAL),
            color_theme=color_theme if color_theme in COLOR_THEMES else DEFAULT_COLOR_THEME,
        )
