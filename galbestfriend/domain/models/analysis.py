"""
Message analysis model
Structured summary extracted from a single user message
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class RelationshipType(Enum):
    """Relationship of a mentioned person to the user"""
    ROMANTIC = "romantic"
    FRIENDSHIP = "friendship"
    FAMILY = "family"
    WORK = "work"
    UNKNOWN = "unknown"


class ActionTag(Enum):
    """What happened"""
    COMMUNICATION = "communication"
    IGNORED = "ignored"
    BETRAYAL = "betrayal"
    CONFLICT = "conflict"
    ENDING = "ending"
    RECONCILIATION = "reconciliation"
    ARGUMENT = "argument"
    BREAKUP = "breakup"
    DISCUSSION = "discussion"
    DISCOVERY = "discovery"
    USER_ACTION = "user_action"


class EmotionTag(Enum):
    """What the user is feeling"""
    ANGRY = "angry"
    FRUSTRATED = "frustrated"
    SAD = "sad"
    HURT = "hurt"
    ANXIOUS = "anxious"
    CONFUSED = "confused"
    LONELY = "lonely"
    EMBARRASSED = "embarrassed"
    JEALOUS = "jealous"
    GUILTY = "guilty"
    BETRAYED = "betrayed"
    DISAPPOINTED = "disappointed"
    EXHAUSTED = "exhausted"
    HOPELESS = "hopeless"
    PREOCCUPIED = "preoccupied"
    OVERWHELMED = "overwhelmed"


class Intensity(Enum):
    MEDIUM = "medium"
    HIGH = "high"


class Timeframe(Enum):
    RECENT = "recent"
    DAYS = "days"
    WEEKS = "weeks"
    ONGOING = "ongoing"
    NONE = "none"


GENERIC_PRONOUNS = frozenset({"he", "she", "they"})

CONFLICT_ACTIONS = frozenset({ActionTag.CONFLICT, ActionTag.ARGUMENT, ActionTag.BETRAYAL})
ENDING_ACTIONS = frozenset({ActionTag.ENDING, ActionTag.BREAKUP, ActionTag.IGNORED})


@dataclass(frozen=True)
class PersonMention:
    """A person referenced in the message"""
    person: str
    relationship: RelationshipType

    @property
    def is_generic(self) -> bool:
        return self.person in GENERIC_PRONOUNS

    def to_dict(self) -> dict[str, Any]:
        return {"person": self.person, "type": self.relationship.value}


@dataclass
class MessageAnalysis:
    """Result of pattern matching over one utterance"""

    people: list[PersonMention] = field(default_factory=list)
    actions: list[ActionTag] = field(default_factory=list)
    emotions: list[EmotionTag] = field(default_factory=list)
    key_phrases: list[str] = field(default_factory=list)
    questions: list[str] = field(default_factory=list)
    timeframe: Timeframe = Timeframe.NONE
    intensity: Intensity = Intensity.MEDIUM

    @property
    def specific_person(self) -> PersonMention | None:
        """First mention that is more than a bare pronoun"""
        return next((p for p in self.people if not p.is_generic), None)

    @property
    def primary_person(self) -> PersonMention | None:
        return self.specific_person or (self.people[0] if self.people else None)

    @property
    def has_conflict(self) -> bool:
        return any(a in CONFLICT_ACTIONS for a in self.actions)

    @property
    def has_ending(self) -> bool:
        return any(a in ENDING_ACTIONS for a in self.actions)

    def has_person(self, label: str) -> bool:
        return any(p.person == label for p in self.people)

    def to_dict(self) -> dict[str, Any]:
        return {
            "people": [p.to_dict() for p in self.people],
            "actions": [a.value for a in self.actions],
            "emotions": [e.value for e in self.emotions],
            "key_phrases": list(self.key_phrases),
            "questions": list(self.questions),
            "timeframe": self.timeframe.value,
            "intensity": self.intensity.value,
        }
