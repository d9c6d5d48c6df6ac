"""
Domain Models
"""

from .analysis import (
    ActionTag,
    EmotionTag,
    Intensity,
    MessageAnalysis,
    PersonMention,
    RelationshipType,
    Timeframe,
)
from .conversation import (
    ChatContext,
    ConversationTurn,
    Role,
)
from .profile import (
    Belief,
    FocusArea,
    LifeStage,
    ResponseStyle,
    Situation,
    ToneBucket,
    UserProfile,
    tone_bucket,
)
from .validation import (
    CheckResult,
    ValidationResult,
)

__all__ = [
    # Profile
    "UserProfile",
    "Situation",
    "Belief",
    "LifeStage",
    "ResponseStyle",
    "FocusArea",
    "ToneBucket",
    "tone_bucket",
    # Conversation (session only)
    "Role",
    "ConversationTurn",
    "ChatContext",
    # Analysis
    "MessageAnalysis",
    "PersonMention",
    "RelationshipType",
    "ActionTag",
    "EmotionTag",
    "Intensity",
    "Timeframe",
    # Validation
    "CheckResult",
    "ValidationResult",
]
