"""
Maker-checker validator
Advisory heuristics run over a locally generated reply
"""

from ..models.profile import DEFAULT_TONE_LEVEL, is_valid_tone_level
from ..models.validation import CheckResult, ValidationResult

GENTLE_MARKERS = ("valid", "okay to feel", "no pressure", "take your time")
DIRECT_MARKERS = ("here's what", "real talk", "the move", "let's cut")

HARMFUL_PATTERNS = (
    "you should break up",
    "they don't deserve you",
    "cut them off",
    "ghost them",
    "revenge",
    "make them jealous",
    "manipulate",
)

EMPATHY_MARKERS = (
    "i hear",
    "i understand",
    "that sounds",
    "i'm here",
    "makes sense",
    "valid",
    "feeling",
    "appreciate",
    "thank you",
    "sharing",
    "trust",
)

ACTIONABLE_MARKERS = (
    "try",
    "consider",
    "could",
    "suggest",
    "might",
    "?",
    "what",
    "how",
    "tell me",
    "think about",
)

VALIDATION_TRIGGERS = ("should i", "what do you think", "advice")
DEFAULT_LENGTH_THRESHOLD = 50


def validate_tone(response: str, tone_level: int) -> CheckResult:
    """Direct phrasing fails only in gentle mode; markers are matched case-sensitively"""
    text = response or ""
    is_gentle = any(marker in text for marker in GENTLE_MARKERS)
    is_direct = any(marker in text for marker in DIRECT_MARKERS)

    if tone_level <= 2 and is_direct:
        return CheckResult(False, "May be too direct for gentle mode")
    if tone_level >= 4 and is_gentle:
        return CheckResult(True, "Balanced approach detected")
    return CheckResult(True, "Matches your preference")


def validate_safety(response: str) -> CheckResult:
    lowered = (response or "").lower()
    if any(pattern in lowered for pattern in HARMFUL_PATTERNS):
        return CheckResult(False, "Contains potentially harmful advice")
    return CheckResult(True, "No harmful content detected")


def validate_empathy(response: str) -> CheckResult:
    lowered = (response or "").lower()
    score = sum(1 for marker in EMPATHY_MARKERS if marker in lowered)
    if score >= 2:
        return CheckResult(True, "Strong emotional acknowledgment")
    if score == 1:
        return CheckResult(True, "Acknowledges your feelings")
    return CheckResult(False, "Could be more empathetic")


def validate_actionable(response: str) -> CheckResult:
    lowered = (response or "").lower()
    if any(marker in lowered for marker in ACTIONABLE_MARKERS):
        return CheckResult(True, "Provides helpful guidance")
    return CheckResult(False, "Lacks actionable insight")


def run_validation_checks(response: str, tone_level: int) -> ValidationResult:
    """
    Run all four checks

    Args:
        response: candidate reply
        tone_level: the profile's 1-5 tone level

    Returns:
        ValidationResult: advisory, the reply is shown regardless
    """
    if not is_valid_tone_level(tone_level):
        tone_level = DEFAULT_TONE_LEVEL
    return ValidationResult(
        tone=validate_tone(response, tone_level),
        safety=validate_safety(response),
        empathy=validate_empathy(response),
        actionable=validate_actionable(response),
    )


def should_validate(message: str, length_threshold: int = DEFAULT_LENGTH_THRESHOLD) -> bool:
    """Long or advice-seeking user messages get a maker-checker pass"""
    lowered = message.lower()
    return len(message) > length_threshold or any(
        trigger in lowered for trigger in VALIDATION_TRIGGERS
    )
