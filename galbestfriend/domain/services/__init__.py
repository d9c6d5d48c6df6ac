"""
Domain Services
"""

from .acknowledgment import AcknowledgmentBuilder
from .advice import AdviceBuilder, QuestionResponder, SituationalAdvisor
from .analyzer import MessageAnalyzer
from .crafter import ResponseCrafter, contextual_fallback
from .llm_reply import LLMReplyHandler
from .openers import OpenerGenerator
from .preferences import STATE_KEY, PreferenceAutosaver, PreferencePersistence
from .prompt import SystemPromptBuilder, format_history
from .session import ChatReply, ChatSession, pacing_delay, regeneration_tone
from .validator import run_validation_checks, should_validate
from .voice import SpeechResult, VoiceEventType, VoiceFeedback, VoiceInputController

__all__ = [
    "MessageAnalyzer",
    "AcknowledgmentBuilder",
    "AdviceBuilder",
    "QuestionResponder",
    "SituationalAdvisor",
    "ResponseCrafter",
    "contextual_fallback",
    "run_validation_checks",
    "should_validate",
    "OpenerGenerator",
    "SystemPromptBuilder",
    "format_history",
    "LLMReplyHandler",
    "ChatSession",
    "ChatReply",
    "pacing_delay",
    "regeneration_tone",
    "PreferencePersistence",
    "PreferenceAutosaver",
    "STATE_KEY",
    "VoiceInputController",
    "VoiceEventType",
    "VoiceFeedback",
    "SpeechResult",
]
