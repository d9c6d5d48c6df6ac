"""
API Dependencies
Dependency wiring and the in-process session registry
"""

from ..adapters.ai.openai import OpenAIAdapter
from ..core.config import CompanionSettings, get_settings
from ..core.exceptions import ConfigurationError, SessionNotFoundError
from ..core.logging import get_logger
from ..domain.models.profile import UserProfile
from ..domain.ports.ai_port import IAIProvider
from ..domain.ports.reply_port import IReplyHandler
from ..domain.services.crafter import ResponseCrafter
from ..domain.services.llm_reply import LLMReplyHandler
from ..domain.services.session import ChatSession
from ..domain.services.voice import VoiceInputController

logger = get_logger(__name__)


class SessionRegistry:
    """
    Live chat sessions keyed by id

    Sessions exist only in memory and disappear with the process.
    """

    def __init__(
        self,
        settings: CompanionSettings | None = None,
        reply_handler: IReplyHandler | None = None,
        crafter: ResponseCrafter | None = None,
    ):
        self.settings = settings or CompanionSettings()
        self.reply_handler = reply_handler
        self.crafter = crafter or ResponseCrafter()
        self._sessions: dict[str, ChatSession] = {}
        self._voice: dict[str, VoiceInputController] = {}

    def create(self, profile: UserProfile) -> ChatSession:
        session = ChatSession(
            profile=profile,
            settings=self.settings,
            crafter=self.crafter,
            reply_handler=self.reply_handler,
        )
        self._sessions[session.session_id] = session
        return session

    def get(self, session_id: str) -> ChatSession:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def voice(self, session_id: str) -> VoiceInputController:
        self.get(session_id)
        return self._voice.setdefault(session_id, VoiceInputController())

    def clear_voice_draft(self, session_id: str) -> None:
        """Drop any dictated draft once its message has been sent"""
        controller = self._voice.get(session_id)
        if controller is not None:
            controller.take_draft()

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        self._voice.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)


# === Singletons ===

_ai_provider: IAIProvider | None = None
_reply_handler: IReplyHandler | None = None
_session_registry: SessionRegistry | None = None


# === Providers ===


def get_ai_provider() -> IAIProvider:
    """OpenAI-compatible provider built from settings"""
    global _ai_provider
    if _ai_provider is None:
        ai = get_settings().ai
        if not ai.is_configured:
            raise ConfigurationError("OPENAI_API_KEY environment variable is required")
        _ai_provider = OpenAIAdapter(
            api_key=ai.openai_api_key,
            model=ai.openai_model,
            timeout=ai.request_timeout,
            base_url=ai.openai_base_url,
            max_tokens=ai.max_tokens,
            temperature=ai.temperature,
            presence_penalty=ai.presence_penalty,
            frequency_penalty=ai.frequency_penalty,
        )
    return _ai_provider


def get_reply_handler() -> IReplyHandler:
    """Reply handler behind ``/api/chat``"""
    global _reply_handler
    if _reply_handler is None:
        _reply_handler = LLMReplyHandler(get_ai_provider())
    return _reply_handler


def get_session_registry() -> SessionRegistry:
    """Sessions delegate to the LLM only when an API key is configured"""
    global _session_registry
    if _session_registry is None:
        settings = get_settings()
        handler = get_reply_handler() if settings.ai.is_configured else None
        _session_registry = SessionRegistry(settings=settings.companion, reply_handler=handler)
        logger.info(f"Session registry ready (external replies: {handler is not None})")
    return _session_registry


# === Test helpers ===


def reset_dependencies() -> None:
    """Reset singletons (tests)"""
    global _ai_provider, _reply_handler, _session_registry
    _ai_provider = None
    _reply_handler = None
    _session_registry = None


def set_ai_provider(ai_provider: IAIProvider) -> None:
    global _ai_provider
    _ai_provider = ai_provider


def set_reply_handler(reply_handler: IReplyHandler) -> None:
    global _reply_handler
    _reply_handler = reply_handler


def set_session_registry(registry: SessionRegistry) -> None:
    global _session_registry
    _session_registry = registry
