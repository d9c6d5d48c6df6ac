"""
Gal Bestfriend - emotional-support chat companion

- Tone-aware replies from an external LLM or a local rule-based crafter
- Advisory maker-checker review of advice-seeking replies
- Session-only history; only cosmetic preferences are persisted
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import tomllib

_pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
if _pyproject.exists():
    with _pyproject.open("rb") as _f:
        __version__: str = tomllib.load(_f)["project"]["version"]
else:
    try:
        __version__ = version("gal-bestfriend")
    except PackageNotFoundError:
        __version__ = "0.0.0"

# ===== Domain Models =====
from .domain.models import (
    ChatContext,
    ConversationTurn,
    MessageAnalysis,
    Role,
    ToneBucket,
    UserProfile,
    ValidationResult,
)

# ===== Ports (Interfaces) =====
from .domain.ports import (
    IAIProvider,
    IPreferenceStore,
    IReplyHandler,
)

# ===== Domain Services =====
from .domain.services import (
    ChatSession,
    MessageAnalyzer,
    ResponseCrafter,
    run_validation_checks,
)


# ===== Adapters (lazy import) =====
def get_openai_adapter():
    from .adapters.ai.openai import OpenAIAdapter

    return OpenAIAdapter


def get_chat_proxy_client():
    from .adapters.ai.proxy import ChatProxyClient

    return ChatProxyClient


def get_file_preference_store():
    from .adapters.storage.file import FilePreferenceStore

    return FilePreferenceStore


# ===== API (lazy import) =====
def create_app():
    from .api import create_app as _create_app

    return _create_app()


__all__ = [
    # Version
    "__version__",
    # Domain Models
    "UserProfile",
    "ToneBucket",
    "Role",
    "ConversationTurn",
    "ChatContext",
    "MessageAnalysis",
    "ValidationResult",
    # Ports
    "IAIProvider",
    "IReplyHandler",
    "IPreferenceStore",
    # Domain Services
    "MessageAnalyzer",
    "ResponseCrafter",
    "ChatSession",
    "run_validation_checks",
    # Adapters (lazy)
    "get_openai_adapter",
    "get_chat_proxy_client",
    "get_file_preference_store",
    # API (lazy)
    "create_app",
]
