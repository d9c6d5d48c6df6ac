"""
Domain Ports
Interfaces the domain depends on; adapters implement them
"""

from .ai_port import ChatMessage, IAIProvider
from .reply_port import IReplyHandler
from .storage_port import IPreferenceStore

__all__ = [
    "ChatMessage",
    "IAIProvider",
    "IReplyHandler",
    "IPreferenceStore",
]
