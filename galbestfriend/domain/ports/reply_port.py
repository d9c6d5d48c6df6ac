"""
Reply handler port
External reply generation a chat session may delegate to
"""

from abc import ABC, abstractmethod

from ..models.conversation import ChatContext


class IReplyHandler(ABC):
    """
    External reply handler

    Implementations receive everything they need in the context, keep no
    memory between calls and return plain text. Any exception makes the
    session fall back to the local crafter.
    """

    @abstractmethod
    async def reply(self, message: str, context: ChatContext) -> str:
        """
        Produce a reply

        Args:
            message: the latest user message
            context: preferences plus the last turns of history

        Returns:
            str: reply text
        """
