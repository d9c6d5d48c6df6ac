"""
AI provider port
Abstracts access to a chat-completion LLM API
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class ChatMessage:
    """Chat message"""

    role: str  # "user" or "assistant"
    content: str


class IAIProvider(ABC):
    """
    AI provider interface

    Hides the concrete LLM API (OpenAI or compatible) behind one call.
    """

    @abstractmethod
    async def generate(
        self,
        message: str,
        system_prompt: str,
        max_tokens: int | None = None,
        conversation_history: list[ChatMessage] | None = None,
    ) -> str:
        """
        Generate a completion

        Args:
            message: user message
            system_prompt: system prompt
            max_tokens: optional token cap
            conversation_history: prior turns, oldest first

        Returns:
            str: completion text (may be empty)
        """

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check the API is reachable

        Returns:
            bool: whether the provider answered
        """

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Model in use"""
