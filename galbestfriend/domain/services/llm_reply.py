"""
LLM reply handler
In-process reply generation through an AI provider
"""

from ...core.logging import get_logger
from ..models.conversation import ChatContext
from ..ports.ai_port import IAIProvider
from ..ports.reply_port import IReplyHandler
from .prompt import SystemPromptBuilder, format_history

logger = get_logger(__name__)

EMPTY_REPLY_FALLBACK = "I'm here for you. Tell me more."


class LLMReplyHandler(IReplyHandler):
    """
    Reply handler backed by a chat-completion provider

    Provider errors propagate so the calling session can fall back to
    the local crafter.
    """

    def __init__(
        self,
        ai_provider: IAIProvider,
        prompt_builder: SystemPromptBuilder | None = None,
        max_tokens: int | None = None,
    ):
        self.ai_provider = ai_provider
        self.prompt_builder = prompt_builder or SystemPromptBuilder()
        self.max_tokens = max_tokens

    async def reply(self, message: str, context: ChatContext) -> str:
        system_prompt = self.prompt_builder.build(context)
        completion = await self.ai_provider.generate(
            message=message,
            system_prompt=system_prompt,
            max_tokens=self.max_tokens,
            conversation_history=format_history(context.history),
        )
        if not completion or not completion.strip():
            logger.info("Empty completion, using fallback reply")
            return EMPTY_REPLY_FALLBACK
        return completion
