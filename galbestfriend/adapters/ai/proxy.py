"""
Chat proxy client
Reply handler that forwards to a running ``/api/chat`` endpoint
"""

import asyncio

import aiohttp

from ...core.exceptions import ExternalServiceError
from ...domain.models.conversation import ChatContext
from ...domain.ports.reply_port import IReplyHandler


class ChatProxyClient(IReplyHandler):
    """POSTs ``{message, context}`` and returns the ``reply`` field"""

    def __init__(self, base_url: str, timeout: float = 25.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/api/chat"

    async def reply(self, message: str, context: ChatContext) -> str:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        body = {"message": message, "context": context.to_wire()}

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.endpoint, json=body) as response:
                    if response.status != 200:
                        raise ExternalServiceError(
                            f"Chat proxy returned HTTP {response.status}",
                            service_name="chat_proxy",
                            status_code=response.status,
                        )
                    data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(
                f"Chat proxy request failed: {e}", service_name="chat_proxy"
            ) from e

        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ExternalServiceError("Chat proxy response has no reply", service_name="chat_proxy")
        return reply
