"""
OpenAI AI adapter
Chat-completions client for OpenAI and compatible APIs
"""

import asyncio

import aiohttp

from ...core.exceptions import ExternalServiceError
from ...core.logging import get_logger
from ...domain.ports.ai_port import ChatMessage, IAIProvider

logger = get_logger(__name__)


class OpenAIAdapter(IAIProvider):
    """
    OpenAI AI adapter

    Sends the system prompt, prior turns and the new message in one
    chat-completions request. A missing or empty completion comes back as
    an empty string; transport and HTTP errors raise ExternalServiceError.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o",
        timeout: float = 20.0,
        base_url: str = "https://api.openai.com/v1",
        max_tokens: int = 500,
        temperature: float = 0.8,
        presence_penalty: float = 0.1,
        frequency_penalty: float = 0.1,
    ):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.presence_penalty = presence_penalty
        self.frequency_penalty = frequency_penalty

    async def generate(
        self,
        message: str,
        system_prompt: str,
        max_tokens: int | None = None,
        conversation_history: list[ChatMessage] | None = None,
    ) -> str:
        """
        Generate a reply

        Raises:
            ExternalServiceError: network failure or non-200 response
        """
        messages = [{"role": "system", "content": system_prompt}]
        if conversation_history:
            for msg in conversation_history:
                messages.append({"role": msg.role, "content": msg.content})
        messages.append({"role": "user", "content": message})

        request_body = {
            "model": self.model,
            "messages": messages,
            "max_tokens": max_tokens or self.max_tokens,
            "temperature": self.temperature,
            "presence_penalty": self.presence_penalty,
            "frequency_penalty": self.frequency_penalty,
        }

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    f"{self.base_url}/chat/completions",
                    headers=headers,
                    json=request_body,
                ) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f"OpenAI API error: HTTP {response.status} - {error_text[:200]}")
                        raise ExternalServiceError(
                            f"OpenAI API error: HTTP {response.status}",
                            service_name="openai",
                            status_code=response.status,
                        )
                    response_data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ExternalServiceError(
                f"OpenAI API request failed: {e}", service_name="openai"
            ) from e

        return self._extract_content(response_data)

    @staticmethod
    def _extract_content(response_data: dict) -> str:
        choices = response_data.get("choices") or []
        if not choices:
            return ""
        content = (choices[0].get("message") or {}).get("content")
        return content if isinstance(content, str) else ""

    async def health_check(self) -> bool:
        """
        Check the API answers

        Returns:
            bool: True when a completion came back
        """
        try:
            response = await self.generate(
                message="Hello",
                system_prompt="Reply with 'OK' only.",
                max_tokens=10,
            )
            return len(response) > 0
        except ExternalServiceError:
            return False

    @property
    def model_name(self) -> str:
        return self.model
