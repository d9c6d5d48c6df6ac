"""
AI adapters
"""

from .openai import OpenAIAdapter
from .proxy import ChatProxyClient

__all__ = ["OpenAIAdapter", "ChatProxyClient"]
