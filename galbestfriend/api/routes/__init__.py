"""
API Routes
"""

from .chat import router as chat_router
from .onboarding import router as onboarding_router
from .sessions import router as sessions_router

__all__ = [
    "chat_router",
    "onboarding_router",
    "sessions_router",
]
