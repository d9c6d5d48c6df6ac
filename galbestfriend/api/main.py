"""
Gal Bestfriend API - main application
"""

from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from .. import __version__
from ..core.config import get_settings
from ..core.exceptions import ConfigurationError
from ..core.logging import CompanionLogger, get_logger
from .dependencies import get_ai_provider, get_session_registry
from .middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from .routes import chat_router, onboarding_router, sessions_router
from .schemas import APIInfoResponse, HealthResponse

CompanionLogger.configure(get_settings().log_level)
logger = get_logger("api.main")

API_VERSION = __version__


class APIVersionMiddleware(BaseHTTPMiddleware):
    """Adds the API version to every response"""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-API-Version"] = API_VERSION
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle"""
    settings = get_settings()

    logger.info(f"Gal Bestfriend API v{API_VERSION} starting...")
    logger.info(f"Debug mode: {settings.debug}")
    if settings.ai.is_configured:
        logger.info(f"LLM replies: {settings.ai.openai_model}")
    else:
        logger.warning("OPENAI_API_KEY not set - sessions use local replies only")

    yield

    logger.info("Gal Bestfriend API shutting down...")


def create_app() -> FastAPI:
    """Create the FastAPI application"""
    application = FastAPI(
        title="Gal Bestfriend API",
        description=(
            "Emotional-support chat companion\n\n"
            "- Tone-aware replies from an LLM or the local rule-based crafter\n"
            "- Maker-checker review of advice-seeking replies\n"
            "- Stateless `/api/chat` proxy for browser clients\n"
        ),
        version=API_VERSION,
        lifespan=lifespan,
    )

    # Middleware (runs bottom to top)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:8000", "http://127.0.0.1:8000"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    application.add_middleware(SecurityHeadersMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_middleware(APIVersionMiddleware)

    application.include_router(chat_router)
    application.include_router(onboarding_router)
    application.include_router(sessions_router)

    @application.get("/", response_model=APIInfoResponse)
    async def root() -> APIInfoResponse:
        """API info"""
        return APIInfoResponse(
            service="Gal Bestfriend - emotional support chat API",
            version=API_VERSION,
            description="Warm, tone-aware companion for relationship and emotional support",
            features=[
                "Onboarding preferences",
                "Tone-aware local replies",
                "LLM replies with local fallback",
                "Maker-checker validation",
                "Voice input feedback",
            ],
        )

    @application.get("/v1/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Health check"""
        components = {
            "sessions": True,
            "ai_provider": True,
        }

        try:
            get_session_registry()
        except Exception:
            components["sessions"] = False

        try:
            components["ai_provider"] = await get_ai_provider().health_check()
        except ConfigurationError:
            components["ai_provider"] = False

        status = "healthy" if all(components.values()) else "degraded"

        return HealthResponse(
            status=status,
            timestamp=datetime.now(),
            version=API_VERSION,
            components=components,
        )

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
