"""
Chat proxy endpoint
Stateless ``POST /api/chat`` that turns a message and context into an LLM reply
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ...core.exceptions import ConfigurationError, ExternalServiceError
from ...core.logging import get_logger, log_error
from ...domain.models.conversation import ChatContext
from ...domain.ports.reply_port import IReplyHandler
from ..dependencies import get_reply_handler
from ..schemas import ChatProxyRequest, ChatProxyResponse

logger = get_logger(__name__)

router = APIRouter(tags=["chat"])


def _reply_handler() -> IReplyHandler | None:
    """None when no AI provider is configured"""
    try:
        return get_reply_handler()
    except ConfigurationError as e:
        log_error(logger, e, {"endpoint": "/api/chat"})
        return None


@router.post("/api/chat", response_model=ChatProxyResponse)
async def chat(
    request: ChatProxyRequest,
    handler: IReplyHandler | None = Depends(_reply_handler),
):
    """
    Reply to one message

    The server keeps no conversation state; the context carries the
    preferences and recent history.
    """
    if handler is None:
        return JSONResponse(status_code=500, content={"error": "AI service error"})

    try:
        context = ChatContext.from_wire(request.context)
        reply = await handler.reply(request.message, context)
    except ExternalServiceError as e:
        log_error(logger, e, {"service": e.details.get("service_name")})
        return JSONResponse(status_code=500, content={"error": "AI service error"})
    except Exception as e:
        log_error(logger, e, {"endpoint": "/api/chat"})
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return ChatProxyResponse(reply=reply)


@router.api_route("/api/chat", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def chat_method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})
