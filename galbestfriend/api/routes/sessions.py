"""
Chat session endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from ...core.exceptions import (
    GalBestfriendException,
    SessionBusyError,
    SessionNotFoundError,
    ValidationError,
)
from ...domain.models.profile import MAX_TONE_LEVEL, MIN_TONE_LEVEL, UserProfile, is_valid_tone_level
from ...domain.services.session import ChatReply, ChatSession
from ...domain.services.voice import SpeechResult
from ..dependencies import SessionRegistry, get_session_registry
from ..schemas import (
    MessageRequest,
    OnboardingRequest,
    RegenerateResponse,
    ReplyResponse,
    SessionResponse,
    SettingsRequest,
    SettingsResponse,
    VoiceEventRequest,
    VoiceFeedbackResponse,
)

router = APIRouter(prefix="/v1/sessions", tags=["sessions"])

_STATUS_CODES: list[tuple[type[GalBestfriendException], int]] = [
    (SessionNotFoundError, 404),
    (SessionBusyError, 409),
    (ValidationError, 400),
]


def _http_error(error: GalBestfriendException) -> HTTPException:
    status_code = next(
        (code for exc_type, code in _STATUS_CODES if isinstance(error, exc_type)), 500
    )
    return HTTPException(
        status_code=status_code,
        detail={
            "message": error.message,
            "error_code": error.error_code,
            "details": error.details,
        },
    )


def _session_or_404(registry: SessionRegistry, session_id: str) -> ChatSession:
    try:
        return registry.get(session_id)
    except SessionNotFoundError as e:
        raise _http_error(e) from e


def _session_response(session: ChatSession) -> SessionResponse:
    return SessionResponse(**session.to_dict())


def _reply_response(reply: ChatReply) -> ReplyResponse:
    data = reply.to_dict()
    return ReplyResponse(
        reply=data["reply"],
        source=data["source"],
        turn=data["turn"],
        validation=data["validation"],
    )


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(
    request: OnboardingRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    """
    Complete onboarding and start a chat

    Tone levels outside 1-5 are rejected; unknown choice values fall back
    to their defaults.
    """
    if not is_valid_tone_level(request.tone_level):
        raise _http_error(
            ValidationError(
                f"Tone level must be between {MIN_TONE_LEVEL} and {MAX_TONE_LEVEL}",
                field="tone_level",
                value=request.tone_level,
            )
        )

    profile = UserProfile.from_dict(request.model_dump())
    session = registry.create(profile)
    session.start()
    return _session_response(session)


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    return _session_response(_session_or_404(registry, session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> Response:
    try:
        registry.delete(session_id)
    except SessionNotFoundError as e:
        raise _http_error(e) from e
    return Response(status_code=204)


@router.post("/{session_id}/messages", response_model=ReplyResponse)
async def send_message(
    session_id: str,
    request: MessageRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> ReplyResponse:
    """Send a message; the reply may carry maker-checker results"""
    session = _session_or_404(registry, session_id)
    try:
        reply = await session.send_message(request.message)
    except (ValidationError, SessionBusyError) as e:
        raise _http_error(e) from e
    registry.clear_voice_draft(session_id)
    return _reply_response(reply)


@router.post("/{session_id}/validation/accept", response_model=SessionResponse)
async def accept_response(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SessionResponse:
    session = _session_or_404(registry, session_id)
    session.accept_response()
    return _session_response(session)


@router.post("/{session_id}/validation/regenerate", response_model=RegenerateResponse)
async def regenerate_response(
    session_id: str,
    registry: SessionRegistry = Depends(get_session_registry),
) -> RegenerateResponse:
    """Drop the latest reply and answer again with a shifted tone"""
    session = _session_or_404(registry, session_id)
    try:
        reply = await session.request_new_response()
    except SessionBusyError as e:
        raise _http_error(e) from e
    return RegenerateResponse(
        regenerated=reply is not None,
        tone_level=session.profile.tone_level,
        reply=_reply_response(reply) if reply else None,
    )


@router.patch("/{session_id}/settings", response_model=SettingsResponse)
async def update_settings(
    session_id: str,
    request: SettingsRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> SettingsResponse:
    """Apply settings-panel changes; takes effect from the next reply"""
    session = _session_or_404(registry, session_id)
    theme_applied = None
    try:
        session.update_settings(
            tone_level=request.tone_level,
            response_style=request.response_style,
            focus_area=request.focus_area,
        )
    except ValidationError as e:
        raise _http_error(e) from e
    if request.color_theme is not None:
        theme_applied = session.set_color_theme(request.color_theme)
    return SettingsResponse(profile=session.profile.to_dict(), color_theme_applied=theme_applied)


@router.post("/{session_id}/voice", response_model=VoiceFeedbackResponse)
async def voice_event(
    session_id: str,
    request: VoiceEventRequest,
    registry: SessionRegistry = Depends(get_session_registry),
) -> VoiceFeedbackResponse:
    """Feed one speech-recognition event; only final transcripts settle the draft"""
    try:
        controller = registry.voice(session_id)
    except SessionNotFoundError as e:
        raise _http_error(e) from e
    controller.supported = request.supported
    feedback = controller.handle(
        request.event,
        results=[SpeechResult(r.transcript, r.is_final) for r in request.results],
        error=request.error,
    )
    return VoiceFeedbackResponse(**feedback.to_dict())
