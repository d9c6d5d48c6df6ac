"""
API Schemas
Pydantic request/response models
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

# === Chat proxy ===


class ChatProxyRequest(BaseModel):
    """Stateless reply request; the client sends its own history"""

    message: str = Field(..., min_length=1, description="Latest user message")
    context: dict[str, Any] = Field(
        default_factory=dict,
        description="toneLevel, responseStyle, focusArea, situation, belief, lifeStage, userName, history",
    )


class ChatProxyResponse(BaseModel):
    reply: str


# === Onboarding ===


class ColorThemeResponse(BaseModel):
    name: str
    mood: str
    h: int
    s: int
    l: int  # noqa: E741


class OnboardingOptionsResponse(BaseModel):
    """Choices offered by the onboarding flow"""

    situations: list[str]
    beliefs: list[str]
    life_stages: list[str]
    response_styles: list[str]
    focus_areas: list[str]
    tone_previews: dict[int, str]
    color_themes: dict[str, ColorThemeResponse]
    default_color_theme: str


class OnboardingRequest(BaseModel):
    """Completed onboarding; starts a chat session"""

    name: str = Field(..., min_length=1, max_length=50, description="Display name")
    color_theme: str = Field("rose", description="Cosmetic theme")
    situation: str | None = Field(None, description="friendship | romantic | family | self")
    belief: str | None = Field(None, description="spiritual | religious | secular | mixed")
    life_stage: str | None = Field(None, description="teens | early20s | late20s | 30s | 40plus")
    tone_level: int = Field(3, description="1 (gentle) to 5 (real talk)")
    response_style: str = Field("conversational", description="conversational | structured | brief")
    focus_area: str = Field("emotional", description="emotional | practical | perspective")


# === Sessions ===


class TurnResponse(BaseModel):
    role: str
    content: str
    timestamp: str


class CheckResponse(BaseModel):
    passed: bool
    status: str


class SessionResponse(BaseModel):
    session_id: str
    profile: dict[str, Any]
    history: list[TurnResponse]
    status: str
    is_typing: bool
    pending_validation: dict[str, CheckResponse] | None = None


class MessageRequest(BaseModel):
    message: str = Field(..., description="User message")


class ReplyResponse(BaseModel):
    """Reply appended to the session"""

    reply: str
    source: str = Field(..., description="external | local")
    turn: TurnResponse
    validation: dict[str, CheckResponse] | None = Field(
        None, description="Maker-checker results when the reply was validated"
    )


class RegenerateResponse(BaseModel):
    regenerated: bool
    tone_level: int
    reply: ReplyResponse | None = None


class SettingsRequest(BaseModel):
    """Partial settings update from the in-chat panel"""

    tone_level: int | None = None
    response_style: str | None = None
    focus_area: str | None = None
    color_theme: str | None = None


class SettingsResponse(BaseModel):
    profile: dict[str, Any]
    color_theme_applied: bool | None = None


# === Voice ===


class SpeechResultModel(BaseModel):
    transcript: str
    is_final: bool = False


class VoiceEventRequest(BaseModel):
    """One event from the client's speech recognizer"""

    event: Literal["start", "result", "end", "error"]
    results: list[SpeechResultModel] = Field(default_factory=list)
    error: str | None = Field(None, description="no-speech | audio-capture | not-allowed | ...")
    supported: bool = Field(True, description="False when the client has no speech recognition")


class VoiceFeedbackResponse(BaseModel):
    status: str
    header_status: str
    draft: str
    listening: bool
    system_message: str | None = None


# === System ===


class HealthResponse(BaseModel):
    """Health check"""

    status: str
    timestamp: datetime
    version: str
    components: dict[str, bool]


class APIInfoResponse(BaseModel):
    """API info"""

    service: str
    version: str
    description: str
    features: list[str]
