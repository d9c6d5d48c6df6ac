"""
Onboarding endpoints
"""

from fastapi import APIRouter

from ...domain.models.profile import (
    COLOR_THEMES,
    DEFAULT_COLOR_THEME,
    TONE_PREVIEW_TEXTS,
    Belief,
    FocusArea,
    LifeStage,
    ResponseStyle,
    Situation,
)
from ..schemas import ColorThemeResponse, OnboardingOptionsResponse

router = APIRouter(prefix="/v1/onboarding", tags=["onboarding"])


@router.get("/options", response_model=OnboardingOptionsResponse)
async def onboarding_options() -> OnboardingOptionsResponse:
    """Choices and previews for each onboarding step"""
    return OnboardingOptionsResponse(
        situations=[s.value for s in Situation],
        beliefs=[b.value for b in Belief],
        life_stages=[s.value for s in LifeStage],
        response_styles=[s.value for s in ResponseStyle],
        focus_areas=[f.value for f in FocusArea],
        tone_previews=dict(TONE_PREVIEW_TEXTS),
        color_themes={key: ColorThemeResponse(**theme) for key, theme in COLOR_THEMES.items()},
        default_color_theme=DEFAULT_COLOR_THEME,
    )
