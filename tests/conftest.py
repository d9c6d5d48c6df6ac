"""
Shared fixtures
"""

import random

import pytest

from galbestfriend.core.config import CompanionSettings
from galbestfriend.domain.models.profile import (
    FocusArea,
    ResponseStyle,
    Situation,
    UserProfile,
)
from galbestfriend.domain.services.openers import OpenerGenerator


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        name="Sam",
        situation=Situation.ROMANTIC,
        tone_level=3,
        response_style=ResponseStyle.CONVERSATIONAL,
        focus_area=FocusArea.EMOTIONAL,
    )


@pytest.fixture
def companion_settings() -> CompanionSettings:
    """No pacing delay, short external timeout"""
    return CompanionSettings(pacing_enabled=False, reply_timeout=0.5)


@pytest.fixture
def openers() -> OpenerGenerator:
    return OpenerGenerator(rng=random.Random(7))
