"""
Response crafter tests
"""

from collections import deque
from unittest.mock import Mock

import pytest

from galbestfriend.domain.models.profile import (
    FocusArea,
    ResponseStyle,
    Situation,
    ToneBucket,
    UserProfile,
)
from galbestfriend.domain.services.advice import SituationalAdvisor
from galbestfriend.domain.services.crafter import (
    QUESTION_FALLBACKS,
    STATEMENT_FALLBACKS,
    ResponseCrafter,
    combine,
    contextual_fallback,
)

ANGRY_MESSAGE = "I'm so angry, he ignored me for three days"
ANGRY_ACK = (
    "I can hear how angry you are, and that anger is valid. "
    "Being ignored by he — especially when you need a response — that hurts."
)


class TestCombine:
    def test_conversational_joins_with_space(self):
        assert combine("Ack.", "Advice?", ResponseStyle.CONVERSATIONAL) == "Ack. Advice?"

    def test_structured_joins_with_blank_line(self):
        assert combine("Ack.", "Advice?", ResponseStyle.STRUCTURED) == "Ack.\n\nAdvice?"

    def test_brief_prefers_acknowledgment(self):
        assert combine("Ack.", "Advice?", ResponseStyle.BRIEF) == "Ack."
        assert combine("", "Advice?", ResponseStyle.BRIEF) == "Advice?"

    def test_missing_part(self):
        assert combine("", "Advice?", ResponseStyle.STRUCTURED) == "Advice?"
        assert combine("Ack.", "", ResponseStyle.CONVERSATIONAL) == "Ack."


class TestResponseCrafter:
    """End-to-end local replies"""

    def setup_method(self):
        self.crafter = ResponseCrafter()

    def test_gentle_venting_reply(self):
        profile = UserProfile(name="Sam", tone_level=2)

        response = self.crafter.craft(ANGRY_MESSAGE, profile)

        assert response == ANGRY_ACK + " " + SituationalAdvisor.VENTING[ToneBucket.GENTLE]

    def test_structured_style(self):
        profile = UserProfile(tone_level=2, response_style=ResponseStyle.STRUCTURED)

        response = self.crafter.craft(ANGRY_MESSAGE, profile)

        assert response == ANGRY_ACK + "\n\n" + SituationalAdvisor.VENTING[ToneBucket.GENTLE]

    def test_brief_style(self):
        profile = UserProfile(tone_level=2, response_style=ResponseStyle.BRIEF)

        assert self.crafter.craft(ANGRY_MESSAGE, profile) == ANGRY_ACK

    def test_brief_without_acknowledgment_gives_advice(self):
        profile = UserProfile(tone_level=5, response_style=ResponseStyle.BRIEF)

        response = self.crafter.craft("It was a weird day", profile)

        assert response == SituationalAdvisor.FOLLOW_UP[ToneBucket.DIRECT]

    @pytest.mark.parametrize("style", list(ResponseStyle))
    @pytest.mark.parametrize("tone_level", [1, 3, 5])
    @pytest.mark.parametrize("focus", list(FocusArea))
    @pytest.mark.parametrize("situation", list(Situation) + [None])
    def test_never_empty(self, style, tone_level, focus, situation):
        profile = UserProfile(
            tone_level=tone_level, response_style=style, focus_area=focus, situation=situation
        )

        for message in ("hi", ANGRY_MESSAGE, "Should I text him back?", "We broke up", "we fought"):
            assert self.crafter.craft(message, profile).strip()

    @pytest.mark.parametrize(
        "situation,table",
        [
            (Situation.ROMANTIC, SituationalAdvisor.CONFLICT_ROMANTIC),
            (Situation.FAMILY, SituationalAdvisor.CONFLICT_FAMILY),
            (Situation.FRIENDSHIP, SituationalAdvisor.CONFLICT_DEFAULT),
            (None, SituationalAdvisor.CONFLICT_DEFAULT),
        ],
    )
    def test_conflict_without_named_person_uses_situation(self, situation, table):
        profile = UserProfile(focus_area=FocusArea.PRACTICAL, situation=situation)

        response = self.crafter.craft("we fought", profile)

        assert response.endswith(table[ToneBucket.BALANCED])

    def test_analysis_window_receives_analysis(self):
        window = deque(maxlen=5)
        profile = UserProfile()

        self.crafter.craft(ANGRY_MESSAGE, profile, analysis_window=window)

        assert len(window) == 1
        assert window[0].has_person("he")

    def test_deterministic(self):
        profile = UserProfile(tone_level=4, focus_area=FocusArea.PRACTICAL)

        first = self.crafter.craft("My boss yelled at me today!!", profile)
        second = self.crafter.craft("My boss yelled at me today!!", profile)

        assert first == second

    def test_fallback_when_nothing_composed(self):
        acknowledgment = Mock()
        acknowledgment.build.return_value = ""
        advice = Mock()
        advice.build.return_value = "  "
        crafter = ResponseCrafter(acknowledgment_builder=acknowledgment, advice_builder=advice)

        statement = crafter.craft("whatever", UserProfile(tone_level=1))
        question = crafter.craft("whatever?", UserProfile(tone_level=1))

        assert statement == STATEMENT_FALLBACKS[ToneBucket.GENTLE]
        assert question == QUESTION_FALLBACKS[ToneBucket.GENTLE]


class TestContextualFallback:
    def test_question_versus_statement(self):
        assert contextual_fallback(ToneBucket.DIRECT, "huh?") == QUESTION_FALLBACKS[ToneBucket.DIRECT]
        assert contextual_fallback(ToneBucket.DIRECT, "huh") == STATEMENT_FALLBACKS[ToneBucket.DIRECT]
