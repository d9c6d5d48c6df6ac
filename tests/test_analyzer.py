"""
Message analyzer tests
"""

import pytest

from galbestfriend.domain.models.analysis import (
    ActionTag,
    EmotionTag,
    Intensity,
    RelationshipType,
    Timeframe,
)
from galbestfriend.domain.services.analyzer import MessageAnalyzer


class TestMessageAnalyzer:
    """Pattern battery"""

    def setup_method(self):
        self.analyzer = MessageAnalyzer()

    def test_angry_and_ignored(self):
        analysis = self.analyzer.analyze("I'm so angry, he ignored me for three days")

        assert analysis.emotions == [EmotionTag.ANGRY]
        assert analysis.intensity is Intensity.HIGH
        assert analysis.actions == [ActionTag.IGNORED]
        assert [p.person for p in analysis.people] == ["he"]
        assert analysis.timeframe is Timeframe.NONE
        assert analysis.questions == []

    def test_blank_message_is_empty(self):
        analysis = self.analyzer.analyze("   ")

        assert analysis.people == []
        assert analysis.actions == []
        assert analysis.emotions == []
        assert analysis.key_phrases == []
        assert analysis.questions == []
        assert analysis.timeframe is Timeframe.NONE
        assert analysis.intensity is Intensity.MEDIUM

    def test_specific_person_and_pronoun_both_kept(self):
        analysis = self.analyzer.analyze("My boyfriend says he is busy")

        labels = [p.person for p in analysis.people]
        assert labels == ["boyfriend", "he"]
        assert analysis.specific_person.person == "boyfriend"
        assert analysis.specific_person.relationship is RelationshipType.ROMANTIC

    def test_people_deduplicated_by_label(self):
        analysis = self.analyzer.analyze("My husband and my wife")

        assert [p.person for p in analysis.people] == ["partner"]

    @pytest.mark.parametrize(
        "message,label,relationship",
        [
            ("My sister yelled at me", "sister", RelationshipType.FAMILY),
            ("my Brother is annoying", "brother", RelationshipType.FAMILY),
            ("The manager called me in", "manager", RelationshipType.WORK),
            ("my coworker took credit", "coworker", RelationshipType.WORK),
        ],
    )
    def test_sibling_and_work_use_matched_word(self, message, label, relationship):
        analysis = self.analyzer.analyze(message)

        assert analysis.people[0].person == label
        assert analysis.people[0].relationship is relationship

    def test_she_not_matched_inside_sister(self):
        analysis = self.analyzer.analyze("My sister yelled at me")

        assert not analysis.has_person("she")
        assert analysis.actions == [ActionTag.CONFLICT]

    def test_subject_may_end_a_longer_word(self):
        analysis = self.analyzer.analyze("She took the left turn")

        assert analysis.actions == [ActionTag.ENDING]

    def test_multiple_actions_in_rule_order(self):
        analysis = self.analyzer.analyze("He lied and then we argued about it")

        assert analysis.actions == [ActionTag.BETRAYAL, ActionTag.ARGUMENT]
        assert analysis.has_conflict

    def test_any_high_emotion_makes_intensity_high(self):
        analysis = self.analyzer.analyze("I feel confused and heartbroken")

        assert analysis.emotions == [EmotionTag.SAD, EmotionTag.CONFUSED]
        assert analysis.intensity is Intensity.HIGH

    def test_medium_only_emotions_stay_medium(self):
        analysis = self.analyzer.analyze("I'm a bit worried about it")

        assert analysis.emotions == [EmotionTag.ANXIOUS]
        assert analysis.intensity is Intensity.MEDIUM

    def test_quoted_phrase_extracted(self):
        analysis = self.analyzer.analyze('She said "you never listen" to me')

        assert analysis.key_phrases[0] == "you never listen"
        assert ActionTag.COMMUNICATION in analysis.actions

    def test_short_phrases_dropped(self):
        analysis = self.analyzer.analyze('He just went "ok" and left')

        assert "ok" not in analysis.key_phrases

    def test_questions_captured(self):
        analysis = self.analyzer.analyze("Is it normal to miss him?")

        assert analysis.questions == ["Is it normal to miss him?"]

    def test_am_i_question_without_question_mark(self):
        analysis = self.analyzer.analyze("Am I overreacting here")

        assert analysis.questions == ["Am I overreacting"]

    @pytest.mark.parametrize(
        "message,expected",
        [
            ("It happened this morning", Timeframe.RECENT),
            ("We talked yesterday", Timeframe.DAYS),
            ("Since last week he's been distant", Timeframe.WEEKS),
            ("This has been going on for months", Timeframe.ONGOING),
            ("Yesterday it started and it's been going on for a while", Timeframe.DAYS),
            ("Just now, after what happened yesterday", Timeframe.RECENT),
            ("Nothing special", Timeframe.NONE),
        ],
    )
    def test_timeframe_priority(self, message, expected):
        assert self.analyzer.analyze(message).timeframe is expected

    @pytest.mark.parametrize(
        "message",
        [
            "I'm fine!!",
            "STOP IGNORING ME",
            "I really miss how it was",
            "i honestly don't care anymore",
        ],
    )
    def test_intensity_override(self, message):
        assert self.analyzer.analyze(message).intensity is Intensity.HIGH

    @pytest.mark.parametrize("message", ["Hello there Michael", "we had lunch", "OK fine"])
    def test_plain_message_stays_medium(self, message):
        assert self.analyzer.analyze(message).intensity is Intensity.MEDIUM

    def test_analysis_is_deterministic(self):
        message = 'My mom said "you are too sensitive" yesterday!!'

        assert self.analyzer.analyze(message) == self.analyzer.analyze(message)

    def test_to_dict(self):
        data = self.analyzer.analyze("My dad yelled today").to_dict()

        assert data["people"] == [{"person": "dad", "type": "family"}]
        assert data["actions"] == ["conflict"]
        assert data["timeframe"] == "recent"
