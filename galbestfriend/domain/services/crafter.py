"""
Response crafter
Local rule-based reply: analyze, acknowledge, advise, combine by style
"""

from collections import deque

from ..models.analysis import MessageAnalysis
from ..models.profile import ResponseStyle, ToneBucket, UserProfile
from .acknowledgment import AcknowledgmentBuilder
from .advice import AdviceBuilder
from .analyzer import MessageAnalyzer

QUESTION_FALLBACKS: dict[ToneBucket, str] = {
    ToneBucket.GENTLE: "That's a thoughtful question. Tell me more about what's behind it — what's making you ask?",
    ToneBucket.BALANCED: "Good question. Give me more context — what's the situation?",
    ToneBucket.DIRECT: "I want to give you a real answer. Fill me in more — what's going on?",
}

STATEMENT_FALLBACKS: dict[ToneBucket, str] = {
    ToneBucket.GENTLE: "I hear you. There's a lot there. What part feels most important to talk through?",
    ToneBucket.BALANCED: "Got it. What's the part of this that's weighing on you most?",
    ToneBucket.DIRECT: "Okay. What do you need — to vent more, or to figure out what to do?",
}


def contextual_fallback(tone: ToneBucket, message: str) -> str:
    """Reply used when composition produced nothing"""
    table = QUESTION_FALLBACKS if "?" in message else STATEMENT_FALLBACKS
    return table.get(tone, table[ToneBucket.BALANCED])


def combine(acknowledgment: str, advice: str, style: ResponseStyle) -> str:
    """Join the two parts the way the response style asks for"""
    if style is ResponseStyle.BRIEF:
        return acknowledgment or advice
    if acknowledgment and advice:
        separator = "\n\n" if style is ResponseStyle.STRUCTURED else " "
        return f"{acknowledgment}{separator}{advice}"
    return acknowledgment or advice


class ResponseCrafter:
    """
    Local reply generator

    Deterministic for a given message and profile. The optional analysis
    window receives every analysis produced; builders do not read it.
    """

    def __init__(
        self,
        analyzer: MessageAnalyzer | None = None,
        acknowledgment_builder: AcknowledgmentBuilder | None = None,
        advice_builder: AdviceBuilder | None = None,
    ):
        self.analyzer = analyzer or MessageAnalyzer()
        self.acknowledgment_builder = acknowledgment_builder or AcknowledgmentBuilder()
        self.advice_builder = advice_builder or AdviceBuilder()

    def craft(
        self,
        message: str,
        profile: UserProfile,
        analysis_window: deque[MessageAnalysis] | None = None,
    ) -> str:
        """
        Craft a reply to ``message`` for ``profile``

        Args:
            message: user message
            profile: current preferences (tone, style, focus, situation)
            analysis_window: bounded deque the analysis is appended to

        Returns:
            str: non-empty reply
        """
        tone = profile.tone
        analysis = self.analyzer.analyze(message)
        if analysis_window is not None:
            analysis_window.append(analysis)

        acknowledgment = self.acknowledgment_builder.build(analysis, tone)
        advice = self.advice_builder.build(
            analysis, tone, profile.focus_area, message, profile.situation
        )

        response = combine(acknowledgment, advice, profile.response_style)
        if not response or not response.strip():
            response = contextual_fallback(tone, message)
        return response
