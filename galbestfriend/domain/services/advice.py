"""
Advice builder
Answers explicit questions, otherwise gives advice for what happened
"""

from collections.abc import Callable

from ..models.analysis import MessageAnalysis
from ..models.profile import FocusArea, Situation, ToneBucket

G, B, D = ToneBucket.GENTLE, ToneBucket.BALANCED, ToneBucket.DIRECT

ToneTable = dict[ToneBucket, str]


def _pick(table: ToneTable, tone: ToneBucket) -> str:
    return table.get(tone, table[B])


class QuestionResponder:
    """Canned answers for the questions people ask most"""

    GENERIC: ToneTable = {
        G: "That's a really important question to be asking yourself. What does your intuition say, underneath all the noise?",
        B: "Good question. Let's think through it — what are the actual options here, and what are the real consequences of each?",
        D: "Alright, let's work through this. What are you really asking — and what answer are you hoping I won't give you?",
    }

    def __init__(self):
        # Checked in order; first matching intent wins
        self._intents: list[tuple[str, Callable[[str], bool], ToneTable]] = [
            (
                "should_i_text",
                lambda m: any(
                    k in m for k in ("should i text", "should i message", "should i reach out")
                ),
                {
                    G: "Before reaching out, check in with yourself — what do you hope to get from that conversation? Make sure you're in a space where any response (or non-response) won't knock you off your feet.",
                    B: "Here's my take: only reach out if you're okay with any outcome — including silence. What would you want to say if you did text?",
                    D: "Real question: what do you actually want from texting them? If you're hoping for a specific response, you might be setting yourself up. What's your gut saying?",
                },
            ),
            (
                "should_i_forgive",
                lambda m: "should i forgive" in m or ("should i give" in m and "chance" in m),
                {
                    G: "Forgiveness is a personal journey, not an obligation. It's okay to take all the time you need. What would forgiving look like for you? It doesn't have to mean going back to how things were.",
                    B: "Forgiveness isn't about them — it's about whether holding onto this is serving you. But forgiving doesn't mean forgetting or even reconciling. What do YOU need to move forward?",
                    D: "Here's the real question: has anything actually changed? Forgiveness without change just sets you up to get hurt the same way again. What's different now?",
                },
            ),
            (
                "should_i_break_up",
                lambda m: any(
                    k in m for k in ("should i break up", "should i end", "should i leave")
                ),
                {
                    G: "That's such a big decision, and only you can make it. But ask yourself: when you imagine your life six months from now, what feels more like relief? Staying or leaving?",
                    B: "Big question. Here's what I'd ask: Is this a rough patch in an otherwise good relationship, or is this the relationship? There's a difference between fighting FOR something and just fighting.",
                    D: "Here's how I'd think about it: Are you trying to fix something fixable, or are you just avoiding the pain of ending it? Sometimes we stay because leaving is hard, not because staying is right.",
                },
            ),
            (
                "am_i_wrong",
                lambda m: any(k in m for k in ("am i wrong", "am i overreacting", "am i crazy")),
                {
                    G: "Your feelings are not wrong — they're information. Even if your reaction feels big, it's pointing to something real that matters to you. What do you think triggered such a strong response?",
                    B: "You're not crazy for feeling what you feel. The question isn't whether your reaction is 'right' — it's whether it matches what actually happened. Walk me through it.",
                    D: "Let's figure that out together. Tell me exactly what happened and how you reacted. Sometimes we overreact, sometimes people gaslight us into thinking we are. Let's look at the facts.",
                },
            ),
        ]

    def classify(self, message: str) -> str:
        """Name of the matched intent, ``"generic"`` when none matches"""
        lowered = message.lower()
        for name, matches, _ in self._intents:
            if matches(lowered):
                return name
        return "generic"

    def respond(self, message: str, tone: ToneBucket) -> str:
        lowered = message.lower()
        for _, matches, table in self._intents:
            if matches(lowered):
                return _pick(table, tone)
        return _pick(self.GENERIC, tone)


class SituationalAdvisor:
    """
    Advice driven by what happened rather than by a question

    Rules are checked in order and the first one wins. Emotional focus
    with a plain vent gets a pacing prompt instead of advice.
    """

    VENTING: ToneTable = {
        G: "I'm here to listen. Is there more you need to get out, or would it help to think through next steps?",
        B: "I hear you. Do you want to keep venting, or are you ready to figure out what to do?",
        D: "Got it. Needed to get that out? Or are you ready to talk about what to do?",
    }
    CONFLICT_ROMANTIC: ToneTable = {
        G: "When things cool down, it might help to revisit this conversation — but from a place of curiosity instead of defense. Something like 'I want to understand what you were feeling when...'",
        B: "Once things settle, try having the conversation again but slower. Focus on understanding each other, not winning. 'I felt X when Y happened' works better than accusations.",
        D: "Look — fighting happens. But how you repair matters. When you're both calm, address what actually triggered this. Don't let it fester.",
    }
    CONFLICT_FAMILY: ToneTable = {
        G: "Family conflicts hit different because the history runs deep. Sometimes the argument isn't about what it seems — it's about older patterns. Can you see any of those at play here?",
        B: "Family stuff is layered. This fight might be connected to older dynamics. The question is: what boundary do you need here, regardless of whether they understand it?",
        D: "Family drama usually isn't about the thing you're fighting about. What's the real issue underneath? And what boundary do you need to set?",
    }
    CONFLICT_DEFAULT: ToneTable = {
        G: "Give yourself permission to step back before deciding how to respond. Sometimes space creates clarity.",
        B: "Before you respond, get clear on what outcome you actually want. That should guide what you say.",
        D: "What do you want to happen here? Figure that out first, then we can work backwards on what to do.",
    }
    ENDING: ToneTable = {
        G: "Endings are hard, even when they might be right. For now, focus on getting through each day. The clarity will come. What's one small thing you can do to take care of yourself today?",
        B: "This is a transition. It's going to hurt for a while, and that's normal. Focus on what you can control — your routines, your support system, your next steps.",
        D: "It's over. That's painful but also potentially freeing. What do you need right now — to grieve, to move forward, or just to sit with it for a bit?",
    }
    PERSPECTIVE: ToneTable = {
        G: "Sometimes stepping back helps. If a friend told you this exact story, what would you say to them? We're often wiser for others than ourselves.",
        B: "Let's zoom out. What would this situation look like from the outside? And what might you be missing from their perspective?",
        D: "Okay, different angle: what's the most generous interpretation of their behavior? I'm not saying it's correct, but what might they say if they were defending themselves?",
    }
    PRACTICAL: ToneTable = {
        G: "When you're ready, one small step might help: write out what you want to happen, then we can work backwards from there.",
        B: "Let's get practical. What's the ONE thing you could do this week that would move this forward — even a little?",
        D: "Action time. What's the move here? What can you actually do about this situation?",
    }
    FOLLOW_UP: ToneTable = {
        G: "Thank you for sharing all of that. What feels like the most important thing to focus on right now?",
        B: "I'm following. What do you think you need most right now — to process this more, or to figure out next steps?",
        D: "Okay, I've got the picture. What do you want to do about it?",
    }

    def advise(
        self,
        analysis: MessageAnalysis,
        tone: ToneBucket,
        focus: FocusArea,
        message: str,
        situation: Situation | None = None,
    ) -> str:
        if focus is FocusArea.EMOTIONAL and "?" not in message and analysis.emotions:
            return _pick(self.VENTING, tone)

        if analysis.has_conflict:
            category = self._relationship_category(analysis, situation)
            if category == "romantic":
                return _pick(self.CONFLICT_ROMANTIC, tone)
            if category == "family":
                return _pick(self.CONFLICT_FAMILY, tone)
            return _pick(self.CONFLICT_DEFAULT, tone)

        if analysis.has_ending:
            return _pick(self.ENDING, tone)

        if focus is FocusArea.PERSPECTIVE:
            return _pick(self.PERSPECTIVE, tone)

        if focus is FocusArea.PRACTICAL:
            return _pick(self.PRACTICAL, tone)

        return _pick(self.FOLLOW_UP, tone)

    @staticmethod
    def _relationship_category(
        analysis: MessageAnalysis, situation: Situation | None
    ) -> str | None:
        """The named person's relationship, else the onboarding situation"""
        person = analysis.specific_person
        if person is not None:
            return person.relationship.value
        return situation.value if situation else None


class AdviceBuilder:
    """Routes to the question responder or the situational advisor"""

    def __init__(
        self,
        question_responder: QuestionResponder | None = None,
        situational_advisor: SituationalAdvisor | None = None,
    ):
        self.question_responder = question_responder or QuestionResponder()
        self.situational_advisor = situational_advisor or SituationalAdvisor()

    def build(
        self,
        analysis: MessageAnalysis,
        tone: ToneBucket,
        focus: FocusArea,
        message: str,
        situation: Situation | None = None,
    ) -> str:
        """
        Build advice for one message

        Args:
            analysis: result of MessageAnalyzer.analyze
            tone: tone bucket
            focus: focus area of the profile
            message: raw user message
            situation: onboarding situation, used when no person is named

        Returns:
            str: never empty
        """
        lowered = message.lower()
        if analysis.questions:
            return self.question_responder.respond(lowered, tone)
        return self.situational_advisor.advise(analysis, tone, focus, lowered, situation)
