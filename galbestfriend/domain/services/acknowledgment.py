"""
Acknowledgment builder
Reflects back what the user said before any advice is given
"""

import re

from ..models.analysis import ActionTag, EmotionTag, Intensity, MessageAnalysis, Timeframe
from ..models.profile import ToneBucket

G, B, D = ToneBucket.GENTLE, ToneBucket.BALANCED, ToneBucket.DIRECT

EMOTION_ACKS: dict[ToneBucket, dict[EmotionTag, str]] = {
    G: {
        EmotionTag.ANGRY: "I can hear how angry you are, and that anger is valid.",
        EmotionTag.FRUSTRATED: "That frustration makes complete sense.",
        EmotionTag.SAD: "I'm sorry you're feeling so sad right now.",
        EmotionTag.HURT: "That sounds really painful, and I'm sorry you're hurting.",
        EmotionTag.ANXIOUS: "It's understandable to feel anxious about this.",
        EmotionTag.CONFUSED: "It makes sense that you're feeling confused.",
        EmotionTag.LONELY: "Feeling lonely like that is really hard.",
        EmotionTag.EMBARRASSED: "That sounds like a really uncomfortable situation.",
        EmotionTag.JEALOUS: "Those feelings are natural, even when they're uncomfortable.",
        EmotionTag.GUILTY: "It sounds like you're being really hard on yourself.",
        EmotionTag.BETRAYED: "Feeling betrayed like that cuts deep. I'm sorry.",
        EmotionTag.DISAPPOINTED: "That disappointment is real and valid.",
        EmotionTag.EXHAUSTED: "It sounds like this has been wearing you down.",
        EmotionTag.HOPELESS: "When things feel hopeless, everything is harder. I hear you.",
        EmotionTag.PREOCCUPIED: "It's hard when something takes up so much space in your head.",
        EmotionTag.OVERWHELMED: "That's a lot to process. No wonder you're feeling overwhelmed.",
    },
    B: {
        EmotionTag.ANGRY: "I get why you're angry — that would set anyone off.",
        EmotionTag.FRUSTRATED: "That sounds really frustrating.",
        EmotionTag.SAD: "That's genuinely sad, and it's okay to feel that way.",
        EmotionTag.HURT: "That's hurtful. No wonder you're upset.",
        EmotionTag.ANXIOUS: "I understand the anxiety around this.",
        EmotionTag.CONFUSED: "Yeah, that's confusing. There's a lot to untangle here.",
        EmotionTag.LONELY: "Loneliness is tough, especially in situations like this.",
        EmotionTag.EMBARRASSED: "That's an awkward spot to be in.",
        EmotionTag.JEALOUS: "Jealousy can be uncomfortable but it's telling you something.",
        EmotionTag.GUILTY: "Sounds like the guilt is weighing on you.",
        EmotionTag.BETRAYED: "That's a betrayal. That's serious.",
        EmotionTag.DISAPPOINTED: "That's disappointing, no question.",
        EmotionTag.EXHAUSTED: "You sound exhausted by this whole thing.",
        EmotionTag.HOPELESS: "Feeling stuck is the worst. Let's see what we can do.",
        EmotionTag.PREOCCUPIED: "It's clearly living rent-free in your head right now.",
        EmotionTag.OVERWHELMED: "That's overwhelming. Let's break it down.",
    },
    D: {
        EmotionTag.ANGRY: "You're pissed. I get it.",
        EmotionTag.FRUSTRATED: "Frustrating as hell, yeah.",
        EmotionTag.SAD: "That sucks. It's okay to be sad about it.",
        EmotionTag.HURT: "That's painful. No sugarcoating it.",
        EmotionTag.ANXIOUS: "The anxiety makes sense here.",
        EmotionTag.CONFUSED: "Confusing situation. Let's figure it out.",
        EmotionTag.LONELY: "Feeling alone in this is rough.",
        EmotionTag.EMBARRASSED: "Awkward situation. Let's deal with it.",
        EmotionTag.JEALOUS: "Jealousy's hitting — let's look at why.",
        EmotionTag.GUILTY: "The guilt is eating at you.",
        EmotionTag.BETRAYED: "That's betrayal, plain and simple.",
        EmotionTag.DISAPPOINTED: "Disappointing. Let's talk about what to do.",
        EmotionTag.EXHAUSTED: "You're drained. I hear it.",
        EmotionTag.HOPELESS: "Feeling stuck. But you're here, so let's work on it.",
        EmotionTag.PREOCCUPIED: "Can't stop thinking about it, huh?",
        EmotionTag.OVERWHELMED: "A lot going on. Let's tackle it.",
    },
}

# Templates take {person} (as written) and {Person} (first letter upper-cased)
ACTION_ACKS: dict[ActionTag, dict[ToneBucket, str]] = {
    ActionTag.IGNORED: {
        G: "Being ignored by {person} — especially when you need a response — that hurts.",
        B: "{Person} ignoring you like that isn't okay.",
        D: "{Person} ignoring you is disrespectful.",
    },
    ActionTag.BETRAYAL: {
        G: "What {person} did was a serious breach of trust. That's not small.",
        B: "That's a real betrayal from {person}. Trust is hard to rebuild.",
        D: "{Person} betrayed you. That's facts.",
    },
    ActionTag.CONFLICT: {
        G: "That kind of reaction from {person} must have been really jarring.",
        B: "{Person} blowing up like that isn't fair to you.",
        D: "{Person} losing it on you — not cool.",
    },
    ActionTag.ARGUMENT: {
        G: "Arguments can leave us feeling so raw afterward.",
        B: "Fighting like that takes a toll on both of you.",
        D: "That fight sounds intense. Let's unpack it.",
    },
    ActionTag.BREAKUP: {
        G: "Breakups are one of the hardest things. I'm here for you.",
        B: "That's a big change. How are you holding up?",
        D: "Breakups hit hard. How are you doing with it?",
    },
    ActionTag.DISCOVERY: {
        G: "Finding that out must have been such a shock.",
        B: "Discovering that changes things. I can see why you're processing.",
        D: "That's a big revelation. Changes the picture.",
    },
    ActionTag.RECONCILIATION: {
        G: "It takes courage to reach out. How did it feel when that happened?",
        B: "Them apologizing — how did that land for you?",
        D: "They apologized. Do you believe it?",
    },
}

QUOTE_ACKS: dict[ToneBucket, str] = {
    G: 'When they said "{phrase}" — that had to sting.',
    B: '"{phrase}" — yeah, that\'s a lot to hear.',
    D: '"{phrase}" — ouch. Let\'s address that.',
}

FRESH_ACKS: dict[ToneBucket, str] = {
    G: "This just happened, so everything is still so raw.",
    B: "This is fresh, so take a breath with me.",
    D: "This literally just happened. Your head's probably spinning.",
}

ONGOING_ACKS: dict[ToneBucket, str] = {
    G: "Dealing with this for so long takes a real toll.",
    B: "This has been going on a while. That wears you down.",
    D: "You've been sitting with this too long. Let's figure it out.",
}

DEFAULT_PERSON = "they"
MAX_PARTS = 2


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


class AcknowledgmentBuilder:
    """Builds at most two short sentences mirroring the user's message"""

    def build(self, analysis: MessageAnalysis, tone: ToneBucket) -> str:
        """
        Build the acknowledgment

        Args:
            analysis: result of MessageAnalyzer.analyze
            tone: tone bucket of the current profile

        Returns:
            str: up to two sentences joined by a space, possibly empty
        """
        parts: list[str] = []

        if analysis.emotions:
            ack = EMOTION_ACKS.get(tone, {}).get(analysis.emotions[0])
            if ack:
                parts.append(ack)

        if analysis.actions:
            main_person = analysis.primary_person
            person = main_person.person if main_person else DEFAULT_PERSON
            template = ACTION_ACKS.get(analysis.actions[0], {}).get(tone)
            if template and not self._mentions(parts, person):
                parts.append(
                    template.format(person=person, Person=_capitalize_first(person))
                )

        if analysis.key_phrases:
            phrase = analysis.key_phrases[0]
            if 5 < len(phrase) < 60 and tone in QUOTE_ACKS:
                parts.append(QUOTE_ACKS[tone].format(phrase=phrase))

        if analysis.timeframe is Timeframe.RECENT and analysis.intensity is Intensity.HIGH:
            parts.append(FRESH_ACKS.get(tone, FRESH_ACKS[B]))
        elif analysis.timeframe is Timeframe.ONGOING:
            parts.append(ONGOING_ACKS.get(tone, ONGOING_ACKS[B]))

        return " ".join(parts[:MAX_PARTS])

    @staticmethod
    def _mentions(parts: list[str], person: str) -> bool:
        # Whole word, so "he" is not found inside "hear"
        pattern = re.compile(rf"\b{re.escape(person)}\b")
        return any(pattern.search(part) for part in parts)
