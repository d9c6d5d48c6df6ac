"""
Message analyzer
Ordered battery of keyword patterns that summarises one user message
"""

import re

from ..models.analysis import (
    ActionTag,
    EmotionTag,
    Intensity,
    MessageAnalysis,
    PersonMention,
    RelationshipType,
    Timeframe,
)

_I = re.IGNORECASE

# (pattern, label, relationship); label None means "use the matched word"
_PEOPLE_RULES: list[tuple[str, str | None, RelationshipType]] = [
    (r"\b(?:my |the )?(boyfriend|bf)\b", "boyfriend", RelationshipType.ROMANTIC),
    (r"\b(?:my |the )?(girlfriend|gf)\b", "girlfriend", RelationshipType.ROMANTIC),
    (r"\b(?:my |the )?(partner|spouse|husband|wife)\b", "partner", RelationshipType.ROMANTIC),
    (r"\b(?:my |the )?(ex)\b", "ex", RelationshipType.ROMANTIC),
    (r"\b(?:my |the )?(best friend|bestie|bff)\b", "best friend", RelationshipType.FRIENDSHIP),
    (r"\b(?:my |the |a )?(friend|buddy)\b", "friend", RelationshipType.FRIENDSHIP),
    (r"\b(?:my |the )?(mom|mother|mum)\b", "mom", RelationshipType.FAMILY),
    (r"\b(?:my |the )?(dad|father)\b", "dad", RelationshipType.FAMILY),
    (r"\b(?:my |the )?(sister|brother|sibling)\b", None, RelationshipType.FAMILY),
    (r"\b(?:my |the )?(boss|manager|coworker|colleague)\b", None, RelationshipType.WORK),
    (r"\bhe\b", "he", RelationshipType.UNKNOWN),
    (r"\bshe\b", "she", RelationshipType.UNKNOWN),
    (r"\bthey\b", "they", RelationshipType.UNKNOWN),
]

_SUBJECT = r"(?:he|she|they|my \w+) "

_ACTION_RULES: list[tuple[str, ActionTag]] = [
    (_SUBJECT + r"(said|told me|texted|called|messaged)", ActionTag.COMMUNICATION),
    (_SUBJECT + r"(ignored|ghosted|left me on read|didn't respond|didn't reply)", ActionTag.IGNORED),
    (_SUBJECT + r"(lied|cheated|betrayed|broke my trust)", ActionTag.BETRAYAL),
    (_SUBJECT + r"(yelled|screamed|got angry|blew up)", ActionTag.CONFLICT),
    (_SUBJECT + r"(left|broke up|ended|walked away|moved out)", ActionTag.ENDING),
    (_SUBJECT + r"(apologized|said sorry|reached out)", ActionTag.RECONCILIATION),
    (r"we (fought|argued|had a fight|disagreed)", ActionTag.ARGUMENT),
    (r"we (broke up|split|ended things)", ActionTag.BREAKUP),
    (r"we (talked|discussed|had a conversation)", ActionTag.DISCUSSION),
    (r"i (found out|discovered|realized|saw)", ActionTag.DISCOVERY),
    (r"i (told|said|texted|called|confronted)", ActionTag.USER_ACTION),
]

_EMOTION_RULES: list[tuple[str, EmotionTag, Intensity]] = [
    (r"\b(angry|furious|pissed|mad|livid)\b", EmotionTag.ANGRY, Intensity.HIGH),
    (r"\b(annoyed|irritated|frustrated)\b", EmotionTag.FRUSTRATED, Intensity.MEDIUM),
    (r"\b(sad|depressed|down|low|devastated|heartbroken)\b", EmotionTag.SAD, Intensity.HIGH),
    (r"\b(hurt|wounded|crushed|broken)\b", EmotionTag.HURT, Intensity.HIGH),
    (r"\b(anxious|worried|nervous|scared|afraid)\b", EmotionTag.ANXIOUS, Intensity.MEDIUM),
    (r"\b(confused|lost|uncertain|torn)\b", EmotionTag.CONFUSED, Intensity.MEDIUM),
    (r"\b(lonely|alone|isolated)\b", EmotionTag.LONELY, Intensity.MEDIUM),
    (r"\b(embarrassed|ashamed|humiliated)\b", EmotionTag.EMBARRASSED, Intensity.MEDIUM),
    (r"\b(jealous|envious)\b", EmotionTag.JEALOUS, Intensity.MEDIUM),
    (r"\b(guilty|regret|remorse)\b", EmotionTag.GUILTY, Intensity.MEDIUM),
    (r"\b(betrayed|deceived)\b", EmotionTag.BETRAYED, Intensity.HIGH),
    (r"\b(disappointed|let down)\b", EmotionTag.DISAPPOINTED, Intensity.MEDIUM),
    (r"\b(exhausted|tired|drained)\b", EmotionTag.EXHAUSTED, Intensity.MEDIUM),
    (r"\b(hopeless|helpless|stuck)\b", EmotionTag.HOPELESS, Intensity.HIGH),
    (r"\bi (can't stop thinking|keep thinking|can't get over)\b", EmotionTag.PREOCCUPIED, Intensity.MEDIUM),
    (r"\bi (don't know what to (do|feel|think))\b", EmotionTag.OVERWHELMED, Intensity.MEDIUM),
]

_KEY_PHRASE_PATTERNS: list[str] = [
    r'"([^"]+)"',
    r"said [\"']?([^\"']+)[\"']?",
    r"told me (?:that )?[\"']?([^\"'.!?]+)",
    r"called me (?:a )?[\"']?([^\"'.!?]+)",
]

_QUESTION_PATTERNS: list[str] = [
    r"should i ([^?]+)\?",
    r"what (should|do|can|would) i ([^?]+)\?",
    r"how (do|can|should) i ([^?]+)\?",
    r"is it (wrong|okay|normal|weird) (to |if |that )?([^?]+)\?",
    r"am i (wrong|crazy|overreacting|being too)",
    r"do you think ([^?]+)\?",
]

# Checked in this order; first match wins
_TIMEFRAME_RULES: list[tuple[str, Timeframe]] = [
    (r"\b(today|just now|just happened|earlier|this morning|tonight)\b", Timeframe.RECENT),
    (r"\b(yesterday|last night|few days ago)\b", Timeframe.DAYS),
    (r"\b(last week|few weeks|this week)\b", Timeframe.WEEKS),
    (r"\b(months|been going on|for a while|long time)\b", Timeframe.ONGOING),
]

MIN_PHRASE_LENGTH = 3
MAX_PHRASE_LENGTH = 99


class MessageAnalyzer:
    """
    Rule-based message analyzer

    Pure and deterministic: the same text always yields the same analysis.
    Rules are evaluated in declaration order with no negation handling.
    """

    def __init__(self):
        self._people = [(re.compile(p, _I), label, rel) for p, label, rel in _PEOPLE_RULES]
        self._actions = [(re.compile(p, _I), tag) for p, tag in _ACTION_RULES]
        self._emotions = [(re.compile(p, _I), tag, level) for p, tag, level in _EMOTION_RULES]
        self._key_phrases = [re.compile(p, _I) for p in _KEY_PHRASE_PATTERNS]
        self._questions = [re.compile(p, _I) for p in _QUESTION_PATTERNS]
        self._timeframes = [(re.compile(p, _I), frame) for p, frame in _TIMEFRAME_RULES]

        # Uppercase runs must stay case-sensitive
        self._shouting = re.compile(r"!{2,}|[A-Z]{5,}")
        self._intensifier = re.compile(r"\bi (really|truly|seriously|genuinely|honestly)\b", _I)

    def analyze(self, message: str) -> MessageAnalysis:
        """
        Analyze a raw user message

        Args:
            message: the utterance as typed (or transcribed)

        Returns:
            MessageAnalysis: empty collections for blank input
        """
        analysis = MessageAnalysis()
        if not message or not message.strip():
            return analysis

        analysis.people = self._extract_people(message)
        analysis.actions = [tag for pattern, tag in self._actions if pattern.search(message)]

        for pattern, tag, level in self._emotions:
            if pattern.search(message):
                analysis.emotions.append(tag)
                if level is Intensity.HIGH:
                    analysis.intensity = Intensity.HIGH

        analysis.key_phrases = self._extract_key_phrases(message)
        analysis.questions = [
            match.group(0)
            for pattern in self._questions
            for match in pattern.finditer(message)
        ]
        analysis.timeframe = self._detect_timeframe(message)

        if self._shouting.search(message) or self._intensifier.search(message):
            analysis.intensity = Intensity.HIGH

        return analysis

    def _extract_people(self, message: str) -> list[PersonMention]:
        people: list[PersonMention] = []
        seen: set[str] = set()
        for pattern, label, relationship in self._people:
            match = pattern.search(message)
            if not match:
                continue
            person = label or match.group(1).lower()
            if person in seen:
                continue
            seen.add(person)
            people.append(PersonMention(person=person, relationship=relationship))
        return people

    def _extract_key_phrases(self, message: str) -> list[str]:
        phrases: list[str] = []
        for pattern in self._key_phrases:
            for match in pattern.finditer(message):
                captured = match.group(1)
                if captured and MIN_PHRASE_LENGTH <= len(captured) <= MAX_PHRASE_LENGTH:
                    phrases.append(captured.strip())
        return phrases

    def _detect_timeframe(self, message: str) -> Timeframe:
        for pattern, frame in self._timeframes:
            if pattern.search(message):
                return frame
        return Timeframe.NONE

