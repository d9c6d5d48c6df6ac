"""
System prompt builder
Turns a chat context into the LLM system prompt and message history
"""

from ...core.markdown_loader import PromptMarkdownLoader
from ..models.conversation import ChatContext, ConversationTurn, last_turns
from ..ports.ai_port import ChatMessage

TONE_DESCRIPTIONS: dict[int, str] = {
    1: "extremely gentle, nurturing, and validating. Use soft language. Never push or challenge.",
    2: "warm and supportive with gentle encouragement. Validate feelings first, then offer soft suggestions.",
    3: "balanced - empathetic but also willing to offer honest perspective. Mix support with gentle insights.",
    4: "more direct and honest while still caring. Give real talk with compassion. Challenge gently when needed.",
    5: "real talk mode - honest, direct, and straightforward. Still caring but no sugarcoating. Call things as you see them.",
}

FOCUS_GUIDANCE: dict[str, str] = {
    "emotional": "Focus primarily on emotional support and validation. Help them process their feelings.",
    "practical": "Balance emotional support with actionable advice and practical next steps.",
    "perspective": "Help them see different angles and perspectives. Gently challenge assumptions when appropriate.",
}

STYLE_GUIDANCE: dict[str, str] = {
    "conversational": "Write naturally as a friend would text - casual, warm, and flowing.",
    "structured": "Organize your response clearly. Acknowledge feelings first, then provide thoughts or advice.",
    "brief": "Keep responses concise and to the point. Short sentences, clear message.",
}

SITUATION_CONTEXT: dict[str, str] = {
    "friendship": "They are dealing with a friendship situation.",
    "romantic": "They are navigating a romantic relationship.",
    "family": "They are working through family dynamics.",
    "self": "They are processing personal/self-related matters.",
}
DEFAULT_SITUATION_CONTEXT = "general relationship matter"

BELIEF_CONTEXT: dict[str, str] = {
    "spiritual": "Spiritual. Ideas like meaning, intuition or energy are welcome when they fit.",
    "religious": "Religious. Respect their faith and use faith-based framing only if they bring it up.",
    "secular": "Secular. Keep perspective grounded and practical, without spiritual framing.",
    "mixed": "A personal mix. Follow their lead on spiritual or secular framing.",
}

LIFE_STAGE_CONTEXT: dict[str, str] = {
    "teens": "Teens. Keep examples age-appropriate.",
    "early20s": "Early 20s.",
    "late20s": "Late 20s.",
    "30s": "30s.",
    "40plus": "40 or older.",
}

DEFAULT_TONE_LEVEL = 3
DEFAULT_USER_NAME = "Friend"
HISTORY_WINDOW = 10


class SystemPromptBuilder:
    """Assembles the companion system prompt from markdown sections and the context"""

    def __init__(self, loader: PromptMarkdownLoader | None = None):
        self.loader = loader or PromptMarkdownLoader()

    def build(self, context: ChatContext) -> str:
        tone_level = context.tone_level
        tone_description = TONE_DESCRIPTIONS.get(tone_level, TONE_DESCRIPTIONS[DEFAULT_TONE_LEVEL])

        about = [
            f"- Name: {context.user_name or DEFAULT_USER_NAME}",
            f"- Current situation type: "
            f"{SITUATION_CONTEXT.get(context.situation or '', DEFAULT_SITUATION_CONTEXT)}",
        ]
        if context.belief in BELIEF_CONTEXT:
            about.append(f"- Beliefs: {BELIEF_CONTEXT[context.belief]}")
        if context.life_stage in LIFE_STAGE_CONTEXT:
            about.append(f"- Life stage: {LIFE_STAGE_CONTEXT[context.life_stage]}")

        sections = [
            self.loader.get("persona"),
            "ABOUT THE USER:\n" + "\n".join(about),
            f"YOUR TONE (Level {tone_level}/5):\n{tone_description}",
            "YOUR FOCUS:\n"
            + FOCUS_GUIDANCE.get(context.focus_area, FOCUS_GUIDANCE["emotional"]),
            "YOUR STYLE:\n"
            + STYLE_GUIDANCE.get(context.response_style, STYLE_GUIDANCE["conversational"]),
            self.loader.get("guidelines"),
            self.loader.get("avoid"),
            self.loader.get("closing"),
        ]
        return "\n\n".join(sections)


def format_history(history: list[ConversationTurn], window: int = HISTORY_WINDOW) -> list[ChatMessage]:
    """Last ``window`` turns as chat-completion messages"""
    return [
        ChatMessage(role=turn.role.value, content=turn.content)
        for turn in last_turns(history, window)
    ]
