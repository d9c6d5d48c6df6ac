"""
Conversation openers
Greeting and first prompt shown when a chat session starts
"""

import random

from ..models.profile import Situation, ToneBucket, UserProfile

GREETINGS: dict[ToneBucket, str] = {
    ToneBucket.GENTLE: "Hi {name}! I'm so glad you're here. This is a completely safe space — no judgment, just support. What's been on your mind?",
    ToneBucket.BALANCED: "Hey {name}! I'm here to listen and help however I can. What's going on?",
    ToneBucket.DIRECT: "Hey {name}. Let's get into it — what's happening?",
}

SITUATION_PROMPTS: dict[Situation, list[str]] = {
    Situation.FRIENDSHIP: [
        "Tell me more about this friendship. How long have you two been close?",
        "What changed recently that brought this up?",
        "How are you feeling about it right now — more hurt, confused, or frustrated?",
    ],
    Situation.ROMANTIC: [
        "How long have you two been together?",
        "What's the main thing that's been weighing on you?",
        "Is this a pattern, or did something specific happen?",
    ],
    Situation.FAMILY: [
        "Family stuff can be so complicated. Who's involved in this situation?",
        "Has this been building up for a while, or is it something recent?",
        "How is this affecting you day-to-day?",
    ],
    Situation.SELF: [
        "I'm here. Let it all out — what's on your mind?",
        "Sometimes we just need to process. What's the main thing you're feeling?",
        "Take your time. What do you need right now — to vent, to think out loud, or to get advice?",
    ],
}


class OpenerGenerator:
    """Picks the greeting and one random situation prompt"""

    def __init__(self, rng: random.Random | None = None):
        self._rng = rng or random.Random()

    def greeting(self, profile: UserProfile) -> str:
        template = GREETINGS.get(profile.tone, GREETINGS[ToneBucket.BALANCED])
        return template.format(name=profile.display_name)

    def situation_prompt(self, profile: UserProfile) -> str | None:
        """None when onboarding skipped the situation"""
        prompts = SITUATION_PROMPTS.get(profile.situation) if profile.situation else None
        if not prompts:
            return None
        return self._rng.choice(prompts)

    def openers(self, profile: UserProfile) -> list[str]:
        messages = [self.greeting(profile)]
        prompt = self.situation_prompt(profile)
        if prompt:
            messages.append(prompt)
        return messages
