"""
System prompt and LLM reply handler tests
"""

from unittest.mock import AsyncMock, Mock

import pytest

from galbestfriend.core.exceptions import ConfigurationError
from galbestfriend.core.markdown_loader import PromptMarkdownLoader
from galbestfriend.domain.models.conversation import ChatContext, ConversationTurn, Role
from galbestfriend.domain.services.llm_reply import EMPTY_REPLY_FALLBACK, LLMReplyHandler
from galbestfriend.domain.services.prompt import (
    TONE_DESCRIPTIONS,
    SystemPromptBuilder,
    format_history,
)


class TestPromptMarkdownLoader:
    def test_bundled_sections(self):
        loader = PromptMarkdownLoader()

        for section in ("persona", "guidelines", "avoid", "closing"):
            assert loader.get(section)
        assert loader.get("persona").startswith("You are Gal Bestfriend")

    def test_custom_file(self, tmp_path):
        path = tmp_path / "prompts.md"
        path.write_text(
            "# Test\n\n"
            "### Greeting\n\n"
            "**ID**: `hello`\n\n"
            "```text\nHello there\n```\n\n"
            "```text\nignored second block\n```\n",
            encoding="utf-8",
        )

        loader = PromptMarkdownLoader(path)

        assert loader.sections == {"hello": "Hello there"}
        assert loader.titles["hello"] == "Greeting"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            PromptMarkdownLoader(tmp_path / "nope.md")

    def test_missing_section(self):
        with pytest.raises(ConfigurationError):
            PromptMarkdownLoader().get("does-not-exist")


class TestSystemPromptBuilder:
    def setup_method(self):
        self.builder = SystemPromptBuilder()

    def test_profile_details_included(self):
        context = ChatContext(
            tone_level=5,
            response_style="brief",
            focus_area="practical",
            situation="family",
            belief="secular",
            life_stage="30s",
            user_name="Ana",
        )

        prompt = self.builder.build(context)

        assert "- Name: Ana" in prompt
        assert "They are working through family dynamics." in prompt
        assert f"YOUR TONE (Level 5/5):\n{TONE_DESCRIPTIONS[5]}" in prompt
        assert "actionable advice" in prompt
        assert "Keep responses concise" in prompt
        assert "- Beliefs: Secular." in prompt
        assert "- Life stage: 30s." in prompt

    def test_defaults_for_missing_values(self):
        context = ChatContext(tone_level=9, response_style="odd", focus_area="odd")

        prompt = self.builder.build(context)

        assert "- Name: Friend" in prompt
        assert "general relationship matter" in prompt
        assert f"YOUR TONE (Level 9/5):\n{TONE_DESCRIPTIONS[3]}" in prompt
        assert "- Beliefs:" not in prompt
        assert "- Life stage:" not in prompt


class TestFormatHistory:
    def test_window_and_roles(self):
        history = [
            ConversationTurn(Role.USER if i % 2 == 0 else Role.ASSISTANT, f"turn {i}")
            for i in range(14)
        ]

        messages = format_history(history)

        assert len(messages) == 10
        assert messages[0].content == "turn 4"
        assert messages[0].role == "user"
        assert messages[1].role == "assistant"


class TestChatContextWire:
    def test_from_wire_is_lenient(self):
        context = ChatContext.from_wire({
            "toneLevel": 11,
            "history": [
                {"role": "ai", "content": "Hi"},
                {"role": "user", "content": 3},
                "junk",
                {"role": "user", "content": "Help"},
            ],
            "userName": "Ana",
        })

        assert context.tone_level == 3
        assert context.response_style == "conversational"
        assert context.focus_area == "emotional"
        assert [(t.role, t.content) for t in context.history] == [
            (Role.ASSISTANT, "Hi"),
            (Role.USER, "Help"),
        ]
        assert context.to_wire()["history"][0] == {"role": "ai", "content": "Hi"}

    def test_from_wire_none(self):
        context = ChatContext.from_wire(None)

        assert context.tone_level == 3
        assert context.history == []


class TestLLMReplyHandler:
    def setup_method(self):
        self.provider = Mock()
        self.provider.generate = AsyncMock(return_value="Sounds hard. Tell me more?")
        self.handler = LLMReplyHandler(self.provider, max_tokens=200)
        self.context = ChatContext(
            tone_level=2,
            response_style="conversational",
            focus_area="emotional",
            history=[ConversationTurn(Role.USER, "I miss her")],
        )

    @pytest.mark.asyncio
    async def test_reply_passes_prompt_and_history(self):
        reply = await self.handler.reply("I miss her", self.context)

        assert reply == "Sounds hard. Tell me more?"
        kwargs = self.provider.generate.await_args.kwargs
        assert kwargs["message"] == "I miss her"
        assert kwargs["max_tokens"] == 200
        assert "YOUR TONE (Level 2/5)" in kwargs["system_prompt"]
        assert [m.content for m in kwargs["conversation_history"]] == ["I miss her"]

    @pytest.mark.asyncio
    async def test_empty_completion_uses_fallback(self):
        self.provider.generate.return_value = "  "

        assert await self.handler.reply("hi", self.context) == EMPTY_REPLY_FALLBACK

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self):
        self.provider.generate.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await self.handler.reply("hi", self.context)
