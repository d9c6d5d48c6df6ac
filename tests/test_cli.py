"""
CLI tests
"""

import pytest
from typer.testing import CliRunner

from galbestfriend.cli import _handle_command, app, theme_color
from galbestfriend.core.config import CompanionSettings
from galbestfriend.core.exceptions import ValidationError
from galbestfriend.domain.models.profile import ResponseStyle, UserProfile
from galbestfriend.domain.services.session import ChatSession

runner = CliRunner()


class TestCommands:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "Gal Bestfriend" in result.output

    def test_prompts_list(self):
        result = runner.invoke(app, ["prompts", "list"])

        assert result.exit_code == 0
        assert "persona" in result.output

    def test_prompts_show_unknown(self):
        result = runner.invoke(app, ["prompts", "show", "--prompt-id", "missing"])

        assert result.exit_code == 1

    def test_theme_color(self):
        assert theme_color("sunshine").startswith("rgb(")
        assert theme_color("neon") == theme_color("rose")


class TestChatCommands:
    def setup_method(self):
        self.session = ChatSession(UserProfile(name="Sam"), settings=CompanionSettings(pacing_enabled=False))
        self.session.start()

    @pytest.mark.asyncio
    async def test_quit(self):
        assert await _handle_command("/quit", self.session) is False

    @pytest.mark.asyncio
    async def test_settings_commands(self):
        assert await _handle_command("/tone 5", self.session) is True
        await _handle_command("/style brief", self.session)
        await _handle_command("/theme coral", self.session)

        assert self.session.profile.tone_level == 5
        assert self.session.profile.response_style is ResponseStyle.BRIEF
        assert self.session.profile.color_theme == "coral"

    @pytest.mark.asyncio
    async def test_invalid_tone(self):
        with pytest.raises(ValidationError):
            await _handle_command("/tone loud", self.session)

    @pytest.mark.asyncio
    async def test_regen_after_message(self):
        await self.session.send_message("We broke up")

        await _handle_command("/regen", self.session)

        assert self.session.profile.tone_level == 4
        assert self.session.history[-1].role.value == "assistant"
