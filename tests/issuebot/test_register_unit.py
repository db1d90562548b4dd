"""Unit tests for slash command registration."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.issuebot import register
from src.issuebot.config import RegistrationSettings
from src.issuebot.discord.client import DiscordAPIError


def run_async(coro):
    return asyncio.run(coro)


@pytest.fixture
def registration_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DISCORD_TOKEN", "bot-token")
    monkeypatch.setenv("DISCORD_CLIENT_ID", "555")
    monkeypatch.delenv("DISCORD_COMMAND_NAME", raising=False)
    return monkeypatch


class TestBuildCommands:

    def test_single_command_without_options(self):
        commands = register.build_commands()
        assert commands == [
            {
                "name": "issues",
                "description": (
                    "Open a form to create a new issue in the linked GitHub repo "
                    "(with optional labels)"
                ),
                "options": [],
            }
        ]

    def test_custom_name(self):
        assert register.build_commands("bug")[0]["name"] == "bug"


class TestRegisterCommands:

    def test_sends_commands_for_client_id(self):
        settings = RegistrationSettings(
            _env_file=None, discord_token="bot-token", discord_client_id="555"
        )
        client = AsyncMock()
        client.register_commands.return_value = register.build_commands()

        registered = run_async(register.register_commands(settings, client))

        client.register_commands.assert_awaited_once_with("555", register.build_commands())
        assert len(registered) == 1


class TestMain:

    def test_missing_configuration_exits_1(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        monkeypatch.delenv("DISCORD_CLIENT_ID", raising=False)

        assert register.main() == 1

    def test_success_exits_0(self, registration_env):
        fake = AsyncMock(return_value=register.build_commands())
        registration_env.setattr(register, "register_commands", fake)

        assert register.main() == 0
        fake.assert_awaited_once()

    def test_api_failure_exits_1(self, registration_env):
        fake = AsyncMock(side_effect=DiscordAPIError("Discord API error: 401", status_code=401))
        registration_env.setattr(register, "register_commands", fake)

        assert register.main() == 1
