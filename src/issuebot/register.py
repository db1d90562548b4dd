"""Register the bot's slash command with Discord.

Run once after creating the application, and again whenever the command
definition changes:

    python -m src.issuebot.register

Requires DISCORD_TOKEN and DISCORD_CLIENT_ID (environment or .env).
"""

import asyncio
import logging
import sys
from typing import Any, Dict, List

from pydantic import ValidationError

from src.issuebot.config import RegistrationSettings, get_registration_settings
from src.issuebot.discord.client import DiscordAPIError, DiscordClient

logger = logging.getLogger(__name__)

COMMAND_DESCRIPTION = (
    "Open a form to create a new issue in the linked GitHub repo (with optional labels)"
)


def build_commands(command_name: str = "issues") -> List[Dict[str, Any]]:
    """Command definitions for the bot; a single option-less command."""
    return [
        {
            "name": command_name,
            "description": COMMAND_DESCRIPTION,
            "options": [],
        }
    ]


async def register_commands(
    settings: RegistrationSettings,
    client: DiscordClient,
) -> List[Dict[str, Any]]:
    """Overwrite the application's global commands with the bot command.

    Raises:
        DiscordAPIError: If Discord rejects the registration.
    """
    logger.info("Registering slash commands...")
    registered = await client.register_commands(
        settings.discord_client_id,
        build_commands(settings.discord_command_name),
    )
    logger.info(
        f"Registered {len(registered)} command(s). "
        f"You can use /{settings.discord_command_name} in Discord."
    )
    return registered


async def _run(settings: RegistrationSettings) -> None:
    async with DiscordClient(
        token=settings.discord_token,
        base_url=settings.discord_api_base,
        timeout=settings.http_timeout_seconds,
    ) as client:
        await register_commands(settings, client)


def main() -> int:
    """Console entry point.

    Returns:
        Process exit code: 0 on success, 1 on missing configuration or a
        failed registration.
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = get_registration_settings()
    except ValidationError as e:
        logger.error("Set DISCORD_TOKEN and DISCORD_CLIENT_ID in .env: %s", e)
        return 1

    try:
        asyncio.run(_run(settings))
    except DiscordAPIError as e:
        logger.error(
            "Command registration failed: %s",
            e.message,
            extra={"status_code": e.status_code, "response_body": e.response_body},
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
