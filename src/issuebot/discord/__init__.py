"""Discord API client for follow-up edits and command registration."""

from src.issuebot.discord.client import DiscordAPIError, DiscordClient

__all__ = [
    "DiscordAPIError",
    "DiscordClient",
]
