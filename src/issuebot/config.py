"""Bot configuration using pydantic-settings.

This module defines the BotSettings class that reads configuration from
environment variables (or a local ``.env`` file). Variable names are not
prefixed so the same ``.env`` file used for the Discord application works
unchanged, e.g. ``DISCORD_TOKEN`` and ``GITHUB_REPO``.

Missing or invalid required values raise ``pydantic.ValidationError`` from
``get_settings()``. The application treats that as a fatal startup error.
"""

from typing import Tuple

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BotSettings(BaseSettings):
    """Issue bot configuration from environment variables.

    Required fields (must be set via environment variables):
    - discord_token: Bot token used to edit deferred replies
    - discord_public_key: Hex Ed25519 key for verifying interaction signatures
    - github_token: GitHub API token used to create issues
    - github_repo: Target repository in ``owner/repo`` form

    The settings object is immutable once constructed and is passed into
    each component instead of being looked up globally.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # -------------------------------------------------------------------------
    # Discord Configuration
    # -------------------------------------------------------------------------
    discord_token: str

    # Public key from the Developer Portal (General Information page)
    discord_public_key: str

    # Name of the registered slash command
    discord_command_name: str = "issues"

    discord_api_base: str = "https://discord.com/api/v10"

    # -------------------------------------------------------------------------
    # GitHub Configuration
    # -------------------------------------------------------------------------
    github_token: str

    # Repository that receives created issues, "owner/repo"
    github_repo: str

    # Base URL for GitHub API (supports GitHub Enterprise)
    github_base_url: str = "https://api.github.com"

    # -------------------------------------------------------------------------
    # HTTP / Server Configuration
    # -------------------------------------------------------------------------
    # Network timeout applied to outbound GitHub and Discord calls
    http_timeout_seconds: float = 30.0

    host: str = "0.0.0.0"

    port: int = 3000

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("discord_token", "github_token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Validate that API tokens are not empty."""
        if not v or not v.strip():
            raise ValueError("token cannot be empty")
        return v.strip()

    @field_validator("discord_public_key")
    @classmethod
    def validate_public_key(cls, v: str) -> str:
        """Validate that the public key is a 32-byte hex Ed25519 key."""
        v = v.strip()
        try:
            Ed25519PublicKey.from_public_bytes(bytes.fromhex(v))
        except ValueError as e:
            raise ValueError(
                "discord_public_key must be a 64 character hex Ed25519 key"
            ) from e
        return v

    @field_validator("github_repo")
    @classmethod
    def validate_github_repo(cls, v: str) -> str:
        """Validate that the repository is in owner/repo form."""
        parts = [part.strip() for part in v.split("/")]
        if len(parts) != 2 or not all(parts):
            raise ValueError(
                "github_repo must be set to owner/repo (e.g. myuser/my-repo)"
            )
        return "/".join(parts)

    @field_validator("discord_command_name")
    @classmethod
    def validate_command_name(cls, v: str) -> str:
        """Validate that the command name is not empty."""
        if not v or not v.strip():
            raise ValueError("discord_command_name cannot be empty")
        return v.strip()

    @field_validator("discord_api_base", "github_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Validate that base URLs are http(s) URLs."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("http_timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the timeout is positive."""
        if v <= 0:
            raise ValueError("http_timeout_seconds must be positive")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate that port is in valid range."""
        if not 1 <= v <= 65535:
            raise ValueError("port must be between 1 and 65535")
        return v

    @property
    def repository(self) -> Tuple[str, str]:
        """Split the configured repository into (owner, name)."""
        owner, name = self.github_repo.split("/")
        return owner, name


class RegistrationSettings(BaseSettings):
    """Configuration for the one-off slash command registration.

    Only the bot token and the application (client) id are needed; the
    signing key and GitHub settings are not read.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    discord_token: str
    discord_client_id: str
    discord_command_name: str = "issues"
    discord_api_base: str = "https://discord.com/api/v10"
    http_timeout_seconds: float = 30.0

    @field_validator("discord_token", "discord_client_id")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that required values are not empty."""
        if not v or not v.strip():
            raise ValueError("value cannot be empty")
        return v.strip()

    @field_validator("discord_api_base")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        return v.rstrip("/")


def get_settings() -> BotSettings:
    """Create and return a BotSettings instance.

    Returns:
        BotSettings: Configured settings instance.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    return BotSettings()


def get_registration_settings() -> RegistrationSettings:
    """Create and return a RegistrationSettings instance.

    Raises:
        pydantic.ValidationError: If required fields are missing or invalid.
    """
    return RegistrationSettings()
