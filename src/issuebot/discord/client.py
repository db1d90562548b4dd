"""Discord REST API client for the issue bot.

Two calls are needed outside the interaction request itself:

- Editing the original (deferred) interaction response once the issue has
  been created or has failed
- Registering the slash command, run once at install time

Requests are single attempts authenticated with the bot token.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from src.issuebot.interactions.models import FollowupTarget

logger = logging.getLogger(__name__)


class DiscordAPIError(Exception):
    """Raised when a Discord API request fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the response.
        response_body: Response body from the Discord API.
        request_url: The URL that was requested.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        request_url: Optional[str] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.request_url = request_url
        super().__init__(message)


class DiscordClient:
    """Async Discord API client.

    Attributes:
        token: The bot token.
        base_url: Discord API base URL including the version.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://discord.com/api/v10",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the HTTP client, creating it if necessary."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bot {self.token}",
                    "User-Agent": "DiscordBot (issuebot, 1.0)",
                },
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "DiscordClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json_data: Any = None,
    ) -> httpx.Response:
        try:
            response = await self.client.request(method=method, url=path, json=json_data)
        except httpx.HTTPError as e:
            raise DiscordAPIError(
                message=str(e) or type(e).__name__,
                request_url=f"{self.base_url}{path}",
            ) from e

        if response.status_code >= 400:
            raise DiscordAPIError(
                message=f"Discord API error: {response.status_code}",
                status_code=response.status_code,
                response_body=response.text,
                request_url=str(response.url),
            )
        return response

    async def edit_original_response(
        self,
        target: FollowupTarget,
        content: str,
    ) -> Dict[str, Any]:
        """Replace the content of the original interaction response.

        Args:
            target: Application id and interaction token of the interaction.
            content: New message content.

        Returns:
            The edited message from the Discord API.

        Raises:
            DiscordAPIError: If the edit fails.
        """
        response = await self._request(
            method="PATCH",
            path=target.edit_path,
            json_data={"content": content},
        )
        logger.debug(
            "Edited original interaction response",
            extra={"application_id": target.application_id},
        )
        return response.json()

    async def register_commands(
        self,
        application_id: str,
        commands: List[Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        """Overwrite the application's global commands.

        Args:
            application_id: The Discord application (client) id.
            commands: Command definitions to register.

        Returns:
            The registered commands as returned by Discord.

        Raises:
            DiscordAPIError: If registration fails.
        """
        response = await self._request(
            method="PUT",
            path=f"/applications/{application_id}/commands",
            json_data=commands,
        )
        return response.json()
