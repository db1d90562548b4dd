"""FastAPI application entry point for the issue bot.

This module provides the FastAPI application that receives Discord
interactions, verifies their signatures, answers synchronously and
completes modal submissions in a background task.

Endpoints:
- POST /interactions - Discord interactions endpoint
- GET / - banner for tunnels and uptime checks
- GET /health - liveness probe
- GET /metrics - Prometheus metrics
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import BackgroundTasks, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .config import BotSettings, get_settings
from .discord.client import DiscordClient
from .events.metrics import InteractionMetrics, get_metrics
from .github.client import GitHubClient
from .interactions.followup import DeferredResponder
from .interactions.models import (
    CommandInteraction,
    ModalSubmitInteraction,
    PingInteraction,
    parse_interaction,
)
from .interactions.router import InteractionRouter
from .interactions.verifier import (
    SIGNATURE_HEADER,
    TIMESTAMP_HEADER,
    InteractionVerifier,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

INTERNAL_ERROR = {"error": "Internal server error"}


def _redact_secret(value: str, visible_chars: int = 4) -> str:
    """Redact a secret value, showing only the first few characters.

    Args:
        value: The secret value to redact.
        visible_chars: Number of characters to show at the start.

    Returns:
        Redacted string with asterisks replacing hidden characters.
    """
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def _log_configuration(settings: BotSettings) -> None:
    """Log configuration values with secrets redacted."""
    logger.info("Issue bot configuration:")
    logger.info(f"  Discord API Base: {settings.discord_api_base}")
    logger.info(f"  Discord Token: {_redact_secret(settings.discord_token)}")
    logger.info(f"  Discord Public Key: {settings.discord_public_key}")
    logger.info(f"  Command Name: /{settings.discord_command_name}")
    logger.info(f"  GitHub Base URL: {settings.github_base_url}")
    logger.info(f"  GitHub Token: {_redact_secret(settings.github_token)}")
    logger.info(f"  GitHub Repository: {settings.github_repo}")
    logger.info(f"  HTTP Timeout Seconds: {settings.http_timeout_seconds}")
    logger.info(f"  Host: {settings.host}")
    logger.info(f"  Port: {settings.port}")


def _interaction_kind(interaction) -> str:
    if isinstance(interaction, PingInteraction):
        return "ping"
    if isinstance(interaction, CommandInteraction):
        return "command"
    if isinstance(interaction, ModalSubmitInteraction):
        return "modal_submit"
    return "unknown"


def create_app(
    settings: Optional[BotSettings] = None,
    github_client: Optional[GitHubClient] = None,
    discord_client: Optional[DiscordClient] = None,
    metrics: Optional[InteractionMetrics] = None,
) -> FastAPI:
    """Create the FastAPI application.

    Components are built during lifespan startup from the settings, which
    are loaded from the environment when not given. Invalid configuration
    fails startup.

    Args:
        settings: Bot settings; read from the environment if None.
        github_client: GitHub client to use instead of building one.
        discord_client: Discord client to use instead of building one.
        metrics: Metrics container; the process-wide one if None.

    Returns:
        The configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Issue bot starting up...")

        cfg = settings or get_settings()
        _log_configuration(cfg)

        gh_client = github_client or GitHubClient(
            token=cfg.github_token,
            base_url=cfg.github_base_url,
            timeout=cfg.http_timeout_seconds,
        )
        dc_client = discord_client or DiscordClient(
            token=cfg.discord_token,
            base_url=cfg.discord_api_base,
            timeout=cfg.http_timeout_seconds,
        )
        owner, repo = cfg.repository

        app.state.settings = cfg
        app.state.metrics = metrics or get_metrics()
        app.state.verifier = InteractionVerifier(cfg.discord_public_key)
        app.state.router = InteractionRouter(command_name=cfg.discord_command_name)
        app.state.responder = DeferredResponder(
            github_client=gh_client,
            discord_client=dc_client,
            owner=owner,
            repo=repo,
            metrics=app.state.metrics,
        )

        logger.info("Issue bot started successfully")

        yield

        logger.info("Issue bot shutting down...")
        await gh_client.close()
        await dc_client.close()
        logger.info("Issue bot shutdown complete")

    app = FastAPI(
        title="GitHub Issues Bot",
        description="Discord slash command that files GitHub issues",
        version="1.0.0",
        lifespan=lifespan,
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error: %s", exc)
        return JSONResponse(status_code=500, content=dict(INTERNAL_ERROR))

    @app.get("/", response_class=PlainTextResponse)
    async def index():
        return "GitHub Issues Bot - interactions at POST /interactions"

    @app.get("/health")
    async def health():
        """Liveness probe endpoint.

        Returns:
            dict: Status indicating the application is healthy.
        """
        return {"status": "healthy"}

    @app.get("/metrics")
    async def metrics_endpoint(request: Request) -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            content=request.app.state.metrics.generate_output(),
            media_type="text/plain; version=0.0.4; charset=utf-8",
        )

    @app.post("/interactions")
    async def interactions(request: Request, background_tasks: BackgroundTasks) -> Response:
        """Discord interactions endpoint.

        The signature is checked against the raw body before the body is
        parsed. Modal submissions are answered with a deferred reply and
        completed by a background task after the response is sent.

        Returns:
            Response: PONG, the issue modal, a deferred acknowledgment or
            an error payload.
        """
        state = request.app.state
        raw_body = await request.body()

        signature = request.headers.get(SIGNATURE_HEADER, "")
        timestamp = request.headers.get(TIMESTAMP_HEADER, "")
        if not state.verifier.verify(raw_body, signature, timestamp):
            logger.warning("Invalid interaction signature")
            state.metrics.record_signature_failure()
            return JSONResponse(status_code=401, content={"error": "Bad request signature"})

        if not raw_body:
            logger.error("Empty interaction body")
            return PlainTextResponse("Bad request: empty body", status_code=400)

        try:
            payload = json.loads(raw_body)
        except ValueError as e:
            logger.error("Interaction body parse error: %s", e)
            return PlainTextResponse("Bad request: invalid JSON", status_code=400)

        try:
            interaction = parse_interaction(payload)
            kind = _interaction_kind(interaction)
            logger.info("Received interaction", extra={"kind": kind})
            state.metrics.record_interaction(kind)

            result = state.router.route(interaction)
            if result.job is not None:
                background_tasks.add_task(state.responder.complete, result.job)
            return JSONResponse(status_code=result.status_code, content=result.body)
        except Exception:
            logger.exception("Interaction handler error")
            return JSONResponse(status_code=500, content=dict(INTERNAL_ERROR))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    dev_settings = get_settings()
    uvicorn.run(
        "src.issuebot.main:app",
        host=dev_settings.host,
        port=dev_settings.port,
    )
