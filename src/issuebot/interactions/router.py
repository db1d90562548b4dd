"""Interaction routing for the issue bot.

The router maps a parsed interaction to exactly one reply:

- Ping -> PONG
- The configured slash command -> the issue modal
- The issue modal submission -> a deferred acknowledgment plus a background
  job that creates the issue and edits the reply
- Anything else -> 400 "Unknown interaction"

The router performs no I/O so it can answer within Discord's three second
window; issue creation happens in the job after the reply has been sent.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .modal import (
    BODY_FIELD_ID,
    LABELS_FIELD_ID,
    MODAL_CUSTOM_ID,
    TITLE_FIELD_ID,
    build_issue_modal,
)
from .models import (
    CommandInteraction,
    InteractionResponseType,
    IssueFollowupJob,
    IssueRequest,
    ModalSubmitInteraction,
    PingInteraction,
    parse_labels,
)

logger = logging.getLogger(__name__)

UNKNOWN_INTERACTION = {"error": "Unknown interaction"}


@dataclass(frozen=True)
class RouteResult:
    """The synchronous reply for an interaction.

    Attributes:
        status_code: HTTP status of the reply.
        body: JSON reply body.
        job: Work to run after the reply has been sent, if any.
    """

    status_code: int
    body: Dict[str, Any]
    job: Optional[IssueFollowupJob] = None


def deferred_ack() -> Dict[str, Any]:
    """Placeholder reply telling Discord a message edit will follow."""
    return {
        "type": int(InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE),
        "data": {"flags": 0},
    }


def extract_issue_request(interaction: ModalSubmitInteraction) -> IssueRequest:
    """Build the issue request from the submitted modal values.

    The title is passed through even when empty. A blank description
    becomes None.
    """
    return IssueRequest(
        title=interaction.field_value(TITLE_FIELD_ID),
        body=interaction.field_value(BODY_FIELD_ID) or None,
        labels=parse_labels(interaction.field_value(LABELS_FIELD_ID)),
    )


class InteractionRouter:
    """Dispatches parsed interactions to their reply.

    Attributes:
        command_name: Name of the registered slash command.
    """

    def __init__(self, command_name: str = "issues") -> None:
        self.command_name = command_name

    def route(
        self,
        interaction: Optional[
            Union[PingInteraction, CommandInteraction, ModalSubmitInteraction]
        ],
    ) -> RouteResult:
        """Choose the reply for an interaction.

        Args:
            interaction: The parsed interaction, or None if the payload did
                         not match any supported shape.

        Returns:
            RouteResult with the status, body and optional follow-up job.
        """
        if isinstance(interaction, PingInteraction):
            return RouteResult(200, {"type": int(InteractionResponseType.PONG)})

        if isinstance(interaction, CommandInteraction):
            if interaction.data.name == self.command_name:
                return RouteResult(200, build_issue_modal())
            logger.info(
                "Ignoring unknown command",
                extra={"command": interaction.data.name},
            )

        if isinstance(interaction, ModalSubmitInteraction):
            if interaction.data.custom_id == MODAL_CUSTOM_ID:
                job = IssueFollowupJob(
                    request=extract_issue_request(interaction),
                    target=interaction.followup_target,
                )
                return RouteResult(200, deferred_ack(), job=job)
            logger.info(
                "Ignoring unknown modal",
                extra={"custom_id": interaction.data.custom_id},
            )

        return RouteResult(400, dict(UNKNOWN_INTERACTION))
