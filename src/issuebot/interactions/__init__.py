"""Discord interaction handling for the issue bot.

This module verifies, parses and routes Discord interactions:
- Ping - endpoint verification by Discord
- Application command - the slash command that opens the issue form
- Modal submit - the filled form, completed by a deferred reply

Signature verification runs on the raw body before anything is parsed.
"""

from .modal import MODAL_CUSTOM_ID, build_issue_modal
from .models import (
    CommandInteraction,
    FollowupTarget,
    InteractionResponseType,
    InteractionType,
    IssueFollowupJob,
    IssueRequest,
    ModalSubmitInteraction,
    PingInteraction,
    parse_interaction,
    parse_labels,
)
from .router import InteractionRouter, RouteResult
from .verifier import SIGNATURE_HEADER, TIMESTAMP_HEADER, InteractionVerifier

__all__ = [
    "CommandInteraction",
    "FollowupTarget",
    "InteractionResponseType",
    "InteractionRouter",
    "InteractionType",
    "InteractionVerifier",
    "IssueFollowupJob",
    "IssueRequest",
    "MODAL_CUSTOM_ID",
    "ModalSubmitInteraction",
    "PingInteraction",
    "RouteResult",
    "SIGNATURE_HEADER",
    "TIMESTAMP_HEADER",
    "build_issue_modal",
    "parse_interaction",
    "parse_labels",
]
