"""Discord interaction models for the issue bot.

Inbound interactions are parsed once into one of three tagged shapes:

- PingInteraction (type 1) - Discord checking the endpoint
- CommandInteraction (type 2) - a slash command invocation
- ModalSubmitInteraction (type 5) - a submitted modal form

Each shape carries only the fields that are valid for it. Anything else
(unknown type, missing correlation fields, wrong field types) fails
validation and is reported by ``parse_interaction`` as ``None``.

Discord Interaction Payload Structure (modal submit):
{
  "type": 5,
  "application_id": "123",
  "token": "aW50ZXJhY3Rpb24...",
  "data": {
    "custom_id": "github-issue-modal",
    "components": [
      {"type": 1, "components": [
        {"type": 4, "custom_id": "issue-title", "value": "Fix login"}
      ]}
    ]
  }
}
"""

import logging
from enum import IntEnum
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)


class InteractionType(IntEnum):
    """Discord interaction types."""

    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    """Discord interaction callback types used by the bot."""

    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    MODAL = 9


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class FollowupTarget(_Frozen):
    """Correlation fields needed to edit the original deferred reply.

    Attributes:
        application_id: The Discord application id from the interaction.
        token: The interaction token, valid for 15 minutes.
    """

    application_id: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)

    @property
    def edit_path(self) -> str:
        """Webhook path of the original response message."""
        return f"/webhooks/{self.application_id}/{self.token}/messages/@original"


class PingInteraction(_Frozen):
    type: Literal[1]


class CommandData(_Frozen):
    name: str


class CommandInteraction(_Frozen):
    type: Literal[2]
    application_id: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)
    data: CommandData


class TextInputValue(_Frozen):
    """A single submitted text input."""

    custom_id: str = ""
    value: str = ""


class ActionRow(_Frozen):
    components: List[TextInputValue] = Field(default_factory=list)


class ModalSubmitData(_Frozen):
    custom_id: str
    components: List[ActionRow] = Field(default_factory=list)


class ModalSubmitInteraction(_Frozen):
    """A submitted modal form.

    Attributes:
        application_id: The Discord application id.
        token: The interaction token used for the follow-up edit.
        data: The modal custom id and submitted field values.
    """

    type: Literal[5]
    application_id: str = Field(..., min_length=1)
    token: str = Field(..., min_length=1)
    data: ModalSubmitData

    @property
    def followup_target(self) -> FollowupTarget:
        return FollowupTarget(application_id=self.application_id, token=self.token)

    def field_value(self, custom_id: str) -> str:
        """Return the trimmed value of a submitted field.

        Args:
            custom_id: The text input custom id.

        Returns:
            The stripped value, or an empty string if the field is absent.
        """
        for row in self.data.components:
            for component in row.components:
                if component.custom_id == custom_id:
                    return component.value.strip()
        return ""


Interaction = Annotated[
    Union[PingInteraction, CommandInteraction, ModalSubmitInteraction],
    Field(discriminator="type"),
]

_INTERACTION_ADAPTER: TypeAdapter = TypeAdapter(Interaction)


def parse_interaction(payload: Any) -> Optional[
    Union[PingInteraction, CommandInteraction, ModalSubmitInteraction]
]:
    """Parse a decoded interaction payload into its tagged shape.

    Args:
        payload: The JSON-decoded request body.

    Returns:
        The parsed interaction, or None for unsupported or malformed
        payloads.
    """
    if not isinstance(payload, dict):
        logger.warning("Invalid payload: expected dict, got %s", type(payload))
        return None

    try:
        return _INTERACTION_ADAPTER.validate_python(payload)
    except ValidationError as e:
        logger.warning(
            "Unsupported interaction payload",
            extra={"interaction_type": payload.get("type"), "errors": e.error_count()},
        )
        return None


class IssueRequest(_Frozen):
    """Issue fields extracted from a submitted modal.

    Attributes:
        title: The issue title. Passed through as submitted, even if empty;
               GitHub rejects empty titles itself.
        body: The issue description, None when left blank.
        labels: Label names in submission order.
    """

    title: str
    body: Optional[str] = None
    labels: List[str] = Field(default_factory=list)


def parse_labels(raw: str) -> List[str]:
    """Split a comma-separated label string.

    Surrounding whitespace is removed, blank entries are dropped and exact
    duplicates keep only their first occurrence.

    Args:
        raw: The raw labels field, e.g. ``"bug, enhancement,  , docs"``.

    Returns:
        Ordered list of label names, e.g. ``["bug", "enhancement", "docs"]``.
    """
    labels: List[str] = []
    for part in raw.split(","):
        name = part.strip()
        if name and name not in labels:
            labels.append(name)
    return labels


class IssueFollowupJob(_Frozen):
    """Background work queued behind a deferred acknowledgment."""

    request: IssueRequest
    target: FollowupTarget
