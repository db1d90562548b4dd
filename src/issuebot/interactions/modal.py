"""The issue form returned for the slash command.

The form is static: three text inputs rendered by the Discord client as a
modal. Field limits mirror what GitHub and Discord accept.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Tuple

from .models import InteractionResponseType

MODAL_CUSTOM_ID = "github-issue-modal"
MODAL_TITLE = "Create GitHub Issue"

TITLE_FIELD_ID = "issue-title"
BODY_FIELD_ID = "issue-body"
LABELS_FIELD_ID = "issue-labels"

ACTION_ROW = 1
TEXT_INPUT = 4


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


@dataclass(frozen=True)
class FormField:
    """One text input of the issue form."""

    custom_id: str
    label: str
    required: bool
    max_length: int
    style: TextInputStyle = TextInputStyle.SHORT
    placeholder: str = ""

    @property
    def multiline(self) -> bool:
        return self.style is TextInputStyle.PARAGRAPH

    def to_component(self) -> Dict[str, Any]:
        return {
            "type": TEXT_INPUT,
            "custom_id": self.custom_id,
            "label": self.label,
            "style": int(self.style),
            "required": self.required,
            "placeholder": self.placeholder,
            "max_length": self.max_length,
        }


ISSUE_FORM_FIELDS: Tuple[FormField, ...] = (
    FormField(
        custom_id=TITLE_FIELD_ID,
        label="Issue title",
        required=True,
        max_length=256,
        placeholder="e.g. Fix login button on mobile",
    ),
    FormField(
        custom_id=BODY_FIELD_ID,
        label="Description (optional)",
        required=False,
        max_length=4000,
        style=TextInputStyle.PARAGRAPH,
        placeholder="Add more details, steps to reproduce...",
    ),
    FormField(
        custom_id=LABELS_FIELD_ID,
        label="Labels / tags (optional)",
        required=False,
        max_length=200,
        placeholder="bug, enhancement, documentation (comma-separated)",
    ),
)


def build_issue_modal() -> Dict[str, Any]:
    """Build the modal response for the slash command.

    Each field is wrapped in its own action row, as Discord requires.

    Returns:
        The interaction response payload (callback type 9).
    """
    return {
        "type": int(InteractionResponseType.MODAL),
        "data": {
            "custom_id": MODAL_CUSTOM_ID,
            "title": MODAL_TITLE,
            "components": [
                {"type": ACTION_ROW, "components": [field.to_component()]}
                for field in ISSUE_FORM_FIELDS
            ],
        },
    }
