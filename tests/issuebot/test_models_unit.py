"""Unit tests for interaction parsing and issue field extraction."""

import pytest

from src.issuebot.interactions.models import (
    CommandInteraction,
    FollowupTarget,
    ModalSubmitInteraction,
    PingInteraction,
    parse_interaction,
    parse_labels,
)


def _modal_payload(**values) -> dict:
    return {
        "type": 5,
        "application_id": "111",
        "token": "tok",
        "data": {
            "custom_id": "github-issue-modal",
            "components": [
                {
                    "type": 1,
                    "components": [{"type": 4, "custom_id": custom_id, "value": value}],
                }
                for custom_id, value in values.items()
            ],
        },
    }


class TestParseInteraction:

    def test_ping(self):
        assert isinstance(parse_interaction({"type": 1}), PingInteraction)

    def test_command(self):
        interaction = parse_interaction(
            {
                "type": 2,
                "application_id": "111",
                "token": "tok",
                "data": {"id": "9", "name": "issues", "type": 1},
                "guild_id": "42",
            }
        )
        assert isinstance(interaction, CommandInteraction)
        assert interaction.data.name == "issues"

    def test_modal_submit(self):
        interaction = parse_interaction(_modal_payload(**{"issue-title": "Hello"}))
        assert isinstance(interaction, ModalSubmitInteraction)
        assert interaction.data.custom_id == "github-issue-modal"
        assert interaction.followup_target == FollowupTarget(
            application_id="111", token="tok"
        )

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": 3, "application_id": "1", "token": "t"},
            {"type": 4},
            {"type": 99},
            {"data": {"name": "issues"}},
            {"type": 2, "application_id": "1", "token": "t"},
            {"type": 5, "token": "t", "data": {"custom_id": "x"}},
            {"type": 5, "application_id": "1", "token": "", "data": {"custom_id": "x"}},
        ],
    )
    def test_unsupported_shapes_return_none(self, payload):
        assert parse_interaction(payload) is None

    @pytest.mark.parametrize("payload", [None, [], "ping", 1])
    def test_non_object_returns_none(self, payload):
        assert parse_interaction(payload) is None


class TestFieldValue:

    def test_values_are_trimmed(self):
        interaction = parse_interaction(_modal_payload(**{"issue-title": "  Fix it  "}))
        assert interaction.field_value("issue-title") == "Fix it"

    def test_missing_field_is_empty(self):
        interaction = parse_interaction(_modal_payload(**{"issue-title": "Fix it"}))
        assert interaction.field_value("issue-body") == ""

    def test_missing_value_is_empty(self):
        payload = _modal_payload()
        payload["data"]["components"] = [
            {"type": 1, "components": [{"type": 4, "custom_id": "issue-body"}]}
        ]
        interaction = parse_interaction(payload)
        assert interaction.field_value("issue-body") == ""


class TestParseLabels:

    def test_blanks_and_whitespace_removed(self):
        assert parse_labels("bug, enhancement,  , docs") == ["bug", "enhancement", "docs"]

    def test_empty_string(self):
        assert parse_labels("") == []

    def test_only_separators(self):
        assert parse_labels(" , ,, ") == []

    def test_exact_duplicates_collapsed(self):
        assert parse_labels("bug, ui, bug") == ["bug", "ui"]

    def test_case_variants_kept(self):
        assert parse_labels("Bug, bug") == ["Bug", "bug"]


class TestFollowupTarget:

    def test_edit_path(self):
        target = FollowupTarget(application_id="123", token="abc")
        assert target.edit_path == "/webhooks/123/abc/messages/@original"
