"""Unit tests for GitHubClient issue creation."""

import asyncio
import json
from typing import List

import httpx
import pytest

from src.issuebot.github.client import GitHubAPIError, GitHubClient
from src.issuebot.github.models import IssueResult


def run_async(coro):
    return asyncio.run(coro)


ISSUE_RESPONSE = {
    "number": 12,
    "html_url": "https://github.com/acme/widgets/issues/12",
    "labels": [{"id": 1, "name": "bug"}, {"id": 2, "name": "docs"}],
}


def _client(handler, requests: List[httpx.Request]) -> GitHubClient:
    def _recording(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    return GitHubClient(token="ghp_test", transport=httpx.MockTransport(_recording))


async def _create(client: GitHubClient, **kwargs) -> IssueResult:
    async with client:
        return await client.create_issue("acme", "widgets", **kwargs)


class TestCreateIssue:

    def test_posts_to_issues_endpoint(self):
        requests: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(201, json=ISSUE_RESPONSE), requests)

        run_async(_create(client, title="Fix login bug", body="Details", labels=["bug"]))

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert request.url.path == "/repos/acme/widgets/issues"
        assert request.headers["Authorization"] == "Bearer ghp_test"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert json.loads(request.content) == {
            "title": "Fix login bug",
            "body": "Details",
            "labels": ["bug"],
        }

    def test_null_body_and_no_labels(self):
        requests: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(201, json=ISSUE_RESPONSE), requests)

        run_async(_create(client, title="Fix login bug", body=None, labels=[]))

        assert json.loads(requests[0].content) == {"title": "Fix login bug", "body": None}

    def test_empty_title_is_sent_unchanged(self):
        requests: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(201, json=ISSUE_RESPONSE), requests)

        run_async(_create(client, title=""))

        assert json.loads(requests[0].content)["title"] == ""

    def test_returns_issue_result(self):
        client = _client(lambda r: httpx.Response(201, json=ISSUE_RESPONSE), [])

        result = run_async(_create(client, title="Fix login bug"))

        assert result == IssueResult(
            number=12,
            html_url="https://github.com/acme/widgets/issues/12",
            labels=["bug", "docs"],
        )

    @pytest.mark.parametrize(
        "status,message",
        [
            (422, "Validation Failed"),
            (401, "Bad credentials"),
            (404, "Not Found"),
        ],
    )
    def test_error_carries_upstream_message(self, status, message):
        client = _client(
            lambda r: httpx.Response(status, json={"message": message}), []
        )

        with pytest.raises(GitHubAPIError) as exc_info:
            run_async(_create(client, title="Fix login bug"))

        assert exc_info.value.message == message
        assert str(exc_info.value) == message
        assert exc_info.value.status_code == status

    def test_error_without_json_body(self):
        client = _client(lambda r: httpx.Response(502, text="Bad gateway"), [])

        with pytest.raises(GitHubAPIError) as exc_info:
            run_async(_create(client, title="Fix login bug"))

        assert exc_info.value.message == "GitHub API error: 502"
        assert exc_info.value.response_body == "Bad gateway"

    def test_single_attempt_on_server_error(self):
        requests: List[httpx.Request] = []
        client = _client(lambda r: httpx.Response(503, json={"message": "Unavailable"}), requests)

        with pytest.raises(GitHubAPIError):
            run_async(_create(client, title="Fix login bug"))

        assert len(requests) == 1

    def test_transport_error_is_wrapped(self):
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _client(_fail, [])

        with pytest.raises(GitHubAPIError) as exc_info:
            run_async(_create(client, title="Fix login bug"))

        assert exc_info.value.message == "connection refused"
        assert exc_info.value.status_code is None


class TestIssueResult:

    def test_plain_string_labels_accepted(self):
        result = IssueResult.from_github_response(
            {"number": 1, "html_url": "https://x/1", "labels": ["bug", ""]}
        )
        assert result.labels == ["bug"]

    def test_missing_labels(self):
        result = IssueResult.from_github_response({"number": 1, "html_url": "https://x/1"})
        assert result.labels == []


class TestClientLifecycle:

    def test_base_url_trailing_slash_removed(self):
        client = GitHubClient(token="t", base_url="https://ghe.example.com/api/v3/")
        assert client.base_url == "https://ghe.example.com/api/v3"

    def test_close_is_idempotent(self):
        client = GitHubClient(token="t", transport=httpx.MockTransport(lambda r: httpx.Response(200)))

        async def _exercise():
            assert client.client is client.client
            await client.close()
            await client.close()

        run_async(_exercise())
        assert client._client is None
