"""Deferred responder completing modal submissions.

A modal submission is acknowledged immediately with a deferred reply.
After that reply has been sent, ``DeferredResponder.complete`` runs as a
background task:

1. Create the issue on GitHub (single attempt).
2. Format a success or failure message.
3. Edit the original deferred reply exactly once with that message.

``complete`` never raises. A failed edit is logged and counted; there is no
other channel to reach the user, so it is not retried.

Source:
- src/issuebot/github/client.py (GitHubClient)
- src/issuebot/discord/client.py (DiscordClient)
- src/issuebot/interactions/models.py (IssueFollowupJob)
"""

import logging
import time
from typing import Optional

from src.issuebot.discord.client import DiscordAPIError, DiscordClient
from src.issuebot.events.metrics import InteractionMetrics
from src.issuebot.github.client import GitHubAPIError, GitHubClient
from src.issuebot.github.models import IssueResult
from src.issuebot.interactions.models import FollowupTarget, IssueFollowupJob

logger = logging.getLogger(__name__)


def format_success_message(title: str, result: IssueResult) -> str:
    """Message shown when the issue was created.

    Example::

        Issue created: **Fix login bug**
        https://github.com/acme/widgets/issues/7
        Labels: `bug` `ui`
    """
    content = f"Issue created: **{title}**\n{result.html_url}"
    if result.labels:
        tags = " ".join(f"`{name}`" for name in result.labels)
        content += f"\nLabels: {tags}"
    return content


def format_failure_message(error: str) -> str:
    return f"Failed to create issue: {error}"


class DeferredResponder:
    """Runs the deferred half of a modal submission.

    Attributes:
        github_client: Client used to create issues.
        discord_client: Client used to edit the deferred reply.
        owner: Repository owner receiving issues.
        repo: Repository name receiving issues.
        metrics: Optional metrics sink.
    """

    def __init__(
        self,
        github_client: GitHubClient,
        discord_client: DiscordClient,
        owner: str,
        repo: str,
        metrics: Optional[InteractionMetrics] = None,
    ):
        self.github_client = github_client
        self.discord_client = discord_client
        self.owner = owner
        self.repo = repo
        self.metrics = metrics

    async def complete(self, job: IssueFollowupJob) -> None:
        """Create the issue and edit the deferred reply with the outcome.

        Args:
            job: The extracted issue request and the reply to edit.
        """
        content = await self._create_issue(job)
        await self._edit_reply(job.target, content)

    async def _create_issue(self, job: IssueFollowupJob) -> str:
        request = job.request
        started = time.monotonic()
        try:
            result = await self.github_client.create_issue(
                self.owner,
                self.repo,
                title=request.title,
                body=request.body,
                labels=request.labels,
            )
        except GitHubAPIError as e:
            self._record_creation(False, started)
            logger.warning(
                "Issue creation rejected",
                extra={"status_code": e.status_code, "error": e.message},
            )
            return format_failure_message(e.message)
        except Exception as e:
            self._record_creation(False, started)
            logger.exception("Unexpected error creating issue")
            return format_failure_message(str(e) or type(e).__name__)

        self._record_creation(True, started)
        return format_success_message(request.title, result)

    async def _edit_reply(self, target: FollowupTarget, content: str) -> None:
        try:
            await self.discord_client.edit_original_response(target, content)
        except DiscordAPIError as e:
            logger.error(
                "Failed to edit deferred reply",
                extra={
                    "application_id": target.application_id,
                    "status_code": e.status_code,
                    "error": e.message,
                },
            )
            self._record_edit(False)
            return
        except Exception:
            logger.exception(
                "Unexpected error editing deferred reply",
                extra={"application_id": target.application_id},
            )
            self._record_edit(False)
            return

        self._record_edit(True)

    def _record_creation(self, success: bool, started: float) -> None:
        if self.metrics is not None:
            self.metrics.record_issue_creation(success, time.monotonic() - started)

    def _record_edit(self, success: bool) -> None:
        if self.metrics is not None:
            self.metrics.record_followup_edit(success)
