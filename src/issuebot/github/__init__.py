"""GitHub API client for creating issues from submitted forms."""

from src.issuebot.github.client import GitHubAPIError, GitHubClient
from src.issuebot.github.models import IssueResult

__all__ = [
    "GitHubAPIError",
    "GitHubClient",
    "IssueResult",
]
