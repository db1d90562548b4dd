"""GitHub API data models for issue creation."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field


class IssueResult(BaseModel):
    """Result of creating a GitHub issue.

    Attributes:
        number: The issue number in the repository.
        html_url: Browser URL of the created issue.
        labels: Names of the labels GitHub applied to the issue.
    """

    number: int = Field(..., gt=0)
    html_url: str
    labels: List[str] = Field(default_factory=list)

    @classmethod
    def from_github_response(cls, data: Dict[str, Any]) -> "IssueResult":
        """Build the result from the create-issue response body.

        GitHub returns labels as objects with a ``name`` field; plain string
        entries are accepted as well.
        """
        labels: List[str] = []
        for label in data.get("labels") or []:
            if isinstance(label, dict):
                name = label.get("name")
            else:
                name = label
            if isinstance(name, str) and name:
                labels.append(name)

        return cls(
            number=data["number"],
            html_url=data["html_url"],
            labels=labels,
        )
