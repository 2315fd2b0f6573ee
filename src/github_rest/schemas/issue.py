"""Pydantic schemas for issues and issue events.

See: https://docs.github.com/en/rest/issues
"""

from datetime import datetime

from pydantic import BaseModel, Field

from .base import GitHubModel
from .enums import IssueState
from .repository import Label, Milestone
from .user import User


class PullURLs(GitHubModel):
    """Links attached to an issue that is also a pull request."""

    url: str | None = Field(default=None, description="API URL for the pull request")
    html_url: str | None = Field(default=None, description="Web URL for the pull request")
    diff_url: str | None = Field(default=None, description="Diff URL")
    patch_url: str | None = Field(default=None, description="Patch URL")


class Issue(GitHubModel):
    """GitHub issue object.

    Pull requests are also returned by the issues endpoints; for those,
    ``pull_request`` is set.
    """

    id: int = Field(description="Issue ID")
    number: int = Field(description="Issue number")
    state: str = Field(description="Issue state (open, closed)")
    locked: bool = Field(default=False, description="Whether the conversation is locked")
    title: str = Field(description="Issue title")
    body: str | None = Field(default=None, description="Issue body text")
    user: User | None = Field(default=None, description="User who opened the issue")
    labels: list[Label] = Field(default_factory=list, description="Issue labels")
    milestone: Milestone | None = Field(default=None, description="Milestone")
    url: str | None = Field(default=None, description="API URL for the issue")
    html_url: str | None = Field(default=None, description="Web URL for the issue")
    labels_url: str | None = Field(default=None, description="API URL for the issue labels")
    pull_request: PullURLs | None = Field(default=None, description="Pull request links")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    closed_at: datetime | None = Field(default=None, description="Closure timestamp")

    @property
    def is_pull_request(self) -> bool:
        """Whether this issue is a pull request."""
        return self.pull_request is not None


class Event(GitHubModel):
    """GitHub issue event object."""

    id: int = Field(description="Event ID")
    event: str = Field(description="Event type (closed, merged, labeled, ...)")
    commit_id: str | None = Field(default=None, description="Commit SHA referenced by the event")
    actor: User | None = Field(default=None, description="User who triggered the event")
    url: str | None = Field(default=None, description="API URL for the event")
    commit_url: str | None = Field(default=None, description="API URL for the commit")
    created_at: datetime | None = Field(default=None, description="Event timestamp")


class IssuesFilter(BaseModel):
    """Filters for listing repository issues."""

    state: IssueState | None = Field(default=None, description="Issue state filter")
    since: datetime | None = Field(
        default=None, description="Only issues updated at or after this time"
    )
