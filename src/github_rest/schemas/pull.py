"""Pydantic schemas for pull requests.

See: https://docs.github.com/en/rest/pulls/pulls
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from .base import GitHubModel, RequestParams
from .enums import IssueState
from .repository import Label, Milestone, Repository
from .user import User


class PullBranch(GitHubModel):
    """Base or head reference of a pull request."""

    label: str | None = Field(default=None, description="Label in 'owner:branch' format")
    ref: str = Field(description="Branch name")
    sha: str = Field(description="Head commit SHA")
    user: User | None = Field(default=None, description="Owner of the branch")
    repo: Repository | None = Field(default=None, description="Repository holding the branch")


class Pull(GitHubModel):
    """GitHub Pull Request object.

    Maps to: GET /repos/{owner}/{repo}/pulls/{number}
    """

    # Basic info
    id: int = Field(description="Pull request ID")
    number: int = Field(description="PR number")
    state: str = Field(description="PR state (open, closed)")
    draft: bool = Field(default=False, description="Whether the PR is a draft")
    locked: bool = Field(default=False, description="Whether the conversation is locked")
    title: str = Field(description="PR title")
    body: str | None = Field(default=None, description="PR description")

    # People and metadata
    user: User | None = Field(default=None, description="PR author")
    labels: list[Label] = Field(default_factory=list, description="PR labels")
    milestone: Milestone | None = Field(default=None, description="Milestone")

    # Branches
    base: PullBranch | None = Field(default=None, description="Base branch")
    head: PullBranch | None = Field(default=None, description="Head branch")

    # Merge status
    merged: bool = Field(default=False, description="Whether PR was merged")
    mergeable: bool | None = Field(default=None, description="Whether PR can be merged")
    rebaseable: bool | None = Field(default=None, description="Whether PR can be rebased")
    merged_by: User | None = Field(default=None, description="Who merged the PR")
    merge_commit_sha: str | None = Field(default=None, description="Merge commit SHA")

    # Links
    url: str | None = Field(default=None, description="API URL for the PR")
    html_url: str | None = Field(default=None, description="Web URL for the PR")
    diff_url: str | None = Field(default=None, description="Diff URL")
    patch_url: str | None = Field(default=None, description="Patch URL")
    issue_url: str | None = Field(default=None, description="API URL for the PR issue")
    commits_url: str | None = Field(default=None, description="API URL for the PR commits")
    statuses_url: str | None = Field(default=None, description="API URL for head statuses")

    # Dates
    created_at: datetime | None = Field(default=None, description="When PR was created")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    closed_at: datetime | None = Field(default=None, description="When PR was closed")
    merged_at: datetime | None = Field(default=None, description="When PR was merged")


class PullsFilter(BaseModel):
    """Filters for listing pull requests."""

    state: IssueState | None = Field(default=None, description="PR state filter")


class CreatePullParams(RequestParams):
    """Request body for creating a pull request."""

    title: str = Field(description="PR title")
    head: str = Field(description="Branch containing the changes")
    base: str = Field(description="Branch to merge into")
    body: str = Field(default="", description="PR description")
    draft: bool = Field(default=False, description="Open as draft")


class UpdatePullParams(RequestParams):
    """Request body for updating a pull request.

    Only fields that are set are sent.
    """

    title: str | None = Field(default=None, description="New title")
    body: str | None = Field(default=None, description="New description")
    base: str | None = Field(default=None, description="New base branch")
    state: Literal["open", "closed"] | None = Field(default=None, description="New state")
