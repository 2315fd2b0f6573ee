"""Pydantic schemas for repositories and their git objects.

See: https://docs.github.com/en/rest/repos/repos
"""

from datetime import datetime

from pydantic import Field

from .base import GitHubModel
from .enums import Permission
from .user import User


class Repository(GitHubModel):
    """GitHub repository object.

    Maps to: GET /repos/{owner}/{repo}
    """

    id: int = Field(description="Repository ID")
    name: str = Field(description="Repository name")
    full_name: str = Field(description="Repository name in 'owner/repo' format")
    description: str | None = Field(default=None, description="Repository description")
    topics: list[str] = Field(default_factory=list, description="Repository topics")
    private: bool = Field(default=False, description="Whether the repository is private")
    fork: bool = Field(default=False, description="Whether the repository is a fork")
    archived: bool = Field(default=False, description="Whether the repository is archived")
    disabled: bool = Field(default=False, description="Whether the repository is disabled")
    default_branch: str | None = Field(default=None, description="Default branch name")
    owner: User | None = Field(default=None, description="Repository owner")
    url: str | None = Field(default=None, description="API URL for the repository")
    html_url: str | None = Field(default=None, description="Web URL for the repository")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    pushed_at: datetime | None = Field(default=None, description="Last push timestamp")


class CollaboratorPermission(GitHubModel):
    """Permission of a collaborator on a repository.

    Maps to: GET /repos/{owner}/{repo}/collaborators/{username}/permission
    """

    permission: Permission = Field(description="Permission level")
    user: User | None = Field(default=None, description="Collaborator")


class Hash(GitHubModel):
    """Reference to a git object by SHA."""

    sha: str = Field(description="Object SHA")
    url: str | None = Field(default=None, description="API URL for the object")


class Signature(GitHubModel):
    """Git author or committer identity (from git, not a GitHub user)."""

    name: str = Field(description="Author name")
    email: str = Field(description="Author email")
    date: datetime = Field(description="Signature timestamp")


class RawCommit(GitHubModel):
    """Git commit data nested in a commit object."""

    message: str = Field(description="Commit message")
    author: Signature = Field(description="Git author")
    committer: Signature = Field(description="Git committer")
    tree: Hash | None = Field(default=None, description="Root tree")
    url: str | None = Field(default=None, description="API URL for the git commit")


class Commit(GitHubModel):
    """GitHub commit object.

    Maps to: GET /repos/{owner}/{repo}/commits/{ref}
    """

    sha: str = Field(description="Commit SHA")
    commit: RawCommit = Field(description="Git commit details")
    author: User | None = Field(default=None, description="GitHub user of the author")
    committer: User | None = Field(default=None, description="GitHub user of the committer")
    parents: list[Hash] = Field(default_factory=list, description="Parent commits")
    url: str | None = Field(default=None, description="API URL for the commit")
    html_url: str | None = Field(default=None, description="Web URL for the commit")


class Branch(GitHubModel):
    """GitHub branch object."""

    name: str = Field(description="Branch name")
    protected: bool = Field(default=False, description="Whether the branch is protected")
    commit: Commit = Field(description="Head commit of the branch")


class Tag(GitHubModel):
    """GitHub tag object."""

    name: str = Field(description="Tag name")
    commit: Hash = Field(description="Tagged commit")


class Label(GitHubModel):
    """GitHub issue/PR label."""

    id: int = Field(description="Label ID")
    name: str = Field(description="Label name")
    description: str | None = Field(default=None, description="Label description")
    color: str = Field(default="", description="Label color (hex without #)")
    default: bool = Field(default=False, description="Whether this is a default label")
    url: str | None = Field(default=None, description="API URL for the label")


class Milestone(GitHubModel):
    """GitHub milestone object."""

    id: int = Field(description="Milestone ID")
    number: int = Field(description="Milestone number")
    state: str = Field(description="Milestone state (open, closed)")
    title: str = Field(description="Milestone title")
    description: str | None = Field(default=None, description="Milestone description")
    creator: User | None = Field(default=None, description="User who created the milestone")
    open_issues: int = Field(default=0, description="Number of open issues")
    closed_issues: int = Field(default=0, description="Number of closed issues")
    due_on: datetime | None = Field(default=None, description="Due date")
    url: str | None = Field(default=None, description="API URL for the milestone")
    html_url: str | None = Field(default=None, description="Web URL for the milestone")
    labels_url: str | None = Field(default=None, description="API URL for the milestone labels")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    closed_at: datetime | None = Field(default=None, description="Closure timestamp")
