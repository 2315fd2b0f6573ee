"""Pydantic schemas for GitHub REST API payloads."""

from .base import GitHubModel, RequestParams
from .enums import IssueState, Permission, Scope
from .issue import Event, Issue, IssuesFilter, PullURLs
from .pull import CreatePullParams, Pull, PullBranch, PullsFilter, UpdatePullParams
from .release import Release, ReleaseAsset, ReleaseParams
from .repository import (
    Branch,
    CollaboratorPermission,
    Commit,
    Hash,
    Label,
    Milestone,
    RawCommit,
    Repository,
    Signature,
    Tag,
)
from .search import SearchIssuesResult, SearchReposResult, SearchUsersResult
from .user import User

__all__ = [
    # Base
    "GitHubModel",
    "RequestParams",
    # Enums
    "IssueState",
    "Permission",
    "Scope",
    # Users
    "User",
    # Repositories
    "Branch",
    "CollaboratorPermission",
    "Commit",
    "Hash",
    "Label",
    "Milestone",
    "RawCommit",
    "Repository",
    "Signature",
    "Tag",
    # Issues
    "Event",
    "Issue",
    "IssuesFilter",
    "PullURLs",
    # Pull requests
    "CreatePullParams",
    "Pull",
    "PullBranch",
    "PullsFilter",
    "UpdatePullParams",
    # Releases
    "Release",
    "ReleaseAsset",
    "ReleaseParams",
    # Search
    "SearchIssuesResult",
    "SearchReposResult",
    "SearchUsersResult",
]
