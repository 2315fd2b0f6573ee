"""Pydantic schemas for search results.

See: https://docs.github.com/en/rest/search/search
"""

from pydantic import Field

from .base import GitHubModel
from .issue import Issue
from .repository import Repository
from .user import User


class SearchUsersResult(GitHubModel):
    """Result page of GET /search/users."""

    total_count: int = Field(description="Total number of matches")
    incomplete_results: bool = Field(default=False, description="Whether the search timed out")
    items: list[User] = Field(default_factory=list, description="Matching users")


class SearchReposResult(GitHubModel):
    """Result page of GET /search/repositories."""

    total_count: int = Field(description="Total number of matches")
    incomplete_results: bool = Field(default=False, description="Whether the search timed out")
    items: list[Repository] = Field(default_factory=list, description="Matching repositories")


class SearchIssuesResult(GitHubModel):
    """Result page of GET /search/issues."""

    total_count: int = Field(description="Total number of matches")
    incomplete_results: bool = Field(default=False, description="Whether the search timed out")
    items: list[Issue] = Field(
        default_factory=list, description="Matching issues and pull requests"
    )
