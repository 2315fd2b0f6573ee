"""Pydantic schemas for GitHub users.

See: https://docs.github.com/en/rest/users/users
"""

from datetime import datetime

from pydantic import Field

from .base import GitHubModel


class User(GitHubModel):
    """GitHub user object.

    Nested references (owners, authors, assignees) only carry the
    identifying fields; the full profile comes from GET /users/{username}.
    """

    id: int = Field(description="GitHub user ID")
    login: str = Field(description="GitHub username")
    type: str = Field(default="User", description="User type (User, Organization, Bot)")
    site_admin: bool = Field(default=False, description="Whether the user is a site admin")
    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Public email")
    company: str | None = Field(default=None, description="Company")
    location: str | None = Field(default=None, description="Location")
    bio: str | None = Field(default=None, description="Profile bio")
    blog: str | None = Field(default=None, description="Website")
    public_repos: int | None = Field(default=None, description="Number of public repositories")
    followers: int | None = Field(default=None, description="Number of followers")
    following: int | None = Field(default=None, description="Number of followed users")
    url: str | None = Field(default=None, description="API URL for the user")
    html_url: str | None = Field(default=None, description="Web URL for the user")
    avatar_url: str | None = Field(default=None, description="Avatar image URL")
    created_at: datetime | None = Field(default=None, description="Account creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last profile update")
