"""Pydantic schemas for releases and release assets.

See: https://docs.github.com/en/rest/releases
"""

from datetime import datetime

from pydantic import Field

from .base import GitHubModel, RequestParams
from .user import User


class ReleaseAsset(GitHubModel):
    """GitHub release asset object."""

    id: int = Field(description="Asset ID")
    name: str = Field(description="File name")
    label: str | None = Field(default=None, description="Display label")
    state: str | None = Field(default=None, description="Asset state (uploaded, open)")
    content_type: str | None = Field(default=None, description="MIME type")
    size: int = Field(default=0, description="Size in bytes")
    download_count: int = Field(default=0, description="Number of downloads")
    url: str | None = Field(default=None, description="API URL for the asset")
    browser_download_url: str | None = Field(default=None, description="Direct download URL")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")
    uploader: User | None = Field(default=None, description="User who uploaded the asset")


class Release(GitHubModel):
    """GitHub release object.

    Maps to: GET /repos/{owner}/{repo}/releases/{id}
    """

    id: int = Field(description="Release ID")
    name: str | None = Field(default=None, description="Release title")
    tag_name: str = Field(description="Git tag of the release")
    target_commitish: str | None = Field(default=None, description="Branch or SHA tagged")
    draft: bool = Field(default=False, description="Whether the release is a draft")
    prerelease: bool = Field(default=False, description="Whether the release is a prerelease")
    body: str | None = Field(default=None, description="Release notes")
    url: str | None = Field(default=None, description="API URL for the release")
    html_url: str | None = Field(default=None, description="Web URL for the release")
    assets_url: str | None = Field(default=None, description="API URL for the assets")
    upload_url: str | None = Field(default=None, description="Hypermedia upload URL template")
    tarball_url: str | None = Field(default=None, description="Source tarball URL")
    zipball_url: str | None = Field(default=None, description="Source zipball URL")
    created_at: datetime | None = Field(default=None, description="Creation timestamp")
    published_at: datetime | None = Field(default=None, description="Publication timestamp")
    author: User | None = Field(default=None, description="Release author")
    assets: list[ReleaseAsset] = Field(default_factory=list, description="Uploaded assets")


class ReleaseParams(RequestParams):
    """Request body for creating or updating a release."""

    tag_name: str = Field(description="Git tag to create or use")
    name: str = Field(default="", description="Release title")
    target_commitish: str = Field(default="", description="Branch or SHA to tag")
    body: str = Field(default="", description="Release notes")
    draft: bool = Field(default=False, description="Create as draft")
    prerelease: bool = Field(default=False, description="Mark as prerelease")
