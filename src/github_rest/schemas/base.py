"""Base schema classes for GitHub API payloads."""

from pydantic import BaseModel, ConfigDict


class GitHubModel(BaseModel):
    """Base class for all GitHub resource schemas.

    Unknown fields returned by the API are ignored so that new upstream
    fields never break decoding.
    """

    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
    )


class RequestParams(BaseModel):
    """Base class for request bodies sent to the API."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
    )
