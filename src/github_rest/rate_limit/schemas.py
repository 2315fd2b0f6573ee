"""Pydantic schemas for GitHub API rate limit data.

Rate limit state is read from the ``X-RateLimit-*`` headers GitHub sends
on every response:
- X-RateLimit-Limit
- X-RateLimit-Remaining
- X-RateLimit-Reset (epoch seconds)
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum

import httpx
from pydantic import BaseModel, ConfigDict, Field, computed_field

HEADER_LIMIT = "x-ratelimit-limit"
HEADER_REMAINING = "x-ratelimit-remaining"
HEADER_RESET = "x-ratelimit-reset"


class RateLimitGroup(StrEnum):
    """GitHub rate limit quota groups.

    Each group has its own separate quota. Search endpoints are billed
    against ``search``; everything else on the REST API uses ``core``.
    See: https://docs.github.com/en/rest/rate-limit/rate-limit
    """

    CORE = "core"
    SEARCH = "search"
    GRAPHQL = "graphql"


class RateLimitStatus(StrEnum):
    """Rate limit health status.

    Thresholds are configurable but defaults are:
    - HEALTHY: > 50% remaining
    - WARNING: 20-50% remaining
    - CRITICAL: 5-20% remaining
    - EXHAUSTED: 0 remaining
    """

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"
    EXHAUSTED = "exhausted"


class Rate(BaseModel):
    """Rate limit reported by the server for one quota group."""

    model_config = ConfigDict(frozen=True)

    group: RateLimitGroup = Field(default=RateLimitGroup.CORE, description="Quota group")
    limit: int = Field(ge=0, description="Maximum requests allowed per window")
    remaining: int = Field(ge=0, description="Requests remaining in current window")
    reset: datetime = Field(description="UTC datetime when the window resets")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_percent(self) -> float:
        """Percentage of the quota still available (0.0 to 100.0)."""
        if self.limit == 0:
            return 0.0
        return (self.remaining / self.limit) * 100

    @property
    def seconds_until_reset(self) -> int:
        """Seconds until rate limit resets (0 if already past)."""
        delta = self.reset - datetime.now(UTC)
        return max(0, int(delta.total_seconds()))

    def get_status(
        self,
        healthy_threshold: float = 50.0,
        warning_threshold: float = 20.0,
        critical_threshold: float = 5.0,
    ) -> RateLimitStatus:
        """Determine rate limit health status.

        Args:
            healthy_threshold: % remaining above which is HEALTHY
            warning_threshold: % remaining above which is WARNING (below healthy)
            critical_threshold: % remaining above which is CRITICAL (below warning)

        Returns:
            RateLimitStatus enum value
        """
        if self.remaining == 0:
            return RateLimitStatus.EXHAUSTED
        if self.remaining_percent >= healthy_threshold:
            return RateLimitStatus.HEALTHY
        if self.remaining_percent >= warning_threshold:
            return RateLimitStatus.WARNING
        return RateLimitStatus.CRITICAL

    @classmethod
    def from_headers(
        cls,
        headers: Mapping[str, str] | httpx.Headers,
        group: RateLimitGroup = RateLimitGroup.CORE,
    ) -> "Rate | None":
        """Parse from HTTP response headers.

        All three headers must be present, integral and in range; otherwise
        the response carries no rate data and None is returned.

        Args:
            headers: HTTP response headers
            group: Quota group the request was billed against

        Returns:
            Rate for the group, or None
        """
        headers = httpx.Headers(headers)
        try:
            limit = int(headers[HEADER_LIMIT])
            remaining = int(headers[HEADER_REMAINING])
            reset_ts = int(headers[HEADER_RESET])
        except (KeyError, ValueError):
            return None

        try:
            return cls(
                group=group,
                limit=limit,
                remaining=remaining,
                reset=datetime.fromtimestamp(reset_ts, tz=UTC),
            )
        except (ValueError, OverflowError, OSError):
            # ValidationError (negative counts) or an out-of-range reset epoch
            return None


class RateLimitSnapshot(BaseModel):
    """Point-in-time copy of every group's last observed rate."""

    timestamp: datetime = Field(description="When this snapshot was taken")
    groups: dict[RateLimitGroup, Rate] = Field(
        default_factory=dict, description="Rate limits by group"
    )

    def get_group(self, group: RateLimitGroup) -> Rate | None:
        """Get rate limit for a specific group, or None if never observed."""
        return self.groups.get(group)

    def get_core(self) -> Rate | None:
        """Convenience accessor for the core group (most common)."""
        return self.groups.get(RateLimitGroup.CORE)


def group_for_path(path: str) -> RateLimitGroup:
    """Map an API path to the quota group GitHub bills it against.

    Args:
        path: Request path relative to the API base URL (e.g. ``/search/issues``)

    Returns:
        RateLimitGroup for the path
    """
    path = "/" + path.lstrip("/")
    if path == "/search" or path.startswith("/search/"):
        return RateLimitGroup.SEARCH
    if path == "/graphql" or path.startswith("/graphql/"):
        return RateLimitGroup.GRAPHQL
    return RateLimitGroup.CORE
