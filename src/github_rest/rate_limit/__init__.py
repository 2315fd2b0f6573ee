"""Rate limit tracking for GitHub API responses.

Parses X-RateLimit-* headers into per-group Rate values and keeps the
last observed rate for each group.
"""

from .monitor import RateLimitMonitor, StatusCallback
from .schemas import (
    Rate,
    RateLimitGroup,
    RateLimitSnapshot,
    RateLimitStatus,
    group_for_path,
)

__all__ = [
    "Rate",
    "RateLimitGroup",
    "RateLimitMonitor",
    "RateLimitSnapshot",
    "RateLimitStatus",
    "StatusCallback",
    "group_for_path",
]
