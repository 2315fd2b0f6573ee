"""Rate limit tracking for a GitHub client.

The monitor keeps the most recently observed rate for each quota group,
fed passively from response headers. It is a report of what the server
last said: it never blocks, delays or rejects requests.

Each GitHubClient owns its own monitor, so two clients never share
state. Updates happen after every response and may come from several
threads at once; all access goes through a lock.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import httpx

from github_rest.config import RateLimitConfig, get_settings
from github_rest.logging import get_logger

from .schemas import Rate, RateLimitGroup, RateLimitSnapshot, RateLimitStatus

logger = get_logger(__name__)

# Type for status-change callbacks
StatusCallback = Callable[[Rate, RateLimitStatus], None]


class RateLimitMonitor:
    """Thread-safe cache of the last observed rate per quota group.

    Usage:
        client = GitHubClient()
        client.repo("octocat", "Hello-World").get(ctx)

        core = client.rate_monitor.get(RateLimitGroup.CORE)
        if client.rate_monitor.get_status() == RateLimitStatus.EXHAUSTED:
            ...
    """

    def __init__(self, config: RateLimitConfig | None = None) -> None:
        """Initialize the rate limit monitor.

        Args:
            config: Optional rate limit configuration (uses settings if not provided)
        """
        self._config = config or get_settings().rate_limit
        self._rates: dict[RateLimitGroup, Rate] = {}
        self._previous_status: dict[RateLimitGroup, RateLimitStatus] = {}
        self._callbacks: list[StatusCallback] = []
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # Passive Tracking (from Response Headers)
    # -------------------------------------------------------------------------
    def update(self, rate: Rate) -> None:
        """Record a freshly observed rate for its group.

        Only the rate's own group is touched. Callbacks fire outside the
        lock when the group's status degrades.

        Args:
            rate: Rate parsed from a response
        """
        with self._lock:
            self._rates[rate.group] = rate
            status = self._status_of(rate)
            previous = self._previous_status.get(rate.group, RateLimitStatus.HEALTHY)
            self._previous_status[rate.group] = status
            callbacks = list(self._callbacks) if self._is_degradation(previous, status) else []

        logger.debug(
            "Rate {}: {}/{} remaining ({})",
            rate.group.value,
            rate.remaining,
            rate.limit,
            status.value,
        )

        for callback in callbacks:
            callback(rate, status)

    def update_from_headers(
        self,
        headers: Mapping[str, str] | httpx.Headers,
        group: RateLimitGroup = RateLimitGroup.CORE,
    ) -> Rate | None:
        """Parse rate headers and record them if present.

        Args:
            headers: HTTP response headers
            group: Quota group the request was billed against

        Returns:
            The parsed Rate, or None when the response had no rate data
        """
        rate = Rate.from_headers(headers, group)
        if rate is not None:
            self.update(rate)
        return rate

    @staticmethod
    def _is_degradation(previous: RateLimitStatus, current: RateLimitStatus) -> bool:
        """Check if status change is a degradation (worse status)."""
        order = [
            RateLimitStatus.HEALTHY,
            RateLimitStatus.WARNING,
            RateLimitStatus.CRITICAL,
            RateLimitStatus.EXHAUSTED,
        ]
        return order.index(current) > order.index(previous)

    def _status_of(self, rate: Rate) -> RateLimitStatus:
        return rate.get_status(
            self._config.healthy_threshold_pct,
            self._config.warning_threshold_pct,
            self._config.critical_threshold_pct,
        )

    # -------------------------------------------------------------------------
    # Query Methods
    # -------------------------------------------------------------------------
    def get(self, group: RateLimitGroup = RateLimitGroup.CORE) -> Rate | None:
        """Get the last observed rate for a group (None if never observed)."""
        with self._lock:
            return self._rates.get(group)

    def snapshot(self) -> RateLimitSnapshot:
        """Copy of all observed rates."""
        with self._lock:
            return RateLimitSnapshot(timestamp=datetime.now(UTC), groups=dict(self._rates))

    def get_status(self, group: RateLimitGroup = RateLimitGroup.CORE) -> RateLimitStatus:
        """Get health status for a group.

        Args:
            group: Rate limit group to check

        Returns:
            RateLimitStatus enum value (HEALTHY if unknown)
        """
        rate = self.get(group)
        if rate is None:
            return RateLimitStatus.HEALTHY
        return self._status_of(rate)

    def clear(self) -> None:
        """Forget every observed rate."""
        with self._lock:
            self._rates.clear()
            self._previous_status.clear()

    # -------------------------------------------------------------------------
    # Callbacks & Observability
    # -------------------------------------------------------------------------
    def on_status_change(self, callback: StatusCallback) -> None:
        """Register a callback for status degradation.

        The callback receives the Rate and new RateLimitStatus when a
        group's status degrades (e.g., HEALTHY -> WARNING). Callbacks are
        NOT fired on improvement.

        Args:
            callback: Function to call on degradation
        """
        with self._lock:
            self._callbacks.append(callback)

    def remove_callback(self, callback: StatusCallback) -> bool:
        """Remove a previously registered callback.

        Returns:
            True if callback was found and removed
        """
        with self._lock:
            try:
                self._callbacks.remove(callback)
                return True
            except ValueError:
                return False

    def to_dict(self) -> dict[str, Any]:
        """Export current state as dictionary (for logging/metrics)."""
        snapshot = self.snapshot()
        groups: dict[str, Any] = {}
        for group, rate in snapshot.groups.items():
            groups[group.value] = {
                "limit": rate.limit,
                "remaining": rate.remaining,
                "remaining_percent": round(rate.remaining_percent, 2),
                "reset": rate.reset.isoformat(),
                "seconds_until_reset": rate.seconds_until_reset,
                "status": self._status_of(rate).value,
            }
        return {"timestamp": snapshot.timestamp.isoformat(), "groups": groups}
