"""Pytest configuration and shared fixtures.

Usage Guide:
- For request/dispatch tests: use the ``client`` and ``api`` fixtures
  (respx router mounted on the client's transport)
- For payloads: import dicts from tests.fixtures.github_responses
- For rate limit headers: import from tests.fixtures.rate_limit_responses
"""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

import pytest
import respx

from github_rest import Context, GitHubClient, RateLimitMonitor
from github_rest.config import Settings, get_settings

# -----------------------------------------------------------------------------
# Test Timeline Constants
# -----------------------------------------------------------------------------
JAN_10 = datetime(2024, 1, 10, 9, 0, 0, tzinfo=UTC)
JAN_15 = datetime(2024, 1, 15, 10, 0, 0, tzinfo=UTC)

JAN_10_ISO = "2024-01-10T09:00:00Z"
JAN_12_ISO = "2024-01-12T16:00:00Z"
JAN_15_ISO = "2024-01-15T10:00:00Z"
JAN_16_ISO = "2024-01-16T14:00:00Z"

API_URL = "https://api.github.com"
UPLOAD_URL = "https://uploads.github.com"
DOWNLOAD_URL = "https://github.com"

TEST_TOKEN = "ghp_test_token"


# -----------------------------------------------------------------------------
# Settings & Client Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _clear_settings_cache(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the developer's environment."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env)."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def api() -> Generator[respx.MockRouter, None, None]:
    """respx router standing in for every GitHub host.

    Unmatched requests fail the test.
    """
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture
def client(settings: Settings, api: respx.MockRouter) -> Generator[GitHubClient, None, None]:
    """Authenticated client whose traffic is served by ``api``."""
    with GitHubClient(token=TEST_TOKEN, settings=settings, rate_monitor=RateLimitMonitor()) as c:
        yield c


@pytest.fixture
def anon_client(settings: Settings, api: respx.MockRouter) -> Generator[GitHubClient, None, None]:
    """Client without a token."""
    with GitHubClient(token="", settings=settings) as c:
        yield c


@pytest.fixture
def ctx() -> Context:
    """Live context with a generous deadline."""
    return Context.with_timeout(30)


# -----------------------------------------------------------------------------
# Utility Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def utc_now() -> datetime:
    """Current UTC datetime for tests."""
    return datetime.now(UTC)
