"""Tests for GitHubClient.do: sending, decoding and error mapping."""

from __future__ import annotations

import io
import threading
import time
from collections.abc import Iterator
from datetime import UTC, datetime
from typing import Any

import httpx
import pytest
import respx
from loguru import logger
from pydantic import TypeAdapter

from github_rest import (
    APIError,
    AuthenticationError,
    Context,
    DecodingError,
    GitHubClient,
    InvalidContextError,
    NotFoundError,
    RateLimitError,
    RateLimitGroup,
    Request,
    TransportError,
)
from github_rest.config import Settings
from github_rest.schemas import Commit, Repository, User
from tests.conftest import API_URL
from tests.fixtures.github_responses import (
    GITHUB_BAD_CREDENTIALS,
    GITHUB_COMMITS_RESPONSE,
    GITHUB_NOT_FOUND,
    GITHUB_RATE_LIMITED,
    GITHUB_REPOSITORY_RESPONSE,
    GITHUB_USER_RESPONSE,
)
from tests.fixtures.rate_limit_responses import (
    HEADERS_EXHAUSTED,
    HEADERS_FIXED_RESET,
    HEADERS_HEALTHY,
    HEADERS_NEGATIVE,
    HEADERS_SEARCH,
    RESET_EPOCH,
)

REPO_URL = f"{API_URL}/repos/octocat/Hello-World"
COMMITS_URL = f"{REPO_URL}/commits"


class FailingStream(httpx.SyncByteStream):
    """Body that breaks off after its first chunk."""

    def __init__(self, first: bytes, error: Exception) -> None:
        self._first = first
        self._error = error

    def __iter__(self) -> Iterator[bytes]:
        yield self._first
        raise self._error


class ChunkedStream(httpx.SyncByteStream):
    def __init__(self, *chunks: bytes) -> None:
        self._chunks = chunks

    def __iter__(self) -> Iterator[bytes]:
        yield from self._chunks


class DrippingStream(httpx.SyncByteStream):
    """Body delivered a few bytes at a time with a pause before each chunk."""

    def __init__(self, body: bytes, size: int, pause: float) -> None:
        self._body = body
        self._size = size
        self._pause = pause

    def __iter__(self) -> Iterator[bytes]:
        for start in range(0, len(self._body), self._size):
            time.sleep(self._pause)
            yield self._body[start : start + self._size]


def mock_client(settings: Settings, response: httpx.Response) -> GitHubClient:
    """Client served by a transport that always returns response."""
    return GitHubClient(
        token="t", settings=settings, transport=httpx.MockTransport(lambda request: response)
    )


# -----------------------------------------------------------------------------
# Success Paths
# -----------------------------------------------------------------------------
class TestDecode:
    """Decoding a successful body into a type."""

    def test_decode_model(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(
            return_value=httpx.Response(200, json=GITHUB_REPOSITORY_RESPONSE, headers=HEADERS_HEALTHY)
        )

        req = client.new_request(ctx, "GET", "/repos/octocat/Hello-World")
        repo, resp = client.do(req, Repository)

        assert isinstance(repo, Repository)
        assert repo.full_name == "octocat/Hello-World"
        assert resp.status_code == 200
        assert resp.rate is not None
        assert resp.rate.remaining == 4500

    def test_decode_list_keeps_order(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(COMMITS_URL).mock(return_value=httpx.Response(200, json=GITHUB_COMMITS_RESPONSE))

        req = client.new_page_request(ctx, "GET", "/repos/octocat/Hello-World/commits", 2, 1)
        commits, _ = client.do(req, list[Commit])

        assert [c.sha for c in commits] == [
            "6dcb09b5b57875f334f61aebed695e2e4193db5e",
            "553c2077f0edc3d5dc5d17262f6aa498e69d6f8e",
        ]

    def test_decode_with_type_adapter(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(f"{API_URL}/user").mock(return_value=httpx.Response(200, json=GITHUB_USER_RESPONSE))

        req = client.new_request(ctx, "GET", "/user")
        data, _ = client.do(req, TypeAdapter(dict[str, Any]))

        assert data["login"] == "octocat"

    def test_pages_from_link_header(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        link = (
            f'<{COMMITS_URL}?per_page=2&page=3>; rel="next", '
            f'<{COMMITS_URL}?per_page=2&page=7>; rel="last"'
        )
        api.get(COMMITS_URL).mock(
            return_value=httpx.Response(200, json=GITHUB_COMMITS_RESPONSE, headers={"Link": link})
        )

        req = client.new_page_request(ctx, "GET", "/repos/octocat/Hello-World/commits", 2, 2)
        _, resp = client.do(req, list[Commit])

        assert resp.pages == {"next": 3, "last": 7}
        assert resp.next_page == 3
        assert resp.last_page == 7

    def test_no_rate_headers(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(f"{API_URL}/user").mock(return_value=httpx.Response(200, json=GITHUB_USER_RESPONSE))

        _, resp = client.do(client.new_request(ctx, "GET", "/user"), User)

        assert resp.rate is None
        assert resp.pages == {}
        assert client.rate() is None


class TestDiscardAndStream:
    """Destinations that are not decoded."""

    def test_discard(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.delete(f"{REPO_URL}/releases/1").mock(return_value=httpx.Response(204))

        result, resp = client.do(client.new_request(ctx, "DELETE", "/repos/octocat/Hello-World/releases/1"))

        assert result is None
        assert resp.status_code == 204

    def test_discard_ignores_invalid_body(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.post(f"{REPO_URL}/dispatches").mock(return_value=httpx.Response(200, content=b"not json"))

        result, _ = client.do(client.new_request(ctx, "POST", "/repos/octocat/Hello-World/dispatches"))

        assert result is None

    def test_stream_into_sink(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        payload = b"\x1f\x8b" + b"archive-bytes" * 100
        api.get(f"{REPO_URL}/tarball/main").mock(return_value=httpx.Response(200, content=payload))
        sink = io.BytesIO()

        result, resp = client.do(
            client.new_request(ctx, "GET", "/repos/octocat/Hello-World/tarball/main"), sink
        )

        assert result is None
        assert sink.getvalue() == payload
        assert resp.status_code == 200

    def test_stream_interrupted(self, settings: Settings, ctx: Context) -> None:
        response = httpx.Response(200, stream=FailingStream(b"abc", httpx.RemoteProtocolError("peer closed")))
        sink = io.BytesIO()

        with mock_client(settings, response) as client:
            with pytest.raises(DecodingError, match="unexpected EOF"):
                client.do(client.new_download_request(ctx, "/o/r/releases/download/v1/app.zip"), sink)

    def test_stream_cancelled_between_chunks(self, settings: Settings) -> None:
        ctx = Context.background()
        response = httpx.Response(200, stream=ChunkedStream(b"one", b"two", b"three"))
        written: list[bytes] = []

        class CancellingSink:
            def write(self, data: bytes) -> int:
                written.append(data)
                ctx.cancel()
                return len(data)

        with mock_client(settings, response) as client:
            with pytest.raises(TransportError, match="context canceled"):
                client.do(client.new_download_request(ctx, "/o/r/releases/download/v1/app.zip"), CancellingSink())

        assert written == [b"one"]


# -----------------------------------------------------------------------------
# Rate Limits
# -----------------------------------------------------------------------------
class TestRateTracking:
    """Rate headers are recorded per group."""

    def test_rate_parsed(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(f"{API_URL}/user").mock(
            return_value=httpx.Response(200, json=GITHUB_USER_RESPONSE, headers=HEADERS_FIXED_RESET)
        )

        _, resp = client.do(client.new_request(ctx, "GET", "/user"), User)

        assert resp.rate is not None
        assert resp.rate.limit == 5000
        assert resp.rate.remaining == 4999
        assert resp.rate.reset == datetime.fromtimestamp(RESET_EPOCH, tz=UTC)
        assert client.rate(RateLimitGroup.CORE) == resp.rate

    def test_search_does_not_touch_core(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(f"{API_URL}/user").mock(
            return_value=httpx.Response(200, json=GITHUB_USER_RESPONSE, headers=HEADERS_HEALTHY)
        )
        api.get(f"{API_URL}/search/users").mock(
            return_value=httpx.Response(
                200, json={"total_count": 0, "items": []}, headers=HEADERS_SEARCH
            )
        )

        _, core_resp = client.do(client.new_request(ctx, "GET", "/user"), User)
        client.do(client.new_request(ctx, "GET", "/search/users", params={"q": "x"}))

        assert client.rate(RateLimitGroup.CORE) == core_resp.rate
        search = client.rate(RateLimitGroup.SEARCH)
        assert search is not None
        assert search.limit == 30
        assert search.group == RateLimitGroup.SEARCH

    def test_rate_recorded_on_error(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(f"{API_URL}/user").mock(
            return_value=httpx.Response(401, json=GITHUB_BAD_CREDENTIALS, headers=HEADERS_HEALTHY)
        )

        with pytest.raises(AuthenticationError):
            client.do(client.new_request(ctx, "GET", "/user"), User)

        rate = client.rate()
        assert rate is not None
        assert rate.remaining == 4500

    def test_invalid_rate_headers_ignored(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(f"{API_URL}/user").mock(
            return_value=httpx.Response(200, json=GITHUB_USER_RESPONSE, headers=HEADERS_NEGATIVE)
        )

        user, resp = client.do(client.new_request(ctx, "GET", "/user"), User)

        assert user.login == "octocat"
        assert resp.rate is None
        assert client.rate() is None


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------
class TestAPIErrors:
    """Non-2xx statuses become structured errors."""

    def test_unauthorized(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(f"{REPO_URL}/issues").mock(return_value=httpx.Response(401, json=GITHUB_BAD_CREDENTIALS))

        with pytest.raises(AuthenticationError) as exc_info:
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World/issues"))

        err = exc_info.value
        assert str(err) == "GET /repos/octocat/Hello-World/issues: 401 Bad credentials"
        assert err.status_code == 401
        assert err.message == "Bad credentials"

    def test_not_found(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(return_value=httpx.Response(404, json=GITHUB_NOT_FOUND))

        with pytest.raises(NotFoundError, match="404 Not Found"):
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"), Repository)

    def test_rate_limited(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(
            return_value=httpx.Response(403, json=GITHUB_RATE_LIMITED, headers=HEADERS_EXHAUSTED)
        )

        with pytest.raises(RateLimitError) as exc_info:
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"), Repository)

        assert exc_info.value.reset_at is not None
        assert exc_info.value.reset_at > datetime.now(UTC)

    def test_forbidden_with_quota_left(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(REPO_URL).mock(
            return_value=httpx.Response(
                403, json={"message": "Resource not accessible"}, headers=HEADERS_HEALTHY
            )
        )

        with pytest.raises(APIError) as exc_info:
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"))

        assert type(exc_info.value) is APIError
        assert exc_info.value.status_code == 403

    def test_unparseable_error_body(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(REPO_URL).mock(return_value=httpx.Response(502, content=b"<html>Bad Gateway</html>"))

        with pytest.raises(APIError) as exc_info:
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"))

        assert exc_info.value.message == ""
        assert str(exc_info.value) == "GET /repos/octocat/Hello-World: 502 "

    def test_error_does_not_write_to_sink(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(f"{REPO_URL}/zipball/main").mock(return_value=httpx.Response(404, json=GITHUB_NOT_FOUND))
        sink = io.BytesIO()

        with pytest.raises(NotFoundError):
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World/zipball/main"), sink)

        assert sink.getvalue() == b""


class TestDecodingErrors:
    """Bodies that cannot be decoded into the destination."""

    def test_truncated_json(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(return_value=httpx.Response(200, content=b'{"id": 1296269, "name": '))

        with pytest.raises(DecodingError, match="unexpected EOF"):
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"), Repository)

    def test_schema_mismatch(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(return_value=httpx.Response(200, json={"id": "not-a-number"}))

        with pytest.raises(DecodingError) as exc_info:
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"), Repository)

        assert "unexpected EOF" not in str(exc_info.value)

    def test_invalid_json(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(return_value=httpx.Response(200, content=b"<html></html>"))

        with pytest.raises(DecodingError, match="invalid JSON"):
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"), Repository)


class TestTransportErrors:
    """Failures before a response is received."""

    def test_connection_error(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(side_effect=httpx.ConnectError("connection refused"))

        with pytest.raises(TransportError) as exc_info:
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout(self, client: GitHubClient, api: respx.MockRouter, ctx: Context) -> None:
        api.get(REPO_URL).mock(side_effect=httpx.ReadTimeout("timed out"))

        with pytest.raises(TransportError):
            client.do(client.new_request(ctx, "GET", "/repos/octocat/Hello-World"))

    def test_cancelled_before_send(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        route = api.get(REPO_URL).mock(return_value=httpx.Response(200, json=GITHUB_REPOSITORY_RESPONSE))
        req = client.new_request(ctx, "GET", "/repos/octocat/Hello-World")
        ctx.cancel()

        with pytest.raises(TransportError, match="context canceled"):
            client.do(req, Repository)

        assert not route.called

    def test_expired_before_send(self, client: GitHubClient, api: respx.MockRouter) -> None:
        route = api.get(REPO_URL).mock(return_value=httpx.Response(200, json=GITHUB_REPOSITORY_RESPONSE))
        req = client.new_request(Context.with_timeout(0), "GET", "/repos/octocat/Hello-World")

        with pytest.raises(TransportError, match="context deadline exceeded"):
            client.do(req, Repository)

        assert not route.called

    def test_request_without_context(self, client: GitHubClient, ctx: Context) -> None:
        built = client.new_request(ctx, "GET", "/user")

        with pytest.raises(InvalidContextError):
            client.do(Request(ctx=None, http=built.http))

    def test_timeout_recomputed_at_send(self, settings: Settings) -> None:
        seen: list[float] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.extensions["timeout"]["read"])
            return httpx.Response(200, json=[])

        ctx = Context.with_timeout(1.0)
        with GitHubClient(settings=settings, transport=httpx.MockTransport(handler)) as client:
            req = client.new_request(ctx, "GET", "/user/repos")
            time.sleep(0.3)
            client.do(req, list[int])

        assert seen[0] <= 0.75


class TestInFlightCancellation:
    """A context that ends mid-call unblocks the caller with TransportError."""

    def test_cancelled_while_waiting_for_headers(self, settings: Settings) -> None:
        release = threading.Event()

        def silent_server(request: httpx.Request) -> httpx.Response:
            release.wait(5)
            return httpx.Response(200, json=[1, 2])

        ctx = Context.background()
        client = GitHubClient(settings=settings, transport=httpx.MockTransport(silent_server))
        timer = threading.Timer(0.1, ctx.cancel)
        started = time.monotonic()
        timer.start()
        try:
            with pytest.raises(TransportError, match="context canceled"):
                client.do(client.new_request(ctx, "GET", "/user/repos"), list[int])
        finally:
            release.set()
            timer.cancel()
            client.close()

        assert time.monotonic() - started < 2

    def test_deadline_passes_during_body(self, settings: Settings) -> None:
        body = DrippingStream(b"[1, 1, 1, 1, 1, 1, 1, 1, 1, 1]", size=2, pause=0.1)
        ctx = Context.with_timeout(0.3)
        started = time.monotonic()

        with mock_client(settings, httpx.Response(200, stream=body)) as client:
            with pytest.raises(TransportError, match="context deadline exceeded"):
                client.do(client.new_request(ctx, "GET", "/user/repos"), list[int])

        assert time.monotonic() - started < 1.0

    def test_cancelled_during_body(self, settings: Settings) -> None:
        body = DrippingStream(b"[1, 1, 1, 1, 1, 1, 1, 1, 1, 1]", size=2, pause=0.1)
        ctx = Context.background()
        timer = threading.Timer(0.2, ctx.cancel)
        started = time.monotonic()

        with mock_client(settings, httpx.Response(200, stream=body)) as client:
            timer.start()
            with pytest.raises(TransportError, match="context canceled"):
                client.do(client.new_request(ctx, "GET", "/user/repos"), list[int])

        assert time.monotonic() - started < 1.0

    def test_nothing_written_after_cancel(self, settings: Settings) -> None:
        body = DrippingStream(b"abcdefghij", size=2, pause=0.2)
        ctx = Context.background()
        sink = io.BytesIO()
        timer = threading.Timer(0.3, ctx.cancel)

        with mock_client(settings, httpx.Response(200, stream=body)) as client:
            timer.start()
            with pytest.raises(TransportError, match="context canceled"):
                client.do(client.new_download_request(ctx, "/o/r/releases/download/v1/app.zip"), sink)
            # Long enough for the whole body to have been delivered
            time.sleep(1.2)

        assert 0 < len(sink.getvalue()) < 10


class TestLogging:
    def test_success_logged_at_debug(
        self, client: GitHubClient, api: respx.MockRouter, ctx: Context
    ) -> None:
        api.get(f"{API_URL}/user").mock(return_value=httpx.Response(200, json=GITHUB_USER_RESPONSE))
        messages: list[str] = []
        handler_id = logger.add(lambda msg: messages.append(str(msg)), level="DEBUG", format="{message}")
        try:
            client.do(client.new_request(ctx, "GET", "/user"), User)
        finally:
            logger.remove(handler_id)

        assert any("GET /user -> 200" in m for m in messages)
