"""GitHub REST API client: request building and dispatch.

Every resource operation goes through the same two steps:

1. ``new_request`` / ``new_page_request`` / ``upload_request`` /
   ``new_download_request`` build an authenticated request against the
   right base URL.
2. ``do`` sends it, records the rate limit headers, and decodes the
   body into the caller's destination or raises a structured error.

Calls are synchronous and independent: nothing is cached, retried or
throttled here.
"""

from __future__ import annotations

import mimetypes
import os
import threading
from collections.abc import Iterator, Mapping
from concurrent.futures import Future
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_json

from .config import Settings, get_settings
from .context import Context
from .exceptions import (
    APIError,
    AuthenticationError,
    DecodingError,
    EncodingError,
    FileError,
    InvalidContextError,
    NotFoundError,
    RateLimitError,
    TransportError,
    URLError,
)
from .logging import bind_request, get_logger
from .pagination import parse_pages
from .rate_limit import Rate, RateLimitGroup, RateLimitMonitor, group_for_path
from .response import Destination, DestinationKind, Response
from .schemas.base import GitHubModel
from .services import RepoService, SearchService, UsersService

logger = get_logger(__name__)

ACCEPT_JSON = "application/vnd.github+json"
ACCEPT_BINARY = "application/octet-stream"

QueryParams = Mapping[str, str | int]


@dataclass
class Request:
    """A request ready to be dispatched.

    Attributes:
        ctx: Deadline and cancellation for the call
        http: The underlying httpx request
        group: Rate limit group the request is billed against
    """

    ctx: Context | None
    http: httpx.Request
    group: RateLimitGroup = RateLimitGroup.CORE

    @property
    def method(self) -> str:
        return self.http.method

    @property
    def url(self) -> httpx.URL:
        return self.http.url


class _ErrorBody(GitHubModel):
    """Error payload GitHub returns with non-2xx responses."""

    message: str = ""


class GitHubClient:
    """Synchronous GitHub REST API client.

    Usage:
        with GitHubClient(token="ghp_...") as client:
            ctx = Context.with_timeout(30)
            commits, resp = client.repo("octocat", "Hello-World").commits(ctx, 50, 1)
            print(resp.pages.get("next"), resp.rate)

    A token is optional; anonymous clients get a lower rate limit.
    Each client owns its own rate limit monitor.
    """

    def __init__(
        self,
        token: str | None = None,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        rate_monitor: RateLimitMonitor | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub access token. If not provided, uses GITHUB_TOKEN from
                   settings; an empty token means anonymous access.
            settings: Optional settings (defaults to get_settings())
            transport: Optional httpx transport (used to mock the API in tests)
            rate_monitor: Optional monitor receiving the rate of every response
        """
        self._settings = settings or get_settings()
        self._token = token if token is not None else self._settings.github_token
        self.api_url = httpx.URL(self._settings.api_url)
        self.upload_url = httpx.URL(self._settings.upload_url)
        self.download_url = httpx.URL(self._settings.download_url)
        self._http = httpx.Client(transport=transport, follow_redirects=True)
        self._rate_monitor = rate_monitor or RateLimitMonitor(self._settings.rate_limit)

        # Services
        self.users = UsersService(self)
        self.search = SearchService(self)

    def repo(self, owner: str, name: str) -> RepoService:
        """Services scoped to one repository."""
        return RepoService(self, owner, name)

    @property
    def rate_monitor(self) -> RateLimitMonitor:
        """Last observed rate limits, per group."""
        return self._rate_monitor

    def rate(self, group: RateLimitGroup = RateLimitGroup.CORE) -> Rate | None:
        """Last observed rate for a group (None if never reported)."""
        return self._rate_monitor.get(group)

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Request Builder
    # -------------------------------------------------------------------------
    def new_request(
        self,
        ctx: Context | None,
        method: str,
        path: str,
        body: Any = None,
        *,
        params: QueryParams | None = None,
    ) -> Request:
        """Build a request against the REST API.

        Args:
            ctx: Request context (required)
            method: HTTP method
            path: Path relative to the API base URL (e.g. ``/repos/o/r``)
            body: Optional value sent as JSON (pydantic model, dict, list...)
            params: Optional query parameters

        Returns:
            Request ready for ``do``

        Raises:
            InvalidContextError: If ctx is None
            URLError: If path cannot be joined to the base URL
            EncodingError: If body cannot be serialized to JSON
        """
        context = self._require_context(ctx)
        url = self._join(self.api_url, path)

        headers = self._headers(ACCEPT_JSON)
        content: bytes | None = None
        if body is not None:
            content = self._encode(body)
            headers["Content-Type"] = "application/json"

        return self._build(context, method, url, group_for_path(path), headers, params, content)

    def new_page_request(
        self,
        ctx: Context | None,
        method: str,
        path: str,
        page_size: int,
        page_no: int,
        body: Any = None,
        *,
        params: QueryParams | None = None,
    ) -> Request:
        """Build a request for one page of a list endpoint.

        Page numbers start at 1. A page number below 1 is treated as
        unspecified and omitted; a page size below 1 falls back to
        ``default_per_page``. Page sizes above ``max_per_page`` are clamped.

        Args:
            ctx: Request context (required)
            method: HTTP method
            path: Path relative to the API base URL
            page_size: Results per page (``per_page``)
            page_no: Page number (``page``)
            body: Optional value sent as JSON
            params: Optional extra query parameters
        """
        page_params: dict[str, str | int] = dict(params or {})
        if page_size < 1:
            page_size = self._settings.default_per_page
        page_params["per_page"] = min(page_size, self._settings.max_per_page)
        if page_no >= 1:
            page_params["page"] = page_no
        return self.new_request(ctx, method, path, body, params=page_params)

    @contextmanager
    def upload_request(
        self,
        ctx: Context | None,
        path: str,
        file_path: str | os.PathLike[str],
        *,
        params: QueryParams | None = None,
    ) -> Iterator[Request]:
        """Build a request streaming a local file to the upload host.

        The file is open only while the ``with`` block runs and is closed
        on every exit path.

        Usage:
            with client.upload_request(ctx, path, "dist/app.zip") as req:
                asset, resp = client.do(req, ReleaseAsset)

        Raises:
            InvalidContextError: If ctx is None
            URLError: If path cannot be joined to the upload base URL
            FileError: If the file cannot be opened
        """
        context = self._require_context(ctx)
        url = self._join(self.upload_url, path)

        try:
            stream = open(file_path, "rb")  # noqa: SIM115
        except OSError as e:
            raise FileError(str(e), path=os.fspath(file_path)) from e

        with stream:
            headers = self._headers(ACCEPT_JSON)
            headers["Content-Type"] = (
                mimetypes.guess_type(Path(file_path).name)[0] or ACCEPT_BINARY
            )
            headers["Content-Length"] = str(os.fstat(stream.fileno()).st_size)
            yield self._build(context, "POST", url, RateLimitGroup.CORE, headers, params, stream)

    def new_download_request(
        self,
        ctx: Context | None,
        path: str,
        *,
        params: QueryParams | None = None,
    ) -> Request:
        """Build a request downloading raw bytes from the download host.

        The response body is meant to be streamed into a byte sink.

        Raises:
            InvalidContextError: If ctx is None
            URLError: If path cannot be joined to the download base URL
        """
        context = self._require_context(ctx)
        url = self._join(self.download_url, path)
        headers = self._headers(ACCEPT_BINARY)
        return self._build(context, "GET", url, RateLimitGroup.CORE, headers, params)

    @staticmethod
    def _require_context(ctx: Context | None) -> Context:
        if ctx is None:
            raise InvalidContextError("nil context")
        return ctx

    @staticmethod
    def _join(base: httpx.URL, path: str) -> httpx.URL:
        """Append a relative path to a base URL, keeping the base path."""
        try:
            return httpx.URL(str(base).rstrip("/") + "/" + path.lstrip("/"))
        except httpx.InvalidURL as e:
            raise URLError(f"invalid path {path!r}: {e}") from e

    @staticmethod
    def _encode(body: Any) -> bytes:
        try:
            return to_json(body, exclude_none=isinstance(body, BaseModel))
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise EncodingError(f"cannot encode request body: {e}") from e

    def _headers(self, accept: str) -> dict[str, str]:
        headers = {
            "Accept": accept,
            "User-Agent": self._settings.user_agent,
            "X-GitHub-Api-Version": self._settings.api_version,
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def _timeout(self, ctx: Context) -> httpx.Timeout:
        """Per-operation timeout bounded by the time the context has left."""
        remaining = ctx.remaining()
        return httpx.Timeout(self._settings.timeout if remaining is None else remaining)

    def _build(
        self,
        ctx: Context,
        method: str,
        url: httpx.URL,
        group: RateLimitGroup,
        headers: dict[str, str],
        params: QueryParams | None = None,
        content: Any = None,
    ) -> Request:
        http_request = self._http.build_request(
            method.upper(),
            url,
            params=dict(params) if params else None,
            headers=headers,
            content=content,
            timeout=self._timeout(ctx),
        )
        return Request(ctx=ctx, http=http_request, group=group)

    # -------------------------------------------------------------------------
    # Dispatcher
    # -------------------------------------------------------------------------
    def do(self, request: Request, dest: Any = None) -> tuple[Any, Response]:
        """Send a request and decode its response.

        ``dest`` selects what happens to a successful body:
        - None: the body is drained and discarded; the result is None
        - a writable byte sink: the body is streamed into it; the result is None
        - a type or TypeAdapter (``Repository``, ``list[Commit]``...): the
          JSON body is validated into a new value, which is the result

        The round trip runs on a helper thread while the calling thread
        waits for it, so cancelling the context or reaching its deadline
        unblocks the caller even while the server is silent.

        Rate limit headers are recorded on the client for every response,
        including errors. The Response envelope is only returned on success.

        Args:
            request: Request built by one of the builder methods
            dest: Decode destination

        Returns:
            Tuple of (result, Response)

        Raises:
            InvalidContextError: If the request has no context
            TransportError: On network failure, timeout or cancellation
            APIError: On status codes >= 400
            DecodingError: If the body cannot be decoded into dest
        """
        ctx = request.ctx
        if ctx is None:
            raise InvalidContextError("nil context")
        method, url = request.method, request.url
        if reason := ctx.err():
            raise TransportError(f"{method} {url}: {reason}")

        destination = Destination.resolve(dest)
        request.http.extensions["timeout"] = self._timeout(ctx).as_dict()

        call: Future[tuple[Any, Response]] = Future()
        worker = threading.Thread(
            target=self._run,
            args=(call, ctx, request, destination),
            name=f"github-rest {method} {url.path}",
            daemon=True,
        )
        worker.start()

        finished = threading.Event()
        call.add_done_callback(lambda _: finished.set())
        unregister = ctx.on_cancel(finished.set)
        try:
            finished.wait(ctx.remaining())
        finally:
            unregister()

        if not call.done():
            raise TransportError(f"{method} {url}: {ctx.err() or 'context deadline exceeded'}")

        result, response = call.result()
        bind_request(method, url.path).debug(
            "{} {} -> {}", method, url.path, response.status_code
        )
        return result, response

    def _run(
        self,
        call: Future[tuple[Any, Response]],
        ctx: Context,
        request: Request,
        destination: Destination,
    ) -> None:
        """Helper thread body: hand the round trip's outcome to ``call``."""
        if not call.set_running_or_notify_cancel():
            return
        try:
            call.set_result(self._round_trip(ctx, request, destination))
        except BaseException as e:
            call.set_exception(e)

    def _round_trip(
        self, ctx: Context, request: Request, destination: Destination
    ) -> tuple[Any, Response]:
        method, url = request.method, request.url
        try:
            raw = self._http.send(request.http, stream=True)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {url}: {e}") from e

        try:
            pages = parse_pages(raw.headers)
            rate = self._rate_monitor.update_from_headers(raw.headers, request.group)

            if reason := ctx.err():
                raise TransportError(f"{method} {url}: {reason}")
            if raw.status_code >= 400:
                raise self._api_error(request, raw, rate)

            result = self._consume(ctx, request, raw, destination)
        finally:
            raw.close()

        return result, Response(raw=raw, pages=pages, rate=rate)

    def _consume(
        self,
        ctx: Context,
        request: Request,
        raw: httpx.Response,
        destination: Destination,
    ) -> Any:
        """Consume a successful body according to its destination.

        The context is checked between chunks; nothing is written to a
        sink once it is done.
        """
        method, url = request.method, request.url
        sink = destination.sink if destination.kind is DestinationKind.STREAM else None
        body = bytearray()
        try:
            for chunk in raw.iter_bytes():
                if reason := ctx.err():
                    raise TransportError(f"{method} {url}: {reason}")
                if sink is not None:
                    sink.write(chunk)
                elif destination.kind is DestinationKind.DECODE:
                    body += chunk
        except httpx.RemoteProtocolError as e:
            raise DecodingError("unexpected EOF") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {url}: {e}") from e

        adapter = destination.adapter
        if adapter is None:
            return None
        try:
            return adapter.validate_json(bytes(body))
        except ValidationError as e:
            raise DecodingError(_describe_decode_error(e)) from e

    @staticmethod
    def _api_error(request: Request, raw: httpx.Response, rate: Rate | None) -> APIError:
        """Build the error for a non-2xx response."""
        try:
            message = _ErrorBody.model_validate_json(raw.read()).message
        except (ValidationError, httpx.HTTPError):
            message = ""

        method, url, status = request.method, str(request.url), raw.status_code
        if status == 401:
            return AuthenticationError(method, url, status, message)
        if status == 404:
            return NotFoundError(method, url, status, message)
        if status in (403, 429) and rate is not None and rate.remaining == 0:
            return RateLimitError(method, url, status, message, reset_at=rate.reset)
        return APIError(method, url, status, message)


def _describe_decode_error(error: ValidationError) -> str:
    """Render a pydantic validation failure as a decode error message."""
    for detail in error.errors():
        if detail["type"] == "json_invalid":
            if "EOF" in detail["msg"]:
                return "unexpected EOF"
            return f"invalid JSON: {detail['msg']}"
    return f"cannot decode response body: {error}"
