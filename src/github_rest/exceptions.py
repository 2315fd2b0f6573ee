"""GitHub client exceptions.

Every failure of the request pipeline is raised to the immediate caller.
Nothing here is retried; underlying causes are chained with ``from``.
"""

from datetime import datetime

from httpx import URL


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class InvalidContextError(GitHubClientError):
    """Raised when a call is made without a request context."""

    pass


class URLError(GitHubClientError):
    """Raised when a request path cannot be joined to its base URL."""

    pass


class EncodingError(GitHubClientError):
    """Raised when a request body cannot be serialized to JSON."""

    pass


class FileError(GitHubClientError):
    """Raised when a local file for upload cannot be opened or read."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class TransportError(GitHubClientError):
    """Raised on network failures, timeouts and cancelled contexts."""

    pass


class DecodingError(GitHubClientError):
    """Raised when a response body cannot be decoded into its destination."""

    pass


class APIError(GitHubClientError):
    """Raised for any non-2xx response from the API.

    The rendered form is ``"<METHOD> <path>: <status> <message>"``; when the
    body carries no ``message`` field the message part is empty.
    """

    def __init__(self, method: str, url: str, status_code: int, message: str = "") -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.message = message
        super().__init__(f"{method} {self.path}: {status_code} {message}")

    @property
    def path(self) -> str:
        """URL path of the failed request."""
        return URL(self.url).path


class AuthenticationError(APIError):
    """Raised when authentication fails (401)."""

    pass


class NotFoundError(APIError):
    """Raised when a resource is not found (404)."""

    pass


class RateLimitError(APIError):
    """Raised when rate limit is exceeded (403/429 with no remaining quota)."""

    def __init__(
        self,
        method: str,
        url: str,
        status_code: int,
        message: str = "",
        reset_at: datetime | None = None,
    ) -> None:
        super().__init__(method, url, status_code, message)
        self.reset_at = reset_at


class ScopeError(GitHubClientError):
    """Raised when the token lacks required OAuth scopes."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"missing required scopes: {', '.join(missing)}")
        self.missing = missing
