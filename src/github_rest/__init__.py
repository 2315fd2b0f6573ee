"""Synchronous client for the GitHub REST API."""

from .client import GitHubClient, Request
from .config import Settings, get_settings
from .context import Context
from .exceptions import (
    APIError,
    AuthenticationError,
    DecodingError,
    EncodingError,
    FileError,
    GitHubClientError,
    InvalidContextError,
    NotFoundError,
    RateLimitError,
    ScopeError,
    TransportError,
    URLError,
)
from .rate_limit import Rate, RateLimitGroup, RateLimitMonitor
from .response import Response
from .search import SearchOrder, SearchQuery, SearchSort, StandardQualifier, qualifiers

__version__ = "0.1.0"

__all__ = [
    "APIError",
    "AuthenticationError",
    "Context",
    "DecodingError",
    "EncodingError",
    "FileError",
    "GitHubClient",
    "GitHubClientError",
    "InvalidContextError",
    "NotFoundError",
    "Rate",
    "RateLimitError",
    "RateLimitGroup",
    "RateLimitMonitor",
    "Request",
    "Response",
    "ScopeError",
    "SearchOrder",
    "SearchQuery",
    "SearchSort",
    "Settings",
    "StandardQualifier",
    "TransportError",
    "URLError",
    "get_settings",
    "qualifiers",
]
