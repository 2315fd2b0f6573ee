"""User endpoints.

See: https://docs.github.com/en/rest/users/users
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_rest.context import Context
from github_rest.exceptions import ScopeError
from github_rest.logging import get_logger
from github_rest.response import Response
from github_rest.schemas import Scope, User

if TYPE_CHECKING:
    from github_rest.client import GitHubClient

logger = get_logger(__name__)

SCOPES_HEADER = "x-oauth-scopes"


class UsersService:
    """Users and token introspection."""

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def get(self, ctx: Context, username: str) -> tuple[User, Response]:
        """Get a user by login."""
        req = self._client.new_request(ctx, "GET", f"/users/{username}")
        return self._client.do(req, User)

    def me(self, ctx: Context) -> tuple[User, Response]:
        """Get the authenticated user."""
        req = self._client.new_request(ctx, "GET", "/user")
        return self._client.do(req, User)

    def ensure_scopes(self, ctx: Context, *scopes: Scope | str) -> None:
        """Check the token was granted every given OAuth scope.

        Scopes are read from the ``X-OAuth-Scopes`` header of ``GET /user``.
        Fine-grained tokens report no scopes at all.

        Raises:
            ScopeError: Listing every requested scope the token lacks
        """
        _, resp = self.me(ctx)
        granted = {
            s.strip() for s in resp.headers.get(SCOPES_HEADER, "").split(",") if s.strip()
        }
        requested = [s.value if isinstance(s, Scope) else s for s in scopes]
        missing = [s for s in requested if s not in granted]
        if missing:
            raise ScopeError(missing)
        logger.debug("Token has scopes {}", ", ".join(sorted(granted)))
