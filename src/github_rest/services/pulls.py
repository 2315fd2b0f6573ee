"""Pull request endpoints.

See: https://docs.github.com/en/rest/pulls/pulls
"""

from __future__ import annotations

from github_rest.context import Context
from github_rest.response import Response
from github_rest.schemas import CreatePullParams, Pull, PullsFilter, UpdatePullParams

from .base import RepoScopedService


class PullsService(RepoScopedService):
    """Pull requests of a single repository."""

    def get(self, ctx: Context, number: int) -> tuple[Pull, Response]:
        """Get a pull request by number."""
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/pulls/{number}")
        return self._client.do(req, Pull)

    def list(
        self,
        ctx: Context,
        page_size: int,
        page_no: int,
        filter: PullsFilter | None = None,
    ) -> tuple[list[Pull], Response]:
        """List pull requests page by page.

        Args:
            ctx: Request context
            page_size: Results per page
            page_no: Page number (1-based)
            filter: Optional state filter (API default is open)
        """
        params: dict[str, str | int] = {}
        if filter is not None and filter.state is not None:
            params["state"] = filter.state.value

        req = self._client.new_page_request(
            ctx, "GET", f"{self._prefix}/pulls", page_size, page_no, params=params
        )
        return self._client.do(req, list[Pull])

    def create(self, ctx: Context, params: CreatePullParams) -> tuple[Pull, Response]:
        """Open a new pull request."""
        req = self._client.new_request(ctx, "POST", f"{self._prefix}/pulls", params)
        self._log.debug("Creating pull request {} -> {}", params.head, params.base)
        return self._client.do(req, Pull)

    def update(
        self, ctx: Context, number: int, params: UpdatePullParams
    ) -> tuple[Pull, Response]:
        """Update a pull request; only fields set on params are sent."""
        req = self._client.new_request(ctx, "PATCH", f"{self._prefix}/pulls/{number}", params)
        return self._client.do(req, Pull)
