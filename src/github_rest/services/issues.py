"""Issues endpoints.

See: https://docs.github.com/en/rest/issues
"""

from __future__ import annotations

from datetime import UTC

from github_rest.context import Context
from github_rest.response import Response
from github_rest.schemas import Event, Issue, IssuesFilter

from .base import RepoScopedService


class IssuesService(RepoScopedService):
    """Issues of a single repository."""

    def list(
        self,
        ctx: Context,
        page_size: int,
        page_no: int,
        filter: IssuesFilter | None = None,
    ) -> tuple[list[Issue], Response]:
        """List issues (pull requests included) page by page.

        Args:
            ctx: Request context
            page_size: Results per page
            page_no: Page number (1-based)
            filter: Optional state/since filter

        Returns:
            Tuple of (issues, Response)
        """
        params: dict[str, str | int] = {}
        if filter is not None:
            if filter.state is not None:
                params["state"] = filter.state.value
            if filter.since is not None:
                since = filter.since
                if since.tzinfo is not None:
                    since = since.astimezone(UTC)
                params["since"] = since.strftime("%Y-%m-%dT%H:%M:%SZ")

        req = self._client.new_page_request(
            ctx, "GET", f"{self._prefix}/issues", page_size, page_no, params=params
        )
        self._log.debug("Listing issues (page {})", page_no)
        return self._client.do(req, list[Issue])

    def events(
        self, ctx: Context, number: int, page_size: int, page_no: int
    ) -> tuple[list[Event], Response]:
        """List the events of one issue page by page."""
        req = self._client.new_page_request(
            ctx, "GET", f"{self._prefix}/issues/{number}/events", page_size, page_no
        )
        return self._client.do(req, list[Event])
