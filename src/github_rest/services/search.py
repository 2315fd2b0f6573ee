"""Search endpoints.

Search has its own, much smaller rate limit; responses are billed
against the ``search`` group.

See: https://docs.github.com/en/rest/search/search
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from github_rest.context import Context
from github_rest.response import Response
from github_rest.schemas import SearchIssuesResult, SearchReposResult, SearchUsersResult
from github_rest.search import SearchOrder, SearchQuery, SearchSort

if TYPE_CHECKING:
    from github_rest.client import GitHubClient


class SearchService:
    """Users, repositories and issues search.

    Usage:
        query = SearchQuery().include_qualifiers(qualifiers.repo("octocat", "Hello-World"))
        result, resp = client.search.issues(ctx, 20, 1, SearchSort.CREATED, SearchOrder.DESC, query)
    """

    def __init__(self, client: GitHubClient) -> None:
        self._client = client

    def users(
        self,
        ctx: Context,
        page_size: int,
        page_no: int,
        sort: SearchSort | None,
        order: SearchOrder | None,
        query: SearchQuery,
    ) -> tuple[SearchUsersResult, Response]:
        """Search users."""
        return self._search(
            ctx, "/search/users", page_size, page_no, sort, order, query, SearchUsersResult
        )

    def repos(
        self,
        ctx: Context,
        page_size: int,
        page_no: int,
        sort: SearchSort | None,
        order: SearchOrder | None,
        query: SearchQuery,
    ) -> tuple[SearchReposResult, Response]:
        """Search repositories."""
        return self._search(
            ctx, "/search/repositories", page_size, page_no, sort, order, query, SearchReposResult
        )

    def issues(
        self,
        ctx: Context,
        page_size: int,
        page_no: int,
        sort: SearchSort | None,
        order: SearchOrder | None,
        query: SearchQuery,
    ) -> tuple[SearchIssuesResult, Response]:
        """Search issues and pull requests."""
        return self._search(
            ctx, "/search/issues", page_size, page_no, sort, order, query, SearchIssuesResult
        )

    def _search(
        self,
        ctx: Context,
        path: str,
        page_size: int,
        page_no: int,
        sort: SearchSort | None,
        order: SearchOrder | None,
        query: SearchQuery,
        result_type: type[Any],
    ) -> tuple[Any, Response]:
        params: dict[str, str | int] = {}
        if sort:
            params["sort"] = str(sort)
        if order:
            params["order"] = str(order)
        params["q"] = str(query)

        req = self._client.new_page_request(ctx, "GET", path, page_size, page_no, params=params)
        return self._client.do(req, result_type)
