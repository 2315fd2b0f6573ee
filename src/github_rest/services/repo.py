"""Repository endpoints.

See: https://docs.github.com/en/rest/repos
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_rest.context import Context
from github_rest.response import ByteSink, Response
from github_rest.schemas import Branch, CollaboratorPermission, Commit, Permission, Repository, Tag

from .base import RepoScopedService
from .issues import IssuesService
from .pulls import PullsService
from .releases import ReleasesService

if TYPE_CHECKING:
    from github_rest.client import GitHubClient


class RepoService(RepoScopedService):
    """Operations on one repository, plus its issue, pull and release services.

    Usage:
        repo = client.repo("octocat", "Hello-World")
        commits, resp = repo.commits(ctx, 50, 1)
        prs, _ = repo.pulls.list(ctx, 10, 1)
    """

    def __init__(self, client: GitHubClient, owner: str, repo: str) -> None:
        super().__init__(client, owner, repo)
        self.issues = IssuesService(client, owner, repo)
        self.pulls = PullsService(client, owner, repo)
        self.releases = ReleasesService(client, owner, repo)

    def get(self, ctx: Context) -> tuple[Repository, Response]:
        """Get the repository."""
        req = self._client.new_request(ctx, "GET", self._prefix)
        return self._client.do(req, Repository)

    def permission(self, ctx: Context, username: str) -> tuple[Permission, Response]:
        """Get a collaborator's permission level on the repository."""
        req = self._client.new_request(
            ctx, "GET", f"{self._prefix}/collaborators/{username}/permission"
        )
        result, resp = self._client.do(req, CollaboratorPermission)
        return result.permission, resp

    def commit(self, ctx: Context, ref: str) -> tuple[Commit, Response]:
        """Get a commit by SHA, branch or tag name."""
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/commits/{ref}")
        return self._client.do(req, Commit)

    def commits(self, ctx: Context, page_size: int, page_no: int) -> tuple[list[Commit], Response]:
        """List commits of the default branch page by page."""
        req = self._client.new_page_request(
            ctx, "GET", f"{self._prefix}/commits", page_size, page_no
        )
        return self._client.do(req, list[Commit])

    def branch(self, ctx: Context, name: str) -> tuple[Branch, Response]:
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/branches/{name}")
        return self._client.do(req, Branch)

    def branch_protection(self, ctx: Context, branch: str, enabled: bool) -> Response:
        """Enable or disable enforcement of branch protection for admins."""
        method = "POST" if enabled else "DELETE"
        req = self._client.new_request(
            ctx, method, f"{self._prefix}/branches/{branch}/protection/enforce_admins"
        )
        self._log.debug("Setting admin enforcement on {} to {}", branch, enabled)
        _, resp = self._client.do(req)
        return resp

    def tags(self, ctx: Context, page_size: int, page_no: int) -> tuple[list[Tag], Response]:
        req = self._client.new_page_request(ctx, "GET", f"{self._prefix}/tags", page_size, page_no)
        return self._client.do(req, list[Tag])

    def download_tar_archive(self, ctx: Context, ref: str, sink: ByteSink) -> Response:
        """Stream a tarball of the repository at ref into sink."""
        return self._download_archive(ctx, "tarball", ref, sink)

    def download_zip_archive(self, ctx: Context, ref: str, sink: ByteSink) -> Response:
        """Stream a zipball of the repository at ref into sink."""
        return self._download_archive(ctx, "zipball", ref, sink)

    def _download_archive(self, ctx: Context, kind: str, ref: str, sink: ByteSink) -> Response:
        req = self._client.new_request(ctx, "GET", f"{self._prefix}/{kind}/{ref}")
        _, resp = self._client.do(req, sink)
        return resp
