"""Shared plumbing for repository-scoped services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from github_rest.logging import bind_repo

if TYPE_CHECKING:
    from loguru import Logger

    from github_rest.client import GitHubClient


class RepoScopedService:
    """Base for services bound to one ``owner/repo``."""

    def __init__(self, client: GitHubClient, owner: str, repo: str) -> None:
        self._client = client
        self.owner = owner
        self.repo = repo

    @property
    def _prefix(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    @property
    def _log(self) -> Logger:
        return bind_repo(self.owner, self.repo)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.owner}/{self.repo})"
