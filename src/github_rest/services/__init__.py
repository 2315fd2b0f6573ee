"""Resource services grouping GitHub REST endpoints."""

from .issues import IssuesService
from .pulls import PullsService
from .releases import ReleasesService
from .repo import RepoService
from .search import SearchService
from .users import UsersService

__all__ = [
    "IssuesService",
    "PullsService",
    "ReleasesService",
    "RepoService",
    "SearchService",
    "UsersService",
]
