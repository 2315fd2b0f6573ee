"""Search query builder.

Assembles free-text keywords and qualifiers into the single ``q``
parameter the search endpoints expect.

See: https://docs.github.com/en/rest/search/search#constructing-a-search-query
"""

from __future__ import annotations

import json
from enum import StrEnum

from .qualifiers import Qualifier


class SearchSort(StrEnum):
    """Fields search results can be sorted by."""

    # Users
    FOLLOWERS = "followers"
    REPOSITORIES = "repositories"
    JOINED = "joined"

    # Repositories
    STARS = "stars"
    FORKS = "forks"

    # Repositories, issues and pull requests
    UPDATED = "updated"

    # Issues and pull requests
    CREATED = "created"
    COMMENTS = "comments"
    REACTIONS = "reactions"
    INTERACTIONS = "interactions"


class SearchOrder(StrEnum):
    """Order of sorted search results."""

    ASC = "asc"
    DESC = "desc"


class SearchQuery:
    """Ordered collection of search keywords and qualifiers.

    Terms render in insertion order, keywords first and qualifiers
    second. Nothing is deduplicated or reordered.

    Usage:
        query = (
            SearchQuery()
            .include_keywords("Fix")
            .exclude_keywords("WIP")
            .include_qualifiers(StandardQualifier.TYPE_PR, label("bug"))
        )
        str(query)  # '"Fix" NOT "WIP" type:pr label:"bug"'
    """

    def __init__(self) -> None:
        self._keywords: list[str] = []
        self._qualifiers: list[Qualifier] = []

    def include_keywords(self, *keywords: str) -> SearchQuery:
        """Require each keyword to appear."""
        self._keywords.extend(json.dumps(k, ensure_ascii=False) for k in keywords)
        return self

    def exclude_keywords(self, *keywords: str) -> SearchQuery:
        """Exclude results containing each keyword."""
        self._keywords.extend(f"NOT {json.dumps(k, ensure_ascii=False)}" for k in keywords)
        return self

    def include_qualifiers(self, *qualifiers: str) -> SearchQuery:
        """Require each qualifier to match."""
        self._qualifiers.extend(Qualifier(str(q)) for q in qualifiers)
        return self

    def exclude_qualifiers(self, *qualifiers: str) -> SearchQuery:
        """Exclude results matching each qualifier."""
        self._qualifiers.extend(Qualifier(f"-{q}") for q in qualifiers)
        return self

    @property
    def keywords(self) -> tuple[str, ...]:
        """Rendered keyword terms in insertion order."""
        return tuple(self._keywords)

    @property
    def qualifiers(self) -> tuple[Qualifier, ...]:
        """Rendered qualifier terms in insertion order."""
        return tuple(self._qualifiers)

    def __str__(self) -> str:
        return " ".join([*self._keywords, *self._qualifiers])

    def __repr__(self) -> str:
        return f"SearchQuery({str(self)!r})"

    def __bool__(self) -> bool:
        return bool(self._keywords or self._qualifiers)
