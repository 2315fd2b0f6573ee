"""Search query DSL: qualifiers, sort keys and the query builder."""

from . import qualifiers
from .qualifiers import Qualifier, StandardQualifier
from .query import SearchOrder, SearchQuery, SearchSort

__all__ = [
    "Qualifier",
    "SearchOrder",
    "SearchQuery",
    "SearchSort",
    "StandardQualifier",
    "qualifiers",
]
