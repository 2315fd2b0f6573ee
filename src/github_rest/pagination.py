"""Link header parsing for paginated list endpoints.

GitHub advertises neighbouring pages in a ``Link`` header:

    <https://api.github.com/repositories/1/commits?page=2>; rel="next",
    <https://api.github.com/repositories/1/commits?page=5>; rel="last"

The relation links are the authoritative next/prev signal; they may
disagree with the ``page``/``per_page`` query parameters sent.
"""

from __future__ import annotations

from collections.abc import Mapping

import httpx


def parse_pages(headers: Mapping[str, str] | httpx.Headers) -> dict[str, int]:
    """Parse the Link header into a relation -> page number mapping.

    Entries without a ``rel``, without a URL, or whose URL carries no
    integer ``page`` parameter are skipped. Pagination metadata is best
    effort and never fails a call.

    Args:
        headers: Response headers

    Returns:
        Mapping such as ``{"next": 2, "last": 5}``; empty if no Link header
    """
    value = httpx.Headers(headers).get("link")
    if not value:
        return {}

    pages: dict[str, int] = {}
    for url, rel in _split_links(value):
        if not rel or not url:
            continue
        page = _page_number(url)
        if page is not None:
            pages[rel] = page
    return pages


def _page_number(url: str) -> int | None:
    """Extract the integer ``page`` query parameter from a URL."""
    try:
        raw = httpx.URL(url).params.get("page")
    except httpx.InvalidURL:
        return None
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _split_links(value: str) -> list[tuple[str, str]]:
    """Split a Link header into (url, rel) pairs, dropping malformed entries."""
    links: list[tuple[str, str]] = []
    for entry in value.split(","):
        parts = entry.split(";")
        url = parts[0].strip()
        if not (url.startswith("<") and url.endswith(">")):
            continue
        rel = ""
        for param in parts[1:]:
            key, sep, val = param.strip().partition("=")
            if sep and key.strip().lower() == "rel":
                rel = val.strip().strip('"').strip()
        links.append((url[1:-1].strip(), rel))
    return links
