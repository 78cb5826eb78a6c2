"""Display helpers for collaborators rendering search results and details."""

from __future__ import annotations

import math
from typing import Union

from moviesearch.domain.models import NOT_AVAILABLE

PageLink = Union[int, str]
ELLIPSIS = "..."

_MEDIA_TYPE_LABELS = {
    "movie": "Movie",
    "series": "Series",
    "episode": "Episode",
}


def format_media_type(value: str) -> str:
    return _MEDIA_TYPE_LABELS.get(value, value)


def _or_not_available(value: str | None) -> str:
    if not value or value == NOT_AVAILABLE:
        return "Not available"
    return value


def format_runtime(value: str | None) -> str:
    return _or_not_available(value)


def format_rating(value: str | None) -> str:
    return _or_not_available(value)


def total_pages(total_count: int, page_size: int = 12, max_pages: int = 3) -> int:
    """Number of logical pages for ``total_count`` results, capped at ``max_pages``."""

    if total_count <= 0:
        return 0
    return min(math.ceil(total_count / page_size), max_pages)


def visible_pages(current: int, total: int, delta: int = 2) -> list[PageLink]:
    """Page links around ``current``, always including the first and last page.

    Gaps wider than ``delta`` are collapsed into ``"..."``. Nothing is shown
    when there is a single page.
    """

    if total <= 1:
        return []

    middle = list(range(max(2, current - delta), min(total - 1, current + delta) + 1))
    links: list[PageLink] = [1]
    if current - delta > 2:
        links.append(ELLIPSIS)
    links.extend(middle)
    if current + delta < total - 1:
        links.append(ELLIPSIS)
    links.append(total)
    return links


__all__ = [
    "ELLIPSIS",
    "PageLink",
    "format_media_type",
    "format_rating",
    "format_runtime",
    "total_pages",
    "visible_pages",
]
