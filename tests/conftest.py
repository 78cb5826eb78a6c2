"""Shared fixtures and OMDb payload builders."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
import structlog

from moviesearch.domain.models import SearchResultItem, UpstreamPage
from moviesearch.services.exceptions import NotFound, UpstreamError

_real_sleep = asyncio.sleep


def omdb_row(index: int, *, media_type: str = "movie", poster: str | None = None) -> dict[str, Any]:
    return {
        "Title": f"Title {index}",
        "Year": str(1990 + index % 30),
        "imdbID": f"tt{index:07d}",
        "Type": media_type,
        "Poster": poster or f"https://img.example/{index}.jpg",
    }


def search_payload(indices, total: int) -> dict[str, Any]:
    return {
        "Search": [omdb_row(i) for i in indices],
        "totalResults": str(total),
        "Response": "True",
    }


def error_payload(message: str) -> dict[str, Any]:
    return {"Response": "False", "Error": message}


def upstream_page(indices, total: int, page_index: int = 1) -> UpstreamPage:
    return UpstreamPage(
        items=tuple(SearchResultItem.model_validate(omdb_row(i)) for i in indices),
        total_count=total,
        page_index=page_index,
    )


class FakeOmdbClient:
    """Stands in for ``OmdbClient``; serves canned pages keyed by upstream page.

    Pages without an entry answer the way OMDb does past the last page.
    """

    def __init__(self, pages: dict[int, UpstreamPage | UpstreamError] | None = None) -> None:
        self.pages = pages or {}
        self.search_calls: list[tuple[str, str, int]] = []
        self.detail_calls: list[str] = []
        self.details: dict[str, Any] = {}

    async def search(self, query: str, type_filter: str = "all", page: int = 1) -> UpstreamPage:
        self.search_calls.append((query, type_filter, page))
        outcome = self.pages.get(page)
        if outcome is None:
            raise NotFound.for_query(query)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def detail(self, item_id: str):
        self.detail_calls.append(item_id)
        outcome = self.details[item_id]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    """Record retry backoff delays instead of waiting them out."""

    delays: list[float] = []

    async def _fake_sleep(delay, *args, **kwargs):
        delays.append(delay)
        await _real_sleep(0)

    monkeypatch.setattr("moviesearch.utils.retry.asyncio.sleep", _fake_sleep)
    return delays
