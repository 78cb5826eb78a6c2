"""Session state and the actions that move it between states."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal, Union

from moviesearch.domain.models import MovieDetail, SearchCriteria, SearchResultItem

Status = Literal["idle", "loading", "success", "error"]


@dataclass(frozen=True, slots=True)
class SessionState:
    status: Status = "idle"
    criteria: SearchCriteria | None = None
    items: tuple[SearchResultItem, ...] = ()
    total_count: int = 0
    loading: bool = False
    error: str | None = None
    detail: MovieDetail | None = None


@dataclass(frozen=True, slots=True)
class SearchStarted:
    criteria: SearchCriteria


@dataclass(frozen=True, slots=True)
class SearchSucceeded:
    criteria: SearchCriteria
    items: tuple[SearchResultItem, ...]
    total_count: int


@dataclass(frozen=True, slots=True)
class SearchFailed:
    message: str


@dataclass(frozen=True, slots=True)
class ResultsCleared:
    pass


@dataclass(frozen=True, slots=True)
class DetailStarted:
    item_id: str


@dataclass(frozen=True, slots=True)
class DetailLoaded:
    detail: MovieDetail


@dataclass(frozen=True, slots=True)
class DetailFailed:
    message: str


@dataclass(frozen=True, slots=True)
class DetailCleared:
    pass


@dataclass(frozen=True, slots=True)
class LoadingFinished:
    pass


Action = Union[
    SearchStarted,
    SearchSucceeded,
    SearchFailed,
    ResultsCleared,
    DetailStarted,
    DetailLoaded,
    DetailFailed,
    DetailCleared,
    LoadingFinished,
]


def reduce(state: SessionState, action: Action) -> SessionState:
    """Return the state that follows ``action``; ``state`` is left untouched."""

    if isinstance(action, (SearchStarted, DetailStarted)):
        return replace(state, status="loading", loading=True, error=None)
    if isinstance(action, SearchSucceeded):
        return replace(
            state,
            status="success",
            criteria=action.criteria,
            items=action.items,
            total_count=action.total_count,
            loading=False,
            error=None,
        )
    if isinstance(action, SearchFailed):
        # A failed search never shows results from an earlier query.
        return replace(
            state,
            status="error",
            items=(),
            total_count=0,
            loading=False,
            error=action.message,
        )
    if isinstance(action, ResultsCleared):
        return replace(
            state, status="idle", items=(), total_count=0, loading=False, error=None
        )
    if isinstance(action, DetailLoaded):
        return replace(state, status="success", detail=action.detail, loading=False, error=None)
    if isinstance(action, DetailFailed):
        return replace(state, status="error", loading=False, error=action.message)
    if isinstance(action, DetailCleared):
        return replace(state, detail=None)
    if isinstance(action, LoadingFinished):
        status = "idle" if state.status == "loading" else state.status
        return replace(state, status=status, loading=False)
    raise TypeError(f"Unsupported action: {action!r}")


__all__ = [
    "Action",
    "DetailCleared",
    "DetailFailed",
    "DetailLoaded",
    "DetailStarted",
    "LoadingFinished",
    "ResultsCleared",
    "SearchFailed",
    "SearchStarted",
    "SearchSucceeded",
    "SessionState",
    "Status",
    "reduce",
]
