"""Search session: one active search at a time, published as state snapshots."""

from __future__ import annotations

import asyncio
from typing import Callable

from pydantic import ValidationError

from moviesearch.domain.models import SearchCriteria, TypeFilter
from moviesearch.logging import logger
from moviesearch.services.aggregator import ResultAggregator
from moviesearch.services.exceptions import (
    InvalidQuery,
    SearchCancelled,
    ServiceError,
    UnknownUpstreamError,
)
from moviesearch.services.omdb_client import OmdbClient
from moviesearch.services.state import (
    Action,
    DetailCleared,
    DetailFailed,
    DetailLoaded,
    DetailStarted,
    LoadingFinished,
    ResultsCleared,
    SearchFailed,
    SearchStarted,
    SearchSucceeded,
    SessionState,
    reduce,
)
from moviesearch.utils.cancellation import CancellationToken

Listener = Callable[[SessionState], None]


class SearchSession:
    """Coordinates searches and detail lookups for one user-facing view.

    A new search cancels the one in flight; only the request holding the
    current cancellation token may publish. Submitting the same criteria as
    the last accepted search is a no-op until ``clear_results`` is called.
    """

    def __init__(
        self,
        client: OmdbClient,
        aggregator: ResultAggregator | None = None,
    ) -> None:
        self._client = client
        self._aggregator = aggregator or ResultAggregator(client)
        self._state = SessionState()
        self._listeners: list[Listener] = []
        self._token: CancellationToken | None = None
        self._inflight: asyncio.Future | None = None
        self._last_signature: tuple[str, str, int] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe callable."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def submit_search(
        self, query: str, type_filter: TypeFilter = "all", page: int = 1
    ) -> None:
        min_length = self._aggregator.policy.min_query_length
        if len((query or "").strip()) < min_length:
            self._reject(InvalidQuery.too_short(min_length))
            return
        try:
            criteria = SearchCriteria(query=query, type_filter=type_filter, page=page)
        except ValidationError:
            self._reject(InvalidQuery())
            return

        if criteria.signature == self._last_signature:
            logger.debug("duplicate_search_ignored", query=criteria.query, page=criteria.page)
            return

        self._cancel_inflight()
        token = CancellationToken()
        self._token = token
        self._last_signature = criteria.signature
        self._dispatch(SearchStarted(criteria))

        task = asyncio.ensure_future(self._aggregator.fetch_page(criteria, token=token))
        self._inflight = task
        try:
            result = await task
        except asyncio.CancelledError:
            if token.cancelled:
                logger.debug("search_superseded", query=criteria.query, page=criteria.page)
                return
            # The caller itself was cancelled; this request is still current.
            token.cancel()
            self._token = None
            self._dispatch(LoadingFinished())
            raise
        except SearchCancelled:
            logger.debug("search_superseded", query=criteria.query, page=criteria.page)
            return
        except ServiceError as exc:
            if token.cancelled:
                return
            logger.info(
                "search_failed",
                query=criteria.query,
                page=criteria.page,
                error_type=exc.__class__.__name__,
            )
            self._dispatch(SearchFailed(exc.user_message))
            return
        except Exception:
            if token.cancelled:
                return
            logger.exception("search_crashed", query=criteria.query, page=criteria.page)
            self._dispatch(SearchFailed(UnknownUpstreamError().user_message))
            return
        finally:
            if self._inflight is task:
                self._inflight = None

        if token.cancelled:
            return
        self._dispatch(SearchSucceeded(criteria, result.items, result.total_count))

    async def fetch_detail(self, item_id: str) -> None:
        self._dispatch(DetailStarted(item_id))
        try:
            detail = await self._client.detail(item_id)
        except asyncio.CancelledError:
            self._dispatch(LoadingFinished())
            raise
        except ServiceError as exc:
            logger.info("detail_failed", item_id=item_id, error_type=exc.__class__.__name__)
            self._dispatch(DetailFailed(exc.user_message))
            return
        except Exception:
            logger.exception("detail_crashed", item_id=item_id)
            self._dispatch(DetailFailed(UnknownUpstreamError().user_message))
            return
        self._dispatch(DetailLoaded(detail))

    def clear_results(self) -> None:
        self._cancel_inflight()
        self._last_signature = None
        self._dispatch(ResultsCleared())

    def clear_detail(self) -> None:
        self._dispatch(DetailCleared())

    async def aclose(self) -> None:
        task = self._inflight
        self._cancel_inflight()
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)
        self._listeners.clear()

    def _reject(self, error: InvalidQuery) -> None:
        self._cancel_inflight()
        # Rejected input clears the page, so the same search must be able to run again.
        self._last_signature = None
        self._dispatch(SearchFailed(error.user_message))

    def _cancel_inflight(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

    def _dispatch(self, action: Action) -> None:
        self._state = reduce(self._state, action)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception:
                logger.exception(
                    "session_listener_failed", action=action.__class__.__name__
                )


__all__ = ["Listener", "SearchSession"]
