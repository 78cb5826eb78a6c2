"""Builds fixed-size logical pages out of OMDb's 10-item pages."""

from __future__ import annotations

import math

from moviesearch.config import PaginationPolicy
from moviesearch.domain.models import LogicalPageResult, SearchCriteria, SearchResultItem
from moviesearch.logging import logger
from moviesearch.services.exceptions import (
    NotFound,
    PageLimitExceeded,
    SearchCancelled,
    UpstreamError,
)
from moviesearch.services.omdb_client import OmdbClient
from moviesearch.utils.cancellation import CancellationToken


def first_upstream_page(
    logical_page: int, page_size: int = 12, upstream_page_size: int = 10
) -> int:
    """Upstream page a logical page starts from.

    Each logical page is given ``ceil(page_size / upstream_page_size)`` upstream
    pages, so with 12 and 10 logical page ``n`` starts at ``2n - 1``.
    """

    return (logical_page - 1) * math.ceil(page_size / upstream_page_size) + 1


class ResultAggregator:
    """Fans one logical page request out to sequential upstream calls.

    Calls stop once a full page is gathered, an upstream page comes back
    empty or "not found", the attempt budget is spent, or a call fails. A
    failure on the first call propagates, except that "not found" past page 1
    means the results ran out and yields an empty page. Later failures only
    truncate the page. The total
    count is taken from the first call and capped at ``max_total_results``.
    """

    def __init__(self, client: OmdbClient, policy: PaginationPolicy | None = None) -> None:
        self._client = client
        self._policy = policy or PaginationPolicy()

    @property
    def policy(self) -> PaginationPolicy:
        return self._policy

    async def fetch_page(
        self,
        criteria: SearchCriteria,
        *,
        token: CancellationToken | None = None,
    ) -> LogicalPageResult:
        policy = self._policy
        if criteria.page > policy.max_pages:
            raise PageLimitExceeded(policy.max_pages)

        upstream_page = first_upstream_page(
            criteria.page, policy.page_size, policy.upstream_page_size
        )
        gathered: list[SearchResultItem] = []
        seen_ids: set[str] = set()
        first_total: int | None = None
        attempts = 0

        while len(gathered) < policy.page_size and attempts < policy.max_fetch_attempts:
            if token is not None and token.cancelled:
                raise SearchCancelled()
            attempts += 1
            try:
                page = await self._client.search(
                    criteria.query, criteria.type_filter, upstream_page
                )
            except NotFound:
                # OMDb answers "Movie not found!" past its last page.
                if attempts == 1 and criteria.page == 1:
                    raise
                logger.debug(
                    "fanout_results_exhausted",
                    query=criteria.query,
                    upstream_page=upstream_page,
                    gathered=len(gathered),
                )
                break
            except UpstreamError as exc:
                if attempts == 1:
                    raise
                logger.warning(
                    "fanout_call_failed",
                    query=criteria.query,
                    upstream_page=upstream_page,
                    gathered=len(gathered),
                    error_type=exc.__class__.__name__,
                )
                break

            if first_total is None:
                first_total = page.total_count
            if not page.items:
                break
            for item in page.items:
                if item.id in seen_ids:
                    continue
                seen_ids.add(item.id)
                gathered.append(item)
            upstream_page += 1

        if token is not None and token.cancelled:
            raise SearchCancelled()

        total = min(first_total or 0, policy.max_total_results)
        logger.debug(
            "logical_page_assembled",
            query=criteria.query,
            page=criteria.page,
            upstream_calls=attempts,
            items=min(len(gathered), policy.page_size),
            total_count=total,
        )
        return LogicalPageResult(items=tuple(gathered[: policy.page_size]), total_count=total)


__all__ = ["ResultAggregator", "first_upstream_page"]
