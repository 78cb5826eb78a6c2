"""Single-request access to the OMDb API with caching and retries."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from moviesearch.config import OmdbSettings, RequestPolicy
from moviesearch.domain.models import (
    MovieDetail,
    SearchResultItem,
    TypeFilter,
    UpstreamPage,
)
from moviesearch.logging import logger
from moviesearch.services.exceptions import (
    AuthError,
    NetworkUnavailable,
    NotFound,
    RequestTimeout,
    ServerError,
    TooManyResults,
    UnknownUpstreamError,
    UpstreamError,
)
from moviesearch.services.response_cache import ResponseCache
from moviesearch.utils.retry import retry_async


def _is_transient(exc: Exception) -> bool:
    return isinstance(exc, UpstreamError) and exc.transient


def _status_error(status_code: int) -> UpstreamError:
    if status_code == 401:
        return AuthError(status_code=status_code)
    if status_code >= 500:
        return ServerError(status_code=status_code)
    return UnknownUpstreamError(status_code=status_code)


def _is_success(payload: dict[str, Any]) -> bool:
    return payload.get("Response") == "True"


def _parse_total(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _malformed_record(name: str, exc: ValidationError) -> UpstreamError:
    logger.warning("omdb_record_invalid", operation=name, errors=exc.error_count())
    return UnknownUpstreamError("OMDb returned a record in an unexpected format.")


class OmdbClient:
    """Performs one search or detail lookup per call.

    Successful payloads are cached by their canonical parameters; the API key
    is not part of the key. Transport failures are mapped onto the
    ``UpstreamError`` hierarchy and transient ones are retried with linear
    backoff.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: OmdbSettings | None = None,
        *,
        policy: RequestPolicy | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or OmdbSettings()
        self._policy = policy or RequestPolicy()
        self._cache = cache if cache is not None else ResponseCache()

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    async def search(
        self, query: str, type_filter: TypeFilter = "all", page: int = 1
    ) -> UpstreamPage:
        query = query.strip()
        key = {"s": query, "type": type_filter, "page": page}
        params: dict[str, Any] = {"s": query, "page": page}
        if type_filter != "all":
            params["type"] = type_filter

        payload = await self._cached_fetch("omdb_search", key, params)
        if not _is_success(payload):
            raise self._search_error(query, payload)

        try:
            items = tuple(
                SearchResultItem.model_validate(row) for row in payload.get("Search") or []
            )
        except ValidationError as exc:
            raise _malformed_record("omdb_search", exc) from exc
        return UpstreamPage(
            items=items,
            total_count=_parse_total(payload.get("totalResults")),
            page_index=page,
        )

    async def detail(self, item_id: str) -> MovieDetail:
        item_id = item_id.strip()
        key = {"i": item_id}
        payload = await self._cached_fetch("omdb_detail", key, dict(key))
        if not _is_success(payload):
            message = payload.get("Error") or "Movie details not found"
            if "not found" in message.lower():
                raise NotFound.for_detail()
            raise UnknownUpstreamError(message)
        try:
            return MovieDetail.model_validate(payload)
        except ValidationError as exc:
            raise _malformed_record("omdb_detail", exc) from exc

    def clear_cache(self) -> None:
        self._cache.clear()

    async def _cached_fetch(
        self, name: str, key: dict[str, Any], params: dict[str, Any]
    ) -> dict[str, Any]:
        payload = self._cache.get(key)
        if payload is not None:
            logger.debug("omdb_cache_hit", operation=name, **key)
            return payload

        payload = await self._fetch(name, params)
        if _is_success(payload):
            self._cache.set(key, payload)
        return payload

    async def _fetch(self, name: str, params: dict[str, Any]) -> dict[str, Any]:
        request_params = {"apikey": self._settings.api_key.get_secret_value(), **params}
        url = str(self._settings.base_url)

        async def _request():
            try:
                response = await self._client.get(
                    url,
                    params=request_params,
                    headers={"Accept": "application/json"},
                    timeout=self._policy.timeout_seconds,
                )
                response.raise_for_status()
            except httpx.TimeoutException as exc:
                raise RequestTimeout() from exc
            except httpx.HTTPStatusError as exc:
                raise _status_error(exc.response.status_code) from exc
            except httpx.TransportError as exc:
                raise NetworkUnavailable() from exc
            return response

        try:
            response = await retry_async(
                _request,
                max_attempts=self._policy.max_retries + 1,
                base_delay=self._policy.retry_base_delay_seconds,
                retry_if=_is_transient,
                logger=logger,
                operation_name=name,
            )
        except UpstreamError as exc:
            logger.warning(
                "omdb_request_failed",
                operation=name,
                error_type=exc.__class__.__name__,
                status_code=exc.status_code,
            )
            raise

        try:
            data = response.json()
        except ValueError as exc:
            raise UnknownUpstreamError("OMDb response is not valid JSON.") from exc
        if not isinstance(data, dict):
            raise UnknownUpstreamError("OMDb response format is invalid.")
        return data

    @staticmethod
    def _search_error(query: str, payload: dict[str, Any]) -> UpstreamError:
        message = payload.get("Error") or "No results found"
        lowered = message.lower()
        if "too many results" in lowered:
            return TooManyResults.for_query(query)
        if "not found" in lowered:
            return NotFound.for_query(query)
        return UnknownUpstreamError(message)


__all__ = ["OmdbClient"]
