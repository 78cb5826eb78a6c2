"""In-memory cache of raw OMDb payloads."""

from __future__ import annotations

from typing import Any, Mapping


def cache_key(params: Mapping[str, Any]) -> str:
    """Canonical key: parameters sorted by name, joined as ``name=value&...``."""

    return "&".join(f"{name}={params[name]}" for name in sorted(params))


class ResponseCache:
    """Append-only payload store shared by every call of one client.

    Entries are never evicted, so memory grows with the number of distinct
    queries for the lifetime of the process.
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}

    def get(self, params: Mapping[str, Any]) -> dict[str, Any] | None:
        return self._entries.get(cache_key(params))

    def set(self, params: Mapping[str, Any], payload: dict[str, Any]) -> None:
        self._entries[cache_key(params)] = payload

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, params: Mapping[str, Any]) -> bool:
        return cache_key(params) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["ResponseCache", "cache_key"]
