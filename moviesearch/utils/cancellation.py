"""Cooperative cancellation for superseded searches."""

from __future__ import annotations


class CancellationToken:
    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


__all__ = ["CancellationToken"]
