"""Tests for the async retry helper."""

from __future__ import annotations

import pytest

from moviesearch.utils.retry import retry_async


class _RecordingLogger:
    def __init__(self) -> None:
        self.events: list[tuple[str, dict]] = []

    def warning(self, event: str, **kwargs) -> None:
        self.events.append((event, kwargs))


@pytest.mark.asyncio
async def test_retry_async_returns_after_transient_failures(sleeps):
    attempts = 0

    async def _operation():
        nonlocal attempts
        attempts += 1
        if attempts < 3:
            raise ConnectionError("flaky")
        return "ok"

    logger = _RecordingLogger()
    result = await retry_async(
        _operation, max_attempts=3, base_delay=1.0, logger=logger, operation_name="probe"
    )

    assert result == "ok"
    assert attempts == 3
    assert sleeps == [1.0, 2.0]
    assert [event for event, _ in logger.events] == ["retrying_operation", "retrying_operation"]
    assert logger.events[0][1]["operation"] == "probe"


@pytest.mark.asyncio
async def test_retry_async_reraises_last_error(sleeps):
    async def _operation():
        raise ConnectionError("down")

    with pytest.raises(ConnectionError, match="down"):
        await retry_async(_operation, max_attempts=2, base_delay=0.5)

    assert sleeps == [0.5]


@pytest.mark.asyncio
async def test_retry_async_skips_rejected_errors(sleeps):
    attempts = 0

    async def _operation():
        nonlocal attempts
        attempts += 1
        raise PermissionError("denied")

    with pytest.raises(PermissionError):
        await retry_async(
            _operation,
            max_attempts=3,
            retry_if=lambda exc: isinstance(exc, ConnectionError),
        )

    assert attempts == 1
    assert sleeps == []
