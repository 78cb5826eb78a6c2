"""Tests for logging configuration and the command-line entrypoint."""

from __future__ import annotations

import httpx
import pytest
import structlog
from typer.testing import CliRunner

from conftest import error_payload, search_payload
from moviesearch import main as main_module
from moviesearch.config import get_settings
from moviesearch.logging import configure_logging

runner = CliRunner()


def test_configure_logging_outputs_json(capsys):
    configure_logging()
    logger = structlog.get_logger()
    logger.info("unit-test", foo="bar")
    out = capsys.readouterr().out
    assert "unit-test" in out
    assert "foo" in out


def test_configure_logging_accepts_level_names(capsys):
    configure_logging("WARNING")
    logger = structlog.get_logger()
    logger.info("hidden-event")
    logger.warning("shown-event")
    out = capsys.readouterr().out
    assert "hidden-event" not in out
    assert "shown-event" in out


@pytest.fixture
def omdb(monkeypatch):
    """Route the CLI's HTTP client to a handler set by the test."""

    handlers = []

    def _install(handler):
        handlers.append(handler)

    def _client_factory() -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handlers[-1]))

    get_settings.cache_clear()
    monkeypatch.setattr(main_module, "create_http_client", _client_factory)
    monkeypatch.setattr(main_module, "configure_logging", lambda level: None)
    yield _install
    get_settings.cache_clear()


def test_search_command_prints_logical_page(omdb):
    requested_pages: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        requested_pages.append(request.url.params["page"])
        start = (page - 1) * 10 + 1
        return httpx.Response(200, json=search_payload(range(start, start + 10), total=100))

    omdb(handler)
    result = runner.invoke(main_module.app, ["search", "alien", "--type", "movie"])

    assert result.exit_code == 0, result.output
    assert "Page 1 of 3 (36 results)" in result.output
    assert "tt0000012  Title 12" in result.output
    assert "tt0000013" not in result.output
    assert requested_pages == ["1", "2"]


def test_search_command_reports_upstream_error(omdb):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=error_payload("Movie not found!"))

    omdb(handler)
    result = runner.invoke(main_module.app, ["search", "zzzzqx"])

    assert result.exit_code == 1
    assert 'No results found for "zzzzqx"' in result.output


def test_search_command_rejects_short_query(omdb):
    async def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    omdb(handler)
    result = runner.invoke(main_module.app, ["search", "a"])

    assert result.exit_code == 1
    assert "at least 2 characters" in result.output


def test_detail_command_formats_record(omdb):
    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "imdbID": "tt0133093",
                "Title": "The Matrix",
                "Year": "1999",
                "Type": "movie",
                "Runtime": "N/A",
                "imdbRating": "8.7",
                "Response": "True",
            },
        )

    omdb(handler)
    result = runner.invoke(main_module.app, ["detail", "tt0133093"])

    assert result.exit_code == 0, result.output
    assert "The Matrix (1999) [Movie]" in result.output
    assert "Runtime: Not available" in result.output
    assert "IMDb rating: 8.7" in result.output
