"""Command-line entrypoint."""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Annotated

import httpx
import typer

from moviesearch.config import get_settings
from moviesearch.logging import configure_logging, logger
from moviesearch.services.formatting import (
    format_media_type,
    format_rating,
    format_runtime,
    total_pages,
)
from moviesearch.services.omdb_client import OmdbClient
from moviesearch.services.session import SearchSession
from moviesearch.services.state import SessionState

app = typer.Typer(help="Search the OMDb title database in pages of 12.", no_args_is_help=True)


class TypeChoice(str, Enum):
    all = "all"
    movie = "movie"
    series = "series"


def create_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient()


def _setup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.debug("cli_starting", environment=settings.environment)


async def _run_search(query: str, type_filter: str, page: int) -> SessionState:
    settings = get_settings()
    async with create_http_client() as http_client:
        session = SearchSession(OmdbClient(http_client, settings.omdb))
        await session.submit_search(query, type_filter, page)
        return session.state


async def _run_detail(item_id: str) -> SessionState:
    settings = get_settings()
    async with create_http_client() as http_client:
        session = SearchSession(OmdbClient(http_client, settings.omdb))
        await session.fetch_detail(item_id)
        return session.state


def _fail(message: str) -> None:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Title to search for.")],
    type_filter: Annotated[
        TypeChoice, typer.Option("--type", "-t", help="Restrict results to a media type.")
    ] = TypeChoice.all,
    page: Annotated[int, typer.Option("--page", "-p", min=1, help="Logical page.")] = 1,
) -> None:
    """Print one page of search results."""

    _setup()
    state = asyncio.run(_run_search(query, type_filter.value, page))
    if state.error:
        _fail(state.error)

    pages = total_pages(state.total_count)
    typer.echo(f"Page {page} of {pages} ({state.total_count} results)")
    if not state.items:
        typer.echo("No more results.")
    for item in state.items:
        typer.echo(
            f"{item.id}  {item.title} ({item.year}) [{format_media_type(item.media_type)}]"
        )


@app.command()
def detail(item_id: Annotated[str, typer.Argument(help="IMDb identifier, e.g. tt0133093.")]) -> None:
    """Print the full record of one title."""

    _setup()
    state = asyncio.run(_run_detail(item_id))
    if state.error or state.detail is None:
        _fail(state.error or "Movie details not found")

    record = state.detail
    typer.echo(f"{record.title} ({record.year}) [{format_media_type(record.media_type)}]")
    typer.echo(f"Runtime: {format_runtime(record.runtime)}")
    typer.echo(f"IMDb rating: {format_rating(record.imdb_rating)}")
    typer.echo(f"Genre: {record.genre}")
    typer.echo(f"Director: {record.director}")
    typer.echo(f"Plot: {record.plot}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
