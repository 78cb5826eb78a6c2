"""Pydantic models shared across the client, aggregator and session layers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

TypeFilter = Literal["all", "movie", "series"]
MediaType = Literal["movie", "series", "episode", "game"]

# OMDb's placeholder for missing values, e.g. a title without a poster.
NOT_AVAILABLE = "N/A"


def _na_to_none(value):
    if isinstance(value, str) and value.strip() in ("", NOT_AVAILABLE):
        return None
    return value


class SearchCriteria(BaseModel):
    model_config = ConfigDict(frozen=True)

    query: str = Field(min_length=1)
    type_filter: TypeFilter = "all"
    page: int = Field(default=1, ge=1)

    @field_validator("query", mode="before")
    @classmethod
    def _strip_query(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @property
    def signature(self) -> tuple[str, str, int]:
        return (self.query, self.type_filter, self.page)


class SearchResultItem(BaseModel):
    """One row of an OMDb search response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="imdbID")
    title: str = Field(alias="Title")
    year: str = Field(default="", alias="Year")
    media_type: MediaType = Field(alias="Type")
    poster_url: str | None = Field(default=None, alias="Poster")

    normalize_poster = field_validator("poster_url", mode="before")(_na_to_none)

    @property
    def has_poster(self) -> bool:
        return self.poster_url is not None


class UpstreamPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[SearchResultItem, ...] = ()
    total_count: int = Field(default=0, ge=0)
    page_index: int = Field(ge=1)


class LogicalPageResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: tuple[SearchResultItem, ...] = ()
    total_count: int = Field(default=0, ge=0)


class Rating(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str = Field(alias="Source")
    value: str = Field(alias="Value")


class MovieDetail(BaseModel):
    """Full OMDb record for a single title.

    Free-text fields keep OMDb's ``"N/A"`` placeholder so presentation code
    decides how to render it (see ``moviesearch.services.formatting``); only
    the poster is normalized to ``None``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(alias="imdbID")
    title: str = Field(alias="Title")
    year: str = Field(default="", alias="Year")
    media_type: MediaType = Field(alias="Type")
    rated: str = Field(default=NOT_AVAILABLE, alias="Rated")
    released: str = Field(default=NOT_AVAILABLE, alias="Released")
    runtime: str = Field(default=NOT_AVAILABLE, alias="Runtime")
    genre: str = Field(default=NOT_AVAILABLE, alias="Genre")
    director: str = Field(default=NOT_AVAILABLE, alias="Director")
    writer: str = Field(default=NOT_AVAILABLE, alias="Writer")
    actors: str = Field(default=NOT_AVAILABLE, alias="Actors")
    plot: str = Field(default=NOT_AVAILABLE, alias="Plot")
    language: str = Field(default=NOT_AVAILABLE, alias="Language")
    country: str = Field(default=NOT_AVAILABLE, alias="Country")
    awards: str = Field(default=NOT_AVAILABLE, alias="Awards")
    poster_url: str | None = Field(default=None, alias="Poster")
    ratings: tuple[Rating, ...] = Field(default=(), alias="Ratings")
    metascore: str = Field(default=NOT_AVAILABLE, alias="Metascore")
    imdb_rating: str = Field(default=NOT_AVAILABLE, alias="imdbRating")
    imdb_votes: str = Field(default=NOT_AVAILABLE, alias="imdbVotes")
    dvd: str = Field(default=NOT_AVAILABLE, alias="DVD")
    box_office: str = Field(default=NOT_AVAILABLE, alias="BoxOffice")
    production: str = Field(default=NOT_AVAILABLE, alias="Production")
    website: str = Field(default=NOT_AVAILABLE, alias="Website")

    normalize_poster = field_validator("poster_url", mode="before")(_na_to_none)

    @property
    def has_poster(self) -> bool:
        return self.poster_url is not None


__all__ = [
    "LogicalPageResult",
    "MediaType",
    "MovieDetail",
    "NOT_AVAILABLE",
    "Rating",
    "SearchCriteria",
    "SearchResultItem",
    "TypeFilter",
    "UpstreamPage",
]
