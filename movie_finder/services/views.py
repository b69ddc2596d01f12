"""Display-ready view models served to the presentation layer."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class MovieCard(_View):
    id: int
    image: str | None
    title: str
    content: str
    date: str


class GenreView(_View):
    id: int | None
    category: str | None


class MovieDetailsView(_View):
    id: int
    title: str | None
    tagline: str | None
    content: str | None
    date: str | None
    image: str | None
    background_img: str | None
    certification: str
    genres: list[GenreView]
    release_status: str | None
    # Passed through as received; the rating and runtime formatters decide what is usable.
    reviews: Any = None
    vote: Any = None
    movie_time: Any = None


class ProviderLogo(_View):
    id: int | None
    logo: str | None
    provider_name: str | None


class ProviderGroup(_View):
    label: str
    slug: str
    providers: list[ProviderLogo]


class ProviderSection(_View):
    groups: list[ProviderGroup]
    message: str | None = None


class MovieModal(_View):
    details: MovieDetailsView
    rating: str | None
    duration: str | None
    categories: list[str]
    year: str | None
    display_date: str | None
    providers: ProviderSection
