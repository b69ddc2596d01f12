"""Pure mappers turning TMDb records into display-ready view models."""

from __future__ import annotations

import math
from typing import Any, Callable, Mapping

from movie_finder.core.config import get_settings
from movie_finder.services.models import (
    DEFAULT_CERTIFICATION,
    CatalogEntry,
    MovieDetail,
    ProviderOffer,
    ProviderRef,
)
from movie_finder.services.views import (
    GenreView,
    MovieCard,
    MovieDetailsView,
    MovieModal,
    ProviderGroup,
    ProviderLogo,
    ProviderSection,
)

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w780"
LOGO_SIZE = "w500"

NO_PROVIDERS_MESSAGE = "This movie is currently not available on any streaming platform."


def build_image_url(path: str | None, size: str) -> str | None:
    if not path:
        return None
    return f"{get_settings().tmdb_image_base.rstrip('/')}/{size}{path}"


def format_movie_card(entry: CatalogEntry) -> MovieCard:
    """Card tile view with placeholder text for missing fields."""

    return MovieCard(
        id=entry.id,
        image=build_image_url(entry.poster_path, POSTER_SIZE),
        title=entry.title or "Title",
        content=entry.overview or "Text Content",
        date=entry.release_date or "Release Date",
    )


def format_movie_details(
    detail: MovieDetail, certifications: Mapping[int, str]
) -> MovieDetailsView:
    """Modal view of one movie; scalar fields pass through untouched."""

    return MovieDetailsView(
        id=detail.id,
        title=detail.title,
        tagline=detail.tagline,
        content=detail.overview,
        date=detail.release_date,
        image=build_image_url(detail.poster_path, POSTER_SIZE),
        background_img=build_image_url(detail.backdrop_path, BACKDROP_SIZE),
        certification=certifications.get(detail.id) or DEFAULT_CERTIFICATION,
        genres=[GenreView(id=genre.id, category=genre.name) for genre in detail.genres],
        release_status=detail.status,
        reviews=detail.vote_average,
        vote=detail.vote_average,
        movie_time=detail.runtime,
    )


def format_provider_logo(provider: ProviderRef) -> ProviderLogo:
    return ProviderLogo(
        id=provider.provider_id,
        logo=build_image_url(provider.logo_path, LOGO_SIZE),
        provider_name=provider.provider_name,
    )


def _to_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def format_rating(value: Any) -> str | None:
    """Convert a 0-10 vote average to a 0-5 score with one decimal.

    Values of 5 or less are assumed to already be on the 0-5 scale.
    """

    rating = _to_number(value)
    if rating is None:
        return None
    if rating > 5:
        rating = rating / 2
    return f"{rating:.1f}"


def format_runtime(value: Any) -> str | None:
    """Render a minute count as ``"1h 45m"``; zero renders as ``""``."""

    minutes = _to_number(value)
    if minutes is None:
        return None
    hours_part = f"{int(minutes // 60)}h" if minutes else ""
    minutes_part = f"{minutes % 60:g}m" if minutes else ""
    return f"{hours_part} {minutes_part}".strip()


def extract_categories(details: MovieDetailsView | None) -> list[str]:
    if details is None or not details.genres:
        return []
    return [genre.category for genre in details.genres if genre.category]


def group_providers(
    offer: ProviderOffer | None,
    to_logo: Callable[[ProviderRef], ProviderLogo] = format_provider_logo,
) -> ProviderSection:
    """Split an offer into labelled logo groups, skipping empty buckets.

    When no bucket has providers the section carries only a fallback message.
    """

    if offer is None or offer.is_empty:
        return ProviderSection(groups=[], message=NO_PROVIDERS_MESSAGE)

    buckets = (
        ("Rent:", offer.rent),
        ("Buy:", offer.buy),
        ("Watch in:", offer.flatrate),
    )
    groups = [
        ProviderGroup(
            label=label,
            slug=label.rstrip(":").lower().replace(" ", "-"),
            providers=[to_logo(provider) for provider in providers],
        )
        for label, providers in buckets
        if providers
    ]
    return ProviderSection(groups=groups)


def truncate_words(text: str, max_words: int) -> str:
    if max_words <= 0:
        return text
    words = text.split(" ")
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + "..."


def format_release_date(value: str | None) -> str | None:
    """``"2024-05-01"`` -> ``"01 / 05 / 2024"``."""

    if not value:
        return None
    return " / ".join(reversed(value.split("-")))


def release_year(value: str | None) -> str | None:
    if not value:
        return None
    return value.split("-")[0]


def format_movie_modal(
    detail: MovieDetail,
    certifications: Mapping[int, str],
    offer: ProviderOffer | None,
) -> MovieModal:
    details = format_movie_details(detail, certifications)
    return MovieModal(
        details=details,
        rating=format_rating(details.reviews),
        duration=format_runtime(details.movie_time),
        categories=extract_categories(details),
        year=release_year(details.date),
        display_date=format_release_date(details.date),
        providers=group_providers(offer),
    )
