"""Fan-out loader assembling the in-memory movie catalog."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from movie_finder.core.config import get_settings
from movie_finder.services.models import (
    CatalogEntry,
    MovieDetail,
    ProviderOffer,
    resolve_certification,
    resolve_provider_offer,
)
from movie_finder.services.tmdb import TMDbClient


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MovieCatalog:
    """Everything fetched during initialization.

    ``details`` lines up with ``movies`` position by position; a movie whose
    detail request failed keeps a ``None`` placeholder at its index.
    """

    movies: list[CatalogEntry] = field(default_factory=list)
    details: list[MovieDetail | None] = field(default_factory=list)
    certifications: dict[int, str] = field(default_factory=dict)
    providers: list[ProviderOffer] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.movies

    def detail_for(self, movie_id: int) -> MovieDetail | None:
        for entry, detail in zip(self.movies, self.details):
            if entry.id == movie_id:
                return detail
        return None

    def providers_for(self, movie_id: int) -> ProviderOffer | None:
        return next((offer for offer in self.providers if offer.id == movie_id), None)


async def load_catalog(client: TMDbClient, *, region: str | None = None) -> MovieCatalog:
    """Fetch the catalog and every per-movie resource it needs.

    Stages run one after another; within a stage all requests are issued
    together and awaited as a batch. Any single failure degrades to that
    movie's default and never aborts the batch.
    """

    region = region or get_settings().tmdb_region

    listing = await client.get_movies()
    movies = [
        CatalogEntry.from_payload(item)
        for item in listing.data
        if isinstance(item, dict) and item.get("id") is not None
    ]
    if not movies:
        logger.info("Discovery returned no movies; skipping per-movie fetches")
        return MovieCatalog()

    movie_ids = [movie.id for movie in movies]

    detail_envelopes = await asyncio.gather(*(client.get_movie_info(i) for i in movie_ids))
    details = [MovieDetail.from_payload(envelope.data) for envelope in detail_envelopes]
    _log_stage("details", detail_envelopes)

    certifications = await fetch_certifications(client, movie_ids, region=region)

    provider_envelopes = await asyncio.gather(
        *(client.get_movie_watch_providers(i) for i in movie_ids)
    )
    providers = [
        resolve_provider_offer(movie_id, envelope, region)
        for movie_id, envelope in zip(movie_ids, provider_envelopes)
    ]
    _log_stage("watch providers", provider_envelopes)

    return MovieCatalog(
        movies=movies,
        details=details,
        certifications=certifications,
        providers=providers,
    )


async def fetch_certifications(
    client: TMDbClient, movie_ids: list[int], *, region: str
) -> dict[int, str]:
    """Return a certification per movie ID, ``"NR"`` where none is known."""

    envelopes = await asyncio.gather(*(client.get_movie_certifications(i) for i in movie_ids))
    _log_stage("certifications", envelopes)
    return {
        movie_id: resolve_certification(envelope, region)
        for movie_id, envelope in zip(movie_ids, envelopes)
    }


def _log_stage(name: str, envelopes) -> None:
    failed = sum(1 for envelope in envelopes if not envelope.ok)
    logger.info("Fetched %s for %d movies (%d failed)", name, len(envelopes), failed)
