"""FastAPI entrypoint loading the movie catalog once and serving view models."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status

from movie_finder.core.config import get_settings
from movie_finder.core.logging_config import configure_logging
from movie_finder.services.catalog import MovieCatalog, load_catalog
from movie_finder.services.formatter import format_movie_card, format_movie_modal, truncate_words
from movie_finder.services.tmdb import TMDbClient
from movie_finder.services.views import MovieCard, MovieModal

logger = logging.getLogger(__name__)

CARD_TEXT_WORDS = 15


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and populate the catalog before serving."""

    configure_logging()
    settings = get_settings()
    async with TMDbClient() as client:
        app.state.catalog = await load_catalog(client, region=settings.tmdb_region)
    if app.state.catalog.is_empty:
        logger.warning("Catalog is empty; /movies will serve no cards")
    else:
        logger.info("Catalog ready with %d movies", len(app.state.catalog.movies))
    yield


app = FastAPI(title="Movie Finder", lifespan=lifespan)


def get_catalog(request: Request) -> MovieCatalog:
    return getattr(request.app.state, "catalog", None) or MovieCatalog()


@app.get("/movies", response_model=list[MovieCard])
def list_movies(catalog: MovieCatalog = Depends(get_catalog)) -> list[MovieCard]:
    cards = [format_movie_card(movie) for movie in catalog.movies]
    return [
        card.model_copy(update={"content": truncate_words(card.content, CARD_TEXT_WORDS)})
        for card in cards
    ]


@app.get("/movies/{movie_id}", response_model=MovieModal)
def get_movie(movie_id: int, catalog: MovieCatalog = Depends(get_catalog)) -> MovieModal:
    """Modal payload for one movie: details, rating, runtime and providers."""

    detail = catalog.detail_for(movie_id)
    if detail is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Movie details are not available.",
        )
    return format_movie_modal(detail, catalog.certifications, catalog.providers_for(movie_id))
