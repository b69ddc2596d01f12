"""Serverless entry point exporting the FastAPI app instance."""

import logging

from movie_finder.core.logging_config import configure_logging
from movie_finder.main import app

configure_logging()
logger = logging.getLogger(__name__)

logger.info("Serverless entry initialized for %s", app.title)

__all__ = ["app"]
