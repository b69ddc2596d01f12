"""Utilities to configure stdlib logging from environment settings."""

from __future__ import annotations

import logging

from movie_finder.core.config import get_settings

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""

    resolved = (level or get_settings().log_level).upper()
    logging.basicConfig(level=resolved, format=_LOG_FORMAT)
    # httpx logs every request at INFO; keep that out of the fan-out summaries.
    logging.getLogger("httpx").setLevel(max(logging.WARNING, logging.getLevelName(resolved)))
