"""Thin async wrapper around the TMDb API returning uniform envelopes."""

from __future__ import annotations

import logging
from typing import Any, Callable

import httpx

from movie_finder.core.config import get_settings
from movie_finder.services.models import Envelope


logger = logging.getLogger(__name__)


class TMDbError(Exception):
    """Base exception for TMDb-related failures."""


class TMDbConfigError(TMDbError):
    """Raised when the client is missing its API key."""


class TMDbResponseError(TMDbError):
    """Raised when TMDb answers with a non-OK status or a non-JSON body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _ok(data: Any) -> Envelope:
    return Envelope(status="ok", data=data, code=200)


def _error(data: Any) -> Envelope:
    return Envelope(status="error", data=data, code=500)


class TMDbClient:
    """TMDb HTTP client using API key auth.

    Every public operation is attempted once and never raises: failures are
    logged and folded into an ``error`` envelope carrying an empty payload.
    Use it as ``async with TMDbClient() as client`` to share one connection
    pool across a fan-out, or pass an ``http_client`` explicitly.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key or settings.tmdb_api_key
        self.base_url = (base_url or settings.tmdb_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.tmdb_timeout
        self._http = http_client
        self._owns_http = False

    async def __aenter__(self) -> TMDbClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self.timeout)
            self._owns_http = True
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None
            self._owns_http = False

    async def _request(self, path: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self.api_key:
            raise TMDbConfigError("TMDB_API_KEY is not configured")
        url = f"{self.base_url}{path}"
        query = {"api_key": self.api_key}
        if params:
            query.update({k: v for k, v in params.items() if v is not None})
        if self._http is not None:
            response = await self._http.get(url, params=query)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=query)
        if not response.is_success:
            raise TMDbResponseError(
                f"TMDb {path} answered HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TMDbResponseError(
                f"TMDb {path} returned non-JSON body",
                status_code=response.status_code,
            ) from exc

    async def _fetch(
        self,
        path: str,
        *,
        extract: Callable[[Any], Any],
        empty: Callable[[], Any],
    ) -> Envelope:
        try:
            payload = await self._request(path)
        except TMDbResponseError as exc:
            logger.warning("TMDb request %s failed (status %s): %s", path, exc.status_code, exc)
            return _error(empty())
        except (TMDbError, httpx.HTTPError) as exc:
            logger.warning("TMDb request %s failed: %s", path, exc)
            return _error(empty())
        logger.debug("TMDb %s payload: %s", path, payload)
        return _ok(extract(payload))

    async def get_movies(self) -> Envelope:
        """Fetch the discovery list; ``data`` is the list of raw catalog entries."""

        return await self._fetch(
            "/discover/movie",
            extract=lambda payload: _results(payload, list),
            empty=list,
        )

    async def get_movie_info(self, movie_id: int) -> Envelope:
        """Fetch one movie's full detail object."""

        return await self._fetch(
            f"/movie/{movie_id}",
            extract=lambda payload: payload if isinstance(payload, dict) else {},
            empty=dict,
        )

    async def get_movie_certifications(self, movie_id: int) -> Envelope:
        """Fetch the per-region release records for one movie."""

        return await self._fetch(
            f"/movie/{movie_id}/release_dates",
            extract=lambda payload: _results(payload, list),
            empty=list,
        )

    async def get_movie_watch_providers(self, movie_id: int) -> Envelope:
        """Fetch the region-keyed watch provider mapping for one movie."""

        return await self._fetch(
            f"/movie/{movie_id}/watch/providers",
            extract=lambda payload: _results(payload, dict),
            empty=dict,
        )


def _results(payload: Any, kind: type) -> Any:
    results = payload.get("results") if isinstance(payload, dict) else None
    return results if isinstance(results, kind) else kind()
