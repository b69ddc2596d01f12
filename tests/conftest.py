from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable

import httpx
import pytest

from movie_finder.core.config import get_settings
from movie_finder.services.tmdb import TMDbClient
from payloads import API_KEY, BASE_URL, make_transport


@pytest.fixture(autouse=True)
def reset_env(monkeypatch):
    # Keep a developer's real key out of the tests
    monkeypatch.delenv("TMDB_API_KEY", raising=False)
    monkeypatch.delenv("VITE_API_KEY", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def run_with_client() -> Callable[..., Any]:
    """Run ``action(client)`` against a TMDbClient backed by a mock transport."""

    def _run(
        routes: dict[str, Any],
        action: Callable[[TMDbClient], Awaitable[Any]],
        *,
        calls: list[str] | None = None,
        transport: httpx.MockTransport | None = None,
    ) -> Any:
        async def _main() -> Any:
            async with httpx.AsyncClient(transport=transport or make_transport(routes, calls)) as http:
                client = TMDbClient(api_key=API_KEY, base_url=BASE_URL, http_client=http)
                return await action(client)

        return asyncio.run(_main())

    return _run
