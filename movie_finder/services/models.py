"""Shared dataclasses for service layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

DEFAULT_CERTIFICATION = "NR"


@dataclass(slots=True)
class Envelope:
    """Uniform result of one TMDb request: status, payload and status code."""

    status: str
    data: Any
    code: int

    @property
    def ok(self) -> bool:
        return self.status == "ok"


@dataclass(slots=True)
class CatalogEntry:
    """Minimal movie record returned by the discovery endpoint."""

    id: int
    title: str | None = None
    overview: str | None = None
    release_date: str | None = None
    poster_path: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> CatalogEntry:
        return cls(
            id=payload["id"],
            title=payload.get("title"),
            overview=payload.get("overview"),
            release_date=payload.get("release_date"),
            poster_path=payload.get("poster_path"),
        )


@dataclass(slots=True)
class Genre:
    id: int | None
    name: str | None


@dataclass(slots=True)
class MovieDetail:
    """Full per-movie metadata fetched individually by ID."""

    id: int
    title: str | None = None
    tagline: str | None = None
    overview: str | None = None
    release_date: str | None = None
    backdrop_path: str | None = None
    poster_path: str | None = None
    runtime: int | None = None
    vote_average: float | None = None
    status: str | None = None
    genres: list[Genre] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> MovieDetail | None:
        """Build a detail record, or ``None`` when the payload carries no movie."""

        if not isinstance(payload, dict) or payload.get("id") is None:
            return None
        return cls(
            id=payload["id"],
            title=payload.get("title"),
            tagline=payload.get("tagline"),
            overview=payload.get("overview"),
            release_date=payload.get("release_date"),
            backdrop_path=payload.get("backdrop_path"),
            poster_path=payload.get("poster_path"),
            runtime=payload.get("runtime"),
            vote_average=payload.get("vote_average"),
            status=payload.get("status"),
            genres=resolve_genres(payload.get("genres")),
        )


@dataclass(slots=True)
class ProviderRef:
    provider_id: int | None
    provider_name: str | None
    logo_path: str | None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ProviderRef:
        return cls(
            provider_id=payload.get("provider_id"),
            provider_name=payload.get("provider_name"),
            logo_path=payload.get("logo_path"),
        )


@dataclass(slots=True)
class ProviderOffer:
    """Region-filtered buy/rent/flatrate options for one movie."""

    id: int
    buy: list[ProviderRef] = field(default_factory=list)
    rent: list[ProviderRef] = field(default_factory=list)
    flatrate: list[ProviderRef] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.buy or self.rent or self.flatrate)


def resolve_genres(raw: Any) -> list[Genre]:
    if not isinstance(raw, list):
        return []
    return [
        Genre(id=item.get("id"), name=item.get("name"))
        for item in raw
        if isinstance(item, dict)
    ]


def resolve_certification(envelope: Envelope, region: str) -> str:
    """Return the first non-empty certification released in ``region``."""

    if not envelope.ok or not isinstance(envelope.data, list):
        return DEFAULT_CERTIFICATION
    region_record = next(
        (
            entry
            for entry in envelope.data
            if isinstance(entry, dict) and entry.get("iso_3166_1") == region
        ),
        None,
    )
    if region_record is None:
        return DEFAULT_CERTIFICATION
    for release in region_record.get("release_dates") or []:
        certification = release.get("certification") if isinstance(release, dict) else None
        if certification:
            return certification
    return DEFAULT_CERTIFICATION


def _resolve_bucket(raw: Any) -> list[ProviderRef]:
    if not isinstance(raw, list):
        return []
    return [ProviderRef.from_payload(item) for item in raw if isinstance(item, dict)]


def resolve_provider_offer(movie_id: int, envelope: Envelope, region: str) -> ProviderOffer:
    """Pick the ``region`` buckets from a watch/providers payload."""

    regions = envelope.data if envelope.ok and isinstance(envelope.data, dict) else {}
    region_record = regions.get(region)
    if not isinstance(region_record, dict):
        return ProviderOffer(id=movie_id)
    return ProviderOffer(
        id=movie_id,
        buy=_resolve_bucket(region_record.get("buy")),
        rent=_resolve_bucket(region_record.get("rent")),
        flatrate=_resolve_bucket(region_record.get("flatrate")),
    )
