"""Domain entities for movie search and the watched list.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any

_LEADING_INT = re.compile(r"^\s*(\d+)")

MIN_USER_RATING = 1.0
MAX_USER_RATING = 10.0


def parse_runtime_minutes(raw: Any) -> int:
    """Parse a runtime like ``"148 min"`` into minutes (0 if unparsable)."""
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, (int, float)):
        return int(raw) if math.isfinite(raw) else 0
    if not isinstance(raw, str):
        return 0
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0


def parse_rating(raw: Any) -> float:
    """Parse a rating like ``"8.8"`` into a float (0.0 for ``"N/A"`` etc.)."""
    if isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw if isinstance(raw, (int, float)) else str(raw).strip())
    except ValueError:
        return 0.0
    # "nan" and "inf" parse as floats but are not ratings.
    return value if math.isfinite(value) else 0.0


@dataclass(frozen=True)
class MovieSummary:
    """One row of a title search."""

    id: str  # IMDb ID, e.g. "tt1375666"
    title: str
    year: str
    poster_url: str = ""


@dataclass(frozen=True)
class MovieDetail:
    """Full catalog record for one selected movie."""

    id: str
    title: str
    year: str
    poster_url: str = ""
    runtime_minutes: int = 0
    external_rating: float = 0.0
    plot: str = ""
    released: str = ""
    actors: str = ""
    director: str = ""
    genre: str = ""
    runtime: str = ""  # as reported upstream, e.g. "148 min"


@dataclass(frozen=True)
class WatchedEntry:
    """A movie the user confirmed as watched, with their own rating."""

    id: str
    title: str
    year: str
    poster_url: str
    external_rating: float
    runtime_minutes: int
    user_rating: float

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("WatchedEntry.id must not be empty")
        if not MIN_USER_RATING <= self.user_rating <= MAX_USER_RATING:
            raise ValueError(
                f"user_rating must be between {MIN_USER_RATING:g} and "
                f"{MAX_USER_RATING:g}, got {self.user_rating!r}"
            )

    @classmethod
    def from_detail(cls, detail: MovieDetail, user_rating: float) -> WatchedEntry:
        return cls(
            id=detail.id,
            title=detail.title,
            year=detail.year,
            poster_url=detail.poster_url,
            external_rating=detail.external_rating,
            runtime_minutes=detail.runtime_minutes,
            user_rating=float(user_rating),
        )

    def to_record(self) -> dict[str, Any]:
        """Serialize using the persisted field names."""
        return {
            "imdbID": self.id,
            "title": self.title,
            "year": self.year,
            "poster": self.poster_url,
            "imdbRating": self.external_rating,
            "runtime": self.runtime_minutes,
            "userRating": self.user_rating,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> WatchedEntry:
        """Inverse of :meth:`to_record`.

        Raises:
            KeyError: A required field is missing.
            ValueError: A field holds an invalid value.
        """
        return cls(
            id=str(record["imdbID"]),
            title=str(record.get("title", "")),
            year=str(record.get("year", "")),
            poster_url=str(record.get("poster", "")),
            external_rating=parse_rating(record.get("imdbRating", 0)),
            runtime_minutes=parse_runtime_minutes(record.get("runtime", 0)),
            user_rating=float(record["userRating"]),
        )


@dataclass(frozen=True)
class WatchlistStats:
    """Aggregates over the watched list (all zero when empty)."""

    count: int = 0
    avg_external_rating: float = 0.0
    avg_user_rating: float = 0.0
    avg_runtime: float = 0.0


class CatalogError(Exception):
    """Base error for movie catalog lookups."""


class TransportError(CatalogError):
    """Non-2xx response or network failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(CatalogError):
    """Well-formed response that flags no results."""

    def __init__(self, message: str = "Movie not found!") -> None:
        super().__init__(message)


class PersistenceError(Exception):
    """Watchlist storage backend failure."""
