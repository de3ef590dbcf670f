from .movie import (
    CatalogError,
    MovieDetail,
    MovieSummary,
    NotFoundError,
    PersistenceError,
    TransportError,
    WatchedEntry,
    WatchlistStats,
    parse_rating,
    parse_runtime_minutes,
)

__all__ = [
    "CatalogError",
    "MovieDetail",
    "MovieSummary",
    "NotFoundError",
    "PersistenceError",
    "TransportError",
    "WatchedEntry",
    "WatchlistStats",
    "parse_rating",
    "parse_runtime_minutes",
]
