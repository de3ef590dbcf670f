"""Watchlist storage in a diskcache (SQLite) directory under a fixed key."""

from __future__ import annotations

import sqlite3
from pathlib import Path

import structlog
from diskcache import Cache as DiskCache
from diskcache import Timeout as DiskCacheTimeout

from popcorn.domain.entities.movie import PersistenceError
from popcorn.infrastructure.persistence.base import (
    DEFAULT_STORAGE_KEY,
    TextWatchlistStorage,
)

log = structlog.get_logger(__name__)


class DiskcacheWatchlistStorage(TextWatchlistStorage):
    """Stores the watched list as a JSON string in ``diskcache.Cache``.

    The cache is opened lazily on first access and kept open until
    :meth:`close`. Entries never expire.

    Args:
        directory: SQLite cache directory.
        key: Storage key holding the JSON array.
    """

    def __init__(
        self,
        directory: str | Path = "./.data/popcorn",
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self.directory = Path(directory)
        self.key = key
        self._cache: DiskCache | None = None

    def _open(self) -> DiskCache:
        if self._cache is None:
            try:
                self._cache = DiskCache(str(self.directory))
            except (OSError, sqlite3.Error) as e:
                raise PersistenceError(f"cannot open {self.directory}: {e}") from e
            log.info("watchlist_diskcache_opened", path=str(self.directory))
        return self._cache

    def _read(self) -> str | None:
        try:
            value = self._open().get(self.key, default=None)
        except (OSError, sqlite3.Error, DiskCacheTimeout) as e:
            raise PersistenceError(str(e)) from e
        if value is not None and not isinstance(value, str):
            # Only JSON text is ever written under this key.
            log.warning("watchlist_diskcache_unexpected_type", type=type(value).__name__)
            return None
        return value

    def _write(self, payload: str) -> None:
        try:
            self._open().set(self.key, payload, expire=None)
        except (OSError, sqlite3.Error, DiskCacheTimeout) as e:
            raise PersistenceError(str(e)) from e

    def close(self) -> None:
        if self._cache is not None:
            self._cache.close()
            self._cache = None
            log.info("watchlist_diskcache_closed", directory=str(self.directory))

    def __enter__(self) -> DiskcacheWatchlistStorage:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
