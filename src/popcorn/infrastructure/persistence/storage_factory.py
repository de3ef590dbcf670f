"""Storage factory: builds the watchlist storage adapter from config."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import structlog

from popcorn.domain.ports.watchlist_storage import WatchlistStoragePort
from popcorn.infrastructure.persistence.base import DEFAULT_STORAGE_KEY
from popcorn.infrastructure.persistence.diskcache_storage import (
    DiskcacheWatchlistStorage,
)
from popcorn.infrastructure.persistence.file_storage import JsonFileWatchlistStorage
from popcorn.infrastructure.persistence.memory_storage import (
    InMemoryWatchlistStorage,
)

log = structlog.get_logger(__name__)

StorageBackend = Literal["diskcache", "file", "memory"]


def create_watchlist_storage(
    backend: StorageBackend = "diskcache",
    *,
    path: str | Path = "./.data/popcorn",
    key: str = DEFAULT_STORAGE_KEY,
) -> WatchlistStoragePort:
    """Create the storage adapter for ``backend``.

    Args:
        backend: "diskcache" (SQLite directory), "file" (JSON file) or "memory".
        path: Diskcache directory, or directory holding ``<key>.json`` for "file".
        key: Storage key (diskcache key / JSON file stem).

    Raises:
        ValueError: If ``backend`` is unknown.
    """
    log.info("watchlist_storage_create", backend=backend, path=str(path), key=key)
    if backend == "diskcache":
        return DiskcacheWatchlistStorage(directory=path, key=key)
    if backend == "file":
        return JsonFileWatchlistStorage(Path(path) / f"{key}.json")
    if backend == "memory":
        return InMemoryWatchlistStorage()
    raise ValueError(
        f"Unknown storage backend: {backend!r}. "
        "Must be 'diskcache', 'file' or 'memory'."
    )
