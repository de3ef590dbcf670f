"""Port for durable storage of the watched list."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from popcorn.domain.entities.movie import WatchedEntry


@runtime_checkable
class WatchlistStoragePort(Protocol):
    """Synchronous key-value storage for the whole watched collection.

    Implementations:
      - DiskcacheWatchlistStorage (SQLite via diskcache)
      - JsonFileWatchlistStorage (single JSON file)
      - InMemoryWatchlistStorage (tests / ephemeral sessions)

    Neither method may raise: corrupt or missing content loads as an empty
    list, and failed writes are logged and dropped.
    """

    def load(self) -> list[WatchedEntry]:
        """Return the stored entries in insertion order."""
        ...

    def save(self, entries: Sequence[WatchedEntry]) -> None:
        """Overwrite stored content with ``entries``."""
        ...
