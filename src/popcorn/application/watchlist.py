"""In-memory watched list backed by a storage port."""

from __future__ import annotations

from collections.abc import Iterator
from statistics import fmean

import structlog

from popcorn.application.observable import Observable
from popcorn.application.selection import SelectionCoordinator
from popcorn.domain.entities.movie import WatchedEntry, WatchlistStats
from popcorn.domain.ports.watchlist_storage import WatchlistStoragePort

log = structlog.get_logger(__name__)


class WatchlistStore(Observable[tuple[WatchedEntry, ...]]):
    """Owns the watched collection and is the only writer to storage.

    Entry ids are unique; order is insertion order. Every mutation is
    written through to storage before listeners are notified.
    """

    def __init__(
        self,
        storage: WatchlistStoragePort,
        selection: SelectionCoordinator,
    ) -> None:
        super().__init__(_dedupe(storage.load()))
        self._storage = storage
        self._selection = selection
        log.info("watchlist_loaded", count=len(self.state))

    @property
    def entries(self) -> tuple[WatchedEntry, ...]:
        return self.state

    def __len__(self) -> int:
        return len(self.state)

    def __iter__(self) -> Iterator[WatchedEntry]:
        return iter(self.state)

    def add(self, entry: WatchedEntry) -> bool:
        """Append ``entry`` unless its id is already present.

        Returns True when the entry was added.
        """
        if self.contains(entry.id):
            log.debug("watchlist_add_duplicate", movie_id=entry.id)
            return False
        self._commit((*self.state, entry))
        log.info("watchlist_added", movie_id=entry.id, user_rating=entry.user_rating)
        return True

    def remove(self, movie_id: str) -> bool:
        """Drop the entry for ``movie_id`` and close the open selection.

        Returns True when an entry was removed.
        """
        remaining = tuple(e for e in self.state if e.id != movie_id)
        removed = len(remaining) != len(self.state)
        if removed:
            self._commit(remaining)
            log.info("watchlist_removed", movie_id=movie_id)
        self._selection.close()
        return removed

    def contains(self, movie_id: str | None) -> bool:
        return any(e.id == movie_id for e in self.state)

    def rating_for(self, movie_id: str | None) -> float | None:
        for entry in self.state:
            if entry.id == movie_id:
                return entry.user_rating
        return None

    def summary_stats(self) -> WatchlistStats:
        entries = self.state
        if not entries:
            return WatchlistStats()
        return WatchlistStats(
            count=len(entries),
            avg_external_rating=fmean(e.external_rating for e in entries),
            avg_user_rating=fmean(e.user_rating for e in entries),
            avg_runtime=fmean(e.runtime_minutes for e in entries),
        )

    def _commit(self, entries: tuple[WatchedEntry, ...]) -> None:
        self._storage.save(entries)
        self._set_state(entries)


def _dedupe(entries: list[WatchedEntry]) -> tuple[WatchedEntry, ...]:
    seen: set[str] = set()
    out: list[WatchedEntry] = []
    for entry in entries:
        if entry.id in seen:
            log.warning("watchlist_duplicate_dropped", movie_id=entry.id)
            continue
        seen.add(entry.id)
        out.append(entry)
    return tuple(out)
