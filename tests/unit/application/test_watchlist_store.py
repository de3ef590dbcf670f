"""Tests for WatchlistStore (collection invariants, persistence, stats)."""

from __future__ import annotations

import json

import pytest

from popcorn.application.selection import SelectionCoordinator
from popcorn.application.watchlist import WatchlistStore
from popcorn.domain.entities.movie import WatchedEntry, WatchlistStats
from popcorn.infrastructure.persistence.memory_storage import (
    InMemoryWatchlistStorage,
)


def _entry(movie_id: str, *, imdb: float, user: float, runtime: int) -> WatchedEntry:
    return WatchedEntry(
        id=movie_id,
        title=f"Movie {movie_id}",
        year="2000",
        poster_url="",
        external_rating=imdb,
        runtime_minutes=runtime,
        user_rating=user,
    )


@pytest.fixture()
def store(
    storage: InMemoryWatchlistStorage, selection: SelectionCoordinator
) -> WatchlistStore:
    return WatchlistStore(storage, selection)


class TestAdd:
    def test_add_appends_and_persists(
        self,
        store: WatchlistStore,
        storage: InMemoryWatchlistStorage,
        watched_entry: WatchedEntry,
    ) -> None:
        assert store.add(watched_entry) is True

        assert store.entries == (watched_entry,)
        assert storage.writes == 1
        assert storage.load() == [watched_entry]

    def test_duplicate_id_is_ignored(
        self,
        store: WatchlistStore,
        storage: InMemoryWatchlistStorage,
        watched_entry: WatchedEntry,
    ) -> None:
        store.add(watched_entry)
        assert store.add(watched_entry) is False

        assert len(store) == 1
        assert storage.writes == 1

    def test_insertion_order_kept(self, store: WatchlistStore) -> None:
        for movie_id in ("c", "a", "b"):
            store.add(_entry(movie_id, imdb=5, user=5, runtime=100))
        assert [e.id for e in store] == ["c", "a", "b"]

    def test_listeners_see_new_collection(
        self, store: WatchlistStore, watched_entry: WatchedEntry
    ) -> None:
        seen: list[tuple[WatchedEntry, ...]] = []
        store.subscribe(seen.append)

        store.add(watched_entry)

        assert seen == [(watched_entry,)]


class TestRemove:
    def test_remove_filters_and_persists(
        self,
        store: WatchlistStore,
        storage: InMemoryWatchlistStorage,
        watched_entry: WatchedEntry,
    ) -> None:
        store.add(watched_entry)

        assert store.remove(watched_entry.id) is True

        assert store.entries == ()
        assert storage.load() == []

    def test_remove_missing_is_noop(
        self, store: WatchlistStore, storage: InMemoryWatchlistStorage
    ) -> None:
        assert store.remove("tt0000000") is False
        assert storage.writes == 0

    def test_remove_clears_selection(
        self,
        store: WatchlistStore,
        selection: SelectionCoordinator,
        watched_entry: WatchedEntry,
    ) -> None:
        store.add(watched_entry)
        selection.select("tt0816692")

        store.remove(watched_entry.id)

        assert selection.selected_id is None

    def test_add_then_remove_restores_previous_collection(
        self, store: WatchlistStore, storage: InMemoryWatchlistStorage
    ) -> None:
        first = _entry("tt1", imdb=7, user=6, runtime=100)
        store.add(first)
        before = storage.payload

        rated = _entry("tt1375666", imdb=8.8, user=8, runtime=148)
        store.add(rated)
        store.remove(rated.id)

        assert store.entries == (first,)
        assert storage.payload == before


class TestQueries:
    def test_contains_and_rating_for(
        self, store: WatchlistStore, watched_entry: WatchedEntry
    ) -> None:
        assert store.contains(watched_entry.id) is False
        assert store.rating_for(watched_entry.id) is None

        store.add(watched_entry)

        assert store.contains(watched_entry.id) is True
        assert store.rating_for(watched_entry.id) == 8.0
        assert store.contains(None) is False


class TestSummaryStats:
    def test_empty_collection_is_all_zero(self, store: WatchlistStore) -> None:
        stats = store.summary_stats()
        assert stats == WatchlistStats(
            count=0, avg_external_rating=0.0, avg_user_rating=0.0, avg_runtime=0.0
        )

    def test_means_over_collection(self, store: WatchlistStore) -> None:
        store.add(_entry("a", imdb=8.0, user=10, runtime=120))
        store.add(_entry("b", imdb=6.0, user=6, runtime=90))

        stats = store.summary_stats()

        assert stats.count == 2
        assert stats.avg_external_rating == pytest.approx(7.0)
        assert stats.avg_user_rating == pytest.approx(8.0)
        assert stats.avg_runtime == pytest.approx(105.0)


class TestLoading:
    def test_initial_entries_come_from_storage(
        self, selection: SelectionCoordinator, watched_entry: WatchedEntry
    ) -> None:
        storage = InMemoryWatchlistStorage(json.dumps([watched_entry.to_record()]))
        store = WatchlistStore(storage, selection)
        assert store.entries == (watched_entry,)

    def test_corrupt_storage_starts_empty(
        self, selection: SelectionCoordinator
    ) -> None:
        store = WatchlistStore(InMemoryWatchlistStorage("{not json"), selection)
        assert store.entries == ()

    def test_duplicate_ids_in_storage_are_collapsed(
        self, selection: SelectionCoordinator, watched_entry: WatchedEntry
    ) -> None:
        record = watched_entry.to_record()
        storage = InMemoryWatchlistStorage(json.dumps([record, record]))
        store = WatchlistStore(storage, selection)
        assert len(store) == 1

    def test_non_finite_ratings_in_storage_keep_stats_finite(
        self, selection: SelectionCoordinator, watched_entry: WatchedEntry
    ) -> None:
        record = {**watched_entry.to_record(), "imdbRating": float("nan")}
        storage = InMemoryWatchlistStorage(json.dumps([record]))

        stats = WatchlistStore(storage, selection).summary_stats()

        assert stats.count == 1
        assert stats.avg_external_rating == 0.0
        assert stats.avg_user_rating == 8.0
