"""Shared test fixtures for the popcorn test suite."""

from __future__ import annotations

import pytest

from popcorn.application.detail import WindowTitle
from popcorn.application.selection import SelectionCoordinator
from popcorn.domain.entities.movie import MovieDetail, WatchedEntry
from popcorn.infrastructure.persistence.memory_storage import (
    InMemoryWatchlistStorage,
)
from tests.fakes import INCEPTION, INCEPTION_DETAIL, INTERSTELLAR_DETAIL, FakeCatalog

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def inception_detail() -> MovieDetail:
    return INCEPTION_DETAIL


@pytest.fixture()
def watched_entry() -> WatchedEntry:
    """Inception rated 8 by the user."""
    return WatchedEntry.from_detail(INCEPTION_DETAIL, 8)


# ---------------------------------------------------------------------------
# Fake ports and application fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def catalog() -> FakeCatalog:
    fake = FakeCatalog()
    fake.search_outcomes["inception"] = [INCEPTION]
    fake.detail_outcomes[INCEPTION_DETAIL.id] = INCEPTION_DETAIL
    fake.detail_outcomes[INTERSTELLAR_DETAIL.id] = INTERSTELLAR_DETAIL
    return fake


@pytest.fixture()
def storage() -> InMemoryWatchlistStorage:
    return InMemoryWatchlistStorage()


@pytest.fixture()
def selection() -> SelectionCoordinator:
    return SelectionCoordinator()


@pytest.fixture()
def window_title() -> WindowTitle:
    return WindowTitle()
