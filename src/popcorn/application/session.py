"""Session facade wiring the search, selection, detail and watchlist panels."""

from __future__ import annotations

import asyncio

import structlog

from popcorn.application.detail import DetailFetcher, DetailState, WindowTitle
from popcorn.application.search import (
    DEFAULT_MIN_QUERY_LENGTH,
    SearchController,
    SearchState,
)
from popcorn.application.selection import SelectionCoordinator
from popcorn.application.watchlist import WatchlistStore
from popcorn.domain.entities.movie import WatchedEntry, WatchlistStats
from popcorn.domain.ports.movie_catalog import MovieCatalogPort
from popcorn.domain.ports.watchlist_storage import WatchlistStoragePort

log = structlog.get_logger(__name__)


class PopcornSession:
    """One user's search-and-rate session.

    Exposes the user actions (type a query, pick a movie, rate it, add it,
    delete from the list, press a key) and read access to each panel's state.
    The panels themselves are public for render layers that want to
    ``subscribe`` to individual containers.
    """

    def __init__(
        self,
        *,
        catalog: MovieCatalogPort,
        storage: WatchlistStoragePort,
        window_title: WindowTitle | None = None,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    ) -> None:
        self.selection = SelectionCoordinator()
        self.window_title = window_title or WindowTitle()
        self.watchlist = WatchlistStore(storage, self.selection)
        self.search = SearchController(
            catalog, self.selection, min_query_length=min_query_length
        )
        self.details = DetailFetcher(catalog, self.selection, self.window_title)
        self._user_rating = 0.0
        self.selection.subscribe(self._reset_rating_draft)

    # ------------------------------------------------------------------
    # Read-only view state
    # ------------------------------------------------------------------

    @property
    def search_state(self) -> SearchState:
        return self.search.state

    @property
    def detail_state(self) -> DetailState:
        return self.details.state

    @property
    def selected_id(self) -> str | None:
        return self.selection.selected_id

    @property
    def selected_in_watchlist(self) -> bool:
        return self.watchlist.contains(self.selected_id)

    @property
    def selected_user_rating(self) -> float | None:
        return self.watchlist.rating_for(self.selected_id)

    @property
    def user_rating(self) -> float:
        """Rating picked in the open detail panel but not yet confirmed."""
        return self._user_rating

    @property
    def can_add_selected(self) -> bool:
        return (
            self._user_rating > 0
            and self.details.state.status == "loaded"
            and not self.selected_in_watchlist
        )

    @property
    def watched(self) -> tuple[WatchedEntry, ...]:
        return self.watchlist.entries

    def summary_stats(self) -> WatchlistStats:
        return self.watchlist.summary_stats()

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def set_query(self, query: str) -> None:
        self.search.set_query(query)

    def select(self, movie_id: str) -> None:
        """Open ``movie_id`` (or close it when already open).

        Raises:
            RuntimeError: Opening needs a running event loop for the detail
                fetch. The selection is left unchanged.
        """
        if movie_id != self.selected_id:
            asyncio.get_running_loop()
        self.selection.select(movie_id)

    def close(self) -> None:
        self.selection.close()

    def handle_key(self, code: str) -> bool:
        return self.selection.handle_key(code)

    def set_user_rating(self, rating: float) -> None:
        """Record the star widget's value for the open movie."""
        if self.selected_id is None:
            raise ValueError("No movie is open")
        self._user_rating = float(rating)

    def add_selected_to_watchlist(self) -> WatchedEntry:
        """Confirm the open movie with the drafted rating, then close it.

        Raises:
            ValueError: Nothing loaded, no rating drafted, the rating is
                outside 1-10, or the movie is already in the watched list.
        """
        detail = self.details.detail
        if detail is None or self.details.state.status != "loaded":
            raise ValueError("No loaded movie to add")
        if self._user_rating <= 0:
            raise ValueError("Rate the movie before adding it")
        if self.watchlist.contains(detail.id):
            raise ValueError("Movie is already in the watched list")

        entry = WatchedEntry.from_detail(detail, self._user_rating)
        self.watchlist.add(entry)
        self.selection.close()
        return entry

    def remove_watched(self, movie_id: str) -> bool:
        return self.watchlist.remove(movie_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def settle(self) -> None:
        """Wait until neither slot has a fetch in flight."""
        while self.search.busy or self.details.busy:
            await asyncio.gather(self.search.wait(), self.details.wait())

    async def aclose(self) -> None:
        await self.search.aclose()
        await self.details.aclose()
        log.debug("session_closed")

    async def __aenter__(self) -> PopcornSession:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    def _reset_rating_draft(self, _: str | None) -> None:
        self._user_rating = 0.0
