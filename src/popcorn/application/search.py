"""Search controller: title query to result list, one live fetch at a time."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Literal

import structlog

from popcorn.application.fetch_slot import CancellationToken, FetchSlot
from popcorn.application.observable import Observable
from popcorn.application.selection import SelectionCoordinator
from popcorn.domain.entities.movie import CatalogError, MovieSummary
from popcorn.domain.ports.movie_catalog import MovieCatalogPort

log = structlog.get_logger(__name__)

SearchStatus = Literal["idle", "loading", "success", "error"]

DEFAULT_MIN_QUERY_LENGTH = 3


@dataclass(frozen=True)
class SearchState:
    """Snapshot of the search panel."""

    status: SearchStatus = "idle"
    query: str = ""
    results: tuple[MovieSummary, ...] = ()
    error: str = ""

    @property
    def loading(self) -> bool:
        return self.status == "loading"

    @property
    def count(self) -> int:
        return len(self.results)


class SearchController(Observable[SearchState]):
    """Drives the title search.

    State machine::

        idle --(query >= min length)--> loading --> success | error
        any  --(query >= min length)--> loading   (previous fetch cancelled)
        any  --(query <  min length)--> idle      (previous fetch cancelled)

    Only the fetch for the latest query can publish a result; superseded
    fetches are cancelled through the query slot and never surface as errors.
    """

    def __init__(
        self,
        catalog: MovieCatalogPort,
        selection: SelectionCoordinator,
        *,
        min_query_length: int = DEFAULT_MIN_QUERY_LENGTH,
    ) -> None:
        super().__init__(SearchState())
        self._catalog = catalog
        self._selection = selection
        self._min_query_length = min_query_length
        self._slot = FetchSlot("query")

    @property
    def query(self) -> str:
        return self.state.query

    def set_query(self, query: str) -> None:
        """Apply a query edit.

        Raises:
            RuntimeError: A fetch would start outside a running event loop.
                Nothing is changed in that case.
        """
        if query == self.state.query:
            return
        if len(query) >= self._min_query_length:
            asyncio.get_running_loop()  # raises before any state changes

        self._slot.cancel()

        if len(query) < self._min_query_length:
            self._set_state(SearchState(status="idle", query=query))
            return

        self._selection.close()
        self._set_state(SearchState(status="loading", query=query))
        self._slot.launch(lambda token: self._fetch(query, token))

    async def _fetch(self, query: str, token: CancellationToken) -> None:
        log.debug("search_started", query=query)
        try:
            results = await self._catalog.search(query)
        except CatalogError as exc:
            if self._slot.is_current(token):
                log.info("search_failed", query=query, error=str(exc))
                self._set_state(
                    SearchState(status="error", query=query, error=str(exc))
                )
            return
        except Exception as exc:
            if self._slot.is_current(token):
                log.warning("search_unexpected_error", query=query, exc_info=True)
                self._set_state(
                    SearchState(
                        status="error",
                        query=query,
                        error=f"Something went wrong: {exc}",
                    )
                )
            return

        if not self._slot.is_current(token):
            log.debug("search_result_discarded", query=query)
            return

        log.info("search_succeeded", query=query, count=len(results))
        self._set_state(
            SearchState(status="success", query=query, results=tuple(results))
        )

    @property
    def busy(self) -> bool:
        return self._slot.busy

    async def wait(self) -> None:
        """Wait for the in-flight search (if any) to settle."""
        await self._slot.wait()

    async def aclose(self) -> None:
        await self._slot.aclose()
