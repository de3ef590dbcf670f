"""Detail fetcher and the window-title surrogate it drives."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

import structlog

from popcorn.application.fetch_slot import CancellationToken, FetchSlot
from popcorn.application.observable import Observable
from popcorn.application.selection import SelectionCoordinator
from popcorn.domain.entities.movie import MovieDetail
from popcorn.domain.ports.movie_catalog import MovieCatalogPort

log = structlog.get_logger(__name__)

DetailStatus = Literal["closed", "loading", "loaded", "unavailable"]

DEFAULT_WINDOW_TITLE = "usePopcorn"
DEFAULT_DETAIL_TITLE_FORMAT = "Movie | {title}"


class TitleLease:
    """Handle returned by :meth:`WindowTitle.show`; releasing reverts the title."""

    __slots__ = ("_owner", "_released")

    def __init__(self, owner: WindowTitle) -> None:
        self._owner = owner
        self._released = False

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._owner._release(self)

    def __enter__(self) -> TitleLease:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()


class WindowTitle(Observable[str]):
    """Page/window title shown by the render layer."""

    def __init__(
        self,
        default: str = DEFAULT_WINDOW_TITLE,
        detail_format: str = DEFAULT_DETAIL_TITLE_FORMAT,
    ) -> None:
        super().__init__(default)
        self.default = default
        self._detail_format = detail_format
        self._lease: TitleLease | None = None

    @property
    def text(self) -> str:
        return self.state

    def show(self, movie_title: str) -> TitleLease:
        """Show ``movie_title`` until the returned lease is released.

        A newer lease replaces the older one; releasing a replaced lease
        does not touch the title.
        """
        if self._lease is not None:
            self._lease._released = True
        lease = TitleLease(self)
        self._lease = lease
        self._set_state(self._detail_format.format(title=movie_title))
        return lease

    def _release(self, lease: TitleLease) -> None:
        if lease is not self._lease:
            return
        self._lease = None
        self._set_state(self.default)


@dataclass(frozen=True)
class DetailState:
    """Snapshot of the detail panel."""

    status: DetailStatus = "closed"
    movie_id: Optional[str] = None
    detail: Optional[MovieDetail] = None

    @property
    def loading(self) -> bool:
        return self.status == "loading"


class DetailFetcher(Observable[DetailState]):
    """Fetches the full record for the open selection.

    Follows the selection coordinator: every change of the open id cancels
    the previous fetch, and closing the selection drops the detail and
    reverts the window title. Fetch failures go to the log only; the panel
    shows ``unavailable`` without an error message.
    """

    def __init__(
        self,
        catalog: MovieCatalogPort,
        selection: SelectionCoordinator,
        window_title: WindowTitle,
    ) -> None:
        super().__init__(DetailState())
        self._catalog = catalog
        self._title = window_title
        self._slot = FetchSlot("selection")
        self._lease: TitleLease | None = None
        self._unsubscribe = selection.subscribe(self._on_selection_changed)

    @property
    def detail(self) -> MovieDetail | None:
        return self.state.detail

    def _on_selection_changed(self, movie_id: str | None) -> None:
        self._slot.cancel()
        self._release_title()

        if not movie_id:
            self._set_state(DetailState())
            return

        try:
            self._slot.launch(lambda token: self._fetch(movie_id, token))
        except RuntimeError as exc:
            log.warning("detail_fetch_not_started", movie_id=movie_id, error=str(exc))
            self._set_state(DetailState(status="unavailable", movie_id=movie_id))
            return
        self._set_state(DetailState(status="loading", movie_id=movie_id))

    async def _fetch(self, movie_id: str, token: CancellationToken) -> None:
        log.debug("detail_fetch_started", movie_id=movie_id)
        try:
            detail = await self._catalog.get_detail(movie_id)
        except Exception as exc:
            if self._slot.is_current(token):
                log.warning(
                    "detail_fetch_failed",
                    movie_id=movie_id,
                    error=str(exc),
                    error_type=type(exc).__name__,
                )
                self._set_state(DetailState(status="unavailable", movie_id=movie_id))
            return

        if not self._slot.is_current(token):
            log.debug("detail_result_discarded", movie_id=movie_id)
            return

        self._set_state(DetailState(status="loaded", movie_id=movie_id, detail=detail))
        if detail.title:
            self._lease = self._title.show(detail.title)
        log.info("detail_loaded", movie_id=movie_id, title=detail.title)

    def _release_title(self) -> None:
        if self._lease is not None:
            self._lease.release()
            self._lease = None

    @property
    def busy(self) -> bool:
        return self._slot.busy

    async def wait(self) -> None:
        await self._slot.wait()

    async def aclose(self) -> None:
        self._unsubscribe()
        await self._slot.aclose()
        self._release_title()
