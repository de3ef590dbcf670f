"""Selection coordinator: which movie id is currently open."""

from __future__ import annotations

from typing import Optional

import structlog

from popcorn.application.observable import Observable

log = structlog.get_logger(__name__)

CANCEL_KEYS: frozenset[str] = frozenset({"Escape"})


class SelectionCoordinator(Observable[Optional[str]]):
    """Single source of truth for the open movie id.

    At most one id is open at a time. Every other component that needs to
    open or close a movie goes through :meth:`select` / :meth:`close`.
    """

    def __init__(self) -> None:
        super().__init__(None)

    @property
    def selected_id(self) -> str | None:
        return self.state

    @property
    def is_open(self) -> bool:
        return self.state is not None

    def select(self, movie_id: str) -> None:
        """Open ``movie_id``, or close it if it is already open."""
        if movie_id == self.state:
            log.debug("selection_toggled_closed", movie_id=movie_id)
            self._set_state(None)
            return
        log.debug("selection_opened", movie_id=movie_id)
        self._set_state(movie_id)

    def close(self) -> None:
        if self.state is not None:
            log.debug("selection_closed", movie_id=self.state)
        self._set_state(None)

    def handle_key(self, code: str) -> bool:
        """Close the open selection on a cancel gesture.

        Returns True when the key closed something.
        """
        if code not in CANCEL_KEYS or self.state is None:
            return False
        self.close()
        return True
