"""Minimal change-notification base for view state containers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

import structlog

log = structlog.get_logger(__name__)

S = TypeVar("S")

Listener = Callable[[S], None]


class Observable(Generic[S]):
    """Holds one immutable state snapshot and notifies listeners on change.

    Listeners run synchronously, in subscription order, with the new
    snapshot. A listener that raises is logged and skipped so one broken
    render callback cannot stall the others.
    """

    def __init__(self, initial: S) -> None:
        self._state = initial
        self._listeners: list[Listener[S]] = []

    @property
    def state(self) -> S:
        return self._state

    def subscribe(self, listener: Listener[S]) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_state(self, new_state: S) -> None:
        if new_state == self._state:
            return
        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                log.warning(
                    "state_listener_failed",
                    container=type(self).__name__,
                    exc_info=True,
                )
