"""Cancellation tokens and single-flight fetch slots.

A slot is a logical fetch target (the search query, the open selection)
that holds at most one live fetch. Launching a new fetch on a slot cancels
the previous one first, so a superseded fetch can never publish its result.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

import structlog

log = structlog.get_logger(__name__)


class CancellationToken:
    """Marks a unit of outstanding work as stale.

    Once cancelled, a token stays cancelled. When bound to a task, cancelling
    the token also cancels the task at its next suspension point.
    """

    __slots__ = ("_cancelled", "_task")

    def __init__(self) -> None:
        self._cancelled = False
        self._task: asyncio.Task[None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def bind(self, task: asyncio.Task[None]) -> None:
        self._task = task
        if self._cancelled:
            task.cancel()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()


class FetchSlot:
    """Owns the active token for one logical fetch target."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._token: CancellationToken | None = None
        self._task: asyncio.Task[None] | None = None

    @property
    def busy(self) -> bool:
        return self._task is not None and not self._task.done()

    def is_current(self, token: CancellationToken) -> bool:
        return token is self._token and not token.cancelled

    def cancel(self) -> None:
        """Invalidate the active token (if any) without starting new work."""
        if self._token is not None and not self._token.cancelled:
            self._token.cancel()
            log.debug("fetch_slot_cancelled", slot=self.name)

    def launch(
        self, work: Callable[[CancellationToken], Awaitable[None]]
    ) -> asyncio.Task[None]:
        """Cancel the previous fetch and schedule ``work`` with a fresh token.

        Raises:
            RuntimeError: No running event loop. The slot is left untouched.
        """
        loop = asyncio.get_running_loop()
        self.cancel()
        token = CancellationToken()
        self._token = token
        task = loop.create_task(
            self._run(work, token), name=f"fetch:{self.name}"
        )
        token.bind(task)
        self._task = task
        return task

    async def _run(
        self,
        work: Callable[[CancellationToken], Awaitable[None]],
        token: CancellationToken,
    ) -> None:
        try:
            await work(token)
        except asyncio.CancelledError:
            if not token.cancelled:
                # Cancelled from outside the slot (e.g. loop shutdown).
                raise
            log.debug("fetch_superseded", slot=self.name)

    async def wait(self) -> None:
        """Wait until the current fetch (if any) has finished.

        Follows replacements: if the awaited fetch is superseded while
        waiting, waits for its successor too.
        """
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})

    async def aclose(self) -> None:
        self.cancel()
        if self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        self._task = None
