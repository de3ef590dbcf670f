"""Process-local watchlist storage (tests and throwaway sessions)."""

from __future__ import annotations

from popcorn.infrastructure.persistence.base import TextWatchlistStorage


class InMemoryWatchlistStorage(TextWatchlistStorage):
    """Keeps the serialized JSON in memory, same format as the disk adapters."""

    def __init__(self, initial: str | None = None) -> None:
        self.payload = initial
        self.writes = 0

    def _read(self) -> str | None:
        return self.payload

    def _write(self, payload: str) -> None:
        self.payload = payload
        self.writes += 1
