"""Shared load/save logic for watchlist storage adapters."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

import structlog

from popcorn.domain.entities.movie import PersistenceError, WatchedEntry

log = structlog.get_logger(__name__)

DEFAULT_STORAGE_KEY = "watched"


def serialize_entries(entries: Sequence[WatchedEntry]) -> str:
    """Serialize entries to the persisted JSON array."""
    return json.dumps([entry.to_record() for entry in entries])


def deserialize_entries(raw: str) -> list[WatchedEntry]:
    """Parse the persisted JSON array.

    Records that are not objects or miss required fields are skipped.

    Raises:
        ValueError: ``raw`` is not JSON or not a JSON array.
    """
    data: Any = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")

    entries: list[WatchedEntry] = []
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            log.warning("watchlist_record_skipped", index=index, reason="not an object")
            continue
        try:
            entries.append(WatchedEntry.from_record(record))
        except (KeyError, TypeError, ValueError) as e:
            log.warning("watchlist_record_skipped", index=index, reason=str(e))
    return entries


class TextWatchlistStorage:
    """Base for adapters that store the collection as one JSON string.

    Subclasses implement ``_read`` / ``_write`` and raise
    :class:`PersistenceError` on backend failure. ``load`` and ``save`` never
    raise.
    """

    def _read(self) -> str | None:
        raise NotImplementedError

    def _write(self, payload: str) -> None:
        raise NotImplementedError

    def load(self) -> list[WatchedEntry]:
        try:
            raw = self._read()
        except PersistenceError as e:
            log.error("watchlist_read_failed", storage=type(self).__name__, error=str(e))
            return []
        if raw is None:
            return []
        try:
            return deserialize_entries(raw)
        except ValueError as e:
            log.error(
                "watchlist_deserialize_error",
                storage=type(self).__name__,
                error=str(e),
            )
            return []

    def save(self, entries: Sequence[WatchedEntry]) -> None:
        try:
            self._write(serialize_entries(entries))
        except (PersistenceError, TypeError, ValueError) as e:
            log.error("watchlist_write_failed", storage=type(self).__name__, error=str(e))
            return
        log.debug("watchlist_saved", storage=type(self).__name__, count=len(entries))
