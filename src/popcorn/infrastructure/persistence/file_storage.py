"""Watchlist storage in a single JSON file."""

from __future__ import annotations

import os
from pathlib import Path

from popcorn.domain.entities.movie import PersistenceError
from popcorn.infrastructure.persistence.base import TextWatchlistStorage


class JsonFileWatchlistStorage(TextWatchlistStorage):
    """Stores the watched list as a JSON array in ``path``.

    Writes go to a sibling temp file that is then renamed over the target,
    so a crash mid-write leaves the previous content intact. The parent
    directory is created on first write.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(str(e)) from e

    def _write(self, payload: str) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, encoding="utf-8")
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceError(str(e)) from e
