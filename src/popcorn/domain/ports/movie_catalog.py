"""Port for the external movie catalog (search + detail lookups)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from popcorn.domain.entities.movie import MovieDetail, MovieSummary


@runtime_checkable
class MovieCatalogPort(Protocol):
    """Async interface for the catalog HTTP endpoint."""

    async def search(self, query: str) -> list[MovieSummary]:
        """Search movies by title.

        Raises:
            TransportError: Non-2xx status or network failure.
            NotFoundError: The catalog reports no matches.
        """
        ...

    async def get_detail(self, movie_id: str) -> MovieDetail:
        """Fetch the full record for one movie id.

        Raises:
            TransportError: Non-2xx status or network failure.
            NotFoundError: The catalog does not know the id.
        """
        ...
