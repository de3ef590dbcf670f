"""OMDb API client: async httpx implementation of MovieCatalogPort."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from popcorn.domain.entities.movie import (
    MovieDetail,
    MovieSummary,
    NotFoundError,
    TransportError,
    parse_rating,
    parse_runtime_minutes,
)

log = structlog.get_logger(__name__)

DEFAULT_BASE_URL = "https://www.omdbapi.com/"

_SEARCH_FAILED = "Something went wrong: {reason}"
_DETAIL_FAILED = "Movie details not found"


def _text(value: Any) -> str:
    return "" if value is None else str(value)


class HttpxOmdbClient:
    """Async OMDb client using a shared httpx.AsyncClient.

    Implements ``MovieCatalogPort`` from domain.ports.movie_catalog.
    Cancellation (``asyncio.CancelledError``) passes through untouched.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get(self, failure_message: str, **params: Any) -> dict[str, Any]:
        """GET the endpoint and return the parsed JSON object.

        ``failure_message`` may reference ``{reason}`` (status text or the
        network error).
        """
        try:
            resp = await self._http.get(
                self._base_url, params={"apikey": self._api_key, **params}
            )
        except httpx.HTTPError as exc:
            log.warning("omdb_network_error", params=params, error=str(exc))
            reason = str(exc) or type(exc).__name__
            raise TransportError(failure_message.format(reason=reason)) from exc

        if not resp.is_success:
            log.warning(
                "omdb_http_error", status=resp.status_code, params=params
            )
            raise TransportError(
                failure_message.format(reason=resp.reason_phrase),
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            log.warning("omdb_invalid_json", params=params)
            raise TransportError(
                failure_message.format(reason="invalid response body"),
                status_code=resp.status_code,
            ) from exc
        if not isinstance(data, dict):
            raise TransportError(
                failure_message.format(reason="unexpected response shape"),
                status_code=resp.status_code,
            )
        return data

    @staticmethod
    def _is_not_found(data: dict[str, Any]) -> bool:
        return data.get("Response") == "False"

    @staticmethod
    def _to_summary(item: dict[str, Any]) -> MovieSummary:
        return MovieSummary(
            id=_text(item.get("imdbID")),
            title=_text(item.get("Title")),
            year=_text(item.get("Year")),
            poster_url=_text(item.get("Poster")),
        )

    @staticmethod
    def _to_detail(movie_id: str, data: dict[str, Any]) -> MovieDetail:
        runtime = _text(data.get("Runtime"))
        return MovieDetail(
            id=_text(data.get("imdbID")) or movie_id,
            title=_text(data.get("Title")),
            year=_text(data.get("Year")),
            poster_url=_text(data.get("Poster")),
            runtime_minutes=parse_runtime_minutes(runtime),
            external_rating=parse_rating(data.get("imdbRating")),
            plot=_text(data.get("Plot")),
            released=_text(data.get("Released")),
            actors=_text(data.get("Actors")),
            director=_text(data.get("Director")),
            genre=_text(data.get("Genre")),
            runtime=runtime,
        )

    # ------------------------------------------------------------------
    # Public API (MovieCatalogPort)
    # ------------------------------------------------------------------

    async def search(self, query: str) -> list[MovieSummary]:
        """Search movies by title (``s=`` parameter)."""
        data = await self._get(_SEARCH_FAILED, s=query)
        if self._is_not_found(data):
            log.debug("omdb_search_not_found", query=query, error=data.get("Error"))
            raise NotFoundError()

        items = data.get("Search") or []
        return [self._to_summary(item) for item in items if isinstance(item, dict)]

    async def get_detail(self, movie_id: str) -> MovieDetail:
        """Fetch one movie by IMDb id (``i=`` parameter)."""
        data = await self._get(_DETAIL_FAILED, i=movie_id)
        if self._is_not_found(data):
            log.debug("omdb_detail_not_found", movie_id=movie_id, error=data.get("Error"))
            raise NotFoundError(_DETAIL_FAILED)
        return self._to_detail(movie_id, data)
