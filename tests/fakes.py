"""Test doubles and canned catalog records shared across the suite."""

from __future__ import annotations

import asyncio
from typing import Any

from popcorn.domain.entities.movie import MovieDetail, MovieSummary, NotFoundError

INCEPTION = MovieSummary(
    id="tt1375666",
    title="Inception",
    year="2010",
    poster_url="https://m.media-amazon.com/images/inception.jpg",
)

INCEPTION_DETAIL = MovieDetail(
    id="tt1375666",
    title="Inception",
    year="2010",
    poster_url="https://m.media-amazon.com/images/inception.jpg",
    runtime_minutes=148,
    external_rating=8.8,
    plot="A thief who steals corporate secrets through dream-sharing...",
    released="16 Jul 2010",
    actors="Leonardo DiCaprio, Joseph Gordon-Levitt, Elliot Page",
    director="Christopher Nolan",
    genre="Action, Adventure, Sci-Fi",
    runtime="148 min",
)

INTERSTELLAR_DETAIL = MovieDetail(
    id="tt0816692",
    title="Interstellar",
    year="2014",
    runtime_minutes=169,
    external_rating=8.7,
    runtime="169 min",
)


class FakeCatalog:
    """Scriptable MovieCatalogPort.

    Outcomes are keyed by query / id: a list or MovieDetail is returned, an
    exception instance is raised. Keys present in ``gates`` block until the
    gate event is set, which lets tests keep a fetch in flight.
    """

    def __init__(self) -> None:
        self.search_outcomes: dict[str, Any] = {}
        self.detail_outcomes: dict[str, Any] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.search_calls: list[str] = []
        self.detail_calls: list[str] = []
        self.cancelled: list[str] = []
        self.ignore_cancellation = False

    def gate(self, key: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[key] = event
        return event

    async def _wait_gate(self, key: str) -> None:
        gate = self.gates.get(key)
        if gate is None:
            return
        try:
            await gate.wait()
        except asyncio.CancelledError:
            self.cancelled.append(key)
            if not self.ignore_cancellation:
                raise
            await gate.wait()

    async def search(self, query: str) -> list[MovieSummary]:
        self.search_calls.append(query)
        await self._wait_gate(query)
        outcome = self.search_outcomes.get(query, NotFoundError())
        if isinstance(outcome, BaseException):
            raise outcome
        return list(outcome)

    async def get_detail(self, movie_id: str) -> MovieDetail:
        self.detail_calls.append(movie_id)
        await self._wait_gate(movie_id)
        outcome = self.detail_outcomes.get(movie_id, NotFoundError())
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
