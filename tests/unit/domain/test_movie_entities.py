"""Tests for movie domain entities and value parsing."""

from __future__ import annotations

import pytest

from popcorn.domain.entities.movie import (
    MovieDetail,
    NotFoundError,
    TransportError,
    WatchedEntry,
    parse_rating,
    parse_runtime_minutes,
)


class TestParseRuntimeMinutes:
    def test_minutes_suffix(self) -> None:
        assert parse_runtime_minutes("148 min") == 148

    def test_bare_number(self) -> None:
        assert parse_runtime_minutes("90") == 90
        assert parse_runtime_minutes(90) == 90

    def test_not_available(self) -> None:
        assert parse_runtime_minutes("N/A") == 0

    def test_none_and_empty(self) -> None:
        assert parse_runtime_minutes(None) == 0
        assert parse_runtime_minutes("") == 0

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_is_zero(self, raw: float) -> None:
        assert parse_runtime_minutes(raw) == 0


class TestParseRating:
    def test_decimal_string(self) -> None:
        assert parse_rating("8.8") == 8.8

    def test_numbers_pass_through(self) -> None:
        assert parse_rating(7) == 7.0

    def test_not_available(self) -> None:
        assert parse_rating("N/A") == 0.0
        assert parse_rating(None) == 0.0

    @pytest.mark.parametrize("raw", [float("nan"), float("inf"), "nan", "Infinity"])
    def test_non_finite_is_zero(self, raw: object) -> None:
        assert parse_rating(raw) == 0.0


class TestWatchedEntry:
    def test_from_detail_copies_catalog_fields(
        self, inception_detail: MovieDetail
    ) -> None:
        entry = WatchedEntry.from_detail(inception_detail, 8)

        assert entry.id == "tt1375666"
        assert entry.title == "Inception"
        assert entry.runtime_minutes == 148
        assert entry.external_rating == 8.8
        assert entry.user_rating == 8.0

    @pytest.mark.parametrize("rating", [0, 10.5, -1])
    def test_rating_out_of_range_rejected(
        self, inception_detail: MovieDetail, rating: float
    ) -> None:
        with pytest.raises(ValueError, match="user_rating"):
            WatchedEntry.from_detail(inception_detail, rating)

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValueError, match="id"):
            WatchedEntry(
                id="",
                title="x",
                year="2000",
                poster_url="",
                external_rating=0.0,
                runtime_minutes=0,
                user_rating=5,
            )

    def test_record_uses_persisted_field_names(
        self, watched_entry: WatchedEntry
    ) -> None:
        record = watched_entry.to_record()

        assert set(record) == {
            "imdbID",
            "title",
            "year",
            "poster",
            "imdbRating",
            "runtime",
            "userRating",
        }
        assert record["imdbID"] == "tt1375666"
        assert record["runtime"] == 148

    def test_from_record_restores_entry(self, watched_entry: WatchedEntry) -> None:
        assert WatchedEntry.from_record(watched_entry.to_record()) == watched_entry

    def test_from_record_missing_rating_raises(self) -> None:
        with pytest.raises(KeyError):
            WatchedEntry.from_record({"imdbID": "tt1"})


class TestErrors:
    def test_not_found_default_message(self) -> None:
        assert str(NotFoundError()) == "Movie not found!"

    def test_transport_error_keeps_status(self) -> None:
        err = TransportError("Something went wrong: Bad Gateway", status_code=502)
        assert err.status_code == 502
        assert "Bad Gateway" in str(err)
