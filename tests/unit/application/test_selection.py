"""Tests for SelectionCoordinator."""

from __future__ import annotations

from popcorn.application.selection import SelectionCoordinator


class TestSelect:
    def test_select_opens(self, selection: SelectionCoordinator) -> None:
        selection.select("tt1375666")
        assert selection.selected_id == "tt1375666"
        assert selection.is_open

    def test_same_id_twice_closes(self, selection: SelectionCoordinator) -> None:
        selection.select("tt1375666")
        selection.select("tt1375666")
        assert selection.selected_id is None
        assert not selection.is_open

    def test_other_id_switches(self, selection: SelectionCoordinator) -> None:
        selection.select("tt1375666")
        selection.select("tt0816692")
        assert selection.selected_id == "tt0816692"

    def test_close_is_unconditional(self, selection: SelectionCoordinator) -> None:
        selection.close()
        assert selection.selected_id is None
        selection.select("tt1375666")
        selection.close()
        assert selection.selected_id is None

    def test_changes_are_observable(self, selection: SelectionCoordinator) -> None:
        seen: list[str | None] = []
        selection.subscribe(seen.append)

        selection.select("a")
        selection.select("b")
        selection.select("b")

        assert seen == ["a", "b", None]


class TestHandleKey:
    def test_escape_closes_open_selection(
        self, selection: SelectionCoordinator
    ) -> None:
        selection.select("tt1375666")
        assert selection.handle_key("Escape") is True
        assert selection.selected_id is None

    def test_escape_without_selection_is_noop(
        self, selection: SelectionCoordinator
    ) -> None:
        assert selection.handle_key("Escape") is False

    def test_other_keys_ignored(self, selection: SelectionCoordinator) -> None:
        selection.select("tt1375666")
        assert selection.handle_key("Enter") is False
        assert selection.selected_id == "tt1375666"
