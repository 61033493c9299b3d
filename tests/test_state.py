"""Tests for the selection and drill-down state machine."""

from __future__ import annotations

import os

import pytest

import diskard.core.cleaner as cleaner
from diskard.models.clean_result import DeleteMode
from diskard.tui.state import AppMode, AppState, DrillDownState, read_entries
from tests.factories import make_finding, write_file


@pytest.fixture
def tree(tmp_path):
    """root/ with a 300-byte sub-directory, a 200-byte file and a 100-byte file."""
    root = tmp_path / "root"
    write_file(root / "sub" / "inner.bin", 300)
    write_file(root / "sub" / "deeper" / "x.bin", 0)
    write_file(root / "medium.bin", 200)
    write_file(root / "small.bin", 100)
    return root


class TestReadEntries:
    def test_sorted_by_size(self, tree):
        entries = read_entries(tree)
        assert [e.name for e in entries] == ["sub", "medium.bin", "small.bin"]
        assert [e.size_bytes for e in entries] == [300, 200, 100]
        assert entries[0].is_dir
        assert not entries[1].is_dir

    def test_symlink_is_not_a_directory(self, tree, tmp_path):
        os.symlink(tree / "sub", tree / "link")
        entry = next(e for e in read_entries(tree) if e.name == "link")
        assert not entry.is_dir

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            read_entries(tmp_path / "nope")


class TestDrillDownState:
    def test_open(self, tree):
        state = DrillDownState.open(tree)
        assert state.stack == [tree]
        assert state.current_path == tree
        assert state.selected == 0
        assert state.total_size() == 600

    def test_go_back_at_root_is_noop(self, tree):
        state = DrillDownState.open(tree)
        state.move_down()
        entries_before = list(state.entries)
        assert state.go_back() is False
        assert state.stack == [tree]
        assert state.entries == entries_before
        assert state.selected == 1

    def test_drill_into_and_back(self, tree):
        state = DrillDownState.open(tree)
        assert state.drill_into() is True
        assert state.current_path == tree / "sub"
        assert state.selected == 0
        assert [e.name for e in state.entries] == ["inner.bin", "deeper"]
        assert state.go_back() is True
        assert state.current_path == tree
        assert state.highlighted.name == "sub"

    def test_drill_into_file_refused(self, tree):
        state = DrillDownState.open(tree)
        state.move_down()
        assert state.drill_into() is False
        assert state.stack == [tree]

    def test_drill_into_unreadable_keeps_listing(self, tree):
        state = DrillDownState.open(tree)
        state.entries[0].path = tree / "vanished"
        before = list(state.entries)
        assert state.drill_into() is False
        assert state.entries == before
        assert state.stack == [tree]

    def test_go_back_unreadable_parent_keeps_listing(self, tree):
        state = DrillDownState.open(tree)
        state.drill_into()
        state.stack[0] = tree / "vanished"
        before = list(state.entries)
        assert state.go_back() is False
        assert state.entries == before
        assert len(state.stack) == 2

    def test_move_bounds(self, tree):
        state = DrillDownState.open(tree)
        state.move_up()
        assert state.selected == 0
        for _ in range(10):
            state.move_down()
        assert state.selected == 2

    def test_toggle_and_accessors(self, tree):
        state = DrillDownState.open(tree)
        state.toggle_selected()
        state.move_down()
        state.move_down()
        state.toggle_selected()
        assert state.checked_count() == 2
        assert state.checked_size() == 400
        assert state.checked_paths() == [(tree / "sub", 300), (tree / "small.bin", 100)]

    def test_select_all_toggles(self, tree):
        state = DrillDownState.open(tree)
        state.toggle_selected()
        state.select_all()
        assert all(e.checked for e in state.entries)
        state.select_all()
        assert not any(e.checked for e in state.entries)

    def test_remove_paths_clamps(self, tree):
        state = DrillDownState.open(tree)
        state.move_down()
        state.move_down()
        state.remove_paths({tree / "small.bin"})
        assert state.selected == 1
        state.remove_paths({e.path for e in state.entries})
        assert state.entries == []
        assert state.selected == 0
        assert state.highlighted is None


class TestAppStateBrowse:
    def test_toggle_and_select_all(self):
        state = AppState([make_finding("/a", size=1), make_finding("/b", size=2)])
        state.toggle_selected()
        assert state.checked_count() == 1
        state.select_all()
        assert state.checked_count() == 2
        assert state.checked_size() == 3
        state.select_all()
        assert state.checked_count() == 0

    def test_request_delete_without_selection(self):
        state = AppState([make_finding("/a")])
        state.request_delete()
        assert state.mode is AppMode.BROWSE
        assert state.status_message == " No items selected. Use Space to select."

    def test_cancel_returns_to_browse(self):
        state = AppState([make_finding("/a")])
        state.toggle_selected()
        state.request_delete()
        assert state.mode is AppMode.CONFIRM
        state.cancel()
        assert state.mode is AppMode.BROWSE
        assert state.checked_count() == 1

    def test_confirm_deletes_checked(self, tmp_path):
        keep = write_file(tmp_path / "keep.bin", 10)
        drop = write_file(tmp_path / "drop.bin", 20)
        state = AppState(
            [make_finding(drop, size=20), make_finding(keep, size=10)], delete_mode=DeleteMode.PERMANENT
        )
        state.toggle_selected()
        state.request_delete()
        state.confirm()
        assert state.mode is AppMode.BROWSE
        assert [item.finding.path for item in state.findings] == [keep]
        assert not drop.exists()
        assert keep.exists()
        assert state.last_result.freed_bytes == 20
        assert not state.should_quit

    def test_selection_clamped_after_delete(self, tmp_path):
        files = [write_file(tmp_path / f"{i}.bin", 10) for i in range(3)]
        state = AppState([make_finding(f, size=10) for f in files], delete_mode=DeleteMode.PERMANENT)
        state.move_down()
        state.move_down()
        state.toggle_selected()
        state.request_delete()
        state.confirm()
        assert len(state.findings) == 2
        assert state.selected == 1

    def test_empty_list_quits(self, tmp_path):
        f = write_file(tmp_path / "only.bin", 10)
        state = AppState([make_finding(f, size=10)], delete_mode=DeleteMode.PERMANENT)
        state.select_all()
        state.request_delete()
        state.confirm()
        assert state.findings == []
        assert state.selected == 0
        assert state.should_quit

    def test_failed_delete_stays_listed(self, tmp_path, monkeypatch):
        f = write_file(tmp_path / "stuck.bin", 10)

        def _fail(path):
            raise OSError("trash full")

        monkeypatch.setattr(cleaner, "send2trash", _fail)
        state = AppState([make_finding(f, size=10)])
        state.toggle_selected()
        state.request_delete()
        state.confirm()
        assert len(state.findings) == 1
        assert state.findings[0].checked
        assert "1 failed" in state.status_message
        assert not state.should_quit


class TestAppStateDrillDown:
    def test_enter_requires_directory(self, tmp_path):
        f = write_file(tmp_path / "file.bin", 10)
        state = AppState([make_finding(f, size=10)])
        assert state.enter_drill_down() is False
        assert state.mode is AppMode.BROWSE
        assert state.status_message == " Not a directory."

    def test_enter_unreadable_stays_in_browse(self, tree, monkeypatch):
        def _denied(directory):
            raise PermissionError(13, "Permission denied", str(directory))

        monkeypatch.setattr("diskard.tui.state.read_entries", _denied)
        state = AppState([make_finding(tree, size=600)])
        assert state.enter_drill_down() is False
        assert state.mode is AppMode.BROWSE
        assert state.drill_down is None
        assert state.status_message.startswith(" Cannot read directory")

    def test_go_back_unreadable_parent_sets_status(self, tree):
        state = AppState([make_finding(tree, size=600)])
        state.enter_drill_down()
        state.drill_into()
        state.drill_down.stack[0] = tree / "vanished"
        state.go_back()
        assert state.mode is AppMode.DRILL_DOWN
        assert state.status_message == " Cannot read parent directory."
        assert len(state.drill_down.stack) == 2

    def test_enter_and_exit(self, tree):
        state = AppState([make_finding(tree, size=600)])
        assert state.enter_drill_down() is True
        assert state.mode is AppMode.DRILL_DOWN
        assert state.drill_down.current_path == tree
        state.go_back()
        assert state.mode is AppMode.BROWSE
        assert state.drill_down is None

    def test_go_back_pops_before_exiting(self, tree):
        state = AppState([make_finding(tree, size=600)])
        state.enter_drill_down()
        state.drill_into()
        state.go_back()
        assert state.mode is AppMode.DRILL_DOWN
        assert state.drill_down.current_path == tree

    def test_drill_into_file_sets_status(self, tree):
        state = AppState([make_finding(tree, size=600)])
        state.enter_drill_down()
        state.drill_down.move_down()
        assert state.drill_into() is False
        assert state.status_message == " Not a directory."

    def test_delete_checked_entries(self, tree):
        state = AppState([make_finding(tree, size=600)], delete_mode=DeleteMode.PERMANENT)
        state.enter_drill_down()
        state.drill_down.move_down()
        state.drill_down.toggle_selected()
        state.request_delete()
        assert state.mode is AppMode.CONFIRM_DRILL_DOWN
        state.confirm()
        assert state.mode is AppMode.DRILL_DOWN
        assert [e.name for e in state.drill_down.entries] == ["sub", "small.bin"]
        assert not (tree / "medium.bin").exists()
        assert state.last_result.freed_bytes == 200

    def test_cancel_returns_to_drill_down(self, tree):
        state = AppState([make_finding(tree, size=600)])
        state.enter_drill_down()
        state.drill_down.toggle_selected()
        state.request_delete()
        state.cancel()
        assert state.mode is AppMode.DRILL_DOWN
        assert (tree / "sub").exists()

    def test_request_delete_without_selection(self, tree):
        state = AppState([make_finding(tree, size=600)])
        state.enter_drill_down()
        state.request_delete()
        assert state.mode is AppMode.DRILL_DOWN
        assert state.status_message == " No items selected. Use Space to select."
