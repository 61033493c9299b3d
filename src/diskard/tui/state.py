"""Selection and drill-down state for the interactive session.

Nothing in this module touches the terminal.  ``AppState`` holds the
top-level finding list and the current mode; ``DrillDownState`` holds
the navigation stack while the user inspects one finding's directory.
Both are owned and mutated by the single UI loop only.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from diskard.core.cleaner import clean, clean_paths
from diskard.models.clean_result import CleanResult, DeleteMode
from diskard.models.finding import Finding
from diskard.utils import bytes_to_human, dir_size

log = logging.getLogger(__name__)


class AppMode(Enum):
    BROWSE = auto()
    CONFIRM = auto()
    DRILL_DOWN = auto()
    CONFIRM_DRILL_DOWN = auto()


@dataclass(slots=True)
class FindingItem:
    finding: Finding
    checked: bool = False


@dataclass(slots=True)
class DirEntry:
    """One immediate child of the directory being inspected."""

    name: str
    path: Path
    size_bytes: int
    is_dir: bool
    checked: bool = False


def read_entries(directory: Path) -> list[DirEntry]:
    """List the immediate children of *directory*, largest first.

    Sub-directory sizes are computed recursively; symlinks are reported
    as files and never followed.

    Raises:
        OSError: if the directory itself cannot be read.
    """
    entries: list[DirEntry] = []
    with os.scandir(directory) as it:
        for item in it:
            path = Path(item.path)
            try:
                is_dir = item.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            if is_dir:
                size = dir_size(path)
            else:
                try:
                    size = item.stat(follow_symlinks=False).st_size
                except OSError:
                    size = 0
            entries.append(DirEntry(name=item.name, path=path, size_bytes=size, is_dir=is_dir))
    entries.sort(key=lambda e: e.size_bytes, reverse=True)
    return entries


def _clamp(index: int, length: int) -> int:
    if length == 0:
        return 0
    return max(0, min(index, length - 1))


class DrillDownState:
    """Navigation inside one finding's directory tree.

    ``stack`` holds the visited directories, the finding's root first.
    It never becomes empty: ``go_back()`` refuses to pop the root.
    """

    def __init__(self, root: Path, entries: list[DirEntry]) -> None:
        self.stack: list[Path] = [root]
        self.entries: list[DirEntry] = entries
        self.selected = 0

    @classmethod
    def open(cls, root: Path) -> DrillDownState:
        """Start inspecting *root*.

        Raises:
            OSError: if *root* cannot be listed.
        """
        return cls(root, read_entries(root))

    # -- Accessors --

    @property
    def current_path(self) -> Path:
        return self.stack[-1]

    @property
    def depth(self) -> int:
        return len(self.stack)

    @property
    def highlighted(self) -> DirEntry | None:
        if not self.entries:
            return None
        return self.entries[self.selected]

    def checked_count(self) -> int:
        return sum(1 for e in self.entries if e.checked)

    def checked_size(self) -> int:
        return sum(e.size_bytes for e in self.entries if e.checked)

    def checked_paths(self) -> list[tuple[Path, int]]:
        return [(e.path, e.size_bytes) for e in self.entries if e.checked]

    def total_size(self) -> int:
        return sum(e.size_bytes for e in self.entries)

    # -- Selection --

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def move_down(self) -> None:
        if self.selected + 1 < len(self.entries):
            self.selected += 1

    def toggle_selected(self) -> None:
        entry = self.highlighted
        if entry is not None:
            entry.checked = not entry.checked

    def select_all(self) -> None:
        all_checked = all(e.checked for e in self.entries)
        for entry in self.entries:
            entry.checked = not all_checked

    # -- Navigation --

    def drill_into(self) -> bool:
        """Open the highlighted sub-directory.

        Returns False, leaving the listing untouched, when the highlighted
        entry is not a directory or cannot be read.
        """
        entry = self.highlighted
        if entry is None or not entry.is_dir:
            return False
        try:
            children = read_entries(entry.path)
        except OSError as e:
            log.info("Cannot read %s: %s", entry.path, e)
            return False
        self.stack.append(entry.path)
        self.entries = children
        self.selected = 0
        return True

    def go_back(self) -> bool:
        """Return to the parent directory.

        Returns False without any change at the root, or when the parent
        cannot be re-read.  The parent is listed before the stack is
        popped so a failure never strands the user.
        """
        if len(self.stack) <= 1:
            return False
        parent = self.stack[-2]
        try:
            children = read_entries(parent)
        except OSError as e:
            log.info("Cannot read %s: %s", parent, e)
            return False
        left = self.stack.pop()
        self.entries = children
        self.selected = next((i for i, e in enumerate(children) if e.path == left), 0)
        return True

    def remove_paths(self, paths: set[Path]) -> None:
        """Drop entries whose path is in *paths* and keep ``selected`` valid."""
        self.entries = [e for e in self.entries if e.path not in paths]
        self.selected = _clamp(self.selected, len(self.entries))


_VERBS = {
    DeleteMode.TRASH: ("Moved", "to Trash"),
    DeleteMode.PERMANENT: ("Deleted", "permanently"),
    DeleteMode.DRY_RUN: ("Would delete", "(dry run)"),
}


def _summary(result: CleanResult, mode: DeleteMode) -> str:
    verb, suffix = _VERBS[mode]
    message = f" {verb} {result.deleted_count} items {suffix}, freed {bytes_to_human(result.freed_bytes)}"
    if result.errors:
        message += f", {len(result.errors)} failed"
    return message


class AppState:
    """Top-level state machine of the interactive cleaner.

    BROWSE <-> CONFIRM handles deleting checked findings.  From BROWSE the
    user may enter DRILL_DOWN, which has its own CONFIRM_DRILL_DOWN for
    deleting checked entries of the current listing.
    """

    def __init__(self, findings: list[Finding], delete_mode: DeleteMode = DeleteMode.TRASH) -> None:
        self.findings: list[FindingItem] = [FindingItem(f) for f in findings]
        self.delete_mode = delete_mode
        self.selected = 0
        self.mode = AppMode.BROWSE
        self.drill_down: DrillDownState | None = None
        self.status_message: str | None = None
        self.should_quit = False
        self.show_help = False
        self.last_result: CleanResult | None = None

    # -- Accessors --

    @property
    def highlighted(self) -> FindingItem | None:
        if not self.findings:
            return None
        return self.findings[self.selected]

    def checked_count(self) -> int:
        return sum(1 for item in self.findings if item.checked)

    def checked_size(self) -> int:
        return sum(item.finding.size_bytes for item in self.findings if item.checked)

    def checked_findings(self) -> list[Finding]:
        return [item.finding for item in self.findings if item.checked]

    def total_reclaimable(self) -> int:
        return sum(item.finding.size_bytes for item in self.findings)

    # -- Browse selection --

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1

    def move_down(self) -> None:
        if self.selected + 1 < len(self.findings):
            self.selected += 1

    def toggle_selected(self) -> None:
        item = self.highlighted
        if item is not None:
            item.checked = not item.checked

    def select_all(self) -> None:
        all_checked = all(item.checked for item in self.findings)
        for item in self.findings:
            item.checked = not all_checked

    # -- Drill-down --

    def enter_drill_down(self) -> bool:
        """Inspect the highlighted finding's directory.

        Stays in BROWSE with a status message when the path is not an
        existing directory or cannot be listed.
        """
        item = self.highlighted
        if item is None:
            return False
        path = item.finding.path
        if not path.is_dir():
            self.status_message = " Not a directory."
            return False
        try:
            self.drill_down = DrillDownState.open(path)
        except OSError as e:
            log.info("Cannot read %s: %s", path, e)
            self.status_message = f" Cannot read directory: {e.strerror or e}"
            return False
        self.mode = AppMode.DRILL_DOWN
        return True

    def exit_drill_down(self) -> None:
        self.drill_down = None
        self.mode = AppMode.BROWSE

    def drill_into(self) -> bool:
        state = self.drill_down
        if state is None:
            return False
        if state.drill_into():
            return True
        entry = state.highlighted
        self.status_message = " Not a directory." if entry is not None and not entry.is_dir else " Cannot read directory."
        return False

    def go_back(self) -> None:
        """Go up one level, leaving drill-down when already at the root."""
        state = self.drill_down
        if state is None:
            return
        if state.depth <= 1:
            self.exit_drill_down()
        elif not state.go_back():
            self.status_message = " Cannot read parent directory."

    # -- Deletion --

    def request_delete(self) -> None:
        """Ask for confirmation before deleting what is checked."""
        if self.mode is AppMode.BROWSE:
            if self.checked_count() > 0:
                self.mode = AppMode.CONFIRM
                return
        elif self.mode is AppMode.DRILL_DOWN and self.drill_down is not None:
            if self.drill_down.checked_count() > 0:
                self.mode = AppMode.CONFIRM_DRILL_DOWN
                return
        else:
            return
        self.status_message = " No items selected. Use Space to select."

    def confirm(self) -> None:
        if self.mode is AppMode.CONFIRM:
            self._delete_checked_findings()
        elif self.mode is AppMode.CONFIRM_DRILL_DOWN:
            self._delete_checked_entries()

    def cancel(self) -> None:
        if self.mode is AppMode.CONFIRM:
            self.mode = AppMode.BROWSE
        elif self.mode is AppMode.CONFIRM_DRILL_DOWN:
            self.mode = AppMode.DRILL_DOWN

    def _delete_checked_findings(self) -> None:
        to_delete = self.checked_findings()
        result = clean(to_delete, self.delete_mode)
        failed = result.failed_paths
        # Failed findings stay listed and checked.
        self.findings = [
            item for item in self.findings if not (item.checked and str(item.finding.path) not in failed)
        ]
        self.selected = _clamp(self.selected, len(self.findings))
        self.last_result = result
        self.status_message = _summary(result, self.delete_mode)
        self.mode = AppMode.BROWSE
        if not self.findings:
            self.should_quit = True

    def _delete_checked_entries(self) -> None:
        state = self.drill_down
        if state is None:
            self.mode = AppMode.BROWSE
            return
        to_delete = state.checked_paths()
        result = clean_paths(to_delete, self.delete_mode)
        failed = result.failed_paths
        state.remove_paths({path for path, _ in to_delete if str(path) not in failed})
        self.last_result = result
        self.status_message = _summary(result, self.delete_mode)
        self.mode = AppMode.DRILL_DOWN

    # -- Session --

    def clear_status(self) -> None:
        self.status_message = None

    def toggle_help(self) -> None:
        self.show_help = not self.show_help

    def quit(self) -> None:
        self.should_quit = True
