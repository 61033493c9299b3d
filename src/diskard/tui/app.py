"""Textual front end for the interactive cleaner."""

from __future__ import annotations

import shutil
from pathlib import Path

from rich.markup import escape
from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import DataTable, Static

from diskard.models.clean_result import DeleteMode
from diskard.models.finding import Finding, RiskLevel
from diskard.tui.state import AppMode, AppState
from diskard.utils import bytes_to_human, home_dir

_RISK_COLORS = {
    RiskLevel.SAFE: "#b5bd68",
    RiskLevel.MODERATE: "#f0c674",
    RiskLevel.RISKY: "#cc6666",
}

_BAR_WIDTH = 30


class HelpOverlay(ModalScreen[None]):
    CSS = """
    HelpOverlay {
        align: center middle;
        background: rgba(0,0,0,0.45);
    }
    #help-box {
        width: 64;
        height: auto;
        background: #282a2e;
        border: solid #81a2be;
        padding: 1 2;
        color: #c5c8c6;
    }
    """

    def compose(self) -> ComposeResult:
        content = "\n".join(
            [
                "[b #81a2be]Findings[/]",
                "  j/k or arrows: Move",
                "  Space: Toggle item",
                "  a: Select / deselect all",
                "  l / Right: Inspect directory",
                "  Enter: Delete checked items",
                "",
                "[b #81a2be]Inspect[/]",
                "  l / Right / Enter: Open directory",
                "  h / Left: Parent directory",
                "  d: Delete checked entries",
                "  q / Esc: Back to findings",
                "",
                "[b #81a2be]Confirm[/]",
                "  y / Enter: Delete",
                "  n / Esc: Cancel",
                "",
                "[b #81a2be]Other[/]",
                "  ?: Toggle help",
                "  q / Esc / Ctrl+C: Quit",
            ]
        )
        yield Static(content, id="help-box")

    def on_key(self, event: events.Key) -> None:
        event.stop()
        if event.key in {"escape", "q", "question_mark"}:
            self.dismiss()


class _ListTable(DataTable, can_focus=False):
    """Row cursor follows the state; keys are handled by the app."""


class DiskardApp(App[None]):
    CSS = """
    #app-grid {
        height: 100%;
    }
    #header-row, #usage-row {
        height: 1;
        padding: 0 1;
    }
    #title-row {
        height: 1;
        padding: 0 1;
        color: #81a2be;
    }
    #content-table {
        height: 1fr;
    }
    #confirm-box {
        height: auto;
        border: solid #cc6666;
        padding: 0 1;
        display: none;
    }
    #status-row {
        height: 1;
        color: #969896;
    }
    """

    BINDINGS = [Binding("ctrl+c", "quit", "Quit", show=False, priority=True)]

    def __init__(self, state: AppState, disk_path: Path | None = None) -> None:
        super().__init__()
        self.state = state
        self.disk_path = disk_path or home_dir() or Path("/")
        self._disk: tuple[int, int, int] | None = None

    def compose(self) -> ComposeResult:
        yield Container(
            Static(id="header-row"),
            Static(id="usage-row"),
            Static(id="title-row"),
            _ListTable(id="content-table"),
            Static(id="confirm-box"),
            Static(id="status-row"),
            id="app-grid",
        )

    def on_mount(self) -> None:
        table = self.query_one("#content-table", DataTable)
        table.cursor_type = "row"
        table.zebra_stripes = True
        self._read_disk_usage()
        self._refresh_all()

    def _read_disk_usage(self) -> None:
        try:
            usage = shutil.disk_usage(self.disk_path)
        except OSError:
            self._disk = None
            return
        self._disk = (usage.total, usage.used, usage.free)

    # -- Rendering --

    def _refresh_all(self) -> None:
        self._render_header()
        self._render_table()
        self._render_confirm()
        self._render_status()

    def _render_header(self) -> None:
        state = self.state
        header = (
            "[bold #8abeb7]diskard[/]"
            f"    [#f0c674]Reclaimable:[/] [bold]{bytes_to_human(state.total_reclaimable())}[/]"
            f"    [#f0c674]Selected:[/] [bold]{bytes_to_human(state.checked_size())}[/]"
            f" ({state.checked_count()} items)"
        )
        self.query_one("#header-row", Static).update(Text.from_markup(header))

        if self._disk is None:
            usage = "[#969896]Disk usage unavailable[/]"
        else:
            total, used, free = self._disk
            usage = (
                f"{_usage_bar(used, total)}  {bytes_to_human(used)} used of {bytes_to_human(total)}"
                f"  [#b5bd68]{bytes_to_human(free)} free[/]"
            )
        self.query_one("#usage-row", Static).update(Text.from_markup(usage))

    def _render_table(self) -> None:
        table = self.query_one("#content-table", DataTable)
        table.clear(columns=True)
        title = self.query_one("#title-row", Static)
        state = self.state
        drill = state.drill_down

        if state.mode in (AppMode.DRILL_DOWN, AppMode.CONFIRM_DRILL_DOWN) and drill is not None:
            title.update(
                Text(
                    f"{drill.current_path}  ({len(drill.entries)} entries, "
                    f"{bytes_to_human(drill.checked_size())} of {bytes_to_human(drill.total_size())} selected)"
                )
            )
            table.add_columns("", "SIZE", "NAME")
            for entry in drill.entries:
                name = f"{entry.name}/" if entry.is_dir else entry.name
                table.add_row(
                    _checkbox(entry.checked),
                    Text(bytes_to_human(entry.size_bytes), justify="right"),
                    Text(name, style="bold #81a2be" if entry.is_dir else ""),
                )
            selected = drill.selected
        else:
            title.update(Text(f"Findings ({len(state.findings)})"))
            table.add_columns("", "SIZE", "RISK", "DESCRIPTION")
            for item in state.findings:
                table.add_row(
                    _checkbox(item.checked),
                    Text(bytes_to_human(item.finding.size_bytes), justify="right"),
                    _risk_text(item.finding),
                    Text(item.finding.description),
                )
            selected = state.selected

        if table.row_count:
            table.move_cursor(row=selected, animate=False)

    def _render_confirm(self) -> None:
        box = self.query_one("#confirm-box", Static)
        state = self.state
        if state.mode is AppMode.CONFIRM:
            count, size = state.checked_count(), state.checked_size()
        elif state.mode is AppMode.CONFIRM_DRILL_DOWN and state.drill_down is not None:
            count, size = state.drill_down.checked_count(), state.drill_down.checked_size()
        else:
            box.display = False
            return
        action = {
            DeleteMode.TRASH: "Move to Trash",
            DeleteMode.PERMANENT: "Permanently delete",
            DeleteMode.DRY_RUN: "Simulate deleting",
        }[state.delete_mode]
        box.update(
            Text.from_markup(
                f"[bold]{action} {count} items ({bytes_to_human(size)})?[/]"
                "   [#b5bd68]y/Enter[/] confirm   [#cc6666]n/Esc[/] cancel"
            )
        )
        box.display = True

    def _render_status(self) -> None:
        state = self.state
        if state.status_message:
            status = f"[bold #f0c674]{escape(state.status_message)}[/]"
        elif state.mode is AppMode.DRILL_DOWN:
            status = " j/k move | space toggle | a all | l open | h back | d delete | q back | ? help"
        elif state.mode is AppMode.BROWSE:
            status = " j/k move | space toggle | a all | l inspect | enter delete | q quit | ? help"
        else:
            status = ""
        self.query_one("#status-row", Static).update(Text.from_markup(status))

    # -- Input --

    def _show_help(self) -> None:
        self.state.show_help = True

        def closed(_: None) -> None:
            self.state.show_help = False

        self.push_screen(HelpOverlay(), closed)

    def on_key(self, event: events.Key) -> None:
        key = event.key
        state = self.state
        state.clear_status()

        if key == "question_mark":
            self._show_help()
        elif state.mode in (AppMode.CONFIRM, AppMode.CONFIRM_DRILL_DOWN):
            if key in {"y", "enter"}:
                state.confirm()
            elif key in {"n", "escape"}:
                state.cancel()
        elif state.mode is AppMode.DRILL_DOWN:
            self._drill_down_key(key)
        else:
            self._browse_key(key)

        if state.should_quit:
            self.exit()
            return
        self._refresh_all()

    def _browse_key(self, key: str) -> None:
        state = self.state
        if key in {"q", "escape"}:
            state.quit()
        elif key in {"j", "down"}:
            state.move_down()
        elif key in {"k", "up"}:
            state.move_up()
        elif key == "space":
            state.toggle_selected()
        elif key == "a":
            state.select_all()
        elif key in {"l", "right"}:
            state.enter_drill_down()
        elif key == "enter":
            state.request_delete()

    def _drill_down_key(self, key: str) -> None:
        state = self.state
        drill = state.drill_down
        if drill is None:
            state.exit_drill_down()
            return
        if key in {"q", "escape"}:
            state.exit_drill_down()
        elif key in {"h", "left"}:
            state.go_back()
        elif key in {"j", "down"}:
            drill.move_down()
        elif key in {"k", "up"}:
            drill.move_up()
        elif key == "space":
            drill.toggle_selected()
        elif key == "a":
            drill.select_all()
        elif key in {"l", "right", "enter"}:
            state.drill_into()
        elif key == "d":
            state.request_delete()


def _checkbox(checked: bool) -> Text:
    return Text("[x]", style="bold #b5bd68") if checked else Text("[ ]", style="#969896")


def _risk_text(finding: Finding) -> Text:
    return Text(str(finding.risk), style=_RISK_COLORS[finding.risk])


def _usage_bar(used: int, total: int) -> str:
    ratio = used / total if total else 0.0
    filled = round(ratio * _BAR_WIDTH)
    color = "#cc6666" if ratio > 0.9 else "#f0c674" if ratio > 0.75 else "#b5bd68"
    return f"[{color}]{'█' * filled}[/][#373b41]{'░' * (_BAR_WIDTH - filled)}[/] {ratio:.0%}"


def run(findings: list[Finding], delete_mode: DeleteMode = DeleteMode.TRASH) -> AppState:
    """Run the interactive session until the user quits and return its final state."""
    state = AppState(findings, delete_mode=delete_mode)
    DiskardApp(state).run()
    return state
