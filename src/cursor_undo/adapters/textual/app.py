"""Executable Textual demo: a TextArea with soft undo/redo of cursor moves."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Footer, Header, Static, TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use cursor_undo.adapters.textual.app"
    ) from exc

from cursor_undo.runtime import telemetry

from .controller import Location, TextualCursorUndoAdapter, TextualUIHooks


class CursorUndoApp(App[None]):
    """TextArea host wired to a cursor undo controller."""

    CSS = """
	#editor {
		height: 1fr;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        Binding("ctrl+u", "cursor_key('ctrl+u')", "Soft Undo", priority=True),
        Binding("ctrl+shift+j", "cursor_key('ctrl+shift+j')", "Soft Redo", priority=True),
        Binding("ctrl+r", "reload", "Reload file"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, path: Optional[Path] = None) -> None:
        super().__init__()
        self._path = path
        self.adapter: TextualCursorUndoAdapter | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield TextArea(self._read_file(), id="editor")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            read_selection=self._read_selection,
            write_selection=self._write_selection,
            scroll_to_line=self._scroll_to_line,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.adapter = TextualCursorUndoAdapter(hooks)
        self.query_one(TextArea).focus()

    def on_unmount(self) -> None:
        if self.adapter:
            self.adapter.close()
            self.adapter = None

    def on_text_area_selection_changed(self, _event: TextArea.SelectionChanged) -> None:
        if self.adapter:
            self.adapter.notify_selection_changed()

    def on_text_area_changed(self, _event: TextArea.Changed) -> None:
        if self.adapter:
            self.adapter.notify_text_changed()

    def action_cursor_key(self, key: str) -> None:
        if self.adapter:
            self.adapter.handle_textual_key(key)

    def action_reload(self) -> None:
        editor = self.query_one(TextArea)
        editor.load_text(self._read_file())
        if self.adapter:
            self.adapter.notify_document_replaced()

    def _read_file(self) -> str:
        if self._path is None:
            return ""
        return self._path.read_text(encoding="utf-8")

    def _read_selection(self) -> Optional[Tuple[Location, Location]]:
        selection = self.query_one(TextArea).selection
        return (tuple(selection.start), tuple(selection.end))  # type: ignore[return-value]

    def _write_selection(self, anchor: Location, head: Location) -> None:
        editor = self.query_one(TextArea)
        with editor.prevent(TextArea.SelectionChanged):
            editor.selection = Selection(anchor, head)

    def _scroll_to_line(self, _line: int, smooth: bool) -> None:
        self.query_one(TextArea).scroll_cursor_visible(center=True, animate=smooth)

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _log_line(self, line: str) -> None:
        self.log(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the cursor undo Textual demo.")
    parser.add_argument("path", nargs="?", type=Path, help="File to open")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset to use instead of CURSOR_UNDO_* environment settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    CursorUndoApp(path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
