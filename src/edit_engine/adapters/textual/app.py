"""Executable Textual app that hosts an editing session."""

from __future__ import annotations

import argparse
import os
from typing import List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

from edit_engine.buffer import BufferMirror
from edit_engine.config import EditorConfig
from edit_engine.keymaps.models import NAMED_KEYS
from edit_engine.session import EditorSession

from .controller import TextualEditorAdapter, TextualUIHooks

_TEXTUAL_NAMES = {
    "escape": "ESC",
    "pageup": "PAGEUP",
    "pagedown": "PAGEDOWN",
}


class EditorApp(App[None]):
    """Minimal Textual UI around one EditorSession."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [("ctrl+c", "quit", "Quit")]

    def __init__(
        self, *, path: str | None = None, config: EditorConfig | None = None
    ) -> None:
        super().__init__()
        self.path = path
        self.session = EditorSession(config=config or EditorConfig.from_env())
        self.adapter: TextualEditorAdapter | None = None
        self._lines: List[str] = [""]
        self._cursor: Tuple[int, int] = (0, 0)
        self._status = ""
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._buffer_widget = Static("", id="buffer-view", markup=False)
        self._status_widget = Static("", id="status-line", markup=False)
        yield self._buffer_widget
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        if self.path and os.path.exists(self.path):
            with open(self.path, encoding="utf-8") as handle:
                self.session.load(handle, filename=self.path)
        elif self.path:
            self.session.filename = self.path
        self.session.bus.subscribe("session.save", self._save)
        self.session.bus.subscribe("session.replace", self._replace)
        self.session.bus.subscribe("session.quit", lambda _payload: self.exit())
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_line=self._update_line,
            update_cursor=self._update_cursor,
            update_status=self._update_status,
            beep=self.bell,
        )
        self.adapter = TextualEditorAdapter(self.session, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _save(self, _payload: object) -> None:
        target = self.session.filename
        if not target:
            self._update_status("no file name")
            return
        with open(target, "w", encoding="utf-8") as handle:
            self.session.save(handle)
        self._update_status(f"wrote {target}")

    def _replace(self, _payload: object) -> None:
        target = self.session.filename
        if not target or not os.path.exists(target):
            self._update_status(f"cannot read {target or '[no file]'}")
            return
        with open(target, encoding="utf-8") as handle:
            self.session.load(handle, filename=target)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._lines = mirror.text.split("\n")
        self._render_text()

    def _update_line(self, row: int, text: str) -> None:
        if 0 <= row < len(self._lines):
            self._lines[row] = text
        self._render_text()

    def _update_cursor(self, row: int, col: int) -> None:
        self._cursor = (row, col)
        self._render_status()

    def _update_status(self, status: str) -> None:
        self._status = status
        self._render_status()

    def _render_text(self) -> None:
        if self._buffer_widget:
            self._buffer_widget.update("\n".join(self._lines))

    def _render_status(self) -> None:
        if not self._status_widget:
            return
        row, col = self._cursor
        flag = "*" if self.session.modified else " "
        name = self.session.filename or "[no file]"
        self._status_widget.update(
            f"{flag} {name}  Ln {row + 1}, Col {col + 1}  {self._status}"
        )

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key == "ctrl+c":
            return None
        if key.startswith("ctrl+"):
            return (key[len("ctrl+") :], None, ("ctrl",))
        named = _TEXTUAL_NAMES.get(key, key.upper())
        if named in NAMED_KEYS:
            return (named, None, ())
        if event.character and event.character.isprintable():
            return (event.character, event.character, ())
        return (key.upper(), None, ())


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the edit_engine Textual demo.")
    parser.add_argument("path", nargs="?", help="File to edit")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=os.environ.get("EDIT_ENGINE_LOG_PRESET"),
        help="telelog preset to activate before starting",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        from edit_engine.runtime import telemetry

        telemetry.configure(preset=args.log_preset)
    EditorApp(path=args.path).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
