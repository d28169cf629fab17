from __future__ import annotations

import io
from typing import List, Tuple

from edit_engine.adapters.textual import TextualEditorAdapter, TextualUIHooks
from edit_engine.buffer import BufferMirror, BufferSync
from edit_engine.config import EditorConfig
from edit_engine.session import EditorSession


def make_session(text: str = "", **config: int) -> EditorSession:
    session = EditorSession(config=EditorConfig(**config))
    if text:
        session.load(io.StringIO(text))
    return session


def test_adapter_paints_everything_on_start() -> None:
    session = make_session("one\ntwo")
    mirrors: List[BufferMirror] = []
    hooks = TextualUIHooks(update_buffer=mirrors.append)

    TextualEditorAdapter(session, hooks)

    assert len(mirrors) == 1
    assert mirrors[0].text == "one\ntwo"
    assert mirrors[0].cursor == (0, 0)


def test_adapter_repaints_single_line_for_plain_typing() -> None:
    session = make_session("ab\ncd")
    mirrors: List[BufferMirror] = []
    lines: List[Tuple[int, str]] = []
    cursors: List[Tuple[int, int]] = []
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=mirrors.append,
        update_line=lambda row, text: lines.append((row, text)),
        update_cursor=lambda row, col: cursors.append((row, col)),
        update_status=statuses.append,
    )
    adapter = TextualEditorAdapter(session, hooks)
    adapter.handle_textual_key("DOWN")

    adapter.handle_textual_key("x", text="x")

    assert len(mirrors) == 1
    assert lines == [(1, "xcd")]
    assert cursors[-1] == (1, 1)
    assert statuses[-1] == "insert.78"


def test_adapter_repaints_buffer_for_newline() -> None:
    session = make_session("ab")
    mirrors: List[BufferMirror] = []
    hooks = TextualUIHooks(update_buffer=mirrors.append)
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("ENTER")

    assert [mirror.text for mirror in mirrors] == ["ab", "\nab"]
    assert mirrors[-1].cursor == (1, 0)


def test_adapter_relays_beeps_and_scrolls() -> None:
    session = make_session("\n".join("row" for _ in range(8)), page_scroll=4)
    beeps: List[None] = []
    scrolls: List[int] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None,
        beep=lambda: beeps.append(None),
        scroll=scrolls.append,
    )
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("BACKSPACE")
    adapter.handle_textual_key("PAGEDOWN")

    assert beeps == [None]
    assert scrolls == [4]


def test_adapter_reports_unbound_keys() -> None:
    session = make_session()
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None, update_status=statuses.append
    )
    adapter = TextualEditorAdapter(session, hooks)

    result = adapter.handle_textual_key("x", modifiers=("CTRL",))

    assert not result.consumed
    assert statuses[-1] == "ctrl+x"


def test_adapter_relays_session_events() -> None:
    session = make_session()
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None, update_status=statuses.append
    )
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert "session.quit" in statuses
    assert not session.alive


def test_adapter_emits_log_lines() -> None:
    session = make_session()
    logs: List[str] = []
    hooks = TextualUIHooks(update_buffer=lambda mirror: None, log=logs.append)
    adapter = TextualEditorAdapter(session, hooks)

    adapter.handle_textual_key("i", text="i")

    assert any(line.startswith("key ->") for line in logs)
    assert any("history=1" in line for line in logs if line.startswith("result <-"))


def test_session_satisfies_buffer_sync() -> None:
    session = make_session("ab")
    sync: BufferSync = session
    session.refresh()

    mirror = sync.pull_buffer()

    assert mirror.text == "ab"
    assert mirror.damage == 0
    assert mirror.line is None


def test_adapter_shows_confirmation_for_modified_quit() -> None:
    session = make_session()
    statuses: List[str] = []
    hooks = TextualUIHooks(
        update_buffer=lambda mirror: None, update_status=statuses.append
    )
    adapter = TextualEditorAdapter(session, hooks)
    adapter.handle_textual_key("x", text="x")

    adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert statuses[-1] == "Buffer modified -- really quit?"
    assert session.alive

    adapter.handle_textual_key("q", modifiers=("ctrl",))

    assert not session.alive
