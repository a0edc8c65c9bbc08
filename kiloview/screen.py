"""Viewport scrolling and frame composition.

``scroll`` keeps the cursor inside the visible window by moving the offsets.
The draw helpers append escape-framed bytes to one buffer so that a frame
reaches the terminal in a single write.
"""

from __future__ import annotations

import time
from typing import Protocol

from . import __version__
from .rows import cx_to_rx
from .state import EditorSession, clip_utf8

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"
CURSOR_HOME = b"\x1b[H"
CLEAR_SCREEN = b"\x1b[2J"
ERASE_LINE_RIGHT = b"\x1b[K"
INVERT_ON = b"\x1b[7m"
INVERT_OFF = b"\x1b[m"
CRLF = b"\r\n"

FILLER_MARKER = b"~"
NO_NAME = "[No Name]"
FILENAME_STATUS_WIDTH = 20


class FrameWriter(Protocol):
    def write(self, data: bytes) -> None: ...


def welcome_message() -> str:
    return f"kiloview -- version {__version__}"


def _encode(text: str) -> bytes:
    return text.encode("utf-8", errors="replace")


def cursor_position(row: int, col: int) -> bytes:
    """Return the sequence moving the terminal cursor to 1-indexed ``(row, col)``."""
    return f"\x1b[{row};{col}H".encode("ascii")


def clear_screen_bytes() -> bytes:
    return CLEAR_SCREEN + CURSOR_HOME


def scroll(session: EditorSession) -> None:
    """Recompute ``rx`` and move the viewport offsets so the cursor is visible."""
    cursor = session.cursor
    view = session.viewport
    row = session.current_row()
    cursor.rx = cx_to_rx(row, cursor.cx) if row is not None else 0

    if cursor.cy < view.rowoff:
        view.rowoff = cursor.cy
    if cursor.cy >= view.rowoff + view.screenrows:
        view.rowoff = cursor.cy - view.screenrows + 1
    if cursor.rx < view.coloff:
        view.coloff = cursor.rx
    if cursor.rx >= view.coloff + view.screencols:
        view.coloff = cursor.rx - view.screencols + 1


def _append_welcome(out: bytearray, screencols: int) -> None:
    welcome = _encode(welcome_message())[:screencols]
    padding = (screencols - len(welcome)) // 2
    if padding:
        out += FILLER_MARKER
        padding -= 1
    out += b" " * padding
    out += welcome


def draw_rows(session: EditorSession, out: bytearray) -> None:
    view = session.viewport
    document = session.document
    for y in range(view.screenrows):
        filerow = y + view.rowoff
        row = document.row_at(filerow)
        if row is None:
            if document.numrows == 0 and y == view.screenrows // 3:
                _append_welcome(out, view.screencols)
            else:
                out += FILLER_MARKER
        else:
            length = max(0, min(row.rsize - view.coloff, view.screencols))
            out += row.render[view.coloff : view.coloff + length]
        out += ERASE_LINE_RIGHT
        out += CRLF


def draw_status_bar(session: EditorSession, out: bytearray) -> None:
    """Append the inverted status line: file and line count, then position."""
    document = session.document
    width = session.viewport.screencols
    name = clip_utf8(_encode(document.filename or NO_NAME), FILENAME_STATUS_WIDTH)
    status = clip_utf8(name + _encode(f" - {document.numrows} lines"), width)
    rstatus = _encode(f"{session.cursor.cy + 1}/{document.numrows}")

    out += INVERT_ON
    out += status
    length = len(status)
    while length < width:
        if width - length == len(rstatus):
            out += rstatus
            break
        out += b" "
        length += 1
    out += INVERT_OFF
    out += CRLF


def draw_message_bar(session: EditorSession, out: bytearray, now: float | None = None) -> None:
    out += ERASE_LINE_RIGHT
    if now is None:
        now = time.time()
    status = session.status
    if status.visible(now, session.status_message_seconds):
        out += clip_utf8(_encode(status.text), session.viewport.screencols)


def compose_frame(session: EditorSession, now: float | None = None) -> bytes:
    """Scroll, then build the complete byte frame for the current state."""
    scroll(session)
    cursor = session.cursor
    view = session.viewport

    out = bytearray()
    out += HIDE_CURSOR
    out += CURSOR_HOME
    draw_rows(session, out)
    draw_status_bar(session, out)
    draw_message_bar(session, out, now)
    out += cursor_position(cursor.cy - view.rowoff + 1, cursor.rx - view.coloff + 1)
    out += CURSOR_HOME
    out += SHOW_CURSOR
    return bytes(out)


def refresh_screen(session: EditorSession, writer: FrameWriter, now: float | None = None) -> None:
    writer.write(compose_frame(session, now))
