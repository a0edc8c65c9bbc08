"""Cursor controller: applies decoded keys to the session cursor.

Every move ends by clamping ``cx`` to the length of the row the cursor
landed on. Paging replays single-line moves so that clamp stays the only one.
"""

from __future__ import annotations

import logging

from .keys import QUIT_KEY, Key, KeyEvent
from .screen import FrameWriter, clear_screen_bytes
from .state import EditorSession

logger = logging.getLogger(__name__)

ARROW_KEYS = frozenset({Key.ARROW_UP, Key.ARROW_DOWN, Key.ARROW_LEFT, Key.ARROW_RIGHT})


def move_cursor(session: EditorSession, key: Key) -> None:
    cursor = session.cursor
    document = session.document
    row = session.current_row()

    if key is Key.ARROW_LEFT:
        if cursor.cx != 0:
            cursor.cx -= 1
        elif cursor.cy > 0:
            cursor.cy -= 1
            cursor.cx = document.rows[cursor.cy].size
    elif key is Key.ARROW_RIGHT:
        if row is not None and cursor.cx < row.size:
            cursor.cx += 1
        elif row is not None and cursor.cx == row.size:
            cursor.cy += 1
            cursor.cx = 0
    elif key is Key.ARROW_UP:
        if cursor.cy != 0:
            cursor.cy -= 1
    elif key is Key.ARROW_DOWN:
        if cursor.cy < document.numrows:
            cursor.cy += 1

    row = session.current_row()
    rowlen = row.size if row is not None else 0
    if cursor.cx > rowlen:
        cursor.cx = rowlen


def page_move(session: EditorSession, key: Key) -> None:
    """Snap to the viewport edge, then replay a screenful of Up/Down moves."""
    cursor = session.cursor
    view = session.viewport
    if key is Key.PAGE_UP:
        cursor.cy = view.rowoff
        step = Key.ARROW_UP
    else:
        cursor.cy = min(view.rowoff + view.screenrows - 1, session.document.numrows)
        step = Key.ARROW_DOWN
    for _ in range(view.screenrows):
        move_cursor(session, step)


def process_keypress(session: EditorSession, event: KeyEvent, writer: FrameWriter) -> bool:
    """Apply one key event. Returns ``True`` when the viewer should quit."""
    if event.is_char(QUIT_KEY):
        writer.write(clear_screen_bytes())
        logger.info("quit requested")
        return True

    key = event.key
    cursor = session.cursor
    if key is Key.HOME:
        cursor.cx = 0
    elif key is Key.END:
        row = session.current_row()
        if row is not None:
            cursor.cx = row.size
    elif key in (Key.PAGE_UP, Key.PAGE_DOWN):
        page_move(session, key)
    elif key in ARROW_KEYS:
        move_cursor(session, key)
    return False
