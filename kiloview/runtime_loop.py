from __future__ import annotations

import logging

from .config import ViewerSettings
from .document import Document
from .input import ByteSource, read_key
from .navigation import process_keypress
from .screen import refresh_screen
from .state import EditorSession, Viewport, set_status_message
from .terminal import TerminalController

logger = logging.getLogger(__name__)

HELP_MESSAGE = "HELP: Ctrl-Q = quit"


def run_main_loop(session: EditorSession, terminal: TerminalController, source: ByteSource) -> None:
    """Draw, read one key, apply it; repeat until the quit key arrives."""
    while True:
        refresh_screen(session, terminal)
        event = read_key(source)
        if process_keypress(session, event, terminal):
            return


def run_viewer(
    document: Document,
    settings: ViewerSettings,
    terminal: TerminalController,
    source: ByteSource,
) -> None:
    with terminal.raw_mode():
        rows, cols = terminal.get_window_size(source)
        session = EditorSession(
            document=document,
            viewport=Viewport.for_window(rows, cols),
            status_message_seconds=settings.status_message_seconds,
        )
        logger.info(
            "session start: file=%s rows=%d screen=%dx%d",
            document.filename,
            document.numrows,
            session.viewport.screenrows,
            session.viewport.screencols,
        )
        set_status_message(session, HELP_MESSAGE)
        run_main_loop(session, terminal, source)
