from __future__ import annotations

import time
from dataclasses import dataclass, field

from .document import Document
from .rows import Row

STATUS_MESSAGE_MAX = 79
STATUS_MESSAGE_SECONDS = 5.0
RESERVED_ROWS = 2


def clip_utf8(data: bytes, limit: int) -> bytes:
    """Cut UTF-8 ``data`` to at most ``limit`` bytes without splitting a character."""
    if len(data) <= limit:
        return data
    return data[: max(0, limit)].decode("utf-8", errors="ignore").encode("utf-8")


@dataclass
class Cursor:
    cx: int = 0
    cy: int = 0
    rx: int = 0


@dataclass
class Viewport:
    screenrows: int
    screencols: int
    rowoff: int = 0
    coloff: int = 0

    @classmethod
    def for_window(cls, rows: int, cols: int) -> Viewport:
        """Build a viewport for a terminal window, keeping two rows for the bars."""
        return cls(screenrows=max(1, rows - RESERVED_ROWS), screencols=max(1, cols))


@dataclass
class StatusMessage:
    text: str = ""
    timestamp: float = 0.0

    def visible(self, now: float, timeout: float = STATUS_MESSAGE_SECONDS) -> bool:
        return bool(self.text) and now - self.timestamp < timeout


@dataclass
class EditorSession:
    document: Document
    viewport: Viewport
    cursor: Cursor = field(default_factory=Cursor)
    status: StatusMessage = field(default_factory=StatusMessage)
    status_message_seconds: float = STATUS_MESSAGE_SECONDS

    def current_row(self) -> Row | None:
        return self.document.row_at(self.cursor.cy)


def set_status_message(session: EditorSession, template: str, *args: object, now: float | None = None) -> None:
    """Replace the status message with ``template.format(*args)``.

    The UTF-8 form is cut to ``STATUS_MESSAGE_MAX`` bytes and stamped with
    ``now`` (wall-clock seconds when omitted).
    """
    text = template.format(*args) if args else template
    session.status = StatusMessage(
        text=clip_utf8(text.encode("utf-8", errors="replace"), STATUS_MESSAGE_MAX).decode("utf-8"),
        timestamp=time.time() if now is None else now,
    )
