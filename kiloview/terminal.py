"""Terminal control helpers for the viewer session.

Owns the raw-mode lifecycle, frame writes, and window-size discovery.
When the device reports no geometry, the size is probed by parking the
cursor in the bottom-right corner and asking for a cursor position report.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import termios
import tty

from .errors import TerminalIOError
from .input import ByteSource

logger = logging.getLogger(__name__)

CURSOR_TO_BOTTOM_RIGHT = b"\x1b[999C\x1b[999B"
REQUEST_CURSOR_POSITION = b"\x1b[6n"
CURSOR_REPORT_MAX_BYTES = 31
_CURSOR_REPORT_RE = re.compile(rb"\x1b\[(\d+);(\d+)$")


def parse_cursor_position_report(reply: bytes) -> tuple[int, int] | None:
    """Parse ``ESC [ rows ; cols`` (the trailing ``R`` already removed)."""
    match = _CURSOR_REPORT_RE.match(reply)
    if match is None:
        return None
    return int(match.group(1)), int(match.group(2))


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalIOError(f"tcgetattr: {exc}") from exc

    def enable_raw_mode(self) -> None:
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalIOError(f"tcsetattr: {exc}") from exc

    def disable_raw_mode(self) -> None:
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except termios.error as exc:
            raise TerminalIOError(f"tcsetattr: {exc}") from exc

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that keeps the terminal raw for the enclosed block."""
        self.enable_raw_mode()
        try:
            yield
        finally:
            self.disable_raw_mode()

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                written = os.write(self.stdout_fd, view)
            except InterruptedError:
                continue
            except OSError as exc:
                raise TerminalIOError(f"write: {exc.strerror or exc}") from exc
            view = view[written:]

    def get_window_size(self, source: ByteSource) -> tuple[int, int]:
        """Return ``(rows, cols)`` of the terminal window."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            size = None
        if size is not None and size.columns > 0:
            return size.lines, size.columns

        logger.info("window size unavailable, probing with cursor position report")
        self.write(CURSOR_TO_BOTTOM_RIGHT)
        return self.get_cursor_position(source)

    def get_cursor_position(self, source: ByteSource) -> tuple[int, int]:
        self.write(REQUEST_CURSOR_POSITION)
        reply = bytearray()
        while len(reply) < CURSOR_REPORT_MAX_BYTES:
            byte = source.read_byte()
            if byte is None or byte == ord("R"):
                break
            reply.append(byte)
        parsed = parse_cursor_position_report(bytes(reply))
        if parsed is None:
            raise TerminalIOError("getWindowSize: unreadable cursor position report")
        return parsed
