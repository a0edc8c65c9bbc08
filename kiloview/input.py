"""Low-level terminal input decoding.

Reads raw bytes from a byte source and translates them into ``KeyEvent``
values. Escape sequences are recognised by a small state machine; a missing
follow-up byte or an unknown sequence degrades to a bare Escape event.
"""

from __future__ import annotations

import enum
import errno
import logging
import os
import select
from typing import Protocol

from .errors import TerminalIOError
from .keys import ESC, Key, KeyEvent

logger = logging.getLogger(__name__)

IDLE_TIMEOUT_SECONDS = 0.1

_TILDE_KEYS: dict[int, Key] = {
    ord("1"): Key.HOME,
    ord("3"): Key.DELETE,
    ord("4"): Key.END,
    ord("5"): Key.PAGE_UP,
    ord("6"): Key.PAGE_DOWN,
    ord("7"): Key.HOME,
    ord("8"): Key.END,
}

_BRACKET_LETTER_KEYS: dict[int, Key] = {
    ord("A"): Key.ARROW_UP,
    ord("B"): Key.ARROW_DOWN,
    ord("C"): Key.ARROW_RIGHT,
    ord("D"): Key.ARROW_LEFT,
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}

_SS3_LETTER_KEYS: dict[int, Key] = {
    ord("H"): Key.HOME,
    ord("F"): Key.END,
}


class ByteSource(Protocol):
    def read_byte(self) -> int | None:
        """Return the next byte, or ``None`` when nothing arrived in time.

        Implementations raise ``TerminalIOError`` on end of stream or on an
        unexpected read failure.
        """
        ...


class FdByteSource:
    """Poll a file descriptor for single bytes with a short idle timeout."""

    def __init__(self, fd: int, timeout: float = IDLE_TIMEOUT_SECONDS) -> None:
        self.fd = fd
        self.timeout = timeout

    def read_byte(self) -> int | None:
        try:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, self.timeout))
            if not ready:
                return None
            data = os.read(self.fd, 1)
        except InterruptedError:
            return None
        except OSError as exc:
            if exc.errno in {errno.EAGAIN, errno.EWOULDBLOCK}:
                return None
            raise TerminalIOError(f"read: {exc.strerror or exc}") from exc
        if not data:
            raise TerminalIOError("read: end of input stream")
        return data[0]


class BufferByteSource:
    """Serve bytes from an in-memory buffer.

    Once the buffer is drained every read reports "no byte yet", the same
    answer a quiet terminal gives.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._data = bytearray(data)

    def feed(self, data: bytes) -> None:
        self._data.extend(data)

    def read_byte(self) -> int | None:
        if not self._data:
            return None
        return self._data.pop(0)

    @property
    def remaining(self) -> bytes:
        return bytes(self._data)


class DecoderState(enum.Enum):
    START = "start"
    SAW_ESCAPE = "saw_escape"
    SAW_BRACKET = "saw_bracket"
    SAW_SS3 = "saw_ss3"
    SAW_DIGIT = "saw_digit"


def _read_first_byte(source: ByteSource) -> int:
    while True:
        byte = source.read_byte()
        if byte is not None:
            return byte


def read_key(source: ByteSource) -> KeyEvent:
    """Block until one logical key has been decoded from ``source``."""
    state = DecoderState.START
    digit = 0
    while True:
        if state is DecoderState.START:
            byte = _read_first_byte(source)
            if byte != ESC:
                return KeyEvent.char(byte)
            state = DecoderState.SAW_ESCAPE
            continue

        byte = source.read_byte()
        if byte is None:
            return KeyEvent(Key.ESCAPE)

        if state is DecoderState.SAW_ESCAPE:
            if byte == ord("["):
                state = DecoderState.SAW_BRACKET
            elif byte == ord("O"):
                state = DecoderState.SAW_SS3
            else:
                break
        elif state is DecoderState.SAW_BRACKET:
            if ord("0") <= byte <= ord("9"):
                digit = byte
                state = DecoderState.SAW_DIGIT
            elif byte in _BRACKET_LETTER_KEYS:
                return KeyEvent(_BRACKET_LETTER_KEYS[byte])
            else:
                break
        elif state is DecoderState.SAW_SS3:
            if byte in _SS3_LETTER_KEYS:
                return KeyEvent(_SS3_LETTER_KEYS[byte])
            break
        elif state is DecoderState.SAW_DIGIT:
            if byte == ord("~") and digit in _TILDE_KEYS:
                return KeyEvent(_TILDE_KEYS[digit])
            break

    logger.debug("unrecognised escape sequence ending in %r (state %s)", bytes([byte]), state.value)
    return KeyEvent(Key.ESCAPE)
