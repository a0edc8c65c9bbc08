"""Logical key events produced by the input decoder."""

from __future__ import annotations

import enum
from dataclasses import dataclass

ESC = 0x1B


class Key(enum.Enum):
    CHAR = "char"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    DELETE = "delete"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    ESCAPE = "escape"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    byte: int | None = None

    @classmethod
    def char(cls, byte: int) -> KeyEvent:
        return cls(Key.CHAR, byte)

    def is_char(self, byte: int) -> bool:
        return self.key is Key.CHAR and self.byte == byte


def ctrl_key(ch: str) -> int:
    """Return the byte a terminal sends for Ctrl plus ``ch``."""
    return ord(ch) & 0x1F


QUIT_KEY = ctrl_key("q")
