"""Row storage and tab-expanded rendering.

A ``Row`` keeps the literal bytes of one file line next to its render form,
where every tab is expanded to the next tab stop. The render form is rebuilt
whenever ``chars`` is assigned, so readers never see a stale copy.
"""

from __future__ import annotations

TAB_STOP = 8
_TAB = 0x09
_SPACE = 0x20


class Row:
    __slots__ = ("_chars", "render", "tab_stop")

    def __init__(self, chars: bytes = b"", tab_stop: int = TAB_STOP) -> None:
        self.tab_stop = max(1, tab_stop)
        self._chars = b""
        self.render = b""
        self.chars = chars

    @property
    def chars(self) -> bytes:
        return self._chars

    @chars.setter
    def chars(self, value: bytes) -> None:
        self._chars = bytes(value)
        update_render(self)

    @property
    def size(self) -> int:
        return len(self._chars)

    @property
    def rsize(self) -> int:
        return len(self.render)

    def __repr__(self) -> str:
        return f"Row({self._chars!r})"


def update_render(row: Row) -> None:
    """Rebuild ``row.render`` from ``row.chars``.

    A tab always emits at least one space and then pads until the render
    index reaches a multiple of the row's tab stop. Other bytes copy through.
    """
    tab_stop = row.tab_stop
    out = bytearray()
    for byte in row.chars:
        if byte == _TAB:
            out.append(_SPACE)
            while len(out) % tab_stop != 0:
                out.append(_SPACE)
        else:
            out.append(byte)
    row.render = bytes(out)


def cx_to_rx(row: Row, cx: int) -> int:
    """Map a file column on ``row`` to its rendered screen column."""
    tab_stop = row.tab_stop
    rx = 0
    for byte in row.chars[:cx]:
        if byte == _TAB:
            rx += (tab_stop - 1) - (rx % tab_stop)
        rx += 1
    return rx
