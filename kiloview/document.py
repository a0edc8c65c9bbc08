"""In-memory document: the ordered rows of one file.

Also hosts the loader that turns a file on disk into rows.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .errors import DocumentLoadError
from .rows import TAB_STOP, Row

logger = logging.getLogger(__name__)


class Document:
    def __init__(self, tab_stop: int = TAB_STOP) -> None:
        self.rows: list[Row] = []
        self.filename: str | None = None
        self.tab_stop = tab_stop

    @property
    def numrows(self) -> int:
        return len(self.rows)

    def row_at(self, index: int) -> Row | None:
        """Return the row at ``index``, or ``None`` past the last row."""
        if 0 <= index < len(self.rows):
            return self.rows[index]
        return None

    def append_row(self, data: bytes) -> Row:
        row = Row(data, tab_stop=self.tab_stop)
        self.rows.append(row)
        return row


def open_file(document: Document, path: Path) -> None:
    """Load ``path`` into ``document``, one row per line.

    Lines are split on ``\\n``; trailing carriage returns and newlines are
    stripped before each row is appended.
    """
    document.filename = str(path)
    try:
        with path.open("rb") as fp:
            for line in fp:
                document.append_row(line.rstrip(b"\r\n"))
    except OSError as exc:
        raise DocumentLoadError(f"{path}: {exc.strerror or exc}") from exc
    logger.info("loaded %s (%d rows)", path, document.numrows)
