"""Exception types raised across the viewer.

Only fatal conditions are modelled here. Empty reads and malformed escape
sequences are absorbed by the input decoder and never raise.
"""

from __future__ import annotations


class KiloviewError(Exception):
    """Base class for kiloview failures."""


class TerminalIOError(KiloviewError):
    """Unrecoverable failure talking to the controlling terminal."""


class DocumentLoadError(KiloviewError):
    """The requested file could not be opened or read."""
