"""Command-line front door for kiloview.

Parses the optional file argument, loads the document, and hands the
terminal over to the viewer loop. Fatal terminal errors end with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .config import load_settings
from .document import Document, open_file
from .errors import DocumentLoadError, TerminalIOError
from .input import FdByteSource
from .logs import configure_logging
from .runtime_loop import run_viewer
from .screen import clear_screen_bytes
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kiloview", description="View a text file in the terminal.")
    parser.add_argument("path", nargs="?", default=None, help="File to open. Starts empty when omitted.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.log_level)

    document = Document(tab_stop=settings.tab_stop)
    if args.path is not None:
        try:
            open_file(document, Path(args.path))
        except DocumentLoadError as exc:
            logger.error("cannot open file: %s", exc)
            raise SystemExit(f"kiloview: {exc}") from exc

    terminal: TerminalController | None = None
    try:
        terminal = TerminalController(sys.stdin.fileno(), sys.stdout.fileno())
        run_viewer(document, settings, terminal, FdByteSource(terminal.stdin_fd))
    except TerminalIOError as exc:
        logger.error("fatal terminal error: %s", exc)
        if terminal is not None:
            try:
                terminal.write(clear_screen_bytes())
            except TerminalIOError:
                pass
        print(f"kiloview: {exc}", file=sys.stderr)
        return 1
    return 0
