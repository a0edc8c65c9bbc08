"""Tests for terminal mode lifecycle, frame writes, and size discovery.

Verifies raw-mode restoration on every exit path and the cursor position
report fallback used when the device reports no window geometry.
"""

from __future__ import annotations

import os
import termios
import unittest
from unittest import mock

from kiloview.errors import TerminalIOError
from kiloview.input import BufferByteSource
from kiloview.terminal import TerminalController, parse_cursor_position_report


def _controller() -> TerminalController:
    with mock.patch("kiloview.terminal.termios.tcgetattr", return_value=[0]):
        return TerminalController(stdin_fd=0, stdout_fd=1)


class RawModeTests(unittest.TestCase):
    def test_enable_and_disable_raw_mode(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("kiloview.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "kiloview.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("kiloview.terminal.termios.tcsetattr") as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_raw_mode()
            controller.disable_raw_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        controller = _controller()

        with mock.patch.object(controller, "enable_raw_mode") as enable_mock, mock.patch.object(
            controller, "disable_raw_mode"
        ) as disable_mock:
            with self.assertRaises(TerminalIOError):
                with controller.raw_mode():
                    raise TerminalIOError("read: boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_missing_tty_is_fatal(self) -> None:
        with mock.patch("kiloview.terminal.termios.tcgetattr", side_effect=termios.error(25, "not a tty")):
            with self.assertRaises(TerminalIOError):
                TerminalController(stdin_fd=0, stdout_fd=1)


class WriteTests(unittest.TestCase):
    def test_write_retries_partial_writes(self) -> None:
        controller = _controller()
        chunks: list[bytes] = []

        def fake_write(fd: int, data) -> int:
            chunk = bytes(data[:3])
            chunks.append(chunk)
            return len(chunk)

        with mock.patch("kiloview.terminal.os.write", side_effect=fake_write):
            controller.write(b"abcdefgh")

        self.assertEqual(b"".join(chunks), b"abcdefgh")
        self.assertEqual(len(chunks), 3)

    def test_write_failure_is_fatal(self) -> None:
        controller = _controller()
        with mock.patch("kiloview.terminal.os.write", side_effect=OSError(5, "Input/output error")):
            with self.assertRaises(TerminalIOError):
                controller.write(b"x")


class WindowSizeTests(unittest.TestCase):
    def test_reported_geometry_is_used_directly(self) -> None:
        controller = _controller()
        with mock.patch(
            "kiloview.terminal.os.get_terminal_size", return_value=os.terminal_size((120, 40))
        ), mock.patch("kiloview.terminal.os.write") as write_mock:
            self.assertEqual(controller.get_window_size(BufferByteSource()), (40, 120))
        write_mock.assert_not_called()

    def test_falls_back_to_cursor_position_report(self) -> None:
        controller = _controller()
        written: list[bytes] = []

        def fake_write(fd: int, data) -> int:
            written.append(bytes(data))
            return len(data)

        source = BufferByteSource(b"\x1b[33;101R")
        with mock.patch("kiloview.terminal.os.get_terminal_size", side_effect=OSError()), mock.patch(
            "kiloview.terminal.os.write", side_effect=fake_write
        ):
            self.assertEqual(controller.get_window_size(source), (33, 101))

        self.assertEqual(written, [b"\x1b[999C\x1b[999B", b"\x1b[6n"])

    def test_zero_columns_triggers_probe(self) -> None:
        controller = _controller()
        source = BufferByteSource(b"\x1b[24;80R")
        with mock.patch(
            "kiloview.terminal.os.get_terminal_size", return_value=os.terminal_size((0, 0))
        ), mock.patch("kiloview.terminal.os.write", side_effect=lambda fd, data: len(data)):
            self.assertEqual(controller.get_window_size(source), (24, 80))

    def test_unreadable_report_is_fatal(self) -> None:
        controller = _controller()
        with mock.patch("kiloview.terminal.os.get_terminal_size", side_effect=OSError()), mock.patch(
            "kiloview.terminal.os.write", side_effect=lambda fd, data: len(data)
        ):
            with self.assertRaises(TerminalIOError):
                controller.get_window_size(BufferByteSource(b"garbage"))


class CursorReportParsingTests(unittest.TestCase):
    def test_parses_rows_and_columns(self) -> None:
        self.assertEqual(parse_cursor_position_report(b"\x1b[24;80"), (24, 80))

    def test_rejects_malformed_replies(self) -> None:
        for reply in (b"", b"[24;80", b"\x1b[24", b"\x1b[a;b", b"\x1b[24;80;1"):
            with self.subTest(reply=reply):
                self.assertIsNone(parse_cursor_position_report(reply))


if __name__ == "__main__":
    unittest.main()
