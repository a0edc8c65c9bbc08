"""Tests for tab expansion and file-column to render-column mapping."""

from __future__ import annotations

import unittest

from kiloview.rows import Row, cx_to_rx, update_render


class RowRenderTests(unittest.TestCase):
    def test_tab_expands_to_next_tab_stop(self) -> None:
        row = Row(b"a\tb")
        self.assertEqual(row.render, b"a       b")
        self.assertEqual(row.rsize, 9)

    def test_leading_tab_emits_full_stop(self) -> None:
        self.assertEqual(Row(b"\tx").render, b" " * 8 + b"x")

    def test_tab_at_stop_boundary_emits_full_width(self) -> None:
        self.assertEqual(Row(b"12345678\t|").render, b"12345678" + b" " * 8 + b"|")

    def test_render_equals_chars_without_tabs(self) -> None:
        row = Row(b"plain text")
        self.assertEqual(row.render, row.chars)

    def test_render_never_shorter_than_chars(self) -> None:
        for chars in (b"", b"\t", b"ab\tcd\t\t", b"x" * 20, b"\t\t\t"):
            with self.subTest(chars=chars):
                row = Row(chars)
                self.assertGreaterEqual(len(row.render), len(row.chars))
                self.assertEqual(len(row.render) == len(row.chars), b"\t" not in chars)

    def test_assigning_chars_rebuilds_render(self) -> None:
        row = Row(b"abc")
        row.chars = b"\tz"
        self.assertEqual(row.render, b" " * 8 + b"z")
        self.assertEqual(row.size, 2)

    def test_custom_tab_stop(self) -> None:
        row = Row(b"a\tb", tab_stop=4)
        self.assertEqual(row.render, b"a   b")
        self.assertEqual(cx_to_rx(row, 2), 4)

    def test_update_render_is_idempotent(self) -> None:
        row = Row(b"x\ty")
        before = row.render
        update_render(row)
        self.assertEqual(row.render, before)


class CxToRxTests(unittest.TestCase):
    def test_index_past_tab_maps_to_tab_stop(self) -> None:
        row = Row(b"a\tb")
        self.assertEqual(cx_to_rx(row, 0), 0)
        self.assertEqual(cx_to_rx(row, 1), 1)
        self.assertEqual(cx_to_rx(row, 2), 8)
        self.assertEqual(cx_to_rx(row, 3), 9)

    def test_identity_without_tabs(self) -> None:
        row = Row(b"hello world")
        for cx in range(row.size + 1):
            self.assertEqual(cx_to_rx(row, cx), cx)

    def test_monotonic_non_decreasing(self) -> None:
        row = Row(b"\ta\t\tbc\td")
        values = [cx_to_rx(row, cx) for cx in range(row.size + 1)]
        self.assertEqual(values, sorted(values))

    def test_end_of_row_matches_render_length(self) -> None:
        row = Row(b"ab\tc\t")
        self.assertEqual(cx_to_rx(row, row.size), row.rsize)


if __name__ == "__main__":
    unittest.main()
