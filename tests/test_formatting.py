"""Tests for code-unit and character formatting helpers."""

from __future__ import annotations

import unittest

from strexplorer.formatting import (
    code_point_label,
    display_text,
    format_code_unit,
    format_utf16,
    format_utf8,
    hex_string,
    scalar_name,
)


class NumberFormattingTests(unittest.TestCase):
    def test_hex_string_pads_to_minimum_length(self) -> None:
        self.assertEqual(hex_string(0xE9, 4), "0x00e9")
        self.assertEqual(hex_string(0xC3, 2), "0xc3")
        self.assertEqual(hex_string(0x1F600, 4), "0x1f600")

    def test_decimal_mode_prints_plain_number(self) -> None:
        self.assertEqual(format_code_unit(0xD83D, False, 4), "55357")
        self.assertEqual(format_utf8(0x41, False), "65")

    def test_encoding_specific_widths(self) -> None:
        self.assertEqual(format_utf16(0x41, True), "0x0041")
        self.assertEqual(format_utf8(0x41, True), "0x41")

    def test_code_point_label(self) -> None:
        self.assertEqual(code_point_label("A"), "U+0041")
        self.assertEqual(code_point_label("\U0001F600"), "U+1F600")

    def test_scalar_name(self) -> None:
        self.assertEqual(scalar_name("é"), "LATIN SMALL LETTER E WITH ACUTE")
        self.assertEqual(scalar_name("\x00"), "")


class DisplayTextTests(unittest.TestCase):
    def test_plain_text_is_unchanged(self) -> None:
        self.assertEqual(display_text("e\u0301"), "e\u0301")

    def test_controls_become_control_pictures(self) -> None:
        self.assertEqual(display_text("\t"), "␉")
        self.assertEqual(display_text("\r\n"), "␍␊")
        self.assertEqual(display_text("\x7f"), "␡")

    def test_lone_combining_mark_gets_dotted_circle(self) -> None:
        self.assertEqual(display_text("\u0301"), "\u25cc\u0301")

    def test_lone_surrogate_is_replaced(self) -> None:
        self.assertEqual(display_text("\ud83d"), "�")

    def test_empty_text(self) -> None:
        self.assertEqual(display_text(""), "")


if __name__ == "__main__":
    unittest.main()
