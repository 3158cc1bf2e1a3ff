"""Regression tests for raw-key decoding.

Covers ESC timing, arrow and mouse sequences, control-key tokens, and
multi-byte UTF-8 text typed into the explorer prompt.
"""

import os
import time
import unittest

from strexplorer import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _read_keys(self, payload: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, b"\x1b")
            started = time.monotonic()
            key = input_mod.read_key(read_fd, timeout_ms=20)
            elapsed = time.monotonic() - started
        finally:
            os.close(read_fd)
            os.close(write_fd)

        self.assertEqual(key, "ESC")
        self.assertLess(elapsed, 0.2)

    def test_timeout_without_input_returns_empty_token(self) -> None:
        self.assertEqual(self._read_keys(b""), [""])

    def test_arrow_and_home_end_sequences(self) -> None:
        keys = self._read_keys(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F", count=6)
        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._read_keys(b"\x1ba", count=2), ["ESC", "a"])

    def test_encoding_toggle_control_keys(self) -> None:
        keys = self._read_keys(b"\x13\x14\x05\x18\x15", count=5)
        self.assertEqual(keys, ["CTRL_S", "CTRL_T", "CTRL_E", "CTRL_X", "CTRL_U"])

    def test_backspace_and_tab_tokens(self) -> None:
        self.assertEqual(self._read_keys(b"\x7f\x08\t", count=3), ["BACKSPACE", "BACKSPACE", "TAB"])

    def test_multibyte_utf8_is_read_as_one_key(self) -> None:
        keys = self._read_keys("é😀a".encode("utf-8"), count=3)
        self.assertEqual(keys, ["é", "\U0001F600", "a"])

    def test_truncated_utf8_keeps_following_byte_for_next_key(self) -> None:
        keys = self._read_keys(b"\xc3a", count=2)
        self.assertEqual(keys, ["�", "a"])

    def test_sgr_mouse_motion_is_reported_with_coordinates(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[<35;5;7M"), ["MOUSE_MOVE:5:7"])

    def test_sgr_mouse_left_press_and_release(self) -> None:
        keys = self._read_keys(b"\x1b[<0;3;4M\x1b[<0;3;4m", count=2)
        self.assertEqual(keys, ["MOUSE_LEFT_DOWN:3:4", "MOUSE_LEFT_UP:3:4"])

    def test_sgr_mouse_wheel(self) -> None:
        keys = self._read_keys(b"\x1b[<64;1;1M\x1b[<65;1;1M", count=2)
        self.assertEqual(keys, ["MOUSE_WHEEL_UP:1:1", "MOUSE_WHEEL_DOWN:1:1"])

    def test_malformed_mouse_payload_falls_back_to_escape(self) -> None:
        self.assertEqual(self._read_keys(b"\x1b[<1;2M"), ["ESC"])


if __name__ == "__main__":
    unittest.main()
