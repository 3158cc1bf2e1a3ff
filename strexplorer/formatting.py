"""Value formatting for cell contents.

Code units render as zero-padded ``0x`` hex or plain decimal; characters and
scalars are made terminal-safe so control codes cannot move the cursor.
"""

from __future__ import annotations

import unicodedata

UTF16_HEX_DIGITS = 4
UTF8_HEX_DIGITS = 2
DOTTED_CIRCLE = "◌"


def hex_string(value: int, minimum_length: int) -> str:
    """Return ``value`` as lowercase hex, zero-padded to ``minimum_length`` digits."""
    digits = format(value, "x")
    if len(digits) < minimum_length:
        digits = "0" * (minimum_length - len(digits)) + digits
    return f"0x{digits}"


def format_code_unit(value: int, hex_mode: bool, hex_minimum_length: int) -> str:
    if hex_mode:
        return hex_string(value, hex_minimum_length)
    return str(value)


def format_utf16(value: int, hex_mode: bool) -> str:
    return format_code_unit(value, hex_mode, UTF16_HEX_DIGITS)


def format_utf8(value: int, hex_mode: bool) -> str:
    return format_code_unit(value, hex_mode, UTF8_HEX_DIGITS)


def code_point_label(scalar: str) -> str:
    """Return the conventional ``U+XXXX`` label of a one-code-point string."""
    return f"U+{ord(scalar):04X}"


def scalar_name(scalar: str) -> str:
    """Return the Unicode name of ``scalar``, or an empty string when unnamed."""
    return unicodedata.name(scalar, "")


def _safe_code_point(ch: str) -> str:
    code = ord(ch)
    if code < 0x20:
        # Control Pictures block mirrors C0 at U+2400.
        return chr(0x2400 + code)
    if code == 0x7F:
        return "␡"
    if 0xD800 <= code <= 0xDFFF:
        return "�"
    return ch


def display_text(text: str) -> str:
    """Return ``text`` in a form that is safe to print inside a grid cell.

    Control characters are swapped for their Control Pictures glyph, lone
    surrogates for U+FFFD, and text starting with a combining mark gets a
    dotted circle base.
    """
    if not text:
        return ""
    safe = "".join(_safe_code_point(ch) for ch in text)
    if unicodedata.combining(safe[0]):
        safe = DOTTED_CIRCLE + safe
    return safe
