"""ANSI-aware text measurement and line shaping utilities.

Provides clipping and padding that preserve escape sequences.
Widths are measured per grapheme cluster so emoji sequences and combining
marks keep grid cells aligned.
"""

from __future__ import annotations

import re
import unicodedata

from .graphemes import split_characters

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
ZERO_WIDTH_CODE_POINTS = frozenset({0x200B, 0x200C, 0x200D, 0x2060, 0xFEFF})
EMOJI_PRESENTATION_SELECTOR = "\ufe0f"


def char_display_width(ch: str) -> int:
    """Return terminal column width for one code point.

    Combining marks, joiners, and variation selectors consume no columns,
    East Asian wide/fullwidth characters consume two.
    """
    code = ord(ch)
    if code in ZERO_WIDTH_CODE_POINTS or 0xFE00 <= code <= 0xFE0F:
        return 0
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def _is_regional_indicator(ch: str) -> bool:
    return 0x1F1E6 <= ord(ch) <= 0x1F1FF


def cluster_display_width(cluster: str) -> int:
    """Return the column width of one grapheme cluster (0, 1, or 2)."""
    if not cluster:
        return 0
    if EMOJI_PRESENTATION_SELECTOR in cluster or _is_regional_indicator(cluster[0]):
        return 2
    return min(2, max(char_display_width(ch) for ch in cluster))


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def text_display_width(text: str) -> int:
    """Return display columns used by ``text``, ignoring escape sequences."""
    return sum(cluster_display_width(cluster) for cluster in split_characters(strip_ansi(text)))


def _ansi_tokens(text: str) -> list[tuple[bool, str]]:
    """Split ``text`` into ``(is_escape, chunk)`` pairs in order."""
    tokens: list[tuple[bool, str]] = []
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            tokens.append((False, text[pos : match.start()]))
        tokens.append((True, match.group(0)))
        pos = match.end()
    if pos < len(text):
        tokens.append((False, text[pos:]))
    return tokens


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    A wide cluster that would straddle the limit is dropped entirely.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for is_escape, chunk in _ansi_tokens(text):
        if is_escape:
            out.append(chunk)
            continue
        for cluster in split_characters(chunk):
            width = cluster_display_width(cluster)
            if col + width > max_cols:
                return "".join(out)
            out.append(cluster)
            col += width
    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and right-pad it with spaces."""
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - text_display_width(clipped))
