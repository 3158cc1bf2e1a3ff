"""Split text into user-perceived characters (extended grapheme clusters)."""

from __future__ import annotations

import grapheme


def split_characters(text: str) -> list[str]:
    """Return the grapheme clusters of ``text`` in input order."""
    if not text:
        return []
    return list(grapheme.graphemes(text))


def last_character(text: str) -> str:
    """Return the final grapheme cluster of ``text`` or ``""``."""
    characters = split_characters(text)
    return characters[-1] if characters else ""


def drop_last_character(text: str) -> str:
    """Remove the final grapheme cluster, keeping combining sequences whole."""
    last = last_character(text)
    if not last:
        return text
    return text[: len(text) - len(last)]
