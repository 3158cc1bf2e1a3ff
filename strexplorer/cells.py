"""Aligned decomposition of text into characters, scalars, and code units.

``decompose`` walks three encodings of every character in lockstep: Unicode
scalars, UTF-16 code units, and UTF-8 bytes. Each synchronized step yields one
``Cell`` carrying at most one element of each encoding plus its index in the
whole text. Walkers are held and resumed so that a new scalar always starts on
a fresh cell: the UTF-8 walker is the longest encoding, so its pause marks the
end of a scalar.

Example for ``"é"`` (U+00E9, UTF-8 ``c3 a9``)::

    cell 0: character=é  scalar=U+00E9  utf16=0x00e9  utf8=0xc3
    cell 1:                                           utf8=0xa9
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .graphemes import split_characters
from .walker import EncodingWalker

V = TypeVar("V")

LEAD_SURROGATE_PREFIX = 0b110110
TRAIL_SURROGATE_PREFIX = 0b110111


@dataclass(frozen=True)
class IndexedValue(Generic[V]):
    """An element together with its 0-based position in the whole text."""

    index: int
    value: V


@dataclass(frozen=True)
class Cell:
    """One aligned row of the decomposition grid.

    ``group_id`` is the index of the owning character. ``character`` is set on
    the first cell of a group only; the other fields are ``None`` when the
    matching walker had nothing to contribute on this step.
    """

    group_id: int
    character: IndexedValue[str] | None = None
    unicode_scalar: IndexedValue[str] | None = None
    utf16_code_unit: IndexedValue[int] | None = None
    utf8_code_unit: IndexedValue[int] | None = None

    @property
    def code_point(self) -> int | None:
        if self.unicode_scalar is None:
            return None
        return ord(self.unicode_scalar.value)

    def is_empty(self) -> bool:
        return (
            self.character is None
            and self.unicode_scalar is None
            and self.utf16_code_unit is None
            and self.utf8_code_unit is None
        )


class Utf8ByteClass(enum.Enum):
    """Role of a byte inside a UTF-8 sequence, from its leading bits."""

    ASCII = "ascii"
    CONTINUATION = "continuation"
    LEAD_2 = "lead_2"
    LEAD_3 = "lead_3"
    LEAD_4 = "lead_4"


_SEQUENCE_LENGTHS = {
    Utf8ByteClass.ASCII: 1,
    Utf8ByteClass.CONTINUATION: 0,
    Utf8ByteClass.LEAD_2: 2,
    Utf8ByteClass.LEAD_3: 3,
    Utf8ByteClass.LEAD_4: 4,
}


def is_lead_surrogate(unit: int) -> bool:
    """Return whether a UTF-16 code unit lies in ``0xD800..0xDBFF``."""
    return (unit >> 10) == LEAD_SURROGATE_PREFIX


def is_trail_surrogate(unit: int) -> bool:
    """Return whether a UTF-16 code unit lies in ``0xDC00..0xDFFF``."""
    return (unit >> 10) == TRAIL_SURROGATE_PREFIX


def utf8_byte_class(byte: int) -> Utf8ByteClass:
    # Checked in this order: 10xxxxxx, 0xxxxxxx, 110xxxxx, 1110xxxx, 1111xxxx.
    if byte & 0xC0 == 0x80:
        return Utf8ByteClass.CONTINUATION
    if byte & 0x80 == 0:
        return Utf8ByteClass.ASCII
    if byte & 0xE0 == 0xC0:
        return Utf8ByteClass.LEAD_2
    if byte & 0xF0 == 0xE0:
        return Utf8ByteClass.LEAD_3
    return Utf8ByteClass.LEAD_4


def utf8_sequence_length(byte: int) -> int:
    """Total byte count of the sequence ``byte`` starts; 0 for continuations."""
    return _SEQUENCE_LENGTHS[utf8_byte_class(byte)]


def character_encodings(character: str) -> tuple[list[str], list[int], list[int]]:
    """Return the scalars, UTF-16 code units, and UTF-8 bytes of ``character``.

    Lone surrogates are passed through so any Python ``str`` can be encoded.
    """
    scalars = list(character)
    utf16_bytes = character.encode("utf-16-le", "surrogatepass")
    utf16_units = [
        int.from_bytes(utf16_bytes[offset : offset + 2], "little")
        for offset in range(0, len(utf16_bytes), 2)
    ]
    utf8_bytes = list(character.encode("utf-8", "surrogatepass"))
    return scalars, utf16_units, utf8_bytes


@dataclass
class RunningIndices:
    """Per-encoding counters for one ``decompose`` call."""

    character: int = 0
    unicode_scalar: int = 0
    utf16: int = 0
    utf8: int = 0


def decompose_character(character: str, indices: RunningIndices) -> list[Cell]:
    """Emit the cells of one character and advance ``indices`` past it.

    ``indices.character`` is used as the group id but is left for the caller
    to advance.
    """
    scalars, utf16_units, utf8_bytes = character_encodings(character)
    scalar_walker = EncodingWalker(scalars)
    utf16_walker = EncodingWalker(utf16_units)
    utf8_walker = EncodingWalker(utf8_bytes)

    cells: list[Cell] = []
    while True:
        unicode_scalar: IndexedValue[str] | None = None
        scalar = scalar_walker.next()
        if scalar is not None:
            unicode_scalar = IndexedValue(indices.unicode_scalar, scalar)
            indices.unicode_scalar += 1
            scalar_walker.hold()

        utf16_code_unit: IndexedValue[int] | None = None
        unit = utf16_walker.next()
        if unit is not None:
            utf16_code_unit = IndexedValue(indices.utf16, unit)
            indices.utf16 += 1
            # A lead surrogate lets the trail surrogate through on the next step.
            if not is_lead_surrogate(unit):
                utf16_walker.hold()

        utf8_code_unit: IndexedValue[int] | None = None
        byte = utf8_walker.next()
        if byte is not None:
            utf8_code_unit = IndexedValue(indices.utf8, byte)
            indices.utf8 += 1
            byte_class = utf8_byte_class(byte)
            if byte_class is Utf8ByteClass.ASCII:
                utf8_walker.hold()
            elif byte_class is not Utf8ByteClass.CONTINUATION:
                utf8_walker.hold(after=_SEQUENCE_LENGTHS[byte_class] - 1)

        # UTF-8 is never shorter than the other encodings of a scalar, so its
        # pause is the scalar boundary.
        if utf8_walker.on_hold:
            scalar_walker.resume()
            utf16_walker.resume()
            utf8_walker.resume()

        if unicode_scalar is None and utf16_code_unit is None and utf8_code_unit is None:
            break

        cells.append(
            Cell(
                group_id=indices.character,
                character=IndexedValue(indices.character, character) if not cells else None,
                unicode_scalar=unicode_scalar,
                utf16_code_unit=utf16_code_unit,
                utf8_code_unit=utf8_code_unit,
            )
        )
    return cells


def decompose(text: str | Iterable[str]) -> list[Cell]:
    """Decompose ``text`` into its aligned cell sequence.

    ``text`` may be a string, split into grapheme clusters here, or an
    iterable of characters that were split already; empty entries there are
    skipped. Every call starts from zeroed indices and returns a new list.
    """
    characters = split_characters(text) if isinstance(text, str) else text
    indices = RunningIndices()
    cells: list[Cell] = []
    for character in characters:
        if not character:
            continue
        cells.extend(decompose_character(character, indices))
        indices.character += 1
    return cells


__all__ = [
    "Cell",
    "IndexedValue",
    "RunningIndices",
    "Utf8ByteClass",
    "character_encodings",
    "decompose",
    "decompose_character",
    "is_lead_surrogate",
    "is_trail_surrogate",
    "utf8_byte_class",
    "utf8_sequence_length",
]
