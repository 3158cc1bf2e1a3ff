"""Display preferences shared by the renderer and key handlers.

Holds which encoding rows are visible, the numeric base for code units, and
the currently highlighted character group. None of this affects how cells are
computed; it only filters and styles them.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from .cells import Cell


class Encoding(enum.Enum):
    UNICODE_SCALAR = "scalar"
    UTF16 = "utf16"
    UTF8 = "utf8"


_VISIBILITY_ATTRS = {
    Encoding.UNICODE_SCALAR: "shows_unicode_scalar",
    Encoding.UTF16: "shows_utf16_code_unit",
    Encoding.UTF8: "shows_utf8_code_unit",
}

ENCODING_LABELS = {
    Encoding.UNICODE_SCALAR: "Unicode Scalar",
    Encoding.UTF16: "UTF-16",
    Encoding.UTF8: "UTF-8",
}


@dataclass
class ViewContext:
    shows_unicode_scalar: bool = True
    shows_utf16_code_unit: bool = True
    shows_utf8_code_unit: bool = True
    hex_mode: bool = True
    highlighted_group_id: int | None = None

    def is_visible(self, encoding: Encoding) -> bool:
        return bool(getattr(self, _VISIBILITY_ATTRS[encoding]))

    def visible_encodings(self) -> tuple[Encoding, ...]:
        return tuple(encoding for encoding in Encoding if self.is_visible(encoding))

    def visible_encoding_count(self) -> int:
        return len(self.visible_encodings())

    def can_toggle(self, encoding: Encoding) -> bool:
        """Hiding is refused for the last visible encoding; showing never is."""
        return not (self.is_visible(encoding) and self.visible_encoding_count() <= 1)

    def toggle(self, encoding: Encoding) -> bool:
        """Flip visibility of ``encoding``; return ``False`` when refused."""
        if not self.can_toggle(encoding):
            return False
        setattr(self, _VISIBILITY_ATTRS[encoding], not self.is_visible(encoding))
        return True

    def toggle_hex_mode(self) -> None:
        self.hex_mode = not self.hex_mode

    def is_cell_visible(self, cell: Cell) -> bool:
        """Return whether ``cell`` has a value in at least one visible row."""
        return (
            (cell.unicode_scalar is not None and self.shows_unicode_scalar)
            or (cell.utf16_code_unit is not None and self.shows_utf16_code_unit)
            or (cell.utf8_code_unit is not None and self.shows_utf8_code_unit)
        )

    def filter_cells(self, cells: Iterable[Cell]) -> list[Cell]:
        return [cell for cell in cells if self.is_cell_visible(cell)]

    def highlight(self, group_id: int | None) -> bool:
        """Set the highlighted group; return whether it changed."""
        if group_id == self.highlighted_group_id:
            return False
        self.highlighted_group_id = group_id
        return True

    def clear_highlight(self) -> bool:
        return self.highlight(None)

    def is_highlighted(self, cell: Cell) -> bool:
        return self.highlighted_group_id is not None and cell.group_id == self.highlighted_group_id


__all__ = ["ENCODING_LABELS", "Encoding", "ViewContext"]
