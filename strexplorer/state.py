from __future__ import annotations

from dataclasses import dataclass, field

from .cells import Cell
from .ui_theme import DEFAULT_THEME, UITheme
from .view_context import ViewContext


@dataclass
class AppState:
    text: str = ""
    cells: list[Cell] = field(default_factory=list)
    view: ViewContext = field(default_factory=ViewContext)
    theme: UITheme = DEFAULT_THEME
    scroll_row: int = 0
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True

    @property
    def character_count(self) -> int:
        return sum(1 for cell in self.cells if cell.character is not None)
