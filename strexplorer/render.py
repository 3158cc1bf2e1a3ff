"""Grid rendering for the cell sequence.

Every cell becomes a fixed-width block of stacked sections: the character,
then one section per visible encoding, each an index line above a value line.
Blocks flow left to right into rows that fill the terminal width. The screen
frame adds an input prompt, a status line, and a key help line.
"""

from __future__ import annotations

import math
import os
import sys
from dataclasses import dataclass

from .ansi import clip_ansi_line, cluster_display_width, pad_ansi_line, text_display_width
from .cells import Cell, IndexedValue
from .formatting import code_point_label, display_text, format_utf16, format_utf8, scalar_name
from .graphemes import split_characters
from .ui_theme import UITheme
from .view_context import ENCODING_LABELS, Encoding, ViewContext

CELL_WIDTH = 9
CELL_SPACING = 1
GRID_PADDING = 1
HEADER_ROWS = 2
FOOTER_ROWS = 2
RULE_CHAR = "─"
HIGHLIGHT_GUTTER = "▌"
PROMPT_LABEL = "Input:"
ELLIPSIS = "…"

TOGGLE_KEYS = {
    Encoding.UNICODE_SCALAR: "^S",
    Encoding.UTF16: "^T",
    Encoding.UTF8: "^E",
}


@dataclass(frozen=True)
class CellSummary:
    characters: int = 0
    unicode_scalars: int = 0
    utf16_code_units: int = 0
    utf8_code_units: int = 0


def summarize(cells: list[Cell]) -> CellSummary:
    return CellSummary(
        characters=sum(1 for cell in cells if cell.character is not None),
        unicode_scalars=sum(1 for cell in cells if cell.unicode_scalar is not None),
        utf16_code_units=sum(1 for cell in cells if cell.utf16_code_unit is not None),
        utf8_code_units=sum(1 for cell in cells if cell.utf8_code_unit is not None),
    )


def grid_column_count(width: int) -> int:
    """Number of cell blocks that fit in ``width`` terminal columns."""
    usable = width - 2 * GRID_PADDING + CELL_SPACING
    return max(1, usable // (CELL_WIDTH + CELL_SPACING))


def block_height(view: ViewContext) -> int:
    """Lines per cell block: two per section plus one rule between sections."""
    sections = 1 + view.visible_encoding_count()
    return 2 * sections + (sections - 1)


def block_row_stride(view: ViewContext) -> int:
    # One blank separator line below every row of blocks.
    return block_height(view) + 1


def _section_lines(
    value: IndexedValue | None,
    text: str,
    style: str,
    theme: UITheme,
    background: str,
    gutter: str,
) -> list[str]:
    content_width = CELL_WIDTH - 1
    if value is None:
        blank = f"{background}{gutter}{' ' * content_width}{theme.reset}"
        return [blank, blank]
    index_line = f"{background}{gutter}{theme.cell_index}{pad_ansi_line(str(value.index), content_width)}{theme.reset}"
    value_line = f"{background}{gutter}{style}{pad_ansi_line(text, content_width)}{theme.reset}"
    return [index_line, value_line]


def cell_block_lines(cell: Cell, view: ViewContext, theme: UITheme, highlighted: bool = False) -> list[str]:
    """Render one cell as ``block_height(view)`` lines of exactly ``CELL_WIDTH`` columns."""
    background = theme.cell_highlight if highlighted else ""
    gutter = HIGHLIGHT_GUTTER if highlighted else " "
    rule = f"{background}{theme.cell_rule}{RULE_CHAR * CELL_WIDTH}{theme.reset}"

    character_text = display_text(cell.character.value) if cell.character is not None else ""
    sections = [_section_lines(cell.character, character_text, theme.cell_character, theme, background, gutter)]
    if view.shows_unicode_scalar:
        scalar_text = display_text(cell.unicode_scalar.value) if cell.unicode_scalar is not None else ""
        sections.append(_section_lines(cell.unicode_scalar, scalar_text, theme.cell_scalar, theme, background, gutter))
    if view.shows_utf16_code_unit:
        unit_text = format_utf16(cell.utf16_code_unit.value, view.hex_mode) if cell.utf16_code_unit is not None else ""
        sections.append(_section_lines(cell.utf16_code_unit, unit_text, theme.cell_utf16, theme, background, gutter))
    if view.shows_utf8_code_unit:
        byte_text = format_utf8(cell.utf8_code_unit.value, view.hex_mode) if cell.utf8_code_unit is not None else ""
        sections.append(_section_lines(cell.utf8_code_unit, byte_text, theme.cell_utf8, theme, background, gutter))

    lines: list[str] = []
    for idx, section in enumerate(sections):
        if idx:
            lines.append(rule)
        lines.extend(section)
    return lines


def build_grid_lines(cells: list[Cell], view: ViewContext, theme: UITheme, width: int) -> list[str]:
    """Lay out the visible cells of ``cells`` as screen lines."""
    visible = view.filter_cells(cells)
    if not visible:
        return []

    columns = grid_column_count(width)
    padding = " " * GRID_PADDING
    spacer = " " * CELL_SPACING
    lines: list[str] = []
    for row_start in range(0, len(visible), columns):
        blocks = [
            cell_block_lines(cell, view, theme, highlighted=view.is_highlighted(cell))
            for cell in visible[row_start : row_start + columns]
        ]
        for line_idx in range(block_height(view)):
            lines.append(padding + spacer.join(block[line_idx] for block in blocks))
        lines.append("")
    return lines


def grid_row_count(visible_count: int, width: int) -> int:
    return math.ceil(visible_count / grid_column_count(width)) if visible_count > 0 else 0


def visible_block_rows(view: ViewContext, viewport_rows: int) -> int:
    """Whole rows of blocks that fit in ``viewport_rows`` screen lines."""
    return max(1, (viewport_rows + 1) // block_row_stride(view))


def max_scroll_row(visible_count: int, view: ViewContext, width: int, viewport_rows: int) -> int:
    return max(0, grid_row_count(visible_count, width) - visible_block_rows(view, viewport_rows))


def cell_at(
    visible_cells: list[Cell],
    view: ViewContext,
    width: int,
    col: int,
    row: int,
    scroll_row: int = 0,
) -> Cell | None:
    """Hit-test a 0-based grid-viewport position against the laid out cells."""
    if col < GRID_PADDING or row < 0:
        return None
    stride = block_row_stride(view)
    grid_row, line_in_row = divmod(row, stride)
    if line_in_row >= block_height(view):
        return None
    slot, offset = divmod(col - GRID_PADDING, CELL_WIDTH + CELL_SPACING)
    if offset >= CELL_WIDTH:
        return None
    columns = grid_column_count(width)
    if slot >= columns:
        return None
    position = (grid_row + scroll_row) * columns + slot
    if position >= len(visible_cells):
        return None
    return visible_cells[position]


def grid_row_of_group(visible_cells: list[Cell], group_id: int, width: int) -> int | None:
    columns = grid_column_count(width)
    for position, cell in enumerate(visible_cells):
        if cell.group_id == group_id:
            return position // columns
    return None


def describe_group(cells: list[Cell], group_id: int) -> str:
    """One-line description of a character group: scalars and byte count."""
    group = [cell for cell in cells if cell.group_id == group_id]
    if not group:
        return ""
    scalars = [cell.unicode_scalar.value for cell in group if cell.unicode_scalar is not None]
    labels = []
    for scalar in scalars:
        name = scalar_name(scalar)
        labels.append(f"{code_point_label(scalar)} {name}" if name else code_point_label(scalar))
    utf16_count = sum(1 for cell in group if cell.utf16_code_unit is not None)
    utf8_count = sum(1 for cell in group if cell.utf8_code_unit is not None)
    return f"#{group_id}: {', '.join(labels)} ({utf16_count} UTF-16, {utf8_count} UTF-8)"


def format_summary(summary: CellSummary) -> str:
    return (
        f"{summary.characters} chars · {summary.unicode_scalars} scalars · "
        f"{summary.utf16_code_units} UTF-16 · {summary.utf8_code_units} UTF-8"
    )


def build_toggle_line(view: ViewContext, theme: UITheme) -> str:
    parts: list[str] = []
    for encoding in Encoding:
        style = theme.toggle_on if view.is_visible(encoding) else theme.toggle_off
        mark = "x" if view.is_visible(encoding) else " "
        parts.append(f"{theme.help_key}{TOGGLE_KEYS[encoding]}{theme.reset} {style}[{mark}] {ENCODING_LABELS[encoding]}{theme.reset}")
    hex_style = theme.toggle_on if view.hex_mode else theme.toggle_off
    base_label = "Hex" if view.hex_mode else "Dec"
    parts.append(f"{theme.help_key}^X{theme.reset} {hex_style}{base_label}{theme.reset}")
    return "  ".join(parts)


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    """Compose a status row with ``right_text`` flush right when it fits."""
    left_width = text_display_width(left_text)
    right_width = text_display_width(right_text)
    if left_width + 1 + right_width > width:
        return clip_ansi_line(left_text, width)
    return left_text + " " * (width - left_width - right_width) + right_text


HELP_LINE = "^U clear ←→ select ↑↓ scroll Esc quit"


@dataclass
class RenderContext:
    text: str
    cells: list[Cell]
    view: ViewContext
    theme: UITheme
    width: int
    height: int
    scroll_row: int = 0
    status_message: str = ""


def grid_viewport_rows(height: int) -> int:
    return max(1, height - HEADER_ROWS - FOOTER_ROWS)


def _tail_to_width(text: str, width: int) -> str:
    """Keep the end of ``text`` that fits in ``width`` columns, marking the cut."""
    if text_display_width(text) <= width:
        return text
    kept: list[str] = []
    used = 1
    for cluster in reversed(split_characters(text)):
        cluster_width = cluster_display_width(cluster)
        if used + cluster_width > width:
            break
        kept.append(cluster)
        used += cluster_width
    return ELLIPSIS + "".join(reversed(kept))


def build_prompt_line(text: str, theme: UITheme, width: int) -> str:
    label = f"{theme.prompt_label}{PROMPT_LABEL}{theme.reset} "
    if not text:
        return f"{label}{theme.reverse} {theme.reset}{theme.prompt_placeholder}type some text{theme.reset}"
    # The cursor block takes one column after the text.
    available = max(1, width - len(PROMPT_LABEL) - 2)
    return f"{label}{_tail_to_width(display_text(text), available)}{theme.reverse} {theme.reset}"


def build_screen_rows(context: RenderContext) -> list[str]:
    """Compose every row of one frame; pure so it can be asserted on."""
    theme = context.theme
    width = max(1, context.width)
    viewport_rows = grid_viewport_rows(context.height)

    grid_lines = build_grid_lines(context.cells, context.view, theme, width)
    start = context.scroll_row * block_row_stride(context.view)
    viewport = grid_lines[start : start + viewport_rows]
    viewport.extend([""] * (viewport_rows - len(viewport)))

    if context.status_message:
        info = context.status_message
    elif context.view.highlighted_group_id is not None:
        info = describe_group(context.cells, context.view.highlighted_group_id)
    else:
        info = format_summary(summarize(context.cells))

    rows = [
        build_prompt_line(context.text, theme, width),
        f"{theme.divider}{RULE_CHAR * width}{theme.reset}",
        *viewport,
        build_status_line(f"{theme.status_text}{info}{theme.reset}", width, f"{theme.help_dim}{HELP_LINE}{theme.reset}"),
        build_toggle_line(context.view, theme),
    ]
    return [clip_ansi_line(row, width) for row in rows]


def render_screen(context: RenderContext) -> None:
    """Write one full frame to the terminal."""
    out: list[str] = ["\033[H"]
    for idx, row in enumerate(build_screen_rows(context)):
        out.append(f"\033[{idx + 1};1H")
        out.append(row)
        out.append("\033[0m\033[K")
    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


def render_grid_text(cells: list[Cell], view: ViewContext, theme: UITheme, width: int) -> str:
    """Render the grid once for non-interactive output."""
    lines = build_grid_lines(cells, view, theme, width)
    out: list[str] = []
    # The trailing separator line is dropped; plain output has no trailing spaces.
    for line in lines[:-1]:
        out.append(line if theme.reset else line.rstrip(" "))
        out.append("\n")
    out.append(format_summary(summarize(cells)))
    out.append("\n")
    return "".join(out)
