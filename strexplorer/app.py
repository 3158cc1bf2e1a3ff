"""Interactive explorer session.

Key handling is a plain function over ``AppState`` so it can be exercised
without a terminal; ``run_explorer`` wires it to raw input and rendering.
Every text edit re-runs ``decompose`` on the whole input.
"""

from __future__ import annotations

import os
import shutil
import sys
import time
from collections.abc import Callable

from .cells import decompose
from .config import save_view_preferences
from .graphemes import drop_last_character
from .input import read_key
from .render import (
    HEADER_ROWS,
    RenderContext,
    cell_at,
    grid_row_of_group,
    grid_viewport_rows,
    max_scroll_row,
    render_screen,
    visible_block_rows,
)
from .state import AppState
from .terminal import TerminalController
from .ui_theme import UITheme
from .view_context import ENCODING_LABELS, Encoding, ViewContext

STATUS_MESSAGE_SECONDS = 2.0
KEY_TIMEOUT_MS = 120
QUIT_KEYS = frozenset({"ESC", "CTRL_C", "CTRL_Q"})
TOGGLE_ENCODING_KEYS = {
    "CTRL_S": Encoding.UNICODE_SCALAR,
    "CTRL_T": Encoding.UTF16,
    "CTRL_E": Encoding.UTF8,
}


def set_text(state: AppState, text: str) -> None:
    """Replace the input and rebuild the full cell sequence."""
    state.text = text
    state.cells = decompose(text)
    highlighted = state.view.highlighted_group_id
    if highlighted is not None and highlighted >= state.character_count:
        state.view.clear_highlight()
    state.dirty = True


def set_status(state: AppState, message: str) -> None:
    state.status_message = message
    state.status_message_until = time.monotonic() + STATUS_MESSAGE_SECONDS
    state.dirty = True


def _clamp_scroll(state: AppState, width: int, height: int) -> None:
    visible_count = len(state.view.filter_cells(state.cells))
    limit = max_scroll_row(visible_count, state.view, width, grid_viewport_rows(height))
    state.scroll_row = max(0, min(state.scroll_row, limit))


def _scroll(state: AppState, delta: int, width: int, height: int) -> None:
    previous = state.scroll_row
    state.scroll_row += delta
    _clamp_scroll(state, width, height)
    if state.scroll_row != previous:
        state.dirty = True


def _reveal_group(state: AppState, group_id: int, width: int, height: int) -> None:
    row = grid_row_of_group(state.view.filter_cells(state.cells), group_id, width)
    if row is None:
        return
    rows = visible_block_rows(state.view, grid_viewport_rows(height))
    if row < state.scroll_row:
        state.scroll_row = row
    elif row >= state.scroll_row + rows:
        state.scroll_row = row - rows + 1
    _clamp_scroll(state, width, height)


def _move_highlight(state: AppState, key: str, width: int, height: int) -> None:
    count = state.character_count
    if count == 0:
        return
    current = state.view.highlighted_group_id
    if key == "HOME":
        target = 0
    elif key == "END":
        target = count - 1
    elif current is None:
        target = 0 if key == "RIGHT" else count - 1
    elif key == "RIGHT":
        target = min(count - 1, current + 1)
    else:
        target = max(0, current - 1)
    if state.view.highlight(target):
        _reveal_group(state, target, width, height)
        state.dirty = True


def _hover(state: AppState, col: int, row: int, width: int, height: int) -> None:
    # Mouse coordinates are 1-based screen positions.
    grid_row = row - 1 - HEADER_ROWS
    cell = None
    if 0 <= grid_row < grid_viewport_rows(height):
        cell = cell_at(
            state.view.filter_cells(state.cells),
            state.view,
            width,
            col - 1,
            grid_row,
            scroll_row=state.scroll_row,
        )
    if state.view.highlight(cell.group_id if cell is not None else None):
        state.dirty = True


def _parse_mouse(key: str) -> tuple[int, int] | None:
    try:
        _kind, col_s, row_s = key.split(":")
        return int(col_s), int(row_s)
    except ValueError:
        return None


def handle_key(
    state: AppState,
    key: str,
    width: int,
    height: int,
    save_view: Callable[[ViewContext], None] = save_view_preferences,
) -> bool:
    """Apply one key token to ``state``; return ``True`` when the session should end."""
    if key in QUIT_KEYS:
        return True

    if key in TOGGLE_ENCODING_KEYS:
        encoding = TOGGLE_ENCODING_KEYS[key]
        if state.view.toggle(encoding):
            save_view(state.view)
            _clamp_scroll(state, width, height)
            state.dirty = True
        else:
            set_status(state, f"{ENCODING_LABELS[encoding]} is the last visible row")
        return False

    if key == "CTRL_X":
        state.view.toggle_hex_mode()
        save_view(state.view)
        state.dirty = True
        return False

    if key == "CTRL_U":
        set_text(state, "")
        _clamp_scroll(state, width, height)
        return False

    if key == "BACKSPACE":
        if state.text:
            set_text(state, drop_last_character(state.text))
            _clamp_scroll(state, width, height)
        return False

    if key == "TAB":
        key = "\t"

    if key in {"LEFT", "RIGHT", "HOME", "END"}:
        _move_highlight(state, key, width, height)
        return False

    if key in {"UP", "DOWN"}:
        _scroll(state, -1 if key == "UP" else 1, width, height)
        return False

    if key.startswith("MOUSE_WHEEL_"):
        _scroll(state, -1 if key.startswith("MOUSE_WHEEL_UP") else 1, width, height)
        return False

    if key.startswith(("MOUSE_MOVE:", "MOUSE_LEFT_DOWN:")):
        position = _parse_mouse(key)
        if position is not None:
            _hover(state, position[0], position[1], width, height)
        return False

    if len(key) == 1:
        set_text(state, state.text + key)
        _clamp_scroll(state, width, height)
    return False


def run_explorer(text: str, view: ViewContext, theme: UITheme) -> str:
    """Run the interactive session until a quit key; return the final text."""
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    state = AppState(view=view, theme=theme)
    set_text(state, text)

    with terminal.raw_mode():
        while True:
            term = shutil.get_terminal_size((80, 24))
            now = time.monotonic()
            if state.status_message and now >= state.status_message_until:
                state.status_message = ""
                state.status_message_until = 0.0
                state.dirty = True
            _clamp_scroll(state, term.columns, term.lines)

            if state.dirty:
                render_screen(
                    RenderContext(
                        text=state.text,
                        cells=state.cells,
                        view=state.view,
                        theme=state.theme,
                        width=term.columns,
                        height=term.lines,
                        scroll_row=state.scroll_row,
                        status_message=state.status_message,
                    )
                )
                state.dirty = False

            try:
                key = read_key(stdin_fd, timeout_ms=KEY_TIMEOUT_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            if handle_key(state, key, term.columns, term.lines):
                break
    os.write(sys.stdout.fileno(), b"\x1b[0m")
    return state.text
