"""Unit tests for explorer key handling.

Drives ``handle_key`` directly over ``AppState`` without a terminal.
Covers text editing, row toggles, highlighting, hovering, and scrolling.
"""

from __future__ import annotations

import unittest

from strexplorer.app import handle_key, set_text
from strexplorer.state import AppState
from strexplorer.ui_theme import PLAIN_THEME
from strexplorer.view_context import ViewContext


def _make_state(text: str = "", view: ViewContext | None = None) -> AppState:
    state = AppState(view=view or ViewContext(), theme=PLAIN_THEME)
    set_text(state, text)
    state.dirty = False
    return state


class KeyHandlersBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.saved_views: list[ViewContext] = []

    def _invoke(self, state: AppState, key: str, width: int = 80, height: int = 24) -> bool:
        return handle_key(state, key, width, height, save_view=self.saved_views.append)

    def test_quit_keys_end_session(self) -> None:
        state = _make_state("a")
        for key in ("ESC", "CTRL_C", "CTRL_Q"):
            self.assertTrue(self._invoke(state, key))

    def test_typing_appends_and_rebuilds_cells(self) -> None:
        state = _make_state()
        self.assertFalse(self._invoke(state, "h"))
        self._invoke(state, "é")

        self.assertEqual(state.text, "hé")
        self.assertEqual(len(state.cells), 3)
        self.assertEqual(state.character_count, 2)
        self.assertTrue(state.dirty)

    def test_tab_inserts_tab_character(self) -> None:
        state = _make_state("a")
        self._invoke(state, "TAB")
        self.assertEqual(state.text, "a\t")

    def test_backspace_removes_whole_character(self) -> None:
        state = _make_state("aé")
        self._invoke(state, "BACKSPACE")
        self.assertEqual(state.text, "a")
        self._invoke(state, "BACKSPACE")
        self._invoke(state, "BACKSPACE")
        self.assertEqual(state.text, "")
        self.assertEqual(state.cells, [])

    def test_ctrl_u_clears_text(self) -> None:
        state = _make_state("hello")
        self._invoke(state, "CTRL_U")
        self.assertEqual(state.text, "")
        self.assertEqual(state.cells, [])

    def test_unknown_tokens_are_ignored(self) -> None:
        state = _make_state("a")
        self._invoke(state, "ENTER_CR")
        self._invoke(state, "MOUSE")
        self.assertEqual(state.text, "a")

    def test_toggle_hides_row_and_persists_view(self) -> None:
        state = _make_state("a")
        self._invoke(state, "CTRL_T")

        self.assertFalse(state.view.shows_utf16_code_unit)
        self.assertEqual(self.saved_views, [state.view])
        self._invoke(state, "CTRL_T")
        self.assertTrue(state.view.shows_utf16_code_unit)

    def test_last_visible_row_cannot_be_hidden(self) -> None:
        view = ViewContext(shows_unicode_scalar=False, shows_utf16_code_unit=False)
        state = _make_state("a", view=view)
        self._invoke(state, "CTRL_E")

        self.assertTrue(state.view.shows_utf8_code_unit)
        self.assertEqual(state.status_message, "UTF-8 is the last visible row")
        self.assertEqual(self.saved_views, [])

    def test_ctrl_x_switches_numeric_base(self) -> None:
        state = _make_state("a")
        self._invoke(state, "CTRL_X")
        self.assertFalse(state.view.hex_mode)
        self.assertEqual(len(self.saved_views), 1)

    def test_arrow_keys_move_highlight_within_bounds(self) -> None:
        state = _make_state("abc")
        self._invoke(state, "RIGHT")
        self.assertEqual(state.view.highlighted_group_id, 0)
        self._invoke(state, "RIGHT")
        self._invoke(state, "RIGHT")
        self._invoke(state, "RIGHT")
        self.assertEqual(state.view.highlighted_group_id, 2)
        self._invoke(state, "HOME")
        self.assertEqual(state.view.highlighted_group_id, 0)
        self._invoke(state, "LEFT")
        self.assertEqual(state.view.highlighted_group_id, 0)

    def test_left_without_highlight_selects_last_character(self) -> None:
        state = _make_state("abc")
        self._invoke(state, "LEFT")
        self.assertEqual(state.view.highlighted_group_id, 2)

    def test_highlight_is_cleared_when_its_character_is_deleted(self) -> None:
        state = _make_state("ab")
        self._invoke(state, "END")
        self._invoke(state, "BACKSPACE")
        self.assertIsNone(state.view.highlighted_group_id)

    def test_mouse_motion_highlights_hovered_group(self) -> None:
        state = _make_state("Hi")
        # Screen row 3 is the first grid line below the prompt and divider.
        self._invoke(state, "MOUSE_MOVE:2:3")
        self.assertEqual(state.view.highlighted_group_id, 0)
        self._invoke(state, "MOUSE_MOVE:12:5")
        self.assertEqual(state.view.highlighted_group_id, 1)
        self._invoke(state, "MOUSE_MOVE:12:1")
        self.assertIsNone(state.view.highlighted_group_id)

    def test_scroll_keys_are_clamped_to_grid(self) -> None:
        state = _make_state("abc")
        # Width 21 fits two blocks per row; height 16 leaves room for one block row.
        self._invoke(state, "DOWN", width=21, height=16)
        self.assertEqual(state.scroll_row, 1)
        self._invoke(state, "MOUSE_WHEEL_DOWN:1:1", width=21, height=16)
        self.assertEqual(state.scroll_row, 1)
        self._invoke(state, "UP", width=21, height=16)
        self.assertEqual(state.scroll_row, 0)

    def test_highlight_scrolls_selected_group_into_view(self) -> None:
        state = _make_state("abc")
        self._invoke(state, "END", width=21, height=16)
        self.assertEqual(state.view.highlighted_group_id, 2)
        self.assertEqual(state.scroll_row, 1)


if __name__ == "__main__":
    unittest.main()
