"""JSON export of a cell sequence.

Records mirror ``Cell`` one to one. When the output is a terminal the JSON is
colored with Pygments, imported lazily so plain exports never pay for it.
"""

from __future__ import annotations

import json
import re

from .cells import Cell, IndexedValue
from .formatting import code_point_label

_PYGMENTS_READY = False
_PYGMENTS_AVAILABLE = False
_PYGMENTS_HIGHLIGHT = None
_PYGMENTS_JSON_LEXER = None
_PYGMENTS_TERMINAL_FORMATTER = None
_PYGMENTS_GET_STYLE_BY_NAME = None
_PYGMENTS_FORMATTERS: dict[str, object] = {}
DEFAULT_STYLE = "monokai"
_SURROGATE_RE = re.compile(r"[\ud800-\udfff]")


def _indexed(value: IndexedValue | None) -> dict[str, object] | None:
    if value is None:
        return None
    return {"index": value.index, "value": value.value}


def cell_to_record(cell: Cell) -> dict[str, object]:
    """Return a JSON-ready dict for ``cell``; absent fields become ``None``."""
    scalar = _indexed(cell.unicode_scalar)
    if scalar is not None:
        scalar["code_point"] = code_point_label(cell.unicode_scalar.value)
    return {
        "group_id": cell.group_id,
        "character": _indexed(cell.character),
        "unicode_scalar": scalar,
        "utf16_code_unit": _indexed(cell.utf16_code_unit),
        "utf8_code_unit": _indexed(cell.utf8_code_unit),
    }


def cells_to_json(cells: list[Cell], indent: int | None = 2) -> str:
    """Serialize ``cells`` as UTF-8 friendly JSON.

    Non-ASCII text stays readable; lone surrogates, which cannot be encoded,
    are written as ``\\uXXXX`` escapes.
    """
    source = json.dumps([cell_to_record(cell) for cell in cells], indent=indent, ensure_ascii=False)
    return _SURROGATE_RE.sub(lambda match: f"\\u{ord(match.group(0)):04x}", source)


def _ensure_pygments_loaded() -> bool:
    global _PYGMENTS_READY
    global _PYGMENTS_AVAILABLE
    global _PYGMENTS_HIGHLIGHT
    global _PYGMENTS_JSON_LEXER
    global _PYGMENTS_TERMINAL_FORMATTER
    global _PYGMENTS_GET_STYLE_BY_NAME

    if _PYGMENTS_READY:
        return _PYGMENTS_AVAILABLE

    _PYGMENTS_READY = True
    try:
        from pygments import highlight as pygments_highlight
        from pygments.formatters import TerminalFormatter
        from pygments.lexers import JsonLexer
        from pygments.styles import get_style_by_name
    except ImportError:
        _PYGMENTS_AVAILABLE = False
        return False

    _PYGMENTS_HIGHLIGHT = pygments_highlight
    _PYGMENTS_JSON_LEXER = JsonLexer
    _PYGMENTS_TERMINAL_FORMATTER = TerminalFormatter
    _PYGMENTS_GET_STYLE_BY_NAME = get_style_by_name
    _PYGMENTS_AVAILABLE = True
    return True


def _normalize_style(style: str) -> str:
    try:
        assert _PYGMENTS_GET_STYLE_BY_NAME is not None
        _PYGMENTS_GET_STYLE_BY_NAME(style)
        return style
    except Exception:
        return DEFAULT_STYLE


def _formatter_for_style(style: str):
    formatter = _PYGMENTS_FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    assert _PYGMENTS_TERMINAL_FORMATTER is not None
    formatter = _PYGMENTS_TERMINAL_FORMATTER(style=style)
    _PYGMENTS_FORMATTERS[style] = formatter
    return formatter


def highlight_json(source: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` colored for a terminal, or unchanged when Pygments is unavailable."""
    if not _ensure_pygments_loaded():
        return source

    formatter = _formatter_for_style(_normalize_style(style))
    try:
        assert _PYGMENTS_HIGHLIGHT is not None
        assert _PYGMENTS_JSON_LEXER is not None
        return _PYGMENTS_HIGHLIGHT(source, _PYGMENTS_JSON_LEXER(), formatter)
    except Exception:
        return source
