"""Persistent JSON config helpers.

Stores encoding-row visibility, the hex/decimal preference, and the UI theme.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from pathlib import Path

from platformdirs import user_config_dir

from .ui_theme import normalize_theme_name
from .view_context import ViewContext

APP_NAME = "strexplorer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

_VIEW_KEYS = (
    "shows_unicode_scalar",
    "shows_utf16_code_unit",
    "shows_utf8_code_unit",
    "hex_mode",
)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_view_preferences() -> ViewContext:
    """Return a ``ViewContext`` seeded from persisted preferences.

    Only explicit boolean values are accepted. A config that would hide every
    encoding row falls back to showing all of them.
    """
    data = load_config()
    view = ViewContext()
    for key in _VIEW_KEYS:
        value = data.get(key)
        if isinstance(value, bool):
            setattr(view, key, value)
    if view.visible_encoding_count() == 0:
        view.shows_unicode_scalar = True
        view.shows_utf16_code_unit = True
        view.shows_utf8_code_unit = True
    return view


def save_view_preferences(view: ViewContext) -> None:
    """Persist visibility and numeric-base flags; the highlight is transient."""
    config = load_config()
    for key in _VIEW_KEYS:
        config[key] = bool(getattr(view, key))
    save_config(config)


def load_theme_name() -> str | None:
    value = load_config().get("theme")
    return value if isinstance(value, str) and value.strip() else None


def save_theme_name(name: str) -> None:
    config = load_config()
    config["theme"] = normalize_theme_name(name)
    save_config(config)
