"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the grid, prompt, and status line. The JSON
export uses a separate Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    cell_index: str
    cell_character: str
    cell_scalar: str
    cell_utf16: str
    cell_utf8: str
    cell_rule: str
    cell_highlight: str
    prompt_label: str
    prompt_placeholder: str
    status_text: str
    toggle_on: str
    toggle_off: str
    help_key: str
    help_dim: str


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    cell_index="\033[2;38;5;250m",
    cell_character="\033[1;38;5;255m",
    cell_scalar="\033[38;5;252m",
    cell_utf16="\033[38;5;214m",
    cell_utf8="\033[38;5;39m",
    cell_rule="\033[2;38;5;240m",
    cell_highlight="\033[48;5;238m",
    prompt_label="\033[1;38;5;81m",
    prompt_placeholder="\033[2;38;5;250m",
    status_text="\033[38;5;250m",
    toggle_on="\033[1;38;5;81m",
    toggle_off="\033[2;38;5;244m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    cell_index="\033[2;38;5;110m",
    cell_character="\033[1;38;5;153m",
    cell_scalar="\033[38;5;117m",
    cell_utf16="\033[38;5;215m",
    cell_utf8="\033[38;5;45m",
    cell_rule="\033[2;38;5;24m",
    cell_highlight="\033[48;5;24m",
    prompt_label="\033[1;38;5;45m",
    prompt_placeholder="\033[2;38;5;110m",
    status_text="\033[38;5;153m",
    toggle_on="\033[1;38;5;45m",
    toggle_off="\033[2;38;5;67m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    cell_index="",
    cell_character="",
    cell_scalar="",
    cell_utf16="",
    cell_utf8="",
    cell_rule="",
    cell_highlight="",
    prompt_label="",
    prompt_placeholder="",
    status_text="",
    toggle_on="",
    toggle_off="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
