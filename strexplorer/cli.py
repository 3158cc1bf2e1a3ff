"""Command-line front door for strexplorer.

Parses CLI options, resolves the input text and display preferences.
Then prints the grid or JSON export, or starts the interactive explorer.
"""

from __future__ import annotations

import argparse
import shutil
import sys
from pathlib import Path

from .app import run_explorer
from .cells import decompose
from .config import load_theme_name, load_view_preferences, save_theme_name
from .export import DEFAULT_STYLE, cells_to_json, highlight_json
from .render import render_grid_text
from .ui_theme import available_theme_names, resolve_theme
from .view_context import ViewContext


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _default_render_width() -> int:
    """Resolve default render width from current terminal size."""
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def _read_piped_stdin() -> str:
    text = sys.stdin.read()
    # `echo` style input carries one trailing newline that is not part of the text.
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Show how text breaks down into characters, Unicode scalars, UTF-16 code units, and UTF-8 bytes."
    )
    parser.add_argument("text", nargs="?", default=None, help="Text to explore. Defaults to piped stdin.")
    parser.add_argument("--file", metavar="PATH", help="Read the text to explore from PATH.")
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--render", action="store_true", help="Print the cell grid and exit.")
    output.add_argument("--json", action="store_true", help="Print the cell sequence as JSON and exit.")
    parser.add_argument(
        "--max-cols",
        type=_positive_int,
        default=None,
        help="Column width for --render output (default: terminal width).",
    )
    base = parser.add_mutually_exclusive_group()
    base.add_argument("--hex", dest="hex_mode", action="store_const", const=True, default=None, help="Show code units in hexadecimal.")
    base.add_argument("--decimal", dest="hex_mode", action="store_const", const=False, help="Show code units in decimal.")
    parser.add_argument("--hide-scalar", action="store_true", help="Hide the Unicode scalar row.")
    parser.add_argument("--hide-utf16", action="store_true", help="Hide the UTF-16 row.")
    parser.add_argument("--hide-utf8", action="store_true", help="Hide the UTF-8 row.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --json output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    return parser


def _resolve_view(args: argparse.Namespace) -> ViewContext:
    view = load_view_preferences()
    if args.hex_mode is not None:
        view.hex_mode = args.hex_mode
    if args.hide_scalar:
        view.shows_unicode_scalar = False
    if args.hide_utf16:
        view.shows_utf16_code_unit = False
    if args.hide_utf8:
        view.shows_utf8_code_unit = False
    if view.visible_encoding_count() == 0:
        raise SystemExit("At least one of the scalar, UTF-16, and UTF-8 rows must stay visible.")
    return view


def main() -> None:
    """Parse CLI arguments and explore the requested text.

    Text comes from the positional argument, ``--file``, or piped stdin, in
    that order. Without ``--render`` or ``--json`` an interactive session is
    started when both stdin and stdout are terminals.
    """
    args = _build_parser().parse_args()

    if args.text is not None and args.file is not None:
        raise SystemExit("Cannot combine positional text with --file.")

    stdin_is_tty = sys.stdin.isatty()
    if args.text is not None:
        text = args.text
    elif args.file is not None:
        path = Path(args.file)
        if not path.is_file():
            raise SystemExit(f"File not found: {path}")
        text = read_text(path)
    elif not stdin_is_tty:
        text = _read_piped_stdin()
    else:
        text = ""

    view = _resolve_view(args)
    theme_name = args.theme or load_theme_name()
    stdout_is_tty = sys.stdout.isatty()

    if not args.render and not args.json and stdin_is_tty and stdout_is_tty:
        if args.theme is not None:
            save_theme_name(args.theme)
        run_explorer(text, view, resolve_theme(theme_name, no_color=args.no_color))
        return

    use_color = stdout_is_tty and not args.no_color
    cells = decompose(text)
    if args.json:
        output = cells_to_json(cells) + "\n"
        sys.stdout.write(highlight_json(output, args.style) if use_color else output)
        return

    max_cols = args.max_cols if args.max_cols is not None else _default_render_width()
    theme = resolve_theme(theme_name, no_color=not use_color)
    sys.stdout.write(render_grid_text(cells, view, theme, max_cols))


if __name__ == "__main__":
    main()
