"""Terminal control helpers for the interactive session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse toggles.
Mouse motion tracking is enabled so hovering a cell can highlight its group.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

MOUSE_ON = b"\x1b[?1000h\x1b[?1003h\x1b[?1006h"
MOUSE_OFF = b"\x1b[?1000l\x1b[?1003l\x1b[?1006l"


class TerminalController:
    """Manage terminal mode transitions for the explorer UI."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse reporting enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen, hide cursor, enable mouse reporting.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l" + MOUSE_ON)

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and disable mouse reporting."""
        os.write(self.stdout_fd, MOUSE_OFF + b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
