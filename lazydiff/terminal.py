"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and realizes the logical terminal requests the view
emits (full-screen buffer, cursor visibility, mouse reporting).
"""

from __future__ import annotations

import contextlib
import logging
import os
import termios
import tty

logger = logging.getLogger(__name__)

ENTER_FULL_SCREEN = "enter_full_screen"
EXIT_FULL_SCREEN = "exit_full_screen"
HIDE_CURSOR = "hide_cursor"
SHOW_CURSOR = "show_cursor"
ENABLE_MOUSE = "enable_mouse"
DISABLE_MOUSE = "disable_mouse"

REQUEST_SEQUENCES: dict[str, bytes] = {
    ENTER_FULL_SCREEN: b"\x1b[?1049h",
    EXIT_FULL_SCREEN: b"\x1b[?1049l",
    HIDE_CURSOR: b"\x1b[?25l",
    SHOW_CURSOR: b"\x1b[?25h",
    ENABLE_MOUSE: b"\x1b[?1000h\x1b[?1006h",
    DISABLE_MOUSE: b"\x1b[?1006l\x1b[?1000l",
}


class TerminalController:
    """Manage terminal mode transitions for the diff view."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind stdin/stdout file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self._mouse_reporting_enabled = False

    def apply(self, request: str) -> None:
        """Write the escape sequence for one logical terminal request."""
        sequence = REQUEST_SEQUENCES.get(request)
        if sequence is None:
            logger.debug("ignoring unknown terminal request %r", request)
            return
        os.write(self.stdout_fd, sequence)
        if request == ENABLE_MOUSE:
            self._mouse_reporting_enabled = True
        elif request == DISABLE_MOUSE:
            self._mouse_reporting_enabled = False

    def write(self, text: str) -> None:
        os.write(self.stdout_fd, text.encode("utf-8", errors="replace"))

    def enable_tui_mode(self, mouse: bool = True) -> None:
        """Enter raw alternate-screen mode, optionally with mouse reporting."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        self.apply(ENTER_FULL_SCREEN)
        self.apply(HIDE_CURSOR)
        if mouse:
            self.apply(ENABLE_MOUSE)

    def disable_tui_mode(self) -> None:
        """Restore normal terminal state and the primary screen buffer."""
        self.apply(DISABLE_MOUSE)
        self.apply(EXIT_FULL_SCREEN)
        self.apply(SHOW_CURSOR)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def set_mouse_reporting(self, enabled: bool) -> None:
        """Toggle terminal mouse tracking without changing other TUI state."""
        desired = bool(enabled)
        if desired == self._mouse_reporting_enabled:
            return
        self.apply(ENABLE_MOUSE if desired else DISABLE_MOUSE)

    @contextlib.contextmanager
    def raw_mode(self, mouse: bool = True):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode(mouse=mouse)
            yield
        finally:
            self.disable_tui_mode()
