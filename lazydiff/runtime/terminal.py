"""Terminal control helpers for the interactive review session.

Owns raw-mode lifecycle, alternate-screen switching, and frame output.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

_CLEAR_AND_HOME = "\x1b[H\x1b[2J"


class TerminalController:
    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @staticmethod
    def size() -> os.terminal_size:
        return shutil.get_terminal_size((80, 24))

    def draw(self, rows: list[str], left_margin: int = 0) -> None:
        """Replace the screen with ``rows``; raw mode needs explicit ``\\r\\n``."""
        margin = " " * max(0, left_margin)
        payload = _CLEAR_AND_HOME + "\r\n".join(f"{margin}{row}\x1b[0m" for row in rows)
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()


__all__ = ["TerminalController"]
