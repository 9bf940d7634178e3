"""Low-level terminal input decoding and key matching.

Reads raw bytes from stdin and translates them into normalized key tokens,
then exposes the token vocabulary through the overlay key capability.
"""

from __future__ import annotations

import os
import select

from ..ansi import clip_ansi_line

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_KEY = "UNKNOWN"
_PENDING_BYTES: list[bytes] = []

_CONTROL_TOKENS = {
    b"\t": "TAB",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\x03": "CTRL_C",
    b"\x7f": "BACKSPACE",
    b"\x08": "BACKSPACE",
}

_ARROW_TOKENS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character started by ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        needed = 3
    elif lead >= 0xE0:
        needed = 2
    elif lead >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = first
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token; ``""`` when ``timeout_ms`` elapses without input.

    Escape sequences the decoder does not know, such as PageUp or Shift+Tab,
    are consumed whole and come back as ``UNKNOWN_KEY``.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    token = _CONTROL_TOKENS.get(ch)
    if token is not None:
        return token

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    arrow = _ARROW_TOKENS.get(seq)
    if arrow is not None:
        return arrow
    # Drain the remainder of an unrecognized CSI sequence.
    while seq is not None and not (b"@" <= seq <= b"~"):
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    return UNKNOWN_KEY


class TerminalKeys:
    """Key capability for tokens produced by :func:`read_key`."""

    escape = "ESC"
    up = "UP"
    down = "DOWN"
    enter = "ENTER"
    tab = "TAB"

    @staticmethod
    def ctrl(letter: str) -> str:
        return f"CTRL_{letter.upper()}"

    @staticmethod
    def matches_key(data: str, key: object) -> bool:
        return data == key

    @staticmethod
    def truncate_to_width(text: str, width: int) -> str:
        return clip_ansi_line(text, width)


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "TerminalKeys", "UNKNOWN_KEY", "read_key"]
