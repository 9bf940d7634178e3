"""ANSI-aware text measurement and row shaping utilities.

Provides stripping, clipping, and fixed-width truncation that preserve
escape sequences. Diff rows and overlay chrome both rely on these helpers to
stay aligned when color codes and wide chars are present.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
RESET = "\x1b[0m"
TAB_STOP = 8

_RESET_SEQUENCES = frozenset({"\x1b[0m", "\x1b[m", "\x1b[00m"})


def strip_ansi(text: str) -> str:
    """Remove all recognized escape sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def visible_width(text: str) -> int:
    """Return display columns used by ``text`` once escapes are removed."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if ch == "\t":
            if col + w > max_cols:
                break
            out.append(" " * w)
            col += w
            i += 1
            continue
        if col + w > max_cols:
            break
        out.append(ch)
        col += w
        i += 1

    return "".join(out)


def truncate_styled_row(text: str, width: int) -> str:
    """Cut a styled row to exactly ``width`` visible characters.

    Escape sequences never count toward ``width`` and are copied verbatim,
    including those directly following the last visible character. Every
    visible character costs at least one unit (wide chars cost two, tabs are
    expanded to spaces) so neither the character count nor the column count
    can exceed ``width``. When a style is still open at the cut point a
    closing reset is appended.
    """
    if width <= 0 or not text:
        return ""

    out: list[str] = []
    shown = 0
    style_open = False
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                seq = match.group(0)
                out.append(seq)
                if seq.endswith("m"):
                    style_open = seq not in _RESET_SEQUENCES
                i = match.end()
                continue
        if shown >= width:
            break
        ch = text[i]
        if ch == "\t":
            spaces = min(char_display_width(ch, shown), width - shown)
            out.append(" " * spaces)
            shown += spaces
            i += 1
            continue
        cost = max(1, char_display_width(ch, shown))
        if shown + cost > width:
            break
        out.append(ch)
        shown += cost
        i += 1

    if style_open:
        out.append(RESET)
    return "".join(out)


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "char_display_width",
    "clip_ansi_line",
    "strip_ansi",
    "truncate_styled_row",
    "visible_width",
]
