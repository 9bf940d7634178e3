"""Syntax highlighting for diff context rows.

Wraps Pygments behind the ``(text, file_path) -> text`` highlight provider
contract. Also neutralizes terminal control bytes so highlighted text cannot
move the cursor or ring the bell.
"""

from __future__ import annotations

import re
from pathlib import PurePath

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if not style:
        return DEFAULT_STYLE
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def plain_highlight(text: str, file_path: str) -> str:
    """Highlight provider that leaves text untouched (``--no-color``)."""
    return text


class PygmentsHighlighter:
    """Callable highlight provider coloring one line at a time.

    Lexers are cached per file name; names Pygments does not recognize fall
    back to :class:`~pygments.lexers.TextLexer`.
    """

    def __init__(self, style: str | None = DEFAULT_STYLE) -> None:
        self.style = normalize_style(style)
        self._formatter = TerminalFormatter(style=self.style)
        self._lexers: dict[str, Lexer] = {}

    def _lexer_for(self, file_path: str) -> Lexer:
        name = PurePath(file_path).name
        lexer = self._lexers.get(name)
        if lexer is not None:
            return lexer
        try:
            lexer = get_lexer_for_filename(name, stripnl=False, ensurenl=True)
        except ClassNotFound:
            lexer = TextLexer(stripnl=False, ensurenl=True)
        self._lexers[name] = lexer
        return lexer

    def __call__(self, text: str, file_path: str) -> str:
        safe = sanitize_terminal_text(text)
        if not safe.strip():
            return safe
        rendered = pygments_highlight(safe, self._lexer_for(file_path), self._formatter)
        return rendered.rstrip("\n")


__all__ = [
    "DEFAULT_STYLE",
    "PygmentsHighlighter",
    "normalize_style",
    "plain_highlight",
    "sanitize_terminal_text",
]
