"""Capabilities the overlays consume from their host.

Hosts supply a terminal handle, a theme, and key utilities. Each contract is
small: ``request_render`` is fire-and-forget and idempotent, theme functions
are pure, and key identities are stable values compared via
``matches_key``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

DEFAULT_TERMINAL_HEIGHT = 40

HighlightProvider = Callable[[str, str], str]


class OverlayTui(Protocol):
    """Terminal host: optional viewport height plus a re-render signal."""

    height: int | None

    def request_render(self) -> None: ...


class OverlayTheme(Protocol):
    """Pure styling functions keyed by semantic role names."""

    def fg(self, role: str, text: str) -> str: ...

    def bold(self, text: str) -> str: ...


class OverlayKeyUtils(Protocol):
    """Key identities, token matching, and width-aware truncation."""

    escape: object
    up: object
    down: object
    enter: object
    tab: object

    def ctrl(self, letter: str) -> object: ...

    def matches_key(self, data: str, key: object) -> bool: ...

    def truncate_to_width(self, text: str, width: int) -> str: ...


@dataclass(frozen=True)
class OverlayCallbacks:
    """Optional host hooks fired by the review overlay."""

    on_dismiss: Callable[[], None] | None = None
    on_paste_to_editor: Callable[[str], None] | None = None


@dataclass
class StaticTui:
    """Fixed-height host used for one-shot rendering and tests."""

    height: int | None = DEFAULT_TERMINAL_HEIGHT
    render_requests: int = 0

    def request_render(self) -> None:
        self.render_requests += 1


__all__ = [
    "DEFAULT_TERMINAL_HEIGHT",
    "HighlightProvider",
    "OverlayCallbacks",
    "OverlayKeyUtils",
    "OverlayTheme",
    "OverlayTui",
    "StaticTui",
]
