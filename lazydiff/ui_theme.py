"""UI theme definitions and selection helpers.

Themes are UI-only ANSI palettes for overlay chrome (borders, headers, hints).
Diff row colors and syntax highlighting style are separate settings.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnsiTheme:
    """Semantic ANSI palette implementing the overlay theme capability."""

    name: str
    reset: str
    bold_on: str
    border: str
    accent: str
    muted: str
    dim: str
    text: str
    success: str
    title: str

    def fg(self, role: str, text: str) -> str:
        """Style ``text`` for semantic ``role``; unknown roles stay unstyled."""
        sgr = getattr(self, role, "") if role in _ROLES else ""
        if not sgr or not text:
            return text
        return f"{sgr}{text}{self.reset}"

    def bold(self, text: str) -> str:
        if not self.bold_on or not text:
            return text
        return f"{self.bold_on}{text}{self.reset}"


_ROLES = frozenset({"border", "accent", "muted", "dim", "text", "success", "title"})


DEFAULT_THEME = AnsiTheme(
    name="default",
    reset="\033[0m",
    bold_on="\033[1m",
    border="\033[38;5;45m",
    accent="\033[38;5;81m",
    muted="\033[38;5;109m",
    dim="\033[2;38;5;250m",
    text="\033[38;5;252m",
    success="\033[38;5;42m",
    title="\033[1;38;5;45m",
)

OCEAN_THEME = AnsiTheme(
    name="ocean",
    reset="\033[0m",
    bold_on="\033[1m",
    border="\033[38;5;39m",
    accent="\033[38;5;45m",
    muted="\033[38;5;73m",
    dim="\033[2;38;5;110m",
    text="\033[38;5;252m",
    success="\033[38;5;84m",
    title="\033[1;38;5;39m",
)

PLAIN_THEME = AnsiTheme(
    name="plain",
    reset="",
    bold_on="",
    border="",
    accent="",
    muted="",
    dim="",
    text="",
    success="",
    title="",
)

_THEMES: dict[str, AnsiTheme] = {
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


def resolve_theme(name: str | None, *, no_color: bool = False) -> AnsiTheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "AnsiTheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
