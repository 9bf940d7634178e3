"""Diff review state: inline row rendering and the multi-file navigator."""

from __future__ import annotations

from .inline_view import HighlightFn, InlineDiffView, LineRow, RenderRow, SeparatorRow
from .session import NavigatorEntry, ReviewSession

__all__ = [
    "HighlightFn",
    "InlineDiffView",
    "LineRow",
    "NavigatorEntry",
    "RenderRow",
    "ReviewSession",
    "SeparatorRow",
]
