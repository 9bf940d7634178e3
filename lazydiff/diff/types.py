"""Value types shared by the diff engine, ledger, and review views."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

LineKind = Literal["added", "removed", "context"]


@dataclass(frozen=True)
class LineRecord:
    """One diff-visible line with independent old/new line numbers.

    ``added`` lines carry only ``new_line_number``, ``removed`` lines only
    ``old_line_number``, and ``context`` lines both.
    """

    kind: LineKind
    text: str
    old_line_number: int | None = None
    new_line_number: int | None = None

    @property
    def anchor_line_number(self) -> int | None:
        """Return the new line number when present, else the old one."""
        if self.new_line_number is not None:
            return self.new_line_number
        return self.old_line_number


@dataclass(frozen=True)
class FileDiffResult:
    """Materialized line diff for one file."""

    path: str
    is_new_file: bool
    lines: tuple[LineRecord, ...]
    additions: int
    deletions: int


@dataclass(frozen=True)
class FileSnapshot:
    """Baseline/current content pair tracked for one path."""

    baseline_content: str
    current_content: str

    @property
    def has_changes(self) -> bool:
        return self.baseline_content != self.current_content


__all__ = [
    "FileDiffResult",
    "FileSnapshot",
    "LineKind",
    "LineRecord",
]
