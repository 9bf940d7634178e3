"""Diff materialization and baseline tracking."""

from __future__ import annotations

from .engine import DIFF_CONTEXT_LINES, compute_diff, split_lines
from .ledger import LedgerFormatError, SnapshotLedger
from .types import FileDiffResult, FileSnapshot, LineKind, LineRecord

__all__ = [
    "DIFF_CONTEXT_LINES",
    "FileDiffResult",
    "FileSnapshot",
    "LedgerFormatError",
    "LineKind",
    "LineRecord",
    "SnapshotLedger",
    "compute_diff",
    "split_lines",
]
