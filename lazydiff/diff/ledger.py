"""Per-file baseline/current ledger driving every review diff.

The ledger is the source of truth for "what changed": it remembers the
content a file had when tracking started (the baseline) and its latest
content. Dismissing a file moves its baseline forward so later diffs start
from there. Snapshots are immutable values; callers never get a handle that
could mutate ledger state behind its back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from .engine import compute_diff
from .types import FileDiffResult, FileSnapshot

logger = logging.getLogger(__name__)

SNAPSHOT_FORMAT_VERSION = 1


class LedgerFormatError(ValueError):
    """Raised when serialized ledger data cannot be decoded."""


class SnapshotLedger:
    """Insertion-ordered mapping of path -> :class:`FileSnapshot`."""

    def __init__(self) -> None:
        self._snapshots: dict[str, FileSnapshot] = {}

    def __len__(self) -> int:
        return len(self._snapshots)

    def __contains__(self, path: object) -> bool:
        return path in self._snapshots

    def track(self, path: str, baseline: str, current: str) -> None:
        """Start tracking ``path``; an already tracked path only gets ``current``."""
        if path in self._snapshots:
            self.update(path, current)
            return
        self._snapshots[path] = FileSnapshot(baseline_content=baseline, current_content=current)
        logger.debug("tracking %s", path)

    def update(self, path: str, current: str) -> None:
        """Replace current content of a tracked path; untracked paths are ignored."""
        snapshot = self._snapshots.get(path)
        if snapshot is None:
            return
        self._snapshots[path] = replace(snapshot, current_content=current)

    def dismiss(self, path: str) -> None:
        """Reset the baseline of ``path`` to its current content."""
        snapshot = self._snapshots.get(path)
        if snapshot is None:
            return
        self._snapshots[path] = replace(snapshot, baseline_content=snapshot.current_content)
        logger.debug("dismissed %s", path)

    def is_tracked(self, path: str) -> bool:
        return path in self._snapshots

    def snapshot_for(self, path: str) -> FileSnapshot | None:
        return self._snapshots.get(path)

    def tracked_paths(self) -> list[str]:
        return list(self._snapshots)

    def diff_for(self, path: str) -> FileDiffResult | None:
        """Compute a fresh diff for ``path``; ``None`` when untracked."""
        snapshot = self._snapshots.get(path)
        if snapshot is None:
            return None
        return compute_diff(path, snapshot.baseline_content, snapshot.current_content)

    def changed_paths(self) -> list[str]:
        """Return tracked paths whose baseline differs from current, in track order."""
        return [path for path, snapshot in self._snapshots.items() if snapshot.has_changes]

    @property
    def pending_count(self) -> int:
        return len(self.changed_paths())

    def to_snapshot(self) -> dict[str, object]:
        """Serialize ledger contents in track order."""
        return {
            "version": SNAPSHOT_FORMAT_VERSION,
            "files": [
                {
                    "path": path,
                    "baselineContent": snapshot.baseline_content,
                    "currentContent": snapshot.current_content,
                }
                for path, snapshot in self._snapshots.items()
            ],
        }

    @classmethod
    def from_snapshot(cls, data: Mapping[str, object]) -> SnapshotLedger:
        """Rebuild a ledger from :meth:`to_snapshot` output.

        Raises :class:`LedgerFormatError` for unknown versions or entries
        missing a string ``path``/``baselineContent``/``currentContent``.
        """
        if not isinstance(data, Mapping):
            raise LedgerFormatError("ledger snapshot must be a JSON object")
        version = data.get("version")
        if version != SNAPSHOT_FORMAT_VERSION:
            raise LedgerFormatError(f"unsupported ledger snapshot version: {version!r}")
        files = data.get("files")
        if not isinstance(files, list):
            raise LedgerFormatError("ledger snapshot 'files' must be a list")

        ledger = cls()
        for index, entry in enumerate(files):
            if not isinstance(entry, Mapping):
                raise LedgerFormatError(f"ledger entry {index} is not an object")
            path = entry.get("path")
            baseline = entry.get("baselineContent")
            current = entry.get("currentContent")
            if not isinstance(path, str) or not path:
                raise LedgerFormatError(f"ledger entry {index} has no valid path")
            if not isinstance(baseline, str) or not isinstance(current, str):
                raise LedgerFormatError(f"ledger entry {path!r} has non-string content")
            if path in ledger._snapshots:
                raise LedgerFormatError(f"ledger entry {path!r} appears more than once")
            ledger._snapshots[path] = FileSnapshot(baseline_content=baseline, current_content=current)
        return ledger


__all__ = [
    "LedgerFormatError",
    "SNAPSHOT_FORMAT_VERSION",
    "SnapshotLedger",
]
