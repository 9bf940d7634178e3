"""Multi-file review state: changed-file list, selection, and file picker.

``ReviewSession`` wraps one :class:`SnapshotLedger`. It derives the ordered
list of changed files, keeps the selected index in bounds across refreshes
and dismissals, and owns the picker sub-mode whose index moves independently
until confirmed.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..diff.ledger import SnapshotLedger
from ..diff.types import FileDiffResult


@dataclass(frozen=True)
class NavigatorEntry:
    """Per-file summary shown in headers and the file picker."""

    path: str
    additions: int
    deletions: int
    is_new_file: bool


def _clamp_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


class ReviewSession:
    """File navigator over the ledger's changed paths."""

    def __init__(self, ledger: SnapshotLedger) -> None:
        self._ledger = ledger
        self._files: tuple[NavigatorEntry, ...] = ()
        self._selected_index = 0
        self._picker_open = False
        self._picker_index = 0
        self.refresh()

    @property
    def ledger(self) -> SnapshotLedger:
        return self._ledger

    @property
    def files(self) -> tuple[NavigatorEntry, ...]:
        return self._files

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @property
    def selected_entry(self) -> NavigatorEntry | None:
        if not self._files:
            return None
        return self._files[self._selected_index]

    @property
    def selected_path(self) -> str | None:
        entry = self.selected_entry
        return entry.path if entry is not None else None

    @property
    def is_picker_open(self) -> bool:
        return self._picker_open

    @property
    def picker_index(self) -> int:
        return self._picker_index

    def refresh(self) -> None:
        """Recompute the changed-file list and clamp the selection into it."""
        entries: list[NavigatorEntry] = []
        for path in self._ledger.changed_paths():
            diff = self._ledger.diff_for(path)
            if diff is None:
                continue
            entries.append(
                NavigatorEntry(
                    path=path,
                    additions=diff.additions,
                    deletions=diff.deletions,
                    is_new_file=diff.is_new_file,
                )
            )
        self._files = tuple(entries)
        self._selected_index = _clamp_index(self._selected_index, len(self._files))
        if self._picker_open:
            self._picker_index = _clamp_index(self._picker_index, len(self._files))

    def select_next(self) -> None:
        if not self._files:
            return
        self._selected_index = (self._selected_index + 1) % len(self._files)

    def select_previous(self) -> None:
        if not self._files:
            return
        self._selected_index = (self._selected_index - 1) % len(self._files)

    def select_index(self, index: int) -> None:
        self._selected_index = _clamp_index(index, len(self._files))

    def selected_diff(self) -> FileDiffResult | None:
        path = self.selected_path
        if path is None:
            return None
        return self._ledger.diff_for(path)

    def dismiss_selected(self) -> bool:
        """Dismiss the selected file in the ledger; ``False`` when nothing is selected."""
        path = self.selected_path
        if path is None:
            return False
        self._ledger.dismiss(path)
        self.refresh()
        return True

    def open_picker(self) -> None:
        self._picker_open = True
        self._picker_index = self._selected_index

    def close_picker(self) -> None:
        self._picker_open = False

    def picker_next(self) -> None:
        if not self._files:
            return
        self._picker_index = (self._picker_index + 1) % len(self._files)

    def picker_previous(self) -> None:
        if not self._files:
            return
        self._picker_index = (self._picker_index - 1) % len(self._files)

    def confirm_picker_selection(self) -> None:
        """Jump to the picker's file and close the picker."""
        self._selected_index = _clamp_index(self._picker_index, len(self._files))
        self._picker_open = False


__all__ = ["NavigatorEntry", "ReviewSession"]
