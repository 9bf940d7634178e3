"""Compact pending-changes summary for status lines outside the overlay."""

from __future__ import annotations

from ..diff.ledger import SnapshotLedger
from .host import OverlayTheme

MAX_WIDGET_FILES = 5


def pending_summary_lines(
    ledger: SnapshotLedger,
    theme: OverlayTheme,
    max_files: int = MAX_WIDGET_FILES,
) -> list[str]:
    """Return a heading plus up to ``max_files`` ``path +a/-d`` rows.

    Returns an empty list when no tracked file has pending changes.
    """
    paths = ledger.changed_paths()
    if not paths:
        return []

    noun = "file" if len(paths) == 1 else "files"
    lines = [theme.fg("accent", theme.bold(f"{len(paths)} {noun} changed"))]
    for path in paths[: max(0, max_files)]:
        diff = ledger.diff_for(path)
        if diff is None:
            continue
        stats = theme.fg("muted", f" +{diff.additions}/-{diff.deletions}")
        tag = theme.fg("success", " [new]") if diff.is_new_file else ""
        lines.append(f"  {theme.fg('text', path)}{stats}{tag}")
    hidden = len(paths) - max(0, max_files)
    if hidden > 0:
        lines.append(theme.fg("dim", f"  … and {hidden} more"))
    return lines


__all__ = ["MAX_WIDGET_FILES", "pending_summary_lines"]
