"""Load and save the snapshot ledger as JSON on disk."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from ..diff.ledger import LedgerFormatError, SnapshotLedger

logger = logging.getLogger(__name__)


def load_ledger(path: Path) -> SnapshotLedger:
    """Read a ledger file; a missing file yields an empty ledger.

    Raises :class:`LedgerFormatError` when the file is not a valid snapshot.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.debug("no ledger at %s, starting empty", path)
        return SnapshotLedger()
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise LedgerFormatError(f"{path}: invalid JSON ({exc})") from exc
    ledger = SnapshotLedger.from_snapshot(data)
    logger.debug("loaded %d tracked file(s) from %s", len(ledger), path)
    return ledger


def save_ledger(ledger: SnapshotLedger, path: Path) -> None:
    """Write ``ledger`` to ``path`` atomically via a sibling temp file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    tmp_path.write_text(json.dumps(ledger.to_snapshot(), indent=2) + "\n", encoding="utf-8")
    os.replace(tmp_path, path)
    logger.debug("saved %d tracked file(s) to %s", len(ledger), path)


__all__ = ["load_ledger", "save_ledger"]
