"""Turn a baseline/current text pair into typed diff line records.

The line diff itself comes from :mod:`difflib`; this module only parses its
unified-diff hunks and numbers each line on the old and new side.
"""

from __future__ import annotations

import difflib
import re
from collections.abc import Iterable

from .types import FileDiffResult, LineRecord

DIFF_CONTEXT_LINES = 3

_HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` without producing a trailing empty line."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _diff_lines(text: str) -> list[str]:
    """Like :func:`split_lines`, but each line keeps its ``\\n``.

    A last line without a newline then differs from the same line with one.
    """
    lines = [line + "\n" for line in split_lines(text)]
    if lines and not text.endswith("\n"):
        lines[-1] = lines[-1][:-1]
    return lines


def _parse_hunk_lines(diff_lines: Iterable[str]) -> list[LineRecord]:
    """Parse unified diff output into numbered line records.

    File headers before the first hunk are skipped; inside a hunk every line
    is a ``+``/``-``/space record.
    """
    records: list[LineRecord] = []
    in_hunk = False
    old_line = 0
    new_line = 0

    for raw_line in diff_lines:
        match = _HUNK_RE.match(raw_line)
        if match:
            in_hunk = True
            old_line = int(match.group(1))
            new_line = int(match.group(3))
            continue
        if not in_hunk:
            continue

        marker = raw_line[:1]
        text = raw_line[1:]
        if text.endswith("\n"):
            text = text[:-1]
        if marker == "+":
            records.append(LineRecord(kind="added", text=text, new_line_number=new_line))
            new_line += 1
        elif marker == "-":
            records.append(LineRecord(kind="removed", text=text, old_line_number=old_line))
            old_line += 1
        else:
            records.append(
                LineRecord(
                    kind="context",
                    text=text,
                    old_line_number=old_line,
                    new_line_number=new_line,
                )
            )
            old_line += 1
            new_line += 1

    return records


def compute_diff(path: str, baseline: str, current: str) -> FileDiffResult:
    """Compute the line diff of ``baseline`` -> ``current`` for ``path``.

    Both-empty input short-circuits to an empty, non-new result. Otherwise
    hunks use a fixed context window of ``DIFF_CONTEXT_LINES``.
    """
    if baseline == "" and current == "":
        return FileDiffResult(path=path, is_new_file=False, lines=(), additions=0, deletions=0)

    is_new_file = baseline == "" and current != ""
    diff_lines = difflib.unified_diff(
        _diff_lines(baseline),
        _diff_lines(current),
        fromfile=path,
        tofile=path,
        lineterm="",
        n=DIFF_CONTEXT_LINES,
    )
    records = _parse_hunk_lines(diff_lines)
    additions = sum(1 for record in records if record.kind == "added")
    deletions = sum(1 for record in records if record.kind == "removed")
    return FileDiffResult(
        path=path,
        is_new_file=is_new_file,
        lines=tuple(records),
        additions=additions,
        deletions=deletions,
    )


__all__ = ["DIFF_CONTEXT_LINES", "compute_diff", "split_lines"]
