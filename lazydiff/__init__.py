"""Public package surface for lazydiff.

Exports ``main`` for programmatic CLI invocation.
The review model lives in ``lazydiff.diff`` and ``lazydiff.review``; the
overlays in ``lazydiff.overlay``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
