"""Persistent JSON config helpers.

Reads the overlay title, UI theme, Pygments style and ledger location.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir, user_state_dir

logger = logging.getLogger(__name__)

APP_NAME = "lazydiff"
CONFIG_FILENAME = "config.json"
LEDGER_FILENAME = "ledger.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def default_ledger_path() -> Path:
    """Return the per-user ledger file location."""
    return Path(user_state_dir(APP_NAME, appauthor=False)) / LEDGER_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        text = CONFIG_PATH.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        logger.warning("cannot read config %s: %s", CONFIG_PATH, exc)
        return {}
    try:
        data = json.loads(text)
    except ValueError as exc:
        logger.warning("ignoring malformed config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def _load_string(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    return _load_string("theme")


def load_overlay_title() -> str | None:
    return _load_string("title")


def load_syntax_style() -> str | None:
    return _load_string("style")


def load_ledger_path() -> Path:
    """Return the configured ledger path, or the per-user default."""
    value = _load_string("ledger_path")
    if value is None:
        return default_ledger_path()
    return Path(value).expanduser()


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "default_ledger_path",
    "load_config",
    "load_ledger_path",
    "load_overlay_title",
    "load_syntax_style",
    "load_theme_name",
]
