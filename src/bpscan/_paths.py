"""Locations of bpscan's writable support directories."""

from __future__ import annotations

import os
from pathlib import Path

HOME_ENV = "BPSCAN_HOME"
LOG_LEVEL_ENV = "BPSCAN_LOG_LEVEL"


def app_support_dir() -> Path:
    """Return the support root, honouring ``BPSCAN_HOME`` when set."""

    override = os.environ.get(HOME_ENV)
    if override:
        root = Path(override).expanduser()
    else:
        root = Path.home() / ".local" / "share" / "bpscan"
    root.mkdir(parents=True, exist_ok=True)
    return root


def logs_dir() -> Path:
    path = app_support_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def log_level_name(default: str = "INFO") -> str:
    """Return the configured log level name, falling back to ``default``."""

    value = (os.environ.get(LOG_LEVEL_ENV) or "").strip().upper()
    if value in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return value
    return default
