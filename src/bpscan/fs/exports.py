"""Report file naming and permission-safe writes."""

from __future__ import annotations

import errno
import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Final, Optional

from bpscan._paths import app_support_dir

_LOGGER = logging.getLogger(__name__)

_UNSAFE_RE: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9._\- ]+", re.ASCII)
_RUNS_RE: Final[re.Pattern[str]] = re.compile(r"(\s)\s+|(\.)\.+", re.ASCII)

MAX_NAME_LEN: Final[int] = 120
REPORT_STEM: Final[str] = "bpscan"
REPORT_SUFFIX: Final[str] = ".txt"

# Writes that fail with these are redirected to the Exports directory.
_REDIRECT_ERRNOS: Final[frozenset[int]] = frozenset({errno.EPERM, errno.EACCES})


def exports_dir() -> Path:
    """Return ``$BPSCAN_HOME/Exports``, creating it if needed."""
    path = app_support_dir() / "Exports"
    path.mkdir(parents=True, exist_ok=True)
    return path


def default_report_name(now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"{REPORT_STEM}_report_{stamp}{REPORT_SUFFIX}"


def _clean(part: str) -> str:
    part = _UNSAFE_RE.sub("_", part)
    return _RUNS_RE.sub(lambda match: match.group(1) or match.group(2), part)


def sanitize_filename(base: str) -> str:
    """Return ``base`` reduced to a portable file name of at most 120 characters.

    Characters outside letters, digits, ``._-`` and space become ``_``;
    whitespace and dot runs collapse. An empty stem falls back to ``bpscan``.
    The extension is kept when the name has to be shortened.
    """

    stem, suffix = os.path.splitext((base or "").strip())
    stem = _clean(stem).strip(" .") or REPORT_STEM
    suffix = _UNSAFE_RE.sub("", suffix)

    room = max(0, MAX_NAME_LEN - len(suffix))
    if len(stem) > room:
        stem = stem[:room].rstrip(" .") or REPORT_STEM
    return f"{stem}{suffix}"


def safe_write_text(path: Path, text: str) -> Path:
    """Write ``text`` to ``path`` and return where it actually landed.

    When the target is not writable the report goes to :func:`exports_dir`
    under its sanitised name instead. Other ``OSError`` s propagate.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    except OSError as exc:
        if exc.errno not in _REDIRECT_ERRNOS:
            raise
        redirected = exports_dir() / sanitize_filename(path.name or default_report_name())
        _LOGGER.warning(
            "Report target %s not writable (errno=%s); writing %s", path, exc.errno, redirected
        )
        redirected.write_text(text, encoding="utf-8")
        return redirected


__all__ = [
    "MAX_NAME_LEN",
    "REPORT_STEM",
    "default_report_name",
    "exports_dir",
    "safe_write_text",
    "sanitize_filename",
]
