"""Observed OCR misread tables for blood-pressure monitor displays.

Every table maps an exact (lowercase, whole-token) garbled string to the
canonical text or value it stands in for. Keys are matched on word
boundaries against normalized text, never as raw substrings.
"""

from __future__ import annotations

from typing import Final, Mapping

# Rewritten by the normalizer before any cascade runs.
TOKEN_REWRITES: Final[Mapping[str, str]] = {
    "minig": "mmhg",
    "cm": "7m",
    "c1": "7m",
    "c9": "7m",
    "mid": "7m",
}

# Month tokens the cascade maps straight to a value, after rewrites.
MONTH_TOKENS: Final[Mapping[str, int]] = {
    "7m": 7,
}

# Last-resort date corrections used by date recovery.
MONTH_MISREADS: Final[Mapping[str, int]] = {
    "tm": 7,
    "t1": 7,
    "t2": 7,
    "cm": 7,
    "c1": 7,
    "c9": 7,
    "mid": 7,
}

DAY_MISREADS: Final[Mapping[str, int]] = {
    "1d": 1,
    "9d": 9,
    "13d": 13,
}

# Three-character clusters the LCD pulse digits collapse into.
PULSE_MISREADS: Final[Mapping[str, int]] = {
    "coc": 71,
    "c0c": 70,
    "c1c": 71,
}


def lookup(table: Mapping[str, int], token: str) -> int | None:
    """Return the value for ``token`` in ``table`` or ``None``."""

    return table.get(token.strip().lower())


__all__ = [
    "DAY_MISREADS",
    "MONTH_MISREADS",
    "MONTH_TOKENS",
    "PULSE_MISREADS",
    "TOKEN_REWRITES",
    "lookup",
]
