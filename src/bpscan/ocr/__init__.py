"""OCR-text helpers for the bpscan extraction engine."""

from __future__ import annotations

__all__ = [
    "cascade",
    "clock",
    "dates",
    "layout",
    "misreads",
    "normalize",
    "tokens",
    "vitals",
    "vitals_bounds",
]
