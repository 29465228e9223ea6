"""Positional reading of the sys/dia/pulse LCD layout."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional

from bpscan.engine.model import Candidates

from .cascade import Hit
from .tokens import has_labels, standalone_numbers, unclaimed_numbers
from .vitals import LAYOUT_LABELS
from .vitals_bounds import DIA_ACCEPT, LAYOUT_RANGE, PULSE_ACCEPT, SYS_ACCEPT

LOGGER = logging.getLogger(__name__)


def is_lcd_layout(text: str) -> bool:
    """Return ``True`` when the ``sys``, ``dia`` and ``pulse`` labels all appear."""

    return has_labels(text, *LAYOUT_LABELS)


def layout_numbers(text: str) -> List[int]:
    """Return standalone 2-3 digit numbers in layout order, minus clock parts."""

    low, high = LAYOUT_RANGE
    return standalone_numbers(text, low, high)


def override_layout(text: str, candidates: Candidates) -> Candidates:
    """Replace sys/dia/pulse with the on-screen number order.

    The first two standalone numbers become systolic and diastolic and a
    third becomes pulse, regardless of what the label cascades found. With
    fewer than two numbers the candidates are returned unchanged. With
    exactly two, a cascade pulse that repeats either number is dropped.
    """

    numbers = layout_numbers(text)
    LOGGER.debug("LCD layout detected, numbers=%s", numbers)
    if len(numbers) < 2:
        return candidates

    pulse = candidates.pulse
    if len(numbers) >= 3:
        pulse = Hit(value=numbers[2], source="layout_position")
    elif pulse is not None and candidates.number("pulse") in numbers[:2]:
        LOGGER.debug("layout drops pulse=%s shared with sys/dia", pulse.value)
        pulse = None
    updated = replace(
        candidates,
        sys=Hit(value=numbers[0], source="layout_position"),
        dia=Hit(value=numbers[1], source="layout_position"),
        pulse=pulse,
        layout_applied=True,
    )
    LOGGER.debug(
        "layout override sys=%s dia=%s pulse=%s",
        updated.number("sys"),
        updated.number("dia"),
        updated.number("pulse"),
    )
    return updated


def _largest(values: List[int]) -> Optional[int]:
    return max(values) if values else None


def _smallest(values: List[int]) -> Optional[int]:
    return min(values) if values else None


def fill_unresolved(text: str, candidates: Candidates) -> Candidates:
    """Fill only the unresolved vitals from numbers no sibling has claimed.

    Systolic and diastolic take the largest remaining value in their range;
    pulse takes the smallest.
    """

    if candidates.sys is None:
        value = _largest(unclaimed_numbers(text, *SYS_ACCEPT, candidates.claimed("dia", "pulse")))
        if value is not None:
            LOGGER.debug("fallback sys=%s", value)
            candidates = replace(candidates, sys=Hit(value=value, source="fallback_largest"))

    if candidates.dia is None:
        value = _largest(unclaimed_numbers(text, *DIA_ACCEPT, candidates.claimed("sys", "pulse")))
        if value is not None:
            LOGGER.debug("fallback dia=%s", value)
            candidates = replace(candidates, dia=Hit(value=value, source="fallback_largest"))

    if candidates.pulse is None:
        value = _smallest(unclaimed_numbers(text, *PULSE_ACCEPT, candidates.claimed("sys", "dia")))
        if value is not None:
            LOGGER.debug("fallback pulse=%s", value)
            candidates = replace(candidates, pulse=Hit(value=value, source="fallback_smallest"))

    return candidates


def apply_layout(text: str, candidates: Candidates) -> Candidates:
    """Run the LCD override when all labels are present, else the soft fallback."""

    if is_lcd_layout(text):
        return override_layout(text, candidates)
    return fill_unresolved(text, candidates)


__all__ = [
    "apply_layout",
    "fill_unresolved",
    "is_lcd_layout",
    "layout_numbers",
    "override_layout",
]
