"""Systolic, diastolic and pulse extraction with OCR correction passes."""

from __future__ import annotations

import logging
import re
from typing import AbstractSet, Final, Optional, Tuple

from .cascade import CascadeStep, Hit, run_cascade, step
from .misreads import PULSE_MISREADS, lookup
from .tokens import (
    LABEL_WINDOW,
    PULSE_LABEL_WINDOW,
    find_label,
    has_labels,
    standalone_numbers,
    unclaimed_numbers,
    window_numbers,
)
from .vitals_bounds import (
    DIA_ACCEPT,
    PULSE_ACCEPT,
    SYS_ACCEPT,
    SYS_CORRECTION,
)

LOGGER = logging.getLogger(__name__)

LAYOUT_LABELS: Final[Tuple[str, str, str]] = ("sys", "dia", "pulse")

_SYS_LOW, _SYS_HIGH = SYS_ACCEPT
_DIA_LOW, _DIA_HIGH = DIA_ACCEPT
_PULSE_LOW, _PULSE_HIGH = PULSE_ACCEPT
_SYS_FIX_LOW, _SYS_FIX_HIGH = SYS_CORRECTION

SYS_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step("sys_label", r"\b(?:systolic|sys|s)\s*[:-]?\s*(\d{2,3})\b", _SYS_LOW, _SYS_HIGH),
    step("sys_attached", r"\b(?:systolic|sys|s)(\d{2,3})\b", _SYS_LOW, _SYS_HIGH),
    step("sys_ratio", r"\b(\d{2,3})\s*/\s*\d{2,3}\b", _SYS_LOW, _SYS_HIGH),
    step("sys_trailing_label", r"\b(\d{2,3})\s*(?:systolic|sys|s)\b", _SYS_LOW, _SYS_HIGH),
    step("sys_bp_ratio", r"\b(?:bp|blood pressure)\s*(\d{2,3})\s*/\s*\d{2,3}\b", _SYS_LOW, _SYS_HIGH),
    step("sys_top", r"\b(?:top|upper)\s*(\d{2,3})\b", _SYS_LOW, _SYS_HIGH),
)

DIA_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step("dia_label", r"\b(?:diastolic|dia|d)\s*[:-]?\s*(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_attached", r"\b(?:diastolic|dia|d)(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_ratio", r"\b\d{2,3}\s*/\s*(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_trailing_label", r"\b(\d{2,3})\s*(?:diastolic|dia|d)\b", _DIA_LOW, _DIA_HIGH),
    step("dia_bp_ratio", r"\b(?:bp|blood pressure)\s*\d{2,3}\s*/\s*(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_bottom", r"\b(?:bottom|lower)\s*(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
)

PULSE_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step(
        "pulse_label_unit",
        r"\b(?:pulse|pul|p)\s*[:-]?\s*(\d{2,3})\s*(?:bpm|min|/min)\b",
        _PULSE_LOW,
        _PULSE_HIGH,
    ),
    step("pulse_label", r"\b(?:pulse|pul|p)\s*[:-]?\s*(\d{2,3})\b", _PULSE_LOW, _PULSE_HIGH),
    step("pulse_trailing_label", r"\b(\d{2,3})\s*(?:bpm|pulse|pul|p)\b", _PULSE_LOW, _PULSE_HIGH),
    step("pulse_heart_rate", r"\b(?:heart rate|hr)\s*[:-]?\s*(\d{2,3})\b", _PULSE_LOW, _PULSE_HIGH),
    step("pulse_unit", r"\b(\d{2,3})\s*(?:bpm|/min)\b", _PULSE_LOW, _PULSE_HIGH),
    step("pulse_rate", r"\b(?:rate|r)\s*(\d{2,3})\b", _PULSE_LOW, _PULSE_HIGH),
)

# Label-attached forms retried by the correction passes.
SYS_CORRECTION_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step("sys_fix_attached", r"sys(\d{2,3})\b", _SYS_FIX_LOW, _SYS_FIX_HIGH),
    step("sys_fix_spaced", r"sys\s*(\d{2,3})\b", _SYS_FIX_LOW, _SYS_FIX_HIGH),
    step("sys_fix_colon", r"sys:(\d{2,3})\b", _SYS_FIX_LOW, _SYS_FIX_HIGH),
    step("sys_fix_spaced_colon", r"sys\s*:\s*(\d{2,3})\b", _SYS_FIX_LOW, _SYS_FIX_HIGH),
)

DIA_CORRECTION_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step("dia_fix_attached", r"dia(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_fix_spaced", r"dia\s*(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_fix_colon", r"dia:(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
    step("dia_fix_spaced_colon", r"dia\s*:\s*(\d{2,3})\b", _DIA_LOW, _DIA_HIGH),
)

PULSE_CLUSTER_RE: Final[re.Pattern[str]] = re.compile(r"\bc[a-z0-9]c\b", re.ASCII)

# Reads the number before the pulse label, which on the LCD is diastolic.
_TRAILING_PULSE_STEP: Final[str] = "pulse_trailing_label"


def extract_systolic(text: str) -> Optional[Hit]:
    return run_cascade(text, SYS_STEPS, field="sys")


def extract_diastolic(text: str) -> Optional[Hit]:
    return run_cascade(text, DIA_STEPS, field="dia")


def extract_pulse(text: str) -> Optional[Hit]:
    return run_cascade(text, PULSE_STEPS, field="pulse")


def pulse_claim(hit: Optional[Hit]) -> frozenset[int]:
    """Return the labelled pulse value the sys/dia corrections must not take.

    A hit read from the number before the ``pulse`` label claims nothing.
    """

    if hit is None or hit.source == _TRAILING_PULSE_STEP:
        return frozenset()
    return frozenset({int(hit.value)})


def correct_systolic(
    text: str, hit: Optional[Hit], claimed: AbstractSet[int] = frozenset()
) -> Optional[Hit]:
    """Re-read systolic when the cascade missed or returned a value under 100.

    Tries label-attached ``sys`` forms, then numbers within ``LABEL_WINDOW``
    characters of the ``sys`` label, then the first number in the correction
    range anywhere in ``text``. Values in ``claimed`` (a labelled pulse) are
    never taken. The cascade hit is kept when nothing better turns up.
    """

    if hit is not None and int(hit.value) >= _SYS_FIX_LOW:
        return hit

    LOGGER.debug("systolic correction, cascade=%s", hit.value if hit else None)
    taken = {value for value in claimed if value}
    anchor = find_label(text, "sys")
    if anchor is not None:
        fixed = run_cascade(text, SYS_CORRECTION_STEPS, field="sys")
        if fixed is not None and int(fixed.value) not in taken:
            return fixed
        nearby = window_numbers(
            text, anchor, _SYS_FIX_LOW, _SYS_FIX_HIGH, width=LABEL_WINDOW, claimed=taken
        )
        if nearby:
            LOGGER.debug("sys=%s via sys_window", nearby[0])
            return Hit(value=nearby[0], source="sys_window")

    remaining = unclaimed_numbers(text, _SYS_FIX_LOW, _SYS_FIX_HIGH, taken)
    if remaining:
        LOGGER.debug("sys=%s via sys_global", remaining[0])
        return Hit(value=remaining[0], source="sys_global")
    return hit


def correct_diastolic(
    text: str, hit: Optional[Hit], claimed: AbstractSet[int] = frozenset()
) -> Optional[Hit]:
    """Re-read diastolic around the ``dia`` label when the cascade missed.

    Numbers already assigned to systolic or pulse (``claimed``) are never
    reused.
    """

    if hit is not None:
        return hit
    anchor = find_label(text, "dia")
    if anchor is None:
        return None

    LOGGER.debug("diastolic correction")
    taken = {value for value in claimed if value}
    fixed = run_cascade(text, DIA_CORRECTION_STEPS, field="dia")
    if fixed is not None and int(fixed.value) not in taken:
        return fixed
    nearby = window_numbers(
        text, anchor, _DIA_LOW, _DIA_HIGH, width=LABEL_WINDOW, claimed=taken
    )
    if nearby:
        LOGGER.debug("dia=%s via dia_window", nearby[0])
        return Hit(value=nearby[0], source="dia_window")
    remaining = unclaimed_numbers(text, _DIA_LOW, _DIA_HIGH, taken)
    if remaining:
        LOGGER.debug("dia=%s via dia_global", remaining[0])
        return Hit(value=remaining[0], source="dia_global")
    return None


def correct_pulse(
    text: str, hit: Optional[Hit], claimed: AbstractSet[int] = frozenset()
) -> Optional[Hit]:
    """Recover a pulse value garbled into a ``c?c`` cluster such as ``coc``.

    Known clusters map straight to a value. Otherwise two-digit numbers
    near the cluster are tried, then the LCD's fixed sys/dia/pulse order,
    then the area around the ``pulse`` label. ``claimed`` values are skipped
    throughout.

    A cascade ``hit`` that only repeats a systolic or diastolic value is
    dropped when it was read from the number before the ``pulse`` label or
    when a cluster is present, as in ``dia 85 pulse coc`` where ``85``
    belongs to diastolic.
    """

    taken = {value for value in claimed if value}
    cluster = PULSE_CLUSTER_RE.search(text)
    if hit is not None:
        repeats = int(hit.value) in taken
        if not repeats or (cluster is None and hit.source != _TRAILING_PULSE_STEP):
            return hit
        LOGGER.debug("pulse=%s via %s repeats a claimed value", hit.value, hit.source)
        hit = None
    if cluster is None:
        return None

    LOGGER.debug("pulse correction, cascade=%s", hit.value if hit else None)
    token = cluster.group(0)
    known = lookup(PULSE_MISREADS, token)
    if known is not None and known not in taken:
        LOGGER.debug("pulse=%s via misread %r", known, token)
        return Hit(value=known, source=f"pulse_misread_{token}")

    nearby = window_numbers(
        text,
        cluster.span(),
        _PULSE_LOW,
        _PULSE_HIGH,
        width=LABEL_WINDOW,
        min_digits=2,
        max_digits=2,
        claimed=taken,
    )
    if nearby:
        LOGGER.debug("pulse=%s near cluster %r", nearby[0], token)
        return Hit(value=nearby[0], source="pulse_cluster_window")

    if not has_labels(text, *LAYOUT_LABELS):
        return None

    ordered = standalone_numbers(text, _PULSE_LOW, _PULSE_HIGH)
    if len(ordered) >= 3 and ordered[2] not in taken:
        LOGGER.debug("pulse=%s via position", ordered[2])
        return Hit(value=ordered[2], source="pulse_position")

    anchor = find_label(text, "pulse")
    if anchor is not None:
        around = window_numbers(
            text,
            anchor,
            _PULSE_LOW,
            _PULSE_HIGH,
            width=PULSE_LABEL_WINDOW,
            min_digits=2,
            max_digits=2,
            claimed=taken,
        )
        if around:
            LOGGER.debug("pulse=%s via pulse label area", around[0])
            return Hit(value=around[0], source="pulse_label_window")
    return None


__all__ = [
    "DIA_CORRECTION_STEPS",
    "DIA_STEPS",
    "LAYOUT_LABELS",
    "PULSE_CLUSTER_RE",
    "PULSE_STEPS",
    "SYS_CORRECTION_STEPS",
    "SYS_STEPS",
    "correct_diastolic",
    "correct_pulse",
    "correct_systolic",
    "extract_diastolic",
    "extract_pulse",
    "extract_systolic",
    "pulse_claim",
]
