"""Month/day extraction from normalized monitor text."""

from __future__ import annotations

import logging
import re
from typing import Final, List, Optional, Sequence, Tuple

from .cascade import CascadeStep, Hit, run_cascade, step
from .misreads import DAY_MISREADS, MONTH_MISREADS, MONTH_TOKENS
from .tokens import Span, clock_spans, in_range, outside_spans, scan_numbers
from .vitals_bounds import DAY_MAX, DAY_MIN, MONTH_MAX, MONTH_MIN

LOGGER = logging.getLogger(__name__)

MONTH_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step("month_number_label", r"\b(\d{1,2})\s*(?:month|mo|m)\b", MONTH_MIN, MONTH_MAX),
    step("month_label_number", r"\b(?:month|mo|m)\s*(\d{1,2})\b", MONTH_MIN, MONTH_MAX),
    step("month_suffix", r"\b(\d{1,2})m\b", MONTH_MIN, MONTH_MAX),
    *(
        step(f"month_token_{token}", rf"\b{re.escape(token)}\b", MONTH_MIN, MONTH_MAX, value=value)
        for token, value in MONTH_TOKENS.items()
    ),
    step("month_slash", r"\b(\d{1,2})\s*/\s*\d{1,2}\b", MONTH_MIN, MONTH_MAX),
    step("month_dash", r"\b(\d{1,2})\s*-\s*\d{1,2}\b", MONTH_MIN, MONTH_MAX),
)

DAY_STEPS: Final[Tuple[CascadeStep, ...]] = (
    step("day_number_label", r"\b(\d{1,2})\s*(?:day|d)\b", DAY_MIN, DAY_MAX),
    step("day_label_number", r"\b(?:day|d)\s*(\d{1,2})\b", DAY_MIN, DAY_MAX),
    step("day_suffix", r"\b(\d{1,2})d\b", DAY_MIN, DAY_MAX),
    step("day_slash", r"\b\d{1,2}\s*/\s*(\d{1,2})\b", DAY_MIN, DAY_MAX),
    step("day_dash", r"\b\d{1,2}\s*-\s*(\d{1,2})\b", DAY_MIN, DAY_MAX),
)

_COMBINED_RE: Final[re.Pattern[str]] = re.compile(r"\b(\d{1,2})m\s*(\d{1,2})d\b", re.ASCII)
_SEPARATOR_RES: Final[Tuple[Tuple[str, re.Pattern[str]], ...]] = (
    ("slash", re.compile(r"\b(\d{1,2})\s*/\s*(\d{1,2})\b", re.ASCII)),
    ("dash", re.compile(r"\b(\d{1,2})-(\d{1,2})\b", re.ASCII)),
    ("space", re.compile(r"\b(\d{1,2})\s+(\d{1,2})\b", re.ASCII)),
)

DatePair = Tuple[Optional[Hit], Optional[Hit]]


def extract_month(text: str) -> Optional[Hit]:
    return run_cascade(text, MONTH_STEPS, field="month")


def extract_day(text: str) -> Optional[Hit]:
    return run_cascade(text, DAY_STEPS, field="day")


def _is_month(value: int) -> bool:
    return MONTH_MIN <= value <= MONTH_MAX


def _is_day(value: int) -> bool:
    return DAY_MIN <= value <= DAY_MAX


def _fill(month: Optional[Hit], day: Optional[Hit], month_value: int, day_value: int, source: str) -> DatePair:
    if month is None and _is_month(month_value):
        month = Hit(value=month_value, source=source)
    if day is None and _is_day(day_value):
        day = Hit(value=day_value, source=source)
    return month, day


def _overlaps(span: Span, spans: Sequence[Span]) -> bool:
    start, end = span
    return any(start < other_end and other_start < end for other_start, other_end in spans)


def _from_combined(text: str, month: Optional[Hit], day: Optional[Hit]) -> DatePair:
    match = _COMBINED_RE.search(text)
    if match is None:
        return month, day
    return _fill(month, day, int(match.group(1)), int(match.group(2)), "date_combined")


def _from_separators(
    text: str, month: Optional[Hit], day: Optional[Hit], clocks: Sequence[Span]
) -> DatePair:
    for name, pattern in _SEPARATOR_RES:
        match = next((m for m in pattern.finditer(text) if not _overlaps(m.span(), clocks)), None)
        if match is None:
            continue
        first, second = int(match.group(1)), int(match.group(2))
        if _is_month(first) and _is_day(second):
            return _fill(month, day, first, second, f"date_{name}")
        if _is_month(second) and _is_day(first):
            return _fill(month, day, second, first, f"date_{name}")
    return month, day


def _from_leftovers(
    text: str, month: Optional[Hit], day: Optional[Hit], clocks: Sequence[Span]
) -> DatePair:
    numbers = in_range(outside_spans(scan_numbers(text, 1, 2), clocks), DAY_MIN, DAY_MAX)
    if len(numbers) < 2:
        return month, day
    ordered: List[int] = sorted(
        (number.value for number in numbers),
        key=lambda value: (not _is_month(value), value),
    )
    if month is None and _is_month(ordered[0]):
        month = Hit(value=ordered[0], source="date_leftover")
    if day is None:
        day = Hit(value=ordered[1], source="date_leftover")
    return month, day


def _from_misreads(text: str, month: Optional[Hit], day: Optional[Hit]) -> DatePair:
    if month is None:
        for token, value in MONTH_MISREADS.items():
            if re.search(rf"\b{re.escape(token)}\b", text):
                month = Hit(value=value, source=f"month_misread_{token}")
                break
    if day is None:
        for token, value in DAY_MISREADS.items():
            if re.search(rf"\b{re.escape(token)}\b", text):
                day = Hit(value=value, source=f"day_misread_{token}")
                break
    return month, day


def recover_date(text: str, month: Optional[Hit], day: Optional[Hit]) -> DatePair:
    """Fill whichever of ``month``/``day`` the cascades left unresolved.

    Passes run in order until both are known: combined ``7m15d`` tokens,
    two-number separator forms, the two smallest leftover 1..31 numbers not
    used by a clock token, and finally the misread tables. Values already
    found are never replaced.
    """

    if month is not None and day is not None:
        return month, day

    clocks = clock_spans(text)
    passes = (
        lambda m, d: _from_combined(text, m, d),
        lambda m, d: _from_separators(text, m, d, clocks),
        lambda m, d: _from_leftovers(text, m, d, clocks),
        lambda m, d: _from_misreads(text, m, d),
    )
    for date_pass in passes:
        month, day = date_pass(month, day)
        if month is not None and day is not None:
            break

    LOGGER.debug(
        "date recovery month=%s day=%s",
        month.source if month else None,
        day.source if day else None,
    )
    return month, day


__all__ = [
    "DAY_MAX",
    "DAY_MIN",
    "DAY_STEPS",
    "MONTH_MAX",
    "MONTH_MIN",
    "MONTH_STEPS",
    "extract_day",
    "extract_month",
    "recover_date",
]
