"""Clock time and AM/PM period extraction."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Final, Optional, Tuple

from .cascade import Hit
from .tokens import scan_numbers

LOGGER = logging.getLogger(__name__)

HOUR_MAX = 23
MINUTE_MAX = 59


@dataclass(frozen=True, slots=True)
class ClockStep:
    """A time pattern with named ``hour``/``minute``/``period`` groups."""

    name: str
    pattern: re.Pattern[str]


def _clock(name: str, pattern: str) -> ClockStep:
    return ClockStep(name=name, pattern=re.compile(pattern, re.IGNORECASE | re.ASCII))


TIME_STEPS: Final[Tuple[ClockStep, ...]] = (
    _clock("clock_period", r"\b(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<period>am|pm)\b"),
    _clock("clock", r"\b(?P<hour>\d{1,2}):(?P<minute>\d{2})\b"),
    _clock("hour_period", r"\b(?P<hour>\d{1,2})\s*(?P<period>am|pm)\b"),
    _clock("period_clock", r"\b(?P<period>am|pm)\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})\b"),
    _clock("dotted_clock_period", r"\b(?P<hour>\d{1,2})\.(?P<minute>\d{2})\s*(?P<period>am|pm)\b"),
)

FALLBACK_STEPS: Final[Tuple[ClockStep, ...]] = (
    _clock("any_colon", r"\b(?P<hour>\d{1,2}):(?P<minute>\d{2})\b"),
    _clock("any_dot", r"\b(?P<hour>\d{1,2})\.(?P<minute>\d{2})\b"),
    _clock("any_space", r"\b(?P<hour>\d{1,2})\s+(?P<minute>\d{2})\b"),
    _clock("any_hm", r"\b(?P<hour>\d{1,2})h(?P<minute>\d{2})m\b"),
)

PERIOD_STEPS: Final[Tuple[Tuple[str, re.Pattern[str], Optional[str]], ...]] = (
    ("period_token", re.compile(r"\b(am|pm)\b", re.IGNORECASE | re.ASCII), None),
    ("period_morning", re.compile(r"\bmorning\b", re.IGNORECASE | re.ASCII), "AM"),
    ("period_afternoon", re.compile(r"\bafternoon\b", re.IGNORECASE | re.ASCII), "PM"),
    ("period_dotted", re.compile(r"\b([ap])\.m\b", re.IGNORECASE | re.ASCII), None),
)

TimeReading = Tuple[Optional[Hit], Optional[Hit]]


def format_clock(hour: int, minute: int) -> str:
    return f"{hour:02d}:{minute:02d}"


def is_valid_clock(hour: int, minute: int) -> bool:
    return 0 <= hour <= HOUR_MAX and 0 <= minute <= MINUTE_MAX


def _read_match(match: re.Match[str]) -> Optional[Tuple[int, int, Optional[str]]]:
    groups = match.groupdict()
    try:
        hour = int(groups["hour"])
        minute = int(groups.get("minute") or 0)
    except (TypeError, ValueError):
        return None
    if not is_valid_clock(hour, minute):
        return None
    period = groups.get("period")
    return hour, minute, period.upper() if period else None


def extract_time(text: str) -> TimeReading:
    """Return ``(time, period)`` hits for the first valid clock in ``text``.

    The labelled cascade runs first; when none of its steps yields a valid
    hour/minute the loose scans run, and finally the first adjacent pair of
    small integers is taken as hour and minute.
    """

    for clock_step in TIME_STEPS:
        match = clock_step.pattern.search(text)
        if match is None:
            continue
        parsed = _read_match(match)
        if parsed is None:
            continue
        hour, minute, period = parsed
        LOGGER.debug("time=%s via %s", format_clock(hour, minute), clock_step.name)
        period_hit = Hit(value=period, source=clock_step.name) if period else None
        return Hit(value=format_clock(hour, minute), source=clock_step.name), period_hit

    for clock_step in FALLBACK_STEPS:
        for match in clock_step.pattern.finditer(text):
            parsed = _read_match(match)
            if parsed is None:
                continue
            hour, minute, _ = parsed
            LOGGER.debug("time=%s via fallback %s", format_clock(hour, minute), clock_step.name)
            return Hit(value=format_clock(hour, minute), source=clock_step.name), None

    small = [number.value for number in scan_numbers(text, 1, 2) if number.value <= HOUR_MAX]
    if len(small) >= 2:
        hour, minute = small[0], small[1]
        LOGGER.debug("time=%s via adjacent integers", format_clock(hour, minute))
        return Hit(value=format_clock(hour, minute), source="adjacent_integers"), None

    return None, None


def extract_period(text: str) -> Optional[Hit]:
    for name, pattern, fixed in PERIOD_STEPS:
        match = pattern.search(text)
        if match is None:
            continue
        if fixed is not None:
            value = fixed
        else:
            token = match.group(1).lower()
            value = token.upper() if len(token) == 2 else f"{token.upper()}M"
        LOGGER.debug("period=%s via %s", value, name)
        return Hit(value=value, source=name)
    return None


__all__ = [
    "FALLBACK_STEPS",
    "PERIOD_STEPS",
    "TIME_STEPS",
    "extract_period",
    "extract_time",
    "format_clock",
    "is_valid_clock",
]
