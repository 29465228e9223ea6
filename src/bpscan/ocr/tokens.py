"""Numeric token scanning and label-proximity helpers over normalized text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import AbstractSet, Final, Iterable, List, Optional, Sequence, Tuple

CLOCK_RE: Final[re.Pattern[str]] = re.compile(r"\b(\d{1,2}):(\d{2})\b", re.ASCII)

LABEL_WINDOW: Final[int] = 10
PULSE_LABEL_WINDOW: Final[int] = 20

Span = Tuple[int, int]

_NUMBER_RES: dict[Tuple[int, int], re.Pattern[str]] = {}


@dataclass(frozen=True, slots=True)
class NumberToken:
    """A standalone run of digits found in normalized text."""

    value: int
    start: int
    end: int

    @property
    def digits(self) -> int:
        return self.end - self.start


def _number_re(min_digits: int, max_digits: int) -> re.Pattern[str]:
    key = (min_digits, max_digits)
    pattern = _NUMBER_RES.get(key)
    if pattern is None:
        pattern = re.compile(rf"\b\d{{{min_digits},{max_digits}}}\b", re.ASCII)
        _NUMBER_RES[key] = pattern
    return pattern


def scan_numbers(text: str, min_digits: int = 2, max_digits: int = 3) -> List[NumberToken]:
    """Return standalone numbers of ``min_digits``..``max_digits`` digits in order."""

    return [
        NumberToken(value=int(match.group(0)), start=match.start(), end=match.end())
        for match in _number_re(min_digits, max_digits).finditer(text)
    ]


def clock_spans(text: str) -> List[Span]:
    """Return the character spans of every ``H:MM`` clock token."""

    return [match.span() for match in CLOCK_RE.finditer(text)]


def outside_spans(numbers: Iterable[NumberToken], spans: Sequence[Span]) -> List[NumberToken]:
    """Drop numbers that sit inside any of ``spans``."""

    kept: List[NumberToken] = []
    for number in numbers:
        if any(start <= number.start and number.end <= end for start, end in spans):
            continue
        kept.append(number)
    return kept


def in_range(numbers: Iterable[NumberToken], low: int, high: int) -> List[NumberToken]:
    return [number for number in numbers if low <= number.value <= high]


def standalone_numbers(
    text: str,
    low: int,
    high: int,
    *,
    min_digits: int = 2,
    max_digits: int = 3,
) -> List[int]:
    """Return in-range numbers in reading order, skipping clock components."""

    numbers = outside_spans(scan_numbers(text, min_digits, max_digits), clock_spans(text))
    return [number.value for number in in_range(numbers, low, high)]


def unclaimed_numbers(
    text: str,
    low: int,
    high: int,
    claimed: AbstractSet[int],
    *,
    min_digits: int = 2,
    max_digits: int = 3,
) -> List[int]:
    """Return in-range numbers whose value is not already assigned elsewhere.

    ``claimed`` holds the values taken by sibling fields; zero entries are
    ignored. Clock components are skipped. Every fallback that may reuse a
    number goes through here so a value given to systolic or diastolic never
    resurfaces as another field.
    """

    taken = {value for value in claimed if value}
    return [
        value
        for value in standalone_numbers(
            text, low, high, min_digits=min_digits, max_digits=max_digits
        )
        if value not in taken
    ]


def find_label(text: str, label: str) -> Optional[Span]:
    """Return the span of the first occurrence of ``label`` in ``text``."""

    index = text.find(label)
    if index < 0:
        return None
    return index, index + len(label)


def window_numbers(
    text: str,
    anchor: Span,
    low: int,
    high: int,
    *,
    width: int = LABEL_WINDOW,
    min_digits: int = 2,
    max_digits: int = 3,
    claimed: AbstractSet[int] = frozenset(),
) -> List[int]:
    """Return in-range numbers within ``width`` characters of ``anchor``.

    Numbers before the anchor come first, then numbers after it, each in
    reading order. A number must lie wholly inside its window.
    """

    start, end = anchor
    before_lo = max(0, start - width)
    after_hi = end + width
    taken = {value for value in claimed if value}
    before: List[int] = []
    after: List[int] = []
    for number in in_range(scan_numbers(text, min_digits, max_digits), low, high):
        if number.value in taken:
            continue
        if before_lo <= number.start and number.end <= start:
            before.append(number.value)
        elif end <= number.start and number.end <= after_hi:
            after.append(number.value)
    return before + after


def has_labels(text: str, *labels: str) -> bool:
    return all(label in text for label in labels)


__all__ = [
    "CLOCK_RE",
    "LABEL_WINDOW",
    "NumberToken",
    "PULSE_LABEL_WINDOW",
    "clock_spans",
    "find_label",
    "has_labels",
    "in_range",
    "outside_spans",
    "scan_numbers",
    "standalone_numbers",
    "unclaimed_numbers",
    "window_numbers",
]
