"""Ordered pattern cascades evaluated short-circuit on the first accepted hit."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple, Union

LOGGER = logging.getLogger(__name__)

Value = Union[int, str]


@dataclass(frozen=True, slots=True)
class CascadeStep:
    """One prioritized attempt within a field cascade.

    ``group`` names the capture group holding the number. When ``value`` is
    set the step is a token match that yields that fixed value instead.
    """

    name: str
    pattern: re.Pattern[str]
    low: int
    high: int
    group: int = 1
    value: Optional[int] = None

    def attempt(self, text: str) -> Optional[int]:
        match = self.pattern.search(text)
        if match is None:
            return None
        if self.value is not None:
            number = self.value
        else:
            number = _to_int(match.group(self.group))
            if number is None:
                return None
        if self.low <= number <= self.high:
            return number
        return None


@dataclass(frozen=True, slots=True)
class Hit:
    """An accepted field value and the step that produced it."""

    value: Value
    source: str


def step(
    name: str,
    pattern: str,
    low: int,
    high: int,
    *,
    group: int = 1,
    value: Optional[int] = None,
) -> CascadeStep:
    """Build a :class:`CascadeStep` from a case-insensitive ASCII ``pattern``."""

    return CascadeStep(
        name=name,
        pattern=re.compile(pattern, re.IGNORECASE | re.ASCII),
        low=low,
        high=high,
        group=group,
        value=value,
    )


def run_cascade(text: str, steps: Sequence[CascadeStep], *, field: str = "") -> Optional[Hit]:
    """Return the first step whose match falls inside its acceptance range."""

    for candidate in steps:
        number = candidate.attempt(text)
        if number is not None:
            LOGGER.debug("%s=%s via %s", field or "field", number, candidate.name)
            return Hit(value=number, source=candidate.name)
    return None


def step_names(steps: Iterable[CascadeStep]) -> Tuple[str, ...]:
    return tuple(candidate.name for candidate in steps)


def _to_int(raw: Optional[str]) -> Optional[int]:
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


__all__ = ["CascadeStep", "Hit", "Value", "run_cascade", "step", "step_names"]
