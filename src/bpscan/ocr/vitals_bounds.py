from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from bpscan.engine.model import Candidates, ExtractionResult

# Acceptance ranges used while matching.
SYS_ACCEPT = (70, 250)
DIA_ACCEPT = (40, 150)
PULSE_ACCEPT = (40, 200)
SYS_CORRECTION = (100, 250)
LAYOUT_RANGE = (40, 250)

# Final ranges enforced before a value is reported.
DAY_MIN, DAY_MAX = 1, 31
MONTH_MIN, MONTH_MAX = 1, 12
SBP_MIN, SBP_MAX = 70, 250
DBP_MIN, DBP_MAX = 40, 150
HR_MIN, HR_MAX = 40, 200

_CLOCK_RE = re.compile(r"^(\d{2}):(\d{2})$")


@dataclass
class GateStats:
    day_gated: int = 0
    month_gated: int = 0
    sbp_gated: int = 0
    dbp_gated: int = 0
    hr_gated: int = 0
    time_gated: int = 0
    period_gated: int = 0

    @property
    def total(self) -> int:
        return (
            self.day_gated
            + self.month_gated
            + self.sbp_gated
            + self.dbp_gated
            + self.hr_gated
            + self.time_gated
            + self.period_gated
        )


def _toi(value) -> Optional[int]:
    try:
        return int(round(float(value)))
    except Exception:
        return None


def _gate(value, low: int, high: int) -> Tuple[int, bool]:
    v = _toi(value)
    if v is None or v < low or v > high:
        return 0, value is not None
    return v, False


def gate_day(value) -> Tuple[int, bool]:
    return _gate(value, DAY_MIN, DAY_MAX)


def gate_month(value) -> Tuple[int, bool]:
    return _gate(value, MONTH_MIN, MONTH_MAX)


def gate_sbp(value) -> Tuple[int, bool]:
    return _gate(value, SBP_MIN, SBP_MAX)


def gate_dbp(value) -> Tuple[int, bool]:
    return _gate(value, DBP_MIN, DBP_MAX)


def gate_hr(value) -> Tuple[int, bool]:
    return _gate(value, HR_MIN, HR_MAX)


def gate_time(value) -> Tuple[str, bool]:
    if not value:
        return "", False
    match = _CLOCK_RE.match(str(value))
    if not match:
        return "", True
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return "", True
    return str(value), False


def gate_period(value) -> Tuple[str, bool]:
    if not value:
        return "", False
    token = str(value).upper()
    if token in {"AM", "PM"}:
        return token, False
    return "", True


def validate(candidates: Candidates, stats: Optional[GateStats] = None) -> ExtractionResult:
    """Clamp every candidate to its final range, zeroing anything outside it."""

    stats = stats if stats is not None else GateStats()

    def _value(hit):
        return hit.value if hit is not None else None

    day, gated = gate_day(_value(candidates.day))
    stats.day_gated += gated
    month, gated = gate_month(_value(candidates.month))
    stats.month_gated += gated
    time_text, gated = gate_time(_value(candidates.time))
    stats.time_gated += gated
    period, gated = gate_period(_value(candidates.period))
    stats.period_gated += gated
    sbp, gated = gate_sbp(_value(candidates.sys))
    stats.sbp_gated += gated
    dbp, gated = gate_dbp(_value(candidates.dia))
    stats.dbp_gated += gated
    hr, gated = gate_hr(_value(candidates.pulse))
    stats.hr_gated += gated

    return ExtractionResult(
        day=day,
        month=month,
        time=time_text,
        period=period,
        sys=sbp,
        dia=dbp,
        pulse=hr,
    )


__all__ = [
    "DAY_MAX",
    "DAY_MIN",
    "DBP_MAX",
    "DBP_MIN",
    "DIA_ACCEPT",
    "GateStats",
    "HR_MAX",
    "HR_MIN",
    "LAYOUT_RANGE",
    "MONTH_MAX",
    "MONTH_MIN",
    "PULSE_ACCEPT",
    "SBP_MAX",
    "SBP_MIN",
    "SYS_ACCEPT",
    "SYS_CORRECTION",
    "gate_day",
    "gate_dbp",
    "gate_hr",
    "gate_month",
    "gate_period",
    "gate_sbp",
    "gate_time",
    "validate",
]
