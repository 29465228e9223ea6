"""Tests for final range validation."""

from __future__ import annotations

from bpscan.engine.model import Candidates, ExtractionResult
from bpscan.ocr.cascade import Hit
from bpscan.ocr.vitals_bounds import (
    GateStats,
    gate_dbp,
    gate_hr,
    gate_period,
    gate_sbp,
    gate_time,
    validate,
)


def test_empty_candidates_give_sentinels() -> None:
    assert validate(Candidates()) == ExtractionResult()


def test_in_range_values_kept() -> None:
    candidates = Candidates(
        month=Hit(7, "m"),
        day=Hit(15, "d"),
        time=Hit("12:30", "t"),
        period=Hit("pm", "p"),
        sys=Hit(130, "s"),
        dia=Hit(85, "d"),
        pulse=Hit(70, "p"),
    )
    assert validate(candidates) == ExtractionResult(
        day=15, month=7, time="12:30", period="PM", sys=130, dia=85, pulse=70
    )


def test_out_of_range_values_zeroed_and_counted() -> None:
    stats = GateStats()
    result = validate(
        Candidates(sys=Hit(300, "s"), dia=Hit(30, "d"), time=Hit("25:00", "t")), stats
    )
    assert (result.sys, result.dia, result.time) == (0, 0, "")
    assert stats.sbp_gated == 1
    assert stats.dbp_gated == 1
    assert stats.time_gated == 1
    assert stats.total == 3


def test_gate_bounds() -> None:
    assert gate_sbp(70) == (70, False)
    assert gate_sbp(69) == (0, True)
    assert gate_dbp(150) == (150, False)
    assert gate_hr(201) == (0, True)
    assert gate_hr(None) == (0, False)
    assert gate_hr("abc") == (0, True)


def test_gate_time_and_period() -> None:
    assert gate_time("07:05") == ("07:05", False)
    assert gate_time("7:05") == ("", True)
    assert gate_time("") == ("", False)
    assert gate_period("am") == ("AM", False)
    assert gate_period("xm") == ("", True)
