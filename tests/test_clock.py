"""Tests for time and period extraction."""

from __future__ import annotations

import re

import pytest

from bpscan.ocr.cascade import Hit
from bpscan.ocr.clock import PERIOD_STEPS, extract_period, extract_time, is_valid_clock


@pytest.mark.parametrize(
    "text,expected_time,expected_period",
    [
        ("12:30 pm", "12:30", "PM"),
        ("7:05", "07:05", None),
        ("7 pm", "07:00", "PM"),
        ("7.45 am", "07:45", "AM"),
    ],
)
def test_labelled_clock_forms(text: str, expected_time: str, expected_period: str) -> None:
    time_hit, period_hit = extract_time(text)
    assert time_hit is not None
    assert time_hit.value == expected_time
    assert (period_hit.value if period_hit else None) == expected_period


def test_invalid_clock_falls_through_to_loose_scan() -> None:
    time_hit, _ = extract_time("25:61 8:15")
    assert time_hit == Hit(value="08:15", source="any_colon")


def test_dotted_clock_without_period() -> None:
    time_hit, _ = extract_time("7.45")
    assert time_hit == Hit(value="07:45", source="any_dot")


def test_adjacent_small_integers() -> None:
    time_hit, period_hit = extract_time("9 x 5")
    assert time_hit == Hit(value="09:05", source="adjacent_integers")
    assert period_hit is None


def test_no_time() -> None:
    assert extract_time("the quick brown fox") == (None, None)


def test_period_before_clock() -> None:
    time_hit, _ = extract_time("pm 7:15")
    assert time_hit.value == "07:15"
    assert extract_period("pm 7:15").value == "PM"


@pytest.mark.parametrize(
    "text,expected",
    [("am", "AM"), ("morning", "AM"), ("afternoon", "PM"), ("7 p.m.", "PM"), ("", None)],
)
def test_extract_period(text: str, expected: str) -> None:
    hit = extract_period(text)
    assert (hit.value if hit else None) == expected


def test_period_word_boundaries_are_ascii() -> None:
    assert all(pattern.flags & re.ASCII for _, pattern, _ in PERIOD_STEPS)
    assert extract_period("éam").value == "AM"


def test_is_valid_clock_bounds() -> None:
    assert is_valid_clock(0, 0)
    assert is_valid_clock(23, 59)
    assert not is_valid_clock(24, 0)
    assert not is_valid_clock(12, 60)
