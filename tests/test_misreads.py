"""Tests for the OCR misread tables."""

from __future__ import annotations

import pytest

from bpscan.ocr.dates import recover_date
from bpscan.ocr.misreads import (
    DAY_MISREADS,
    MONTH_MISREADS,
    PULSE_MISREADS,
    TOKEN_REWRITES,
    lookup,
)
from bpscan.ocr.normalize import normalize
from bpscan.ocr.vitals import correct_pulse


@pytest.mark.parametrize("token,replacement", sorted(TOKEN_REWRITES.items()))
def test_token_rewrites(token: str, replacement: str) -> None:
    assert normalize(f"x {token.upper()} y") == f"x {replacement} y"


@pytest.mark.parametrize("token,value", sorted(MONTH_MISREADS.items()))
def test_month_misreads(token: str, value: int) -> None:
    month, _ = recover_date(token, None, None)
    assert month is not None
    assert month.value == value
    assert month.source == f"month_misread_{token}"


@pytest.mark.parametrize("token,value", sorted(DAY_MISREADS.items()))
def test_day_misreads(token: str, value: int) -> None:
    _, day = recover_date(token, None, None)
    assert day is not None
    assert day.value == value


@pytest.mark.parametrize("token,value", sorted(PULSE_MISREADS.items()))
def test_pulse_misreads(token: str, value: int) -> None:
    hit = correct_pulse(f"pulse {token}", None)
    assert hit is not None
    assert hit.value == value


def test_lookup_is_case_insensitive() -> None:
    assert lookup(PULSE_MISREADS, " COC ") == 71
    assert lookup(PULSE_MISREADS, "cxc") is None
