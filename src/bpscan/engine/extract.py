"""Turn raw monitor OCR text into a validated :class:`ExtractionResult`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Union

from bpscan.ocr.clock import extract_period, extract_time
from bpscan.ocr.dates import extract_day, extract_month, recover_date
from bpscan.ocr.layout import apply_layout
from bpscan.ocr.normalize import normalize
from bpscan.ocr.vitals import (
    correct_diastolic,
    correct_pulse,
    correct_systolic,
    extract_diastolic,
    extract_pulse,
    extract_systolic,
    pulse_claim,
)
from bpscan.ocr.vitals_bounds import GateStats, validate

from .model import Candidates, ExtractionResult

LOGGER = logging.getLogger(__name__)

RawText = Union[str, bytes, None]


@dataclass(frozen=True, slots=True)
class ExtractionTrace:
    """Every intermediate stage of one extraction, for logs and debugging."""

    raw: str
    normalized: str
    cascades: Candidates
    final: Candidates
    result: ExtractionResult
    gates: GateStats = field(default_factory=GateStats)


def coerce_text(raw_text: RawText) -> str:
    """Return ``raw_text`` as ``str``; ``None`` becomes empty, bytes are decoded."""

    if raw_text is None:
        return ""
    if isinstance(raw_text, (bytes, bytearray)):
        return bytes(raw_text).decode("utf-8", errors="replace")
    if isinstance(raw_text, str):
        return raw_text
    return str(raw_text)


def read_candidates(text: str) -> Candidates:
    """Run every field cascade and correction pass over normalized ``text``."""

    month = extract_month(text)
    day = extract_day(text)
    time_hit, clock_period = extract_time(text)
    period = extract_period(text) or clock_period
    month, day = recover_date(text, month, day)

    pulse = extract_pulse(text)
    labelled_pulse = pulse_claim(pulse)
    candidates = Candidates(month=month, day=day, time=time_hit, period=period)
    candidates = replace(
        candidates, sys=correct_systolic(text, extract_systolic(text), labelled_pulse)
    )
    candidates = replace(
        candidates,
        dia=correct_diastolic(
            text, extract_diastolic(text), candidates.claimed("sys") | labelled_pulse
        ),
    )
    return replace(
        candidates,
        pulse=correct_pulse(text, pulse, candidates.claimed("sys", "dia")),
    )


def trace(raw_text: RawText) -> ExtractionTrace:
    """Extract a reading and keep every intermediate stage."""

    raw = coerce_text(raw_text)
    normalized = normalize(raw)
    LOGGER.debug("raw OCR text: %r", raw)
    LOGGER.debug("normalized text: %r", normalized)

    cascades = read_candidates(normalized)
    final = apply_layout(normalized, cascades)
    gates = GateStats()
    result = validate(final, gates)
    LOGGER.debug("extracted %s sources=%s", result.to_dict(), final.sources())
    return ExtractionTrace(
        raw=raw,
        normalized=normalized,
        cascades=cascades,
        final=final,
        result=result,
        gates=gates,
    )


def extract(raw_text: RawText) -> ExtractionResult:
    """Return the best-effort reading for ``raw_text``; never raises.

    Unresolved fields come back as ``0`` or ``""``.
    """

    try:
        return trace(raw_text).result
    except Exception:  # pragma: no cover
        LOGGER.exception("Extraction failed; returning empty reading")
        return ExtractionResult()


__all__ = ["ExtractionTrace", "coerce_text", "extract", "read_candidates", "trace"]
