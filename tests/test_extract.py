"""End-to-end tests for the extraction engine."""

from __future__ import annotations

import unittest

from bpscan.engine.extract import extract, trace
from bpscan.engine.model import ExtractionResult


class ExtractTests(unittest.TestCase):
    def test_full_reading(self) -> None:
        result = extract("7m 15d 12:30 pm sys 130 dia 85 pulse 70")
        self.assertEqual(
            result,
            ExtractionResult(day=15, month=7, time="12:30", period="PM", sys=130, dia=85, pulse=70),
        )
        self.assertFalse(result.needs_manual_entry)

    def test_layout_precedence(self) -> None:
        result = extract("SYS 144 DIA 72 PULSE 76")
        self.assertEqual((result.sys, result.dia, result.pulse), (144, 72, 76))

    def test_no_signal_gives_sentinels(self) -> None:
        result = extract("the quick brown fox")
        self.assertEqual(result, ExtractionResult())
        self.assertTrue(result.needs_manual_entry)
        self.assertEqual(
            result.to_dict(),
            {"day": 0, "month": 0, "time": "", "period": "", "sys": 0, "dia": 0, "pulse": 0},
        )

    def test_none_and_bytes_inputs(self) -> None:
        self.assertEqual(extract(None), ExtractionResult())
        self.assertEqual(extract(b""), ExtractionResult())
        result = extract(b"sys 130 dia 85 pulse 70")
        self.assertEqual((result.sys, result.dia, result.pulse), (130, 85, 70))

    def test_garbled_pulse_cluster(self) -> None:
        result = extract("SYS 130 DIA 85 PULSE COC")
        self.assertEqual((result.sys, result.dia, result.pulse), (130, 85, 71))

    def test_unlabelled_numbers_use_soft_fallback(self) -> None:
        result = extract("130 85 72")
        self.assertEqual((result.sys, result.dia, result.pulse), (130, 85, 72))

    def test_labelled_systolic_beats_unrelated_number(self) -> None:
        self.assertEqual(extract("200 sys 130").sys, 130)

    def test_vitals_never_share_a_fallback_number(self) -> None:
        cases = {
            "hr 120 dia 80": (0, 80, 120),
            "pulse 120": (0, 0, 120),
            "sys 130 dia 85 pulse": (130, 85, 0),
        }
        for text, expected in cases.items():
            with self.subTest(text=text):
                result = extract(text)
                self.assertEqual((result.sys, result.dia, result.pulse), expected)

    def test_deterministic(self) -> None:
        text = "cm 9d 8:05 AM sys120 dia 80 pul 66"
        self.assertEqual(extract(text), extract(text))

    def test_trace_keeps_intermediate_stages(self) -> None:
        stages = trace("SYS 144 DIA 72 PULSE 76")
        self.assertEqual(stages.normalized, "sys 144 dia 72 pulse 76")
        self.assertEqual(stages.cascades.sys.source, "sys_label")
        self.assertTrue(stages.final.layout_applied)
        self.assertEqual(stages.gates.total, 0)

    def test_missing_fields(self) -> None:
        result = ExtractionResult(sys=120, dia=80)
        self.assertEqual(result.missing_fields(), ["day", "month", "time", "period", "pulse"])
        self.assertTrue(result.needs_manual_entry)
