"""Tests for OCR text normalization."""

from __future__ import annotations

import unittest

from bpscan.ocr.normalize import collapse, normalize, rewrite_misreads, strip_noise


class NormalizeTests(unittest.TestCase):
    def test_empty_input(self) -> None:
        self.assertEqual(normalize(""), "")

    def test_lowercases_and_collapses_whitespace(self) -> None:
        self.assertEqual(normalize("  SYS   120\n\tDIA 80 "), "sys 120 dia 80")

    def test_noise_markers_removed(self) -> None:
        self.assertEqual(normalize("120+ 80%"), "120 80")
        self.assertEqual(normalize("1+ 130"), "130")

    def test_disallowed_characters_become_spaces(self) -> None:
        self.assertEqual(normalize("sys=120;dia=80"), "sys 120 dia 80")
        self.assertEqual(normalize("120 80 ♥ 70"), "120 80 70")

    def test_label_digit_concatenations_split(self) -> None:
        self.assertEqual(normalize("SYS120 DIA80"), "sys 120 dia 80")

    def test_leading_zero_dropped_outside_clock(self) -> None:
        self.assertEqual(normalize("day 07"), "day 7")
        self.assertEqual(normalize("07:05 AM"), "07:05 am")

    def test_misreads_rewritten_as_whole_tokens(self) -> None:
        self.assertEqual(normalize("cm 15d"), "7m 15d")
        self.assertEqual(normalize("MID"), "7m")
        self.assertEqual(normalize("120 minig"), "120 mmhg")
        self.assertEqual(normalize("cmd"), "cmd")

    def test_idempotent(self) -> None:
        samples = [
            "7m 15d 12:30 PM SYS 130 DIA 85 PULSE 70",
            "cm 1+ 09 120+ 80%",
            "sys120 dia80",
            "  \t mid  ",
            "07-07 d01 2",
        ]
        for sample in samples:
            once = normalize(sample)
            self.assertEqual(normalize(once), once, sample)


def test_helpers_compose() -> None:
    assert strip_noise("98%") == "98 "
    assert collapse(" a ,, b ") == "a b"
    assert rewrite_misreads("c9 c1x") == "7m c1x"
