"""TXT writer tests."""

from __future__ import annotations

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from bpscan.engine.model import ExtractionResult
from bpscan.report.model import ReadingRecord
from bpscan.report.txt_writer import format_record_line, write_report


class TxtWriterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.complete = ReadingRecord(
            source="a.txt",
            result=ExtractionResult(day=15, month=7, time="12:30", period="PM", sys=130, dia=85, pulse=70),
        )
        self.partial = ReadingRecord(source="B.txt", result=ExtractionResult(sys=120))

    def test_record_line(self) -> None:
        self.assertEqual(
            format_record_line(self.complete),
            "a.txt: 07/15 12:30 PM · SYS 130 · DIA 85 · PULSE 70",
        )
        self.assertEqual(
            format_record_line(self.partial),
            "B.txt: --/-- --:-- · SYS 120 · DIA ? · PULSE ?",
        )

    def test_write_report_sections(self) -> None:
        with TemporaryDirectory() as tmp:
            out_path = Path(tmp) / "nested" / "report.txt"
            written = write_report([self.partial, self.complete], out_path)
            self.assertEqual(written, out_path)
            lines = out_path.read_text(encoding="utf-8").splitlines()

        self.assertEqual(lines[0], "bpscan readings · Sources: 2")
        self.assertEqual(lines[1], "Read: 2 · Complete: 1 · Needs entry: 1")
        needs_index = lines.index("Needs manual entry —")
        self.assertEqual(lines[needs_index + 1], "B.txt: missing dia, pulse")
        all_index = lines.index("All readings —")
        self.assertTrue(lines[all_index + 1].startswith("a.txt:"))
        self.assertTrue(lines[all_index + 2].startswith("B.txt:"))
        self.assertTrue(lines[-1].startswith("Generated: "))

    def test_all_complete_placeholder(self) -> None:
        with TemporaryDirectory() as tmp:
            out_path = write_report([self.complete], Path(tmp) / "report.txt")
            text = out_path.read_text(encoding="utf-8")
        self.assertIn("None (all readings complete)", text)
