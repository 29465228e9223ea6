"""TXT batch report for a set of extracted readings."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterable, List

from bpscan.fs.exports import safe_write_text

from .model import ReadingRecord


def write_report(records: List[ReadingRecord], out_path: Path) -> Path:
    """Write the batch TXT report to ``out_path`` and return the path written.

    The returned path differs from ``out_path`` when the target was not
    writable and the report landed in the Exports directory instead.
    """

    complete = [record for record in records if record.complete]
    needs_entry = [record for record in records if not record.complete]

    lines: List[str] = [
        f"bpscan readings · Sources: {len(records)}",
        f"Read: {len(records)} · Complete: {len(complete)} · Needs entry: {len(needs_entry)}",
        "",
        "Needs manual entry —",
    ]
    if needs_entry:
        for record in _iter_sorted(needs_entry):
            lines.append(f"{record.source}: missing {', '.join(_missing_vitals(record))}")
    else:
        lines.append("None (all readings complete)")

    lines.append("")
    lines.append("All readings —")
    for record in _iter_sorted(records):
        lines.append(format_record_line(record))

    lines.append("")
    generated_stamp = datetime.now().strftime("%m/%d/%Y %H:%M")
    lines.append(f"Generated: {generated_stamp}")

    return safe_write_text(out_path, "\n".join(lines))


def format_record_line(record: ReadingRecord) -> str:
    """Return the one-line rendering of ``record`` used in reports and the CLI."""

    result = record.result
    date_text = f"{result.month:02d}/{result.day:02d}" if result.month and result.day else "--/--"
    time_text = result.time or "--:--"
    if result.period:
        time_text = f"{time_text} {result.period}"
    return (
        f"{record.source}: {date_text} {time_text} · "
        f"SYS {_vital(result.sys)} · DIA {_vital(result.dia)} · PULSE {_vital(result.pulse)}"
    )


def _vital(value: int) -> str:
    return str(value) if value else "?"


def _missing_vitals(record: ReadingRecord) -> List[str]:
    return [name for name in record.missing if name in ("sys", "dia", "pulse")]


def _iter_sorted(records: Iterable[ReadingRecord]) -> Iterable[ReadingRecord]:
    return sorted(records, key=lambda record: record.source.lower())


__all__ = ["format_record_line", "write_report"]
