"""Headless batch runner used by the CLI."""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, TextIO

from bpscan._paths import log_level_name
from bpscan.engine.extract import trace
from bpscan.fs.exports import default_report_name, exports_dir, sanitize_filename
from bpscan.logs.rotating import get_logger, log_path
from bpscan.report.model import ReadingRecord
from bpscan.report.txt_writer import format_record_line, write_report

LOGGER = logging.getLogger(__name__)

STDIN_MARKER = "-"


@dataclass(slots=True)
class HeadlessOptions:
    """Configuration for a headless extraction run."""

    inputs: List[Path]
    report: Optional[Path] = None
    json_output: bool = False
    log_dir: Path = field(default_factory=lambda: Path("debug"))
    log_file: Optional[Path] = None
    trace: bool = False


@dataclass(slots=True)
class HeadlessResult:
    """Outcome of a headless extraction run."""

    exit_code: int
    readings: List[ReadingRecord]
    report_path: Optional[Path]
    log_file: Path
    lines: List[str] = field(default_factory=list)

    @property
    def summary_line(self) -> str:
        complete = sum(1 for record in self.readings if record.complete)
        return (
            f"Read:{len(self.readings)} Complete:{complete} "
            f"Needs-entry:{len(self.readings) - complete}"
        )


def execute_headless(options: HeadlessOptions, stdin: Optional[TextIO] = None) -> HeadlessResult:
    """Extract a reading from every input in ``options`` and report on them."""

    if not options.inputs:
        raise ValueError("at least one input is required")
    sources = [_resolve_input(path) for path in options.inputs]

    log_dir = options.log_dir.expanduser().resolve()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = (options.log_file or (log_dir / _default_log_name())).expanduser().resolve()

    base_logger = _configure_logging(log_file, trace=options.trace)
    LOGGER.info("Headless start: %d input(s)", len(sources))
    if options.trace:
        base_logger.debug("Trace mode enabled for headless execution.")
    LOGGER.debug("Rotating log at %s", log_path())

    readings: List[ReadingRecord] = []
    try:
        for source in sources:
            raw = _read_source(source, stdin)
            stages = trace(raw)
            name = "stdin" if source is None else source.name
            readings.append(ReadingRecord(source=name, result=stages.result, sources=stages.final.sources()))
            LOGGER.info("%s: %s", name, stages.result.to_dict())
    except OSError:
        LOGGER.exception("Headless run failed while reading inputs")
        return HeadlessResult(exit_code=1, readings=readings, report_path=None, log_file=log_file)

    lines = [_render(record, options.json_output) for record in readings]

    report_path: Optional[Path] = None
    if options.report is not None:
        report_path = write_report(readings, _report_target(options.report))
        LOGGER.info("Report written to %s", report_path)

    exit_code = 0 if all(record.complete for record in readings) else 2
    result = HeadlessResult(
        exit_code=exit_code,
        readings=readings,
        report_path=report_path,
        log_file=log_file,
        lines=lines,
    )
    LOGGER.info("Headless run completed exit_code=%s %s", exit_code, result.summary_line)
    return result


def _resolve_input(path: Path) -> Optional[Path]:
    if str(path) == STDIN_MARKER:
        return None
    resolved = path.expanduser().resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Input text not found: {resolved}")
    return resolved


def _read_source(source: Optional[Path], stdin: Optional[TextIO]) -> str:
    if source is None:
        return (stdin or sys.stdin).read()
    return source.read_text(encoding="utf-8", errors="replace")


def _render(record: ReadingRecord, as_json: bool) -> str:
    if as_json:
        payload = {"source": record.source, **record.result.to_dict()}
        return json.dumps(payload, sort_keys=False)
    return format_record_line(record)


def _report_target(report: Path) -> Path:
    target = report.expanduser()
    if target.is_dir():
        return target / sanitize_filename(default_report_name())
    if not target.name:
        return exports_dir() / sanitize_filename(default_report_name())
    return target.parent / sanitize_filename(target.name)


def _configure_logging(log_file: Path, *, trace: bool = False) -> logging.Logger:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    base_logger = get_logger()
    level = logging.DEBUG if trace else getattr(logging, log_level_name())
    base_logger.setLevel(level)

    if not any(type(handler) is logging.StreamHandler for handler in base_logger.handlers):
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level if trace else logging.WARNING)
        base_logger.addHandler(stream_handler)

    existing_paths = {
        getattr(handler, "baseFilename", None)
        for handler in base_logger.handlers
        if hasattr(handler, "baseFilename")
    }
    if str(log_file) not in existing_paths:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            "%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(formatter)
        base_logger.addHandler(file_handler)

    return base_logger


def _default_log_name() -> str:
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"headless_{timestamp}.log"


__all__ = ["HeadlessOptions", "HeadlessResult", "STDIN_MARKER", "execute_headless"]
