"""Command-line parsing for the bpscan extractor."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from bpscan.headless import STDIN_MARKER, HeadlessOptions, HeadlessResult, execute_headless


def parse_arguments(argv: Optional[List[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Parse known CLI arguments and return ``(args, extras)``."""

    parser = argparse.ArgumentParser(
        prog="bpscan",
        description="Extract blood-pressure readings from monitor OCR text.",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help=f"OCR text files to read; '{STDIN_MARKER}' reads standard input.",
    )
    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print one JSON object per input instead of a summary line.",
    )
    parser.add_argument(
        "--report",
        dest="report",
        help="Write a TXT batch report to this file or directory.",
    )
    parser.add_argument(
        "--log-dir",
        dest="log_dir",
        default="debug",
        help="Directory for per-run logs (default: debug).",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        help="Optional explicit log file path.",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Log every normalization and cascade step at DEBUG.",
    )

    args, extras = parser.parse_known_args(argv)
    return args, extras


def create_headless_options(args: argparse.Namespace) -> HeadlessOptions:
    """Return ``HeadlessOptions`` derived from parsed ``args``."""

    inputs = list(args.inputs or [])
    if not inputs:
        raise ValueError(f"at least one input file (or '{STDIN_MARKER}') is required")
    if inputs.count(STDIN_MARKER) > 1:
        raise ValueError(f"'{STDIN_MARKER}' may only be given once")

    return HeadlessOptions(
        inputs=[Path(item) for item in inputs],
        report=Path(args.report).expanduser() if args.report else None,
        json_output=bool(args.json_output),
        log_dir=Path(args.log_dir).expanduser(),
        log_file=Path(args.log_file).expanduser() if args.log_file else None,
        trace=bool(args.trace),
    )


def run_headless_from_args(args: argparse.Namespace) -> HeadlessResult:
    """Execute the headless run using ``args`` and return the result."""

    options = create_headless_options(args)
    return execute_headless(options)


def main(argv: Optional[List[str]] = None) -> int:
    args, extras = parse_arguments(argv)
    if extras:
        print(f"Ignoring unknown arguments: {' '.join(extras)}", file=sys.stderr)
    try:
        result = run_headless_from_args(args)
    except (ValueError, FileNotFoundError) as exc:
        raise SystemExit(f"bpscan: {exc}") from exc

    for line in result.lines:
        print(line, flush=True)
    if result.report_path is not None:
        print(f"Report: {result.report_path}", file=sys.stderr)
    return result.exit_code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())


__all__ = ["create_headless_options", "main", "parse_arguments", "run_headless_from_args"]
