"""Report data structures for batch TXT output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from bpscan.engine.model import ExtractionResult


@dataclass(slots=True)
class ReadingRecord:
    """One OCR input and the reading extracted from it."""

    source: str
    result: ExtractionResult
    sources: Dict[str, object] = field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.result.needs_manual_entry

    @property
    def missing(self) -> List[str]:
        return self.result.missing_fields()


__all__ = ["ReadingRecord"]
