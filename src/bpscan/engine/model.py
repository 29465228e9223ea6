"""Data structures threaded through the extraction pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict, List, Literal, Optional, Union

from bpscan.ocr.cascade import Hit

Period = Literal["AM", "PM", ""]

VITAL_FIELDS = ("sys", "dia", "pulse")


@dataclass(frozen=True, slots=True)
class Candidates:
    """Per-field cascade results before validation.

    ``None`` means the field was not found. Stages never mutate an instance;
    they return a copy via :func:`dataclasses.replace`.
    """

    month: Optional[Hit] = None
    day: Optional[Hit] = None
    time: Optional[Hit] = None
    period: Optional[Hit] = None
    sys: Optional[Hit] = None
    dia: Optional[Hit] = None
    pulse: Optional[Hit] = None
    layout_applied: bool = False

    def number(self, name: str) -> int:
        """Return the integer value of ``name`` or ``0`` when unresolved."""

        hit = getattr(self, name)
        if hit is None:
            return 0
        try:
            return int(hit.value)
        except (TypeError, ValueError):
            return 0

    def claimed(self, *names: str) -> frozenset[int]:
        """Return the non-zero values already assigned to ``names``."""

        return frozenset(value for value in (self.number(name) for name in names) if value)

    def sources(self) -> Dict[str, Optional[str]]:
        result: Dict[str, Optional[str]] = {}
        for item in fields(self):
            if item.name == "layout_applied":
                continue
            hit = getattr(self, item.name)
            result[item.name] = hit.source if hit is not None else None
        return result


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """Final monitor reading. ``0``/``""`` marks a field as not determined."""

    day: int = 0
    month: int = 0
    time: str = ""
    period: Period = ""
    sys: int = 0
    dia: int = 0
    pulse: int = 0

    @property
    def needs_manual_entry(self) -> bool:
        return any(getattr(self, name) == 0 for name in VITAL_FIELDS)

    def missing_fields(self) -> List[str]:
        return [item.name for item in fields(self) if getattr(self, item.name) in (0, "")]

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return asdict(self)


__all__ = ["Candidates", "ExtractionResult", "Period", "VITAL_FIELDS"]
