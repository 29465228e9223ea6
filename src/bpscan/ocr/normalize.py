"""Canonicalise raw OCR text before the field cascades run."""

from __future__ import annotations

import re
from typing import Final, Mapping

from .misreads import TOKEN_REWRITES

_NOISE_RES: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"(?<![\w.])1\+(?!\w)"),
    re.compile(r"(?<=\d)\s*[+%]+"),
    re.compile(r"[+%]+(?=\d)"),
)
_DISALLOWED_RE: Final[re.Pattern[str]] = re.compile(r"[^\w\s/\-:.]", re.ASCII)
_SPACE_RE: Final[re.Pattern[str]] = re.compile(r"\s+", re.ASCII)
_LABEL_DIGITS_RE: Final[re.Pattern[str]] = re.compile(
    r"\b(sys|dia|s|d)(\d{2,3})\b", re.IGNORECASE | re.ASCII
)
_LEADING_ZERO_RE: Final[re.Pattern[str]] = re.compile(
    r"(?<![\d:.])\b0(\d)\b(?![:.]\d)", re.ASCII
)


def _rewrite_pattern(table: Mapping[str, str]) -> re.Pattern[str]:
    keys = sorted(table, key=len, reverse=True)
    alternation = "|".join(re.escape(key) for key in keys)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE | re.ASCII)


_REWRITE_RE: Final[re.Pattern[str]] = _rewrite_pattern(TOKEN_REWRITES)


def strip_noise(text: str) -> str:
    """Remove ``+``/``%`` OCR artefacts glued to digit tokens."""

    for pattern in _NOISE_RES:
        text = pattern.sub(" ", text)
    return text


def collapse(text: str) -> str:
    """Replace disallowed characters and collapse whitespace runs."""

    text = _DISALLOWED_RE.sub(" ", text)
    return _SPACE_RE.sub(" ", text).strip()


def rewrite_misreads(text: str) -> str:
    """Replace whole-token misreads with their canonical form."""

    return _REWRITE_RE.sub(lambda match: TOKEN_REWRITES[match.group(0).lower()], text)


def normalize(raw: str) -> str:
    """Return the canonical, lowercase form of ``raw`` OCR text.

    The steps run in a fixed order so that ``normalize`` is idempotent:
    noise removal, character filtering and whitespace collapse, splitting of
    ``sys120``-style label/number concatenations, dropping the leading zero
    of standalone two-digit tokens (clock values are left alone), misread
    rewrites, and finally lowercasing.
    """

    if not raw:
        return ""
    text = strip_noise(raw)
    text = collapse(text)
    text = _LABEL_DIGITS_RE.sub(r"\1 \2", text)
    text = _LEADING_ZERO_RE.sub(r"\1", text)
    text = rewrite_misreads(text)
    return text.lower()


__all__ = ["collapse", "normalize", "rewrite_misreads", "strip_noise"]
