"""Row validation for uploaded grade sheets.

Each row arrives as three raw text cells (name, score, timestamp). A row is
either normalized into typed fields or rejected with a short reason; nothing
is raised, so the batch can count rejects and keep going.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

# markup/quoting characters removed from every cell
_DANGEROUS_CHARS_RE = re.compile(r"[<>'\"`]")

_SCORE_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_TIMESTAMP_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}:[0-9]{2}")
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

MIN_SCORE = 0.0
MAX_SCORE = 100.0


@dataclass(frozen=True)
class RawRow:
    name: Optional[str]
    score: Optional[str]
    timestamp: Optional[str]


@dataclass(frozen=True)
class NormalizedRow:
    name: str
    score: float
    submitted_at: datetime
    timestamp: str  # sanitized text, echoed back in results


@dataclass(frozen=True)
class Rejected:
    reason: str


def sanitize(value) -> str:
    if not isinstance(value, str):
        return ""
    return _DANGEROUS_CHARS_RE.sub("", value).strip()


def parse_score(text: str) -> float | None:
    """Parse a plain decimal score in [0, 100]. Out of range is None, not clamped."""
    if not _SCORE_RE.fullmatch(text):
        return None
    score = float(text)
    if score < MIN_SCORE or score > MAX_SCORE:
        return None
    return score


def parse_timestamp(text: str) -> datetime | None:
    if not _TIMESTAMP_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        # right shape, impossible date (month 13, minute 61, Feb 30 ...)
        return None


def validate_row(raw: RawRow) -> Union[NormalizedRow, Rejected]:
    name = sanitize(raw.name)
    if not name:
        return Rejected("missing name")

    score = parse_score(sanitize(raw.score))
    if score is None:
        return Rejected("invalid score")

    timestamp = sanitize(raw.timestamp)
    submitted_at = parse_timestamp(timestamp)
    if submitted_at is None:
        return Rejected("invalid timestamp")

    return NormalizedRow(name=name, score=score, submitted_at=submitted_at, timestamp=timestamp)
