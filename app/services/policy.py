"""Late policy configuration.

A ``PenaltyConfig`` is an immutable snapshot: the store swaps whole objects on
update, so a batch that grabbed a snapshot keeps scoring with it even if the
policy changes mid-upload.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import time
from typing import Union

from app.core.config import DEFAULT_CUTOFF_TIME, DEFAULT_MAX_PERCENT, DEFAULT_START_TIME

# "H:MM" or "HH:MM", 00:00 .. 23:59
_TIME_RE = re.compile(r"([0-1]?[0-9]|2[0-3]):([0-5][0-9])")


@dataclass(frozen=True)
class PenaltyConfig:
    grace_period_end: time
    penalty_cutoff: time
    max_penalty_percent: float

    @property
    def window_minutes(self) -> int:
        return minutes_of_day(self.penalty_cutoff) - minutes_of_day(self.grace_period_end)

    @property
    def start_time(self) -> str:
        return format_time(self.grace_period_end)

    @property
    def cutoff_time(self) -> str:
        return format_time(self.penalty_cutoff)


@dataclass(frozen=True)
class ConfigValidationError:
    reason: str


ConfigOutcome = Union[PenaltyConfig, ConfigValidationError]


def minutes_of_day(t: time) -> int:
    return t.hour * 60 + t.minute


def format_time(t: time) -> str:
    return t.strftime("%H:%M")


def parse_time(text: str) -> time | None:
    """Parse ``H:MM``/``HH:MM`` into a ``time``; None when malformed."""
    if not isinstance(text, str):
        return None
    m = _TIME_RE.fullmatch(text)
    if not m:
        return None
    return time(int(m.group(1)), int(m.group(2)))


def _parse_percent(value) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        percent = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(percent):
        return None
    return percent


def build_config(start_time, cutoff_time, max_percent) -> ConfigOutcome:
    """Validate raw policy values.

    Returns a new ``PenaltyConfig`` or a ``ConfigValidationError`` carrying the
    first problem found. Checks run in this order:
    - all three values present
    - both times are valid ``HH:MM``
    - max_percent strictly between 0 and 100
    - cutoff strictly after start (same day)
    """
    if not start_time or not cutoff_time or max_percent is None:
        return ConfigValidationError("start_time, cutoff_time and max_percent are required")

    start = parse_time(start_time)
    cutoff = parse_time(cutoff_time)
    if start is None or cutoff is None:
        return ConfigValidationError("Invalid time format. Use HH:MM")

    percent = _parse_percent(max_percent)
    if percent is None or percent <= 0 or percent >= 100:
        return ConfigValidationError("max_percent must be a number between 0 and 100")

    if minutes_of_day(cutoff) <= minutes_of_day(start):
        return ConfigValidationError("cutoff_time must be later than start_time")

    return PenaltyConfig(
        grace_period_end=start,
        penalty_cutoff=cutoff,
        max_penalty_percent=percent,
    )


def default_config() -> PenaltyConfig:
    cfg = build_config(DEFAULT_START_TIME, DEFAULT_CUTOFF_TIME, DEFAULT_MAX_PERCENT)
    if not isinstance(cfg, PenaltyConfig):
        raise RuntimeError(f"Invalid default late policy: {cfg.reason}")
    return cfg
