from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from app.services.policy import PenaltyConfig

# Exemption bands, expressed on a 0-10 scale
NOT_SUBMITTED_MAX = 0.5
MINIMUM_SCORE_LOW = 9.5
MINIMUM_SCORE_HIGH = 10.5


class PenaltyStatus(str, Enum):
    ON_TIME = "On time"
    NOT_SUBMITTED = "Not submitted"
    MINIMUM_SCORE = "Minimum score"
    LATE = "Late"
    MAXIMUM_DELAY = "Maximum delay"


@dataclass(frozen=True)
class PenaltyResult:
    original_score: float
    final_score: int
    discount_percent: float
    discount_amount: float
    minutes_late: int
    status: PenaltyStatus


def round_half_up(value: float, places: int = 0) -> Decimal:
    """Round half away from zero on the value's shortest decimal form."""
    exp = Decimal(1).scaleb(-places)
    return Decimal(repr(value)).quantize(exp, rounding=ROUND_HALF_UP)


def grace_boundary(submitted_at: datetime, config: PenaltyConfig) -> datetime:
    """The submission's own date at ``grace_period_end``, zero seconds."""
    return submitted_at.replace(
        hour=config.grace_period_end.hour,
        minute=config.grace_period_end.minute,
        second=0,
        microsecond=0,
    )


def _no_penalty(original_score: float, status: PenaltyStatus) -> PenaltyResult:
    return PenaltyResult(
        original_score=original_score,
        final_score=int(round_half_up(original_score)),
        discount_percent=0.0,
        discount_amount=0.0,
        minutes_late=0,
        status=status,
    )


def calculate_penalty(
    original_score: float,
    submitted_at: datetime,
    config: PenaltyConfig,
) -> PenaltyResult:
    """
    Score one submission against the late policy.

    Policy (first match wins):
    - at or before the grace boundary -> "On time", no penalty
    - score <= 0.5 -> "Not submitted", no penalty
    - 9.5 <= score <= 10.5 -> "Minimum score", no penalty
    - otherwise the penalty grows linearly over the window, up to
      max_penalty_percent at window_minutes late.

    Status "Maximum delay" compares the uncapped lateness, so it first shows
    up at window_minutes + 1.
    """
    boundary = grace_boundary(submitted_at, config)

    if submitted_at <= boundary:
        return _no_penalty(original_score, PenaltyStatus.ON_TIME)

    if original_score <= NOT_SUBMITTED_MAX:
        return _no_penalty(original_score, PenaltyStatus.NOT_SUBMITTED)

    if MINIMUM_SCORE_LOW <= original_score <= MINIMUM_SCORE_HIGH:
        return _no_penalty(original_score, PenaltyStatus.MINIMUM_SCORE)

    window = config.window_minutes
    minutes_late = (submitted_at - boundary) // timedelta(minutes=1)
    capped_minutes = min(minutes_late, window)

    fraction = capped_minutes * (config.max_penalty_percent / 100 / window)
    discount = original_score * fraction

    return PenaltyResult(
        original_score=original_score,
        # rounded from the unrounded discount
        final_score=int(round_half_up(original_score - discount)),
        discount_percent=float(round_half_up(fraction * 100, 2)),
        discount_amount=float(round_half_up(discount, 2)),
        minutes_late=capped_minutes,
        status=PenaltyStatus.MAXIMUM_DELAY if minutes_late > window else PenaltyStatus.LATE,
    )
