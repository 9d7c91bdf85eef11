from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from app.core.config import NAME_COLUMN, REQUIRED_COLUMNS, SCORE_COLUMN, TIMESTAMP_COLUMN
from app.services.penalty import PenaltyStatus, calculate_penalty
from app.services.policy import PenaltyConfig
from app.services.row_validator import Rejected, RawRow, validate_row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredRecord:
    name: str
    original_score: float
    final_score: int
    discount_percent: float
    discount_amount: float
    minutes_late: int
    status: PenaltyStatus
    timestamp: str


@dataclass
class BatchResult:
    records: list[ScoredRecord] = field(default_factory=list)
    total_rows: int = 0
    invalid_rows: int = 0
    missing_columns: list[str] = field(default_factory=list)

    @property
    def valid_rows(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class ColumnMapping:
    """Cell index for each required field, resolved once per batch."""

    name: Optional[int]
    score: Optional[int]
    timestamp: Optional[int]
    missing: tuple[str, ...] = ()

    @classmethod
    def from_header(cls, header: Sequence[str]) -> "ColumnMapping":
        normalized = [str(h).strip().lower() for h in header]

        indexes: dict[str, Optional[int]] = {}
        for col in REQUIRED_COLUMNS:
            indexes[col] = normalized.index(col) if col in normalized else None

        missing = tuple(col for col in REQUIRED_COLUMNS if indexes[col] is None)

        # a missing column is read by its usual position, if nobody else claimed it
        claimed = {i for i in indexes.values() if i is not None}
        for position, col in enumerate(REQUIRED_COLUMNS):
            if indexes[col] is None and position not in claimed:
                indexes[col] = position
                claimed.add(position)

        return cls(
            name=indexes[NAME_COLUMN],
            score=indexes[SCORE_COLUMN],
            timestamp=indexes[TIMESTAMP_COLUMN],
            missing=missing,
        )

    def extract(self, cells: Sequence[str]) -> RawRow:
        def cell(i: Optional[int]) -> Optional[str]:
            if i is None or i >= len(cells):
                return None
            return cells[i]

        return RawRow(name=cell(self.name), score=cell(self.score), timestamp=cell(self.timestamp))


def score_row(raw: RawRow, config: PenaltyConfig) -> ScoredRecord | Rejected:
    row = validate_row(raw)
    if isinstance(row, Rejected):
        return row

    penalty = calculate_penalty(row.score, row.submitted_at, config)
    return ScoredRecord(
        name=row.name,
        original_score=penalty.original_score,
        final_score=penalty.final_score,
        discount_percent=penalty.discount_percent,
        discount_amount=penalty.discount_amount,
        minutes_late=penalty.minutes_late,
        status=penalty.status,
        timestamp=row.timestamp,
    )


def process_batch(
    header: Sequence[str],
    rows: Iterable[Sequence[str]],
    config: PenaltyConfig,
) -> BatchResult:
    """
    Validate and score every row, in order.

    A header lacking any of nome/nota/datahora counts as one extra invalid
    row but does not stop the batch. Rejected rows are only counted.
    """
    result = BatchResult()
    mapping = ColumnMapping.from_header(header)

    if mapping.missing:
        result.missing_columns = list(mapping.missing)
        result.invalid_rows += 1
        logger.warning("Missing required column(s): %s", ", ".join(mapping.missing))

    for line_no, cells in enumerate(rows, start=1):
        result.total_rows += 1
        outcome = score_row(mapping.extract(cells), config)
        if isinstance(outcome, Rejected):
            result.invalid_rows += 1
            logger.debug("Row %d rejected: %s", line_no, outcome.reason)
            continue
        result.records.append(outcome)

    logger.info(
        "Batch processed: %d rows, %d valid, %d invalid",
        result.total_rows,
        result.valid_rows,
        result.invalid_rows,
    )
    return result
