from pydantic import BaseModel

from app.services.batch import BatchResult
from app.services.penalty import PenaltyStatus


class ScoredRecordRead(BaseModel):
    name: str
    original_score: float
    final_score: int
    discount_percent: float
    discount_amount: float
    minutes_late: int
    status: PenaltyStatus
    timestamp: str

    class Config:
        from_attributes = True


class BatchInfo(BaseModel):
    total_rows: int
    valid_rows: int
    invalid_rows: int
    missing_columns: list[str] = []


class BatchResultRead(BaseModel):
    results: list[ScoredRecordRead]
    info: BatchInfo

    @classmethod
    def from_result(cls, result: BatchResult) -> "BatchResultRead":
        return cls(
            results=[ScoredRecordRead.model_validate(r) for r in result.records],
            info=BatchInfo(
                total_rows=result.total_rows,
                valid_rows=result.valid_rows,
                invalid_rows=result.invalid_rows,
                missing_columns=result.missing_columns,
            ),
        )
