from typing import Union

from pydantic import BaseModel

from app.services.policy import PenaltyConfig


class PenaltyConfigRead(BaseModel):
    start_time: str
    cutoff_time: str
    max_percent: float
    window_minutes: int

    @classmethod
    def from_config(cls, cfg: PenaltyConfig) -> "PenaltyConfigRead":
        return cls(
            start_time=cfg.start_time,
            cutoff_time=cfg.cutoff_time,
            max_percent=cfg.max_penalty_percent,
            window_minutes=cfg.window_minutes,
        )


class PenaltyConfigUpdate(BaseModel):
    start_time: str
    cutoff_time: str
    # numbers sent as strings ("40") are accepted like plain numbers
    max_percent: Union[float, str]


class PenaltyConfigUpdateResult(BaseModel):
    success: bool = True
    message: str
    config: PenaltyConfigRead
