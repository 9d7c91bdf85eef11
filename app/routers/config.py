from fastapi import APIRouter, Depends, HTTPException, status

from app.core.deps import get_config_store
from app.schemas.penalty_config import PenaltyConfigRead, PenaltyConfigUpdate, PenaltyConfigUpdateResult
from app.services.config_store import ConfigStore
from app.services.policy import ConfigValidationError

router = APIRouter()


@router.get("/config", response_model=PenaltyConfigRead)
def read_config(store: ConfigStore = Depends(get_config_store)):
    return PenaltyConfigRead.from_config(store.get())


@router.post(
    "/config",
    response_model=PenaltyConfigUpdateResult,
    responses={
        400: {"description": "Invalid time format, percent out of range or empty window"},
    },
)
def update_config(
    payload: PenaltyConfigUpdate,
    store: ConfigStore = Depends(get_config_store),
):
    outcome = store.update(payload.start_time, payload.cutoff_time, payload.max_percent)
    if isinstance(outcome, ConfigValidationError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=outcome.reason,
        )

    return PenaltyConfigUpdateResult(
        message="Configuration updated",
        config=PenaltyConfigRead.from_config(outcome),
    )
