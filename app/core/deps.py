from fastapi import Depends, Request

from app.services.config_store import ConfigStore
from app.services.policy import PenaltyConfig


# the store is built once at startup and lives on app.state
def get_config_store(request: Request) -> ConfigStore:
    return request.app.state.config_store


def get_penalty_config(store: ConfigStore = Depends(get_config_store)) -> PenaltyConfig:
    """Snapshot taken at request start; the whole batch is scored against it."""
    return store.get()
