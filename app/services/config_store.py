from __future__ import annotations

import logging
import threading

from sqlalchemy.orm import Session, sessionmaker

from app.models.penalty_config import PenaltyConfigSnapshot
from app.services.policy import ConfigOutcome, PenaltyConfig, build_config, default_config

logger = logging.getLogger(__name__)

SNAPSHOT_ID = 1


class ConfigStore:
    """Owns the process-wide late policy.

    Readers call ``get()`` and keep the returned snapshot for the whole batch.
    ``update()`` validates, persists, then swaps the reference; a failed
    validation or a failed commit leaves the current snapshot in place.
    """

    def __init__(self, session_factory: sessionmaker | None = None, initial: PenaltyConfig | None = None):
        self._session_factory = session_factory
        self._lock = threading.Lock()
        self._current = initial or default_config()

    @classmethod
    def load(cls, session_factory: sessionmaker) -> "ConfigStore":
        """Build a store from the persisted snapshot, or defaults if there is none."""
        db: Session = session_factory()
        try:
            row = db.get(PenaltyConfigSnapshot, SNAPSHOT_ID)
        finally:
            db.close()

        if row is None:
            logger.info("No saved late policy, using defaults")
            return cls(session_factory)

        cfg = build_config(row.start_time, row.cutoff_time, row.max_percent)
        if not isinstance(cfg, PenaltyConfig):
            logger.warning("Saved late policy is invalid (%s), using defaults", cfg.reason)
            return cls(session_factory)

        logger.info(
            "Loaded late policy: %s-%s, max %.2f%%",
            cfg.start_time,
            cfg.cutoff_time,
            cfg.max_penalty_percent,
        )
        return cls(session_factory, initial=cfg)

    def get(self) -> PenaltyConfig:
        return self._current

    def update(self, start_time, cutoff_time, max_percent) -> ConfigOutcome:
        cfg = build_config(start_time, cutoff_time, max_percent)
        if not isinstance(cfg, PenaltyConfig):
            logger.info("Late policy update rejected: %s", cfg.reason)
            return cfg

        with self._lock:
            if self._session_factory is not None:
                self._persist(cfg)
            self._current = cfg

        logger.info(
            "Late policy updated: %s-%s, max %.2f%% (%d min window)",
            cfg.start_time,
            cfg.cutoff_time,
            cfg.max_penalty_percent,
            cfg.window_minutes,
        )
        return cfg

    def _persist(self, cfg: PenaltyConfig) -> None:
        db: Session = self._session_factory()
        try:
            row = db.get(PenaltyConfigSnapshot, SNAPSHOT_ID)
            if row is None:
                row = PenaltyConfigSnapshot(id=SNAPSHOT_ID)
                db.add(row)

            row.start_time = cfg.start_time
            row.cutoff_time = cfg.cutoff_time
            row.max_percent = cfg.max_penalty_percent

            try:
                db.commit()
            except Exception:
                db.rollback()
                raise
        finally:
            db.close()
