from sqlalchemy import Column, DateTime, Float, Integer, String, func

from app.db.base_class import Base


class PenaltyConfigSnapshot(Base):
    """Persisted late policy. Only one row (id=1) is ever written."""

    __tablename__ = "penalty_config"

    id = Column(Integer, primary_key=True)

    start_time = Column(String(5), nullable=False)  # "HH:MM"
    cutoff_time = Column(String(5), nullable=False)  # "HH:MM"
    max_percent = Column(Float, nullable=False)

    # window length is derived from the two times on load, never stored
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
