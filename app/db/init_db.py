from sqlalchemy.engine import Engine

from app.db.base_class import Base
from app.db.session import engine as default_engine

# import models so SQLAlchemy registers them
from app.models import penalty_config  # noqa: F401


def init_db(engine: Engine | None = None) -> None:
    Base.metadata.create_all(bind=engine or default_engine)
