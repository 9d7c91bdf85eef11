import os

TEST_DB_FILE = "test_grader.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before anything imports app.db.session
os.environ["GRADER_DATABASE_URL"] = TEST_DB_URL

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from app.core.deps import get_config_store  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.db.init_db import init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.penalty_config import PenaltyConfigSnapshot  # noqa: E402
from app.services.config_store import ConfigStore  # noqa: E402
from app.services.policy import default_config  # noqa: E402

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False},
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    init_db(engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def clean_snapshot():
    """Every test starts without a saved policy."""
    db = TestingSessionLocal()
    try:
        db.query(PenaltyConfigSnapshot).delete()
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def config():
    return default_config()


@pytest.fixture()
def store():
    return ConfigStore.load(TestingSessionLocal)


@pytest.fixture()
def client(store):
    """Test client wired to a store backed by the test DB."""
    app.dependency_overrides[get_config_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
