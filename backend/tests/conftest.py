import os

# Must be set before boostkit.config is imported anywhere
os.environ["TESTING"] = "1"

import dotenv  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import boostkit.database as _db_mod  # noqa: E402
from boostkit.bootstrap import Bootstrap  # noqa: E402
from boostkit.database import Base  # noqa: E402
from boostkit.database import initialize_database  # noqa: E402
from boostkit.database import make_engine  # noqa: E402
from boostkit.database import make_sessionmaker  # noqa: E402

dotenv.load_dotenv()


# Create a test database - using in-memory SQLite for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# Create test engine and session factory
test_engine = make_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,  # Use StaticPool for in-memory database
)

TestingSessionLocal = make_sessionmaker(test_engine)

# Code that falls back to the module default factory must hit the test DB too
_db_mod.default_session_factory = TestingSessionLocal


def make_broken_session_factory():
    """Session factory over an empty database: every query raises."""
    engine = make_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
    return make_sessionmaker(engine)


@pytest.fixture
def db_session():
    """
    Creates a fresh database for each test, then tears it down after the test is done.
    """
    initialize_database(test_engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Drop all tables after the test
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def session_factory(db_session):
    return TestingSessionLocal


@pytest.fixture
def broken_session_factory():
    return make_broken_session_factory()


@pytest.fixture
def container(session_factory):
    """A booted container wired to the test database."""
    return Bootstrap(session_factory=session_factory).init()


@pytest.fixture
def client(session_factory):
    """
    Create a FastAPI TestClient whose per-request containers use the test database.
    """
    from boostkit.main import create_app

    app = create_app(session_factory=session_factory)
    with TestClient(app) as client:
        yield client
