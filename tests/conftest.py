"""Pytest fixtures and configuration for usersapi tests."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from usersapi.auth.jwt import TokenService
from usersapi.config import Settings
from usersapi.database.database import Base, init_db
from usersapi.database.user_repository import UserRepository


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"
TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def settings():
    """Settings pointing at the in-memory test database."""
    return Settings(database_url=TEST_DATABASE_URL, jwt_secret_key=TEST_SECRET)


@pytest.fixture(scope="function")
def engine():
    """In-memory SQLite engine shared by every connection in a test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    init_db(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine):
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def user_repository(db_session: Session):
    """Create a UserRepository instance for testing."""
    return UserRepository(db_session)


@pytest.fixture
def token_service():
    return TokenService(TEST_SECRET)


@pytest.fixture
def sample_user_data():
    """Base create-user payload that tests can override."""
    return {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "gender": "female",
        "age": 36,
    }


@pytest.fixture
def app(settings, engine):
    from usersapi.api.app import create_app
    return create_app(settings, engine=engine)


@pytest.fixture
def test_client(app):
    """FastAPI test client over the in-memory database (runs the lifespan)."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(token_service):
    """Authorization header carrying a valid token for the accepted login."""
    return {"Authorization": f"Bearer {token_service.issue('claytonfaria')}"}
