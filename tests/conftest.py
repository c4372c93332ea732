"""
Test configuration for the salon backend.
"""
import os

# Settings are read at import time
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from salon.auth.models import UserRole
from salon.auth.service import get_credential_store
from salon.core.cache import ResponseCache
from salon.core.security import TokenService
from salon.database import Base, get_db
from salon.main import create_app

ADMIN_PASSWORD = "correct-horse"

# Create test database engine
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

# Create test session factory
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    """
    Create a fresh database for each test.
    """
    # Create tables
    Base.metadata.create_all(bind=engine)

    # Create session
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    # Drop tables after test
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def cache():
    return ResponseCache(ttl=300)


@pytest.fixture
def tokens():
    return TokenService("test-secret")


@pytest.fixture
def app(db, cache, tokens):
    """
    Fresh application wired to the test database, cache and token service.
    """
    app = create_app(engine=engine, session_factory=TestingSessionLocal, cache=cache, tokens=tokens)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    # Override the get_db dependency
    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client with a test database session.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def admin_user(db):
    return get_credential_store(db).create_user("admin", ADMIN_PASSWORD, UserRole.ADMIN)


@pytest.fixture
def auth_headers(admin_user, headers_for):
    return headers_for(admin_user)


@pytest.fixture
def headers_for(tokens):
    """Build an Authorization header for any user."""
    def build(user):
        return {"Authorization": f"Bearer {tokens.issue(user.id, user.username, user.role.value)}"}
    return build
