"""
Pytest configuration for NeuroRelief API and service tests
"""

import os

import pytest

# Set database and token settings BEFORE importing any neurorelief modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SESSION_SECRET"] = "test-session-secret-for-neurorelief"

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from neurorelief.database import Base
from neurorelief.dependencies import AuthContext, get_auth_context, get_storage
from neurorelief.main import app
from neurorelief.services.storage import DatabaseStorage

# Single shared in-memory connection so every session sees the same tables
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


@pytest.fixture(scope="function")
def storage():
    """Fresh schema for each test"""
    Base.metadata.create_all(bind=engine)
    try:
        yield DatabaseStorage(TestingSessionLocal)
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def user_a(storage):
    return storage.upsert_user("user_a_123", email="user_a@test.com", first_name="Alex")


@pytest.fixture
def user_b(storage):
    return storage.upsert_user("user_b_456", email="user_b@test.com", first_name="Blake")


@pytest.fixture(scope="function")
def client(storage):
    """Test client backed by the test storage"""
    app.dependency_overrides[get_storage] = lambda: storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Authenticate subsequent requests as the given user id"""
    def _login(user_id: str):
        app.dependency_overrides[get_auth_context] = lambda: AuthContext(user_id=user_id)
    return _login
