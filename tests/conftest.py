"""
Task Tracker API - Test Configuration

Shared fixtures for CI-safe testing without MongoDB.
"""

import pytest
from fastapi.testclient import TestClient

from tasktracker.main import app
from tasktracker.auth.dependencies import (
    get_password_hasher,
    get_token_service,
    get_user_repository,
)
from tasktracker.auth.passwords import PasswordHasher
from tasktracker.auth.repository import InMemoryUserRepository
from tasktracker.auth.tokens import TokenService
from tasktracker.tasks.repository import InMemoryTaskRepository
from tasktracker.tasks.router import get_task_repository


TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"

# Minimum bcrypt work factor keeps the suite fast
_test_password_hasher = PasswordHasher(rounds=4)
_test_token_service = TokenService(secret_key=TEST_JWT_SECRET, expire_minutes=60)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    return _test_password_hasher


@pytest.fixture
def token_service() -> TokenService:
    return _test_token_service


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    """Provide a fresh in-memory user repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def task_repository() -> InMemoryTaskRepository:
    """Provide a fresh in-memory task repository for each test."""
    return InMemoryTaskRepository()


@pytest.fixture
def client(user_repository, task_repository, password_hasher, token_service):
    """Create test client with in-memory repositories."""
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_task_repository] = lambda: task_repository
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher
    app.dependency_overrides[get_token_service] = lambda: token_service

    yield TestClient(app)
    # Clean up overrides after test
    app.dependency_overrides.clear()


@pytest.fixture
def registered_user(client):
    """Register a test user and return credentials."""
    credentials = {"name": "Ann", "email": "ann@x.com", "password": "secret1"}
    response = client.post("/auth/register", json=credentials)
    assert response.status_code == 201
    return credentials


@pytest.fixture
def auth_token(client, registered_user):
    """Get an auth token for the registered user."""
    response = client.post(
        "/auth/login",
        json={"email": registered_user["email"], "password": registered_user["password"]},
    )
    return response.json()["token"]


@pytest.fixture
def auth_headers(auth_token):
    """Create Authorization headers for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def second_user_credentials():
    """Credentials for a second test user."""
    return {"name": "Bob", "email": "bob@x.com", "password": "secondpassword"}


@pytest.fixture
def second_user_token(client, second_user_credentials):
    """Register a second user and get their auth token."""
    client.post("/auth/register", json=second_user_credentials)
    response = client.post(
        "/auth/login",
        json={
            "email": second_user_credentials["email"],
            "password": second_user_credentials["password"],
        },
    )
    return response.json()["token"]


@pytest.fixture
def second_auth_headers(second_user_token):
    """Authorization headers for the second user."""
    return {"Authorization": f"Bearer {second_user_token}"}
