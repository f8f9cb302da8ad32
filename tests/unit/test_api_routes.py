"""
Unit tests for API v1 routes.

Tests endpoint responses with mocked dependencies.
"""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_account_service
from src.api.main import infrastructure_error_handler
from src.api.v1.routes import router
from src.domain.account import Account, Verified
from src.domain.exceptions import (
    AccountNotVerified,
    EmailTaken,
    InfrastructureError,
    InvalidCredentials,
    InvalidInput,
    InvalidOrUsedToken,
    StorageUnavailable,
)
from src.domain.lifecycle import AccountService


@pytest.fixture
def mock_service() -> MagicMock:
    return MagicMock(spec=AccountService)


@pytest.fixture
def app(mock_service: MagicMock) -> FastAPI:
    """Create test FastAPI application with the service overridden."""
    test_app = FastAPI()
    test_app.include_router(router, prefix="/v1")
    test_app.add_exception_handler(InfrastructureError, infrastructure_error_handler)
    test_app.dependency_overrides[get_account_service] = lambda: mock_service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


def verified_account() -> Account:
    return Account(
        id=uuid4(),
        email="user@example.com",
        secret_hash="$2b$04$hash",
        created_at=datetime.now(timezone.utc),
        status=Verified(verified_at=datetime.now(timezone.utc)),
    )


class TestRegisterEndpoint:
    """Tests for POST /v1/register endpoint."""

    def test_register_success_returns_201(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.register.return_value = "user@example.com"

        response = client.post("/v1/register", json={"email": "user@example.com", "password": "secret1"})

        assert response.status_code == 201
        assert response.json() == {
            "message": "Registration successful. Please verify your email.",
            "email": "user@example.com",
        }
        mock_service.register.assert_called_once_with("user@example.com", "secret1")

    def test_register_never_echoes_secret_or_token(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.register.return_value = "user@example.com"
        response = client.post("/v1/register", json={"email": "user@example.com", "password": "secret1"})
        assert "secret1" not in response.text
        assert "token" not in response.text

    def test_register_duplicate_returns_409(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.register.side_effect = EmailTaken("user@example.com")

        response = client.post("/v1/register", json={"email": "user@example.com", "password": "secret1"})

        assert response.status_code == 409
        assert response.json() == {"detail": "An account with this email already exists"}

    def test_register_invalid_input_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.register.side_effect = InvalidInput("Password must be at least 6 characters")

        response = client.post("/v1/register", json={"email": "user@example.com", "password": "abc"})

        assert response.status_code == 400
        assert response.json() == {"detail": "Password must be at least 6 characters"}

    def test_register_validates_email(self, client: TestClient) -> None:
        response = client.post("/v1/register", json={"email": "invalid-email", "password": "secret1"})
        assert response.status_code == 422

    def test_register_requires_password(self, client: TestClient) -> None:
        response = client.post("/v1/register", json={"email": "user@example.com"})
        assert response.status_code == 422


class TestVerifyEndpoint:
    """Tests for GET /v1/verify/{token} endpoint."""

    def test_verify_success_returns_200(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.verify.return_value = "user@example.com"

        response = client.get("/v1/verify/abc123")

        assert response.status_code == 200
        assert response.json()["email"] == "user@example.com"
        mock_service.verify.assert_called_once_with("abc123")

    def test_verify_invalid_token_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.verify.side_effect = InvalidOrUsedToken()

        response = client.get("/v1/verify/abc123")

        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid or used token"}


class TestLoginEndpoint:
    """Tests for POST /v1/login endpoint."""

    def test_login_success_returns_200(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.login.return_value = verified_account()

        response = client.post("/v1/login", json={"email": "user@example.com", "password": "secret1"})

        assert response.status_code == 200
        assert response.json() == {"message": "Login successful", "email": "user@example.com"}

    def test_login_response_has_no_hash(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.login.return_value = verified_account()
        response = client.post("/v1/login", json={"email": "user@example.com", "password": "secret1"})
        assert "$2b$" not in response.text

    def test_invalid_credentials_returns_401(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.login.side_effect = InvalidCredentials()

        response = client.post("/v1/login", json={"email": "user@example.com", "password": "wrong1"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid email or password"}

    def test_unverified_returns_403(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.login.side_effect = AccountNotVerified()

        response = client.post("/v1/login", json={"email": "user@example.com", "password": "secret1"})

        assert response.status_code == 403

    def test_missing_field_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.login.side_effect = InvalidInput("Password is required")

        response = client.post("/v1/login", json={"email": "user@example.com", "password": ""})

        assert response.status_code == 400

    def test_login_requires_body_fields(self, client: TestClient) -> None:
        response = client.post("/v1/login", json={"email": "user@example.com"})
        assert response.status_code == 422


class TestInfrastructureFaults:
    """Infrastructure errors surface as a generic 500 without internals."""

    def test_storage_fault_returns_generic_500(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.register.side_effect = StorageUnavailable("/var/data/users.json unwritable")

        response = client.post("/v1/register", json={"email": "user@example.com", "password": "secret1"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}
        assert "users.json" not in response.text
