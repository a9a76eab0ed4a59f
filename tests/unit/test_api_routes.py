"""
Unit tests for API v1 routes.

Tests endpoint responses with mocked dependencies.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from simple_auth.api.dependencies import get_registration_service
from simple_auth.api.v1.routes import router
from simple_auth.domain.exceptions import AlreadyExistsError, InternalError, ValidationError
from simple_auth.domain.ports import RegistrationResult
from simple_auth.domain.registration import RegistrationService


@pytest.fixture
def mock_service() -> MagicMock:
    service = MagicMock(spec=RegistrationService)
    service.register.return_value = RegistrationResult(
        message="User registered successfully", record_key="1"
    )
    return service


@pytest.fixture
def client(mock_service: MagicMock) -> TestClient:
    """Create test client with the registration service overridden."""
    test_app = FastAPI()
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_registration_service] = lambda: mock_service
    return TestClient(test_app)


class TestRegisterEndpoint:
    """Tests for POST /v1/register endpoint."""

    def test_register_success_returns_201(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        response = client.post("/v1/register", json={"username": "alice", "password": "s3cret"})

        assert response.status_code == 201
        assert response.json() == {"message": "User registered successfully"}
        mock_service.register.assert_called_once_with("alice", "s3cret")

    def test_record_key_is_not_exposed(self, client: TestClient) -> None:
        response = client.post("/v1/register", json={"username": "alice", "password": "s3cret"})
        assert "record_key" not in response.json()

    def test_validation_error_returns_422(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = ValidationError("username is required")

        response = client.post("/v1/register", json={"username": "", "password": "s3cret"})

        assert response.status_code == 422
        assert response.json() == {"detail": "Invalid registration request"}

    def test_duplicate_returns_409(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.register.side_effect = AlreadyExistsError("alice")

        response = client.post("/v1/register", json={"username": "alice", "password": "s3cret"})

        assert response.status_code == 409
        assert response.json() == {"detail": "User already exists"}

    def test_internal_error_returns_500(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = InternalError(kind="hashing", stage="EXISTENCE_CHECKED")

        response = client.post("/v1/register", json={"username": "alice", "password": "s3cret"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Internal server error"}

    def test_retryable_internal_error_returns_503(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = InternalError(
            kind="store_unavailable", stage="VALIDATED", retryable=True
        )

        response = client.post("/v1/register", json={"username": "alice", "password": "s3cret"})

        assert response.status_code == 503
        assert response.json() == {"detail": "Internal server error"}

    def test_internal_error_detail_is_opaque(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = InternalError(
            kind="store_constraint", stage="HASHED"
        )

        response = client.post("/v1/register", json={"username": "alice", "password": "s3cret"})

        assert "store_constraint" not in response.text
        assert "HASHED" not in response.text

    @pytest.mark.parametrize(
        "body",
        [{"password": "s3cret"}, {"username": "alice"}, {"username": 1, "password": "s3cret"}],
    )
    def test_malformed_body_returns_422(
        self, client: TestClient, mock_service: MagicMock, body: dict
    ) -> None:
        response = client.post("/v1/register", json=body)

        assert response.status_code == 422
        mock_service.register.assert_not_called()
