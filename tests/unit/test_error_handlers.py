"""Unit tests for the global exception handlers."""

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.core.error_handlers import register_exception_handlers, status_for
from src.core.exceptions import (
    AppError,
    AuthenticationError,
    ConflictError,
    GameNightRejectedError,
    InternalError,
    NotFoundError,
    ValidationError,
)


class TestStatusFor:
    """Tests for mapping application errors to HTTP status codes."""

    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (AuthenticationError(), 401),
            (NotFoundError(), 404),
            (ConflictError(), 409),
            (ValidationError(), 422),
            (GameNightRejectedError.from_errors(["Game date is required"]), 422),
            (InternalError(), 500),
            (AppError(), 400),
        ],
    )
    def test_status(self, exc, expected):
        assert status_for(exc) == expected


class TestGameNightRejectedError:
    """Tests for the itemised validation error."""

    def test_carries_errors(self):
        exc = GameNightRejectedError.from_errors(["Game date is required"])

        assert exc.code == "validation_error"
        assert exc.message == "Game night is not valid"
        assert exc.errors == ["Game date is required"]
        assert str(exc) == "Game night is not valid"


class TestRegisteredHandlers:
    """Tests for the rendered error payloads."""

    @pytest.fixture
    def client(self) -> TestClient:
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/rejected")
        def rejected():
            raise GameNightRejectedError.from_errors(["At least one player is required"])

        @app.get("/integrity")
        def integrity():
            raise IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed"))

        @app.get("/database")
        def database():
            raise OperationalError("SELECT", {}, Exception("database is locked"))

        return TestClient(app, raise_server_exceptions=False)

    def test_rejected_night(self, client):
        response = client.get("/rejected")

        assert response.status_code == 422
        assert response.json() == {
            "error": {
                "code": "validation_error",
                "message": "Game night is not valid",
                "details": {"errors": ["At least one player is required"]},
            }
        }

    def test_integrity_error_is_conflict(self, client):
        response = client.get("/integrity")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "conflict"

    def test_database_error(self, client):
        response = client.get("/database")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "database_error"
