"""Global exception handlers for FastAPI application."""

from typing import TYPE_CHECKING, cast

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.core.exceptions import (
    AppError,
    AuthenticationError,
    ConflictError,
    ErrorDetails,
    InternalError,
    NotFoundError,
    ValidationError,
)

if TYPE_CHECKING:
    type ErrorPayload = dict[str, dict[str, str | ErrorDetails]]

# Most specific first; anything else derived from AppError is a 400
_STATUS_BY_ERROR: tuple[tuple[type[AppError], int], ...] = (
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 422),
    (InternalError, 500),
)


def _error_payload(
    code: str,
    message: str,
    details: ErrorDetails | None = None,
) -> "ErrorPayload":
    """Build consistent error response payload."""
    return {"error": {"code": code, "message": message, "details": details or {}}}


def status_for(exc: AppError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 400


def register_exception_handlers(app: FastAPI) -> None:
    """Register all global exception handlers on the FastAPI app.

    Note: The nested handler functions are registered via decorators and used by FastAPI
    at runtime, but static analysis tools cannot detect this usage pattern.
    """

    @app.exception_handler(AppError)
    def app_error_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: AppError
    ) -> JSONResponse:
        status_code = status_for(exc)
        if status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message}")
        elif status_code == 404:
            logger.debug(f"{type(exc).__name__}: {exc.message}")
        else:
            logger.warning(f"{type(exc).__name__}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=_error_payload(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    def request_validation_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.debug(f"Request validation failed: {exc.errors()}")
        # Rejected inputs such as NaN cannot be rendered as JSON, so they are not echoed
        errors = [
            {key: value for key, value in error.items() if key != "input"}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=422,
            content=_error_payload(
                "request_validation_error",
                "Request validation failed",
                cast("ErrorDetails", {"errors": jsonable_encoder(errors)}),
            ),
        )

    @app.exception_handler(IntegrityError)
    def integrity_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: IntegrityError
    ) -> JSONResponse:
        # Lost races on unique names or one-result-per-night end up here
        logger.warning(f"Integrity error: {exc.orig}")
        return JSONResponse(
            status_code=409,
            content=_error_payload("conflict", "Conflicts with existing records"),
        )

    @app.exception_handler(SQLAlchemyError)
    def sqlalchemy_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        logger.exception(f"Database error: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_payload("database_error", "Database error"),
        )

    @app.exception_handler(Exception)
    def unhandled_handler(  # pyright: ignore[reportUnusedFunction]
        _: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception(f"Unhandled exception: {exc}")
        return JSONResponse(
            status_code=500,
            content=_error_payload("internal_error", "Internal server error"),
        )
