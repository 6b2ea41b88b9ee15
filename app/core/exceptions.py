"""
Application exceptions and global exception handlers for the Starter Dashboard.
Storage failures raised by repositories and HTTP-facing errors live here.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ── Storage errors ────────────────────────────────────────────────────────────

class StorageError(Exception):
    """
    Any failure reported by the underlying query executor.
    The original driver/ORM exception is kept on ``cause``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class ConstraintViolationError(StorageError):
    """A uniqueness, NOT NULL or foreign-key constraint rejected a write."""


# ── HTTP exception classes ────────────────────────────────────────────────────

class DashboardException(Exception):
    """Base exception for all HTTP-facing dashboard errors."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.error_code = error_code or "DASHBOARD_ERROR"
        super().__init__(detail)


class NotFoundException(DashboardException):
    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        detail = f"{resource} not found"
        if resource_id:
            detail = f"{resource} with id '{resource_id}' not found"
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code="NOT_FOUND",
        )


class UnauthorizedException(DashboardException):
    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
        )


class ConflictException(DashboardException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT",
        )


class InvalidSessionException(DashboardException):
    def __init__(self, detail: str = "Invalid or expired session") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="INVALID_SESSION",
        )


# ── Exception handlers ────────────────────────────────────────────────────────

def _error_response(status_code: int, detail: str, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error_code,
            "detail": detail,
        },
    )


async def dashboard_exception_handler(
    request: Request, exc: DashboardException
) -> JSONResponse:
    return _error_response(exc.status_code, exc.detail, exc.error_code)


async def constraint_violation_handler(
    request: Request, exc: ConstraintViolationError
) -> JSONResponse:
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.cause)
    return _error_response(
        status_code=status.HTTP_409_CONFLICT,
        detail="The record conflicts with existing data",
        error_code="CONSTRAINT_VIOLATION",
    )


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error(
        "Storage failure on %s %s: %s", request.method, request.url.path, exc.cause
    )
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="The request could not be completed",
        error_code="STORAGE_ERROR",
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append({"field": field, "message": error["msg"]})
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "VALIDATION_ERROR",
            "detail": "Request validation failed",
            "errors": errors,
        },
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected internal server error occurred",
        error_code="INTERNAL_SERVER_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI application."""
    app.add_exception_handler(DashboardException, dashboard_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ConstraintViolationError, constraint_violation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, storage_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
