# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error carries a machine-readable code and, where useful, a suggestion
# telling the caller how to recover.
#
# Booking workflow taxonomy:
# - ValidationError: field-level, raised before any network call
# - UploadError: payment screenshot could not be stored
# - PersistenceError: record insert/query failed
# - NotificationError: relay dispatch failed (logged, never surfaced)
# - MalformedRequestError: relay body could not be parsed
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class CosmOracleException(Exception):
    """
    Base exception for the CosmOracle API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "COSMORACLE_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Booking Workflow Exceptions
# =============================================================================

class ValidationError(CosmOracleException):
    """
    Raised when submitted fields break a form constraint.

    `errors` maps each offending field (using the form's camelCase names)
    to the message shown next to it.
    """

    def __init__(self, errors: dict[str, str]):
        super().__init__(
            message="Please correct the highlighted fields",
            code="VALIDATION_ERROR",
            status_code=422,
            suggestion="Fix the listed fields and submit again",
        )
        self.errors = dict(errors)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["errors"] = self.errors
        return result


class UploadError(CosmOracleException):
    """Raised when the payment screenshot cannot be stored."""

    def __init__(self, error: str, filename: str | None = None):
        super().__init__(
            message="Failed to upload payment screenshot",
            code="UPLOAD_FAILED",
            status_code=500,
            suggestion="Try uploading the screenshot again",
            details={"filename": filename} if filename else None,
        )
        self.error = error


class PersistenceError(CosmOracleException):
    """
    Raised when a database read or write fails.

    The underlying error is kept on `self.error` for logging only; the
    response body always carries the generic failure message.
    """

    def __init__(self, operation: str, error: str):
        super().__init__(
            message=GENERIC_FAILURE_MESSAGE,
            code="PERSISTENCE_FAILED",
            status_code=500,
            details={"operation": operation},
        )
        self.operation = operation
        self.error = error


class NotificationError(CosmOracleException):
    """Raised when the notification relay cannot be reached."""

    def __init__(self, error: str):
        super().__init__(
            message=f"Failed to dispatch booking notification: {error}",
            code="NOTIFICATION_FAILED",
            status_code=502,
        )


class MalformedRequestError(CosmOracleException):
    """Raised when the relay body is not a usable JSON object."""

    def __init__(self, error: str):
        super().__init__(
            message=error,
            code="MALFORMED_REQUEST",
            status_code=500,
        )

    def to_dict(self) -> dict[str, Any]:
        # Relay callers expect the bare {"error": ...} shape
        return {"error": self.message}


# =============================================================================
# Admin / Catalog Exceptions
# =============================================================================

class NoBookingsToExportError(CosmOracleException):
    """Raised when a CSV export is requested but there are no bookings."""

    def __init__(self):
        super().__init__(
            message="No bookings to export",
            code="NO_BOOKINGS",
            status_code=404,
            suggestion="Wait for the first booking before exporting",
        )


class PlanNotFoundError(CosmOracleException):
    """Raised when a plan ID is not in the catalog."""

    def __init__(self, plan_id: str, available: list[str]):
        super().__init__(
            message=f"Plan not found: {plan_id}",
            code="PLAN_NOT_FOUND",
            status_code=404,
            suggestion=f"Use one of: {', '.join(available)}",
            details={"plan_id": plan_id},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def cosmoracle_exception_handler(
    request: Request,
    exc: CosmOracleException
) -> JSONResponse:
    """
    Convert CosmOracleException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    Renders them in the same VALIDATION_ERROR shape the booking form uses,
    keyed by the last element of each error location.
    """
    errors = {}
    for error in exc.errors():
        loc = error.get("loc") or ("body",)
        errors.setdefault(str(loc[-1]), error.get("msg", "Invalid value"))

    return JSONResponse(
        status_code=422,
        content={
            "detail": "Validation error",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )
