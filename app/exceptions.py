# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error handling for the API.
# Every error path ends in one of the handlers at the bottom of this module,
# so all clients see the same payload shape:
#   {"detail": ..., "code": ..., "suggestion"?: ..., "details"?: ...}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class JobsApiException(Exception):
    """
    Base exception for the Jobs API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "JOBS_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

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

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=self.to_dict(),
            headers=self.headers,
        )


# =============================================================================
# Generic Exceptions
# =============================================================================

class BadRequestError(JobsApiException):
    """Raised when the request is well-formed but its content is unusable."""

    def __init__(self, message: str, code: str = "BAD_REQUEST", **kwargs):
        super().__init__(message=message, code=code, status_code=400, **kwargs)


class UnauthenticatedError(JobsApiException):
    """Raised when credentials are missing, malformed or rejected."""

    def __init__(self, message: str = "Authentication invalid", **kwargs):
        super().__init__(
            message=message,
            code="UNAUTHENTICATED",
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
            **kwargs,
        )


class NotFoundError(JobsApiException):
    """Raised when a requested resource doesn't exist."""

    def __init__(self, message: str, code: str = "NOT_FOUND", **kwargs):
        super().__init__(message=message, code=code, status_code=404, **kwargs)


class DuplicateValueError(JobsApiException):
    """Raised when a unique field (e.g. email) already exists."""

    def __init__(self, field: str):
        super().__init__(
            message=f"Duplicate value entered for {field} field, please choose another value",
            code="DUPLICATE_VALUE",
            status_code=400,
            details={"field": field},
        )


# =============================================================================
# Job Exceptions
# =============================================================================

class JobNotFoundError(NotFoundError):
    """Raised when a job ID doesn't exist or belongs to another user."""

    def __init__(self, job_id: str):
        super().__init__(
            message=f"No job with id {job_id}",
            code="JOB_NOT_FOUND",
            suggestion="Check that the job id is correct and belongs to your account",
            details={"job_id": job_id},
        )


class InvalidIdError(NotFoundError):
    """Raised when a path id is not a valid ObjectId."""

    def __init__(self, value: str):
        super().__init__(
            message=f"No item found with id : {value}",
            code="INVALID_ID",
            details={"id": value},
        )


# =============================================================================
# Pipeline Exceptions
# =============================================================================

class RouteNotFoundError(NotFoundError):
    """Raised for any path no router handled."""

    def __init__(self, path: str):
        super().__init__(
            message="Route does not exist",
            code="ROUTE_NOT_FOUND",
            details={"path": path},
        )


class RateLimitExceededError(JobsApiException):
    """Raised when a client exhausts its request budget for the window."""

    def __init__(self, retry_after: int):
        super().__init__(
            message="Too many requests, please try again later.",
            code="RATE_LIMITED",
            status_code=429,
            suggestion=f"Retry after {retry_after} seconds",
            headers={"Retry-After": str(retry_after)},
        )


class MalformedBodyError(BadRequestError):
    """Raised when a JSON body cannot be parsed."""

    def __init__(self, error: str):
        super().__init__(
            message="Malformed JSON in request body",
            code="MALFORMED_JSON",
            suggestion="Send a valid JSON document with Content-Type: application/json",
            details={"error": error},
        )


class PayloadTooLargeError(JobsApiException):
    """Raised when a request body exceeds the configured limit."""

    def __init__(self, size: int, limit: int):
        super().__init__(
            message=f"Request body too large: {size} bytes (max: {limit} bytes)",
            code="PAYLOAD_TOO_LARGE",
            status_code=413,
            details={"size": size, "limit": limit},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def jobs_api_exception_handler(
    request: Request,
    exc: JobsApiException
) -> JSONResponse:
    """Convert JobsApiException to JSON response."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return exc.to_response()


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors.

    Converts validation errors to one readable message plus per-field errors.
    """
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })

    if errors:
        message = ", ".join(f"{e['field']}: {e['message']}" for e in errors)
    else:
        message = "Validation error"

    return JSONResponse(
        status_code=400,
        content={
            "detail": message,
            "code": "VALIDATION_ERROR",
            "errors": errors,
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Handle routing-level HTTP errors raised by Starlette.

    Unmatched paths become the not-found payload; anything else keeps its
    status code but is reshaped into the uniform payload.
    """
    if exc.status_code == 404:
        return RouteNotFoundError(request.url.path).to_response()

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "detail": exc.detail,
            "code": f"HTTP_{exc.status_code}",
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Something went wrong, try again later",
            "code": "INTERNAL_ERROR",
        }
    )
