"""
Structured exceptions and error responses for Taskboard.

Provides consistent error handling across the API with:
- Custom exception classes
- Structured error response format
- FastAPI exception handlers
"""

from typing import Any, Dict, Optional, List

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskboard.logging_config import get_logger


# =============================================================================
# Error Response Schema
# =============================================================================

class ErrorDetail(BaseModel):
    """Detail of a single error."""
    loc: Optional[List[str]] = None  # Location of error (e.g., ["body", "title"])
    field: Optional[str] = None  # Offending field name, when there is one
    msg: str
    type: str


class ErrorResponse(BaseModel):
    """Structured error response format."""
    error: str  # Error code (e.g., "not_found", "validation_error")
    message: str  # Human-readable message
    details: Optional[List[ErrorDetail]] = None


# OpenAPI documentation for the error bodies every protected route can return
ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse, "description": "Validation error"},
    status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse, "description": "Missing or invalid credential"},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Not found or not owned"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse, "description": "Unexpected error"},
}


# =============================================================================
# Custom Exceptions
# =============================================================================

class TaskboardException(Exception):
    """Base exception for all Taskboard errors."""

    def __init__(
        self,
        message: str,
        error_code: str = "internal_error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[List[Dict[str, Any]]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details
        self.headers = headers
        super().__init__(message)


class NotFoundError(TaskboardException):
    """
    Resource not found.

    Also raised for resources owned by another user, so callers cannot
    discover which ids exist but belong to someone else.
    """

    def __init__(self, resource: str):
        super().__init__(
            message=f"{resource} not found",
            error_code="not_found",
            status_code=status.HTTP_404_NOT_FOUND,
        )
        self.resource = resource


class UnauthorizedError(TaskboardException):
    """Missing, malformed or rejected credential."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(
            message=message,
            error_code="unauthorized",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )


class ValidationError(TaskboardException):
    """Request validation error."""

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(
            message=message,
            error_code="validation_error",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )

    @classmethod
    def for_field(cls, field: str, msg: str) -> "ValidationError":
        """Single-field violation on the request body."""
        return cls(
            message="Request validation failed",
            details=[{"loc": ["body", field], "field": field, "msg": msg, "type": "value_error"}],
        )


class InternalError(TaskboardException):
    """Unexpected failure; the message returned to callers stays generic."""

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message=message)


# =============================================================================
# Exception Handlers
# =============================================================================

def _error_body(error_code: str, message: str, details=None) -> dict:
    return {"error": error_code, "message": message, "details": details}


async def taskboard_exception_handler(request: Request, exc: TaskboardException) -> JSONResponse:
    """Handle TaskboardException and return structured response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error_code, exc.message, exc.details),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every violated field as a 400 validation_error."""
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ())]
        # loc is ("body", "<field>", ...) for body errors and ("body",) when the body itself is bad
        field = loc[1] if len(loc) > 1 else None
        details.append({
            "loc": loc,
            "field": field,
            "msg": err.get("msg", "Invalid value"),
            "type": err.get("type", "value_error"),
        })

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("validation_error", "Request validation failed", details),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Shape framework HTTP errors (unmatched routes, bad methods) like our own."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        body = _error_body("not_found", "Route not found")
    else:
        body = _error_body("http_error", str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content=body,
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger = get_logger("taskboard.error")
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    internal = InternalError()
    return JSONResponse(
        status_code=internal.status_code,
        content=_error_body(internal.error_code, internal.message),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(TaskboardException, taskboard_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
