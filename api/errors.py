"""
API Error Handling

Standardized error handling for the API. Domain rejections raised by the
gate (AllowlistException) are mapped to HTTP status codes by error code.
"""

import logging
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import AllowlistException, ErrorCodes


logger = logging.getLogger(__name__)


# Domain error code -> HTTP status
STATUS_BY_CODE: dict[str, int] = {
    ErrorCodes.NOT_AUTHORIZED: 403,
    ErrorCodes.INVALID_ROOT: 400,
    ErrorCodes.SYSTEM_SUSPENDED: 409,
    ErrorCodes.TOKEN_ALREADY_CLAIMED: 409,
    ErrorCodes.CLAIMANT_ALREADY_CLAIMED: 409,
    ErrorCodes.INVALID_PROOF: 400,
    ErrorCodes.SCHEMA_VALIDATION_ERROR: 422,
    ErrorCodes.TOKEN_REGISTRY_ERROR: 409,
    ErrorCodes.STATE_IO_ERROR: 500,
}


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=self.code,
                message=self.message,
                details=self.details,
            ),
        )


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class MissingCallerError(APIError):
    """The authenticated caller identity header is absent."""

    def __init__(self, message: str = "Caller identity header is required"):
        super().__init__(
            code="MISSING_CALLER",
            message=message,
            status_code=401,
        )


class ServiceNotConfiguredError(APIError):
    """The gate has not been initialized."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="SERVICE_NOT_CONFIGURED",
            message=message,
            status_code=503,
            details=details,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(self, message: str = "Internal server error", details: dict[str, Any] | None = None):
        super().__init__(
            code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
    )


async def allowlist_error_handler(request: Request, exc: AllowlistException) -> JSONResponse:
    """Handle rejections raised by the gate and its collaborators."""
    error = exc.to_error_model()
    return JSONResponse(
        status_code=STATUS_BY_CODE.get(error.code, 400),
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code=error.code,
                message=error.message,
                details=error.details,
            ),
        ).model_dump(),
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            ok=False,
            error=ErrorDetail(
                code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                details={"type": type(exc).__name__},
            ),
        ).model_dump(),
    )
