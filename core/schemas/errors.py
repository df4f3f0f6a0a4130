"""
Schemas
File: errors.py

Purpose: Standard error taxonomy for allowlist claims and admin operations.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Every exception in this module is a rejection: the operation that raised it
committed no state.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Authorization
    NOT_AUTHORIZED = "NOT_AUTHORIZED"

    # Commitment root
    INVALID_ROOT = "INVALID_ROOT"

    # Claim rejections
    SYSTEM_SUSPENDED = "SYSTEM_SUSPENDED"
    TOKEN_ALREADY_CLAIMED = "TOKEN_ALREADY_CLAIMED"
    CLAIMANT_ALREADY_CLAIMED = "CLAIMANT_ALREADY_CLAIMED"
    INVALID_PROOF = "INVALID_PROOF"

    # Input & collaborators
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    TOKEN_REGISTRY_ERROR = "TOKEN_REGISTRY_ERROR"
    STATE_IO_ERROR = "STATE_IO_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class AllowlistError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the HTTP and CLI surfaces to report a rejected operation
    without re-raising it.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.INVALID_PROOF],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether resubmitting the same input could succeed",
    )

    def to_exception(self) -> "AllowlistException":
        """Convert this error model to a raised exception."""
        return AllowlistException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class AllowlistException(Exception):
    """
    Base exception for all allowlist errors.

    This exception carries structured error information and can be
    converted to/from AllowlistError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "ALLOWLIST_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> AllowlistError:
        """Convert this exception to an AllowlistError model."""
        return AllowlistError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class NotAuthorizedException(AllowlistException):
    """Raised when a caller other than the admin attempts an admin operation."""

    def __init__(
        self,
        caller: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["caller"] = caller
        if operation:
            full_details["operation"] = operation
        super().__init__(
            message=f"Caller {caller} is not authorized"
            + (f" to {operation}" if operation else ""),
            code=ErrorCodes.NOT_AUTHORIZED,
            details=full_details,
        )


class InvalidRootException(AllowlistException):
    """Raised when a commitment root is the zero sentinel or malformed."""

    def __init__(
        self,
        message: str = "Commitment root must be a non-zero 32-byte value",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_ROOT,
            details=details,
        )


class SystemSuspendedException(AllowlistException):
    """Raised when a claim is submitted while claims are paused."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message="Claims are suspended",
            code=ErrorCodes.SYSTEM_SUSPENDED,
            details=details,
            retryable=True,
        )


class TokenAlreadyClaimedException(AllowlistException):
    """Raised when the requested token id has already been claimed."""

    def __init__(self, token_id: int) -> None:
        super().__init__(
            message=f"Token {token_id} has already been claimed",
            code=ErrorCodes.TOKEN_ALREADY_CLAIMED,
            details={"token_id": str(token_id)},
        )


class ClaimantAlreadyClaimedException(AllowlistException):
    """Raised when the calling claimant has already claimed a token."""

    def __init__(self, claimant: str) -> None:
        super().__init__(
            message=f"Claimant {claimant} has already claimed",
            code=ErrorCodes.CLAIMANT_ALREADY_CLAIMED,
            details={"claimant": claimant},
        )


class InvalidProofException(AllowlistException):
    """Raised when a proof path does not reduce to the live commitment root."""

    def __init__(
        self,
        message: str = "Merkle proof does not match the commitment root",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_PROOF,
            details=details,
        )


class SchemaValidationException(AllowlistException):
    """Raised when an input value is malformed (address, token id, hash)."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
        )


class TokenRegistryException(AllowlistException):
    """Raised by the token registry when issuance cannot be recorded."""

    def __init__(
        self,
        message: str,
        token_id: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if token_id is not None:
            full_details["token_id"] = str(token_id)
        super().__init__(
            message=message,
            code=ErrorCodes.TOKEN_REGISTRY_ERROR,
            details=full_details,
        )
