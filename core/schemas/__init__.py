"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    AllowlistError,
    AllowlistException,
    ClaimantAlreadyClaimedException,
    ErrorCodes,
    InvalidProofException,
    InvalidRootException,
    NotAuthorizedException,
    SchemaValidationException,
    SystemSuspendedException,
    TokenAlreadyClaimedException,
    TokenRegistryException,
)

# Claim schemas
from .claims import (
    MAX_ROYALTY_BPS,
    ClaimReceipt,
    GateStatus,
    RoyaltyQuote,
    RoyaltySettings,
)

__all__ = [
    # Errors
    "AllowlistError",
    "AllowlistException",
    "ClaimantAlreadyClaimedException",
    "ErrorCodes",
    "InvalidProofException",
    "InvalidRootException",
    "NotAuthorizedException",
    "SchemaValidationException",
    "SystemSuspendedException",
    "TokenAlreadyClaimedException",
    "TokenRegistryException",
    # Claims
    "MAX_ROYALTY_BPS",
    "ClaimReceipt",
    "GateStatus",
    "RoyaltyQuote",
    "RoyaltySettings",
]
