"""API request and response models."""

from api.models.requests import (
    ClaimRequest,
    LeafRequest,
    SetMetadataRequest,
    SetRootRequest,
    TransferAdminRequest,
    VerifyProofRequest,
)
from api.models.responses import (
    ClaimantStatusResponse,
    ClaimResponse,
    ErrorDetail,
    ErrorResponse,
    EventsResponse,
    HealthResponse,
    LeafResponse,
    MetadataResponse,
    RoyaltyResponse,
    StatusResponse,
    TokenStatusResponse,
    VerifyProofResponse,
)

__all__ = [
    "ClaimRequest",
    "LeafRequest",
    "SetMetadataRequest",
    "SetRootRequest",
    "TransferAdminRequest",
    "VerifyProofRequest",
    "ClaimantStatusResponse",
    "ClaimResponse",
    "ErrorDetail",
    "ErrorResponse",
    "EventsResponse",
    "HealthResponse",
    "LeafResponse",
    "MetadataResponse",
    "RoyaltyResponse",
    "StatusResponse",
    "TokenStatusResponse",
    "VerifyProofResponse",
]
