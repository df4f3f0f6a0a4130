"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.events.models import StateEvent
from core.schemas.claims import ClaimReceipt, GateStatus, RoyaltyQuote


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-allowlist-api"
    version: str = "v1"
    ready: bool = Field(..., description="A gate is loaded and can serve claims")
    suspended: bool | None = None
    detail: str | None = Field(default=None, description="Why the service is not ready")


class StatusResponse(BaseModel):
    """Response for GET /status and admin mutations."""

    ok: bool = True
    status: GateStatus


class ClaimResponse(BaseModel):
    """Response for POST /claim."""

    ok: bool = True
    receipt: ClaimReceipt


class TokenStatusResponse(BaseModel):
    """Response for GET /tokens/{token_id}."""

    ok: bool = True
    token_id: int
    consumed: bool = Field(..., description="Whether the token has been claimed")
    owner: str | None = Field(default=None, description="Owner if claimed")


class ClaimantStatusResponse(BaseModel):
    """Response for GET /claimants/{address}."""

    ok: bool = True
    claimant: str
    consumed: bool = Field(..., description="Whether the claimant has claimed")
    balance: int = 0


class MetadataResponse(BaseModel):
    """Response for GET /tokens/{token_id}/metadata."""

    ok: bool = True
    token_id: int
    location: str


class RoyaltyResponse(BaseModel):
    """Response for GET /tokens/{token_id}/royalty."""

    ok: bool = True
    quote: RoyaltyQuote


class LeafResponse(BaseModel):
    """Response for POST /leaf."""

    ok: bool = True
    claimant: str
    token_id: int
    encoded: str = Field(..., description="ABI encoding of (claimant, token_id)")
    leaf: str = Field(..., description="Leaf commitment")


class VerifyProofResponse(BaseModel):
    """Response for POST /verify-proof."""

    ok: bool = True
    valid: bool
    leaf: str
    root: str


class EventsResponse(BaseModel):
    """Response for GET /events."""

    ok: bool = True
    events: list[StateEvent] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
