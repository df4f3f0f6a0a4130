"""
API Request Models

Pydantic models for API request validation. Hash values are 0x-prefixed
hex strings; token ids may be sent as JSON numbers or decimal strings.
"""

from pydantic import BaseModel, Field

from core.merkle.leaf import MAX_TOKEN_ID


class ClaimRequest(BaseModel):
    """Request body for POST /claim. The claimant is the calling identity."""

    token_id: int = Field(
        ...,
        ge=0,
        le=MAX_TOKEN_ID,
        description="Token identifier to claim",
    )
    proof: list[str] = Field(
        default_factory=list,
        description="Sibling hashes from leaf to root (0x-prefixed)",
    )


class LeafRequest(BaseModel):
    """Request body for POST /leaf."""

    claimant: str = Field(..., description="Claimant address")
    token_id: int = Field(..., ge=0, le=MAX_TOKEN_ID)


class VerifyProofRequest(LeafRequest):
    """Request body for POST /verify-proof."""

    proof: list[str] = Field(default_factory=list)


class SetRootRequest(BaseModel):
    """Request body for POST /admin/root."""

    root: str = Field(..., description="New commitment root (0x-prefixed, 32 bytes)")


class SetMetadataRequest(BaseModel):
    """Request body for POST /admin/metadata."""

    location: str = Field(..., description="Metadata base location")


class TransferAdminRequest(BaseModel):
    """Request body for POST /admin/transfer."""

    new_admin: str = Field(..., description="Address of the next admin")
