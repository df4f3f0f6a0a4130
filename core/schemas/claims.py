"""
Schemas
File: claims.py

Purpose: Models describing claim outcomes, royalty settings and the
read-only status of the issuance gate. Hash values are carried as
0x-prefixed hex strings so the models serialise without custom encoders.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


MAX_ROYALTY_BPS = 10_000


class RoyaltySettings(BaseModel):
    """Royalty recipient and rate, stored and reported by the token registry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    recipient: str = Field(
        ...,
        description="Checksummed address receiving royalties",
    )
    bps: int = Field(
        default=0,
        ge=0,
        le=MAX_ROYALTY_BPS,
        description="Royalty rate in basis points",
    )


class RoyaltyQuote(BaseModel):
    """Royalty owed for one sale of a token."""

    model_config = ConfigDict(extra="forbid")

    token_id: int
    sale_price: int
    recipient: str
    amount: int


class ClaimReceipt(BaseModel):
    """Outcome of an accepted claim."""

    model_config = ConfigDict(extra="forbid")

    token_id: int = Field(..., ge=0, description="Issued token identifier")
    claimant: str = Field(..., description="Checksummed address of the new owner")
    leaf: str = Field(..., description="Leaf commitment (0x-prefixed)")
    root: str = Field(..., description="Commitment root the proof matched")
    event_sequence: int = Field(..., ge=0, description="Journal position of the claim")


class GateStatus(BaseModel):
    """Read-only view of the live configuration."""

    model_config = ConfigDict(extra="forbid")

    admin: str
    commitment_root: str
    suspended: bool
    metadata_location: str
    royalty: RoyaltySettings
    tokens_claimed: int = 0
