"""
Read Routes

Token, claimant, status and event reads.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.deps import get_gate
from api.models.responses import (
    ClaimantStatusResponse,
    EventsResponse,
    MetadataResponse,
    RoyaltyResponse,
    StatusResponse,
    TokenStatusResponse,
)
from core.crypto.identity import normalize_address
from core.events.models import EventKind
from core.gate.issuance_gate import IssuanceGate
from core.merkle.leaf import validate_token_id
from core.schemas.errors import SchemaValidationException


router = APIRouter(tags=["reads"])


def _token_id(raw: str) -> int:
    # Path params arrive as strings; uint256 ids may exceed 64 bits.
    try:
        value = int(raw, 10)
    except ValueError:
        raise SchemaValidationException(
            f"Token id must be a decimal integer, got {raw!r}", "token_id"
        ) from None
    return validate_token_id(value)


@router.get("/status", response_model=StatusResponse)
def get_status(gate: IssuanceGate = Depends(get_gate)) -> StatusResponse:
    return StatusResponse(ok=True, status=gate.status())


@router.get("/tokens/{token_id}", response_model=TokenStatusResponse)
def get_token(token_id: str, gate: IssuanceGate = Depends(get_gate)) -> TokenStatusResponse:
    tid = _token_id(token_id)
    with gate.lock:
        consumed = gate.is_token_consumed(tid)
        owner = gate.owner_of(tid) if consumed else None
    return TokenStatusResponse(ok=True, token_id=tid, consumed=consumed, owner=owner)


@router.get("/tokens/{token_id}/metadata", response_model=MetadataResponse)
def get_token_metadata(token_id: str, gate: IssuanceGate = Depends(get_gate)) -> MetadataResponse:
    tid = _token_id(token_id)
    return MetadataResponse(ok=True, token_id=tid, location=gate.metadata_location_for(tid))


@router.get("/tokens/{token_id}/royalty", response_model=RoyaltyResponse)
def get_token_royalty(
    token_id: str,
    sale_price: int = Query(..., ge=0, description="Sale price in the smallest unit"),
    gate: IssuanceGate = Depends(get_gate),
) -> RoyaltyResponse:
    return RoyaltyResponse(ok=True, quote=gate.royalty_info(_token_id(token_id), sale_price))


@router.get("/claimants/{address}", response_model=ClaimantStatusResponse)
def get_claimant(address: str, gate: IssuanceGate = Depends(get_gate)) -> ClaimantStatusResponse:
    claimant = normalize_address(address, "address")
    with gate.lock:
        consumed = gate.is_claimant_consumed(claimant)
        balance = gate.balance_of(claimant)
    return ClaimantStatusResponse(
        ok=True, claimant=claimant, consumed=consumed, balance=balance
    )


@router.get("/events", response_model=EventsResponse)
def list_events(
    kind: Optional[EventKind] = Query(default=None),
    gate: IssuanceGate = Depends(get_gate),
) -> EventsResponse:
    return EventsResponse(ok=True, events=gate.events(kind))
