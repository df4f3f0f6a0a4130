"""
Claim Routes

Submit claims and compute or check allowlist commitments.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_caller, get_gate, persist
from api.models.requests import ClaimRequest, LeafRequest, VerifyProofRequest
from api.models.responses import ClaimResponse, LeafResponse, VerifyProofResponse
from core.crypto.hashing import to_hex
from core.crypto.identity import normalize_address
from core.gate.issuance_gate import IssuanceGate
from core.merkle.leaf import encode_claim, leaf_hash


logger = logging.getLogger(__name__)

router = APIRouter(tags=["claims"])


@router.post("/claim", response_model=ClaimResponse)
def submit_claim(
    request: ClaimRequest,
    caller: str = Depends(get_caller),
    gate: IssuanceGate = Depends(get_gate),
) -> ClaimResponse:
    """
    Claim a token for the calling identity.

    Rejections (suspended, already claimed, invalid proof) are returned as
    error responses and leave all state unchanged. A claim whose state file
    write fails is undone as well.
    """
    with gate.transaction():
        receipt = gate.claim(caller, request.token_id, request.proof)
        persist(gate)
    return ClaimResponse(ok=True, receipt=receipt)


@router.post("/leaf", response_model=LeafResponse)
def compute_leaf(request: LeafRequest) -> LeafResponse:
    """Compute the leaf commitment an off-system tree must contain."""
    claimant = normalize_address(request.claimant, "claimant")
    return LeafResponse(
        ok=True,
        claimant=claimant,
        token_id=request.token_id,
        encoded=to_hex(encode_claim(claimant, request.token_id)),
        leaf=to_hex(leaf_hash(claimant, request.token_id)),
    )


@router.post("/verify-proof", response_model=VerifyProofResponse)
def verify_proof(
    request: VerifyProofRequest,
    gate: IssuanceGate = Depends(get_gate),
) -> VerifyProofResponse:
    """Check a proof against the live root without claiming."""
    checked = gate.check_proof(request.claimant, request.token_id, request.proof)
    return VerifyProofResponse(
        ok=True,
        valid=checked.verify(),
        leaf=to_hex(checked.leaf),
        root=to_hex(checked.root),
    )
