"""
Admin Routes

Admin-gated mutations. Every route requires the caller to be the current
admin; other callers receive NOT_AUTHORIZED and nothing changes. A change
whose state file write fails is undone before the error is returned.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_caller, get_gate, persist
from api.models.requests import SetMetadataRequest, SetRootRequest, TransferAdminRequest
from api.models.responses import StatusResponse
from core.gate.issuance_gate import IssuanceGate


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


def _status(gate: IssuanceGate) -> StatusResponse:
    persist(gate)
    return StatusResponse(ok=True, status=gate.status())


@router.post("/root", response_model=StatusResponse)
def set_root(
    request: SetRootRequest,
    caller: str = Depends(get_caller),
    gate: IssuanceGate = Depends(get_gate),
) -> StatusResponse:
    with gate.transaction():
        gate.set_commitment_root(caller, request.root)
        return _status(gate)


@router.post("/pause", response_model=StatusResponse)
def pause(
    caller: str = Depends(get_caller),
    gate: IssuanceGate = Depends(get_gate),
) -> StatusResponse:
    with gate.transaction():
        gate.pause(caller)
        return _status(gate)


@router.post("/unpause", response_model=StatusResponse)
def unpause(
    caller: str = Depends(get_caller),
    gate: IssuanceGate = Depends(get_gate),
) -> StatusResponse:
    with gate.transaction():
        gate.unpause(caller)
        return _status(gate)


@router.post("/metadata", response_model=StatusResponse)
def set_metadata(
    request: SetMetadataRequest,
    caller: str = Depends(get_caller),
    gate: IssuanceGate = Depends(get_gate),
) -> StatusResponse:
    with gate.transaction():
        gate.set_metadata_location(caller, request.location)
        return _status(gate)


@router.post("/transfer", response_model=StatusResponse)
def transfer_admin(
    request: TransferAdminRequest,
    caller: str = Depends(get_caller),
    gate: IssuanceGate = Depends(get_gate),
) -> StatusResponse:
    with gate.transaction():
        gate.transfer_admin(caller, request.new_admin)
        return _status(gate)
