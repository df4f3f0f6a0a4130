"""
Health Route

Liveness plus readiness: the service is ready once a gate is loaded from
the state file or built from configuration.
"""

from fastapi import APIRouter

from api.deps import get_gate
from api.errors import APIError
from api.models.responses import HealthResponse
from core.schemas.errors import AllowlistException


router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Report whether claims can be served, and whether they are suspended."""
    try:
        gate = get_gate()
    except (APIError, AllowlistException) as e:
        return HealthResponse(ok=True, ready=False, detail=e.message)
    return HealthResponse(ok=True, ready=True, suspended=gate.controls.suspended)
