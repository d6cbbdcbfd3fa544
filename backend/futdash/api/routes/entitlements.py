"""
Entitlement API routes.

GET /api/entitlements/me returns the caller's resolved entitlement state
so the dashboard can adjust navigation (lock icons, upgrade badges).

Resolution errors are reported as status "error" with no detail; the
dashboard treats that like a missing plan.
"""

import logging

from fastapi import APIRouter, Request

from futdash.api.schemas.entitlements import EntitlementStateResponse, SnapshotResponse
from futdash.entitlements.dependencies import resolve_entitlements
from futdash.entitlements.models import ResolutionStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/entitlements", tags=["entitlements"])


@router.get("/me", response_model=EntitlementStateResponse)
async def get_my_entitlements(request: Request) -> EntitlementStateResponse:
    """Resolve and return the caller's entitlement snapshot."""
    state = await resolve_entitlements(request)

    if state.status != ResolutionStatus.READY:
        return EntitlementStateResponse(status=state.status.value)

    return EntitlementStateResponse(
        status=state.status.value,
        snapshot=SnapshotResponse(**state.snapshot.to_dict()),
    )
