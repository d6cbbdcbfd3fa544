"""
Entitlement API schemas.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class SnapshotResponse(BaseModel):
    """Normalised entitlement snapshot."""
    authenticated: Optional[bool] = None
    is_premium: bool = False
    features: Optional[Dict[str, bool]] = None
    limits: Optional[Dict[str, Any]] = None


class EntitlementStateResponse(BaseModel):
    """Outcome of one resolution cycle. snapshot is null unless status is ready."""
    status: str
    snapshot: Optional[SnapshotResponse] = None
