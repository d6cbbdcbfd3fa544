"""
Gate control-flow exceptions.

Raised from FastAPI dependencies when a gated endpoint must not run, and
turned into responses by the handlers in futdash.entitlements.dependencies.
"""

from typing import Optional

from futdash.entitlements.models import GateDecision


class EntitlementGateError(Exception):
    """Base exception for gate outcomes that replace the endpoint's response."""

    def __init__(self, message: str, decision: Optional[GateDecision] = None):
        super().__init__(message)
        self.decision = decision


class GateRedirect(EntitlementGateError):
    """Navigate the user elsewhere (login or billing)."""

    def __init__(self, location: str, decision: Optional[GateDecision] = None):
        super().__init__(f"Redirecting to {location}", decision)
        self.location = location


class GateBlocked(EntitlementGateError):
    """Render a fallback or placeholder fragment instead of the widget."""

    def __init__(self, body: str, decision: Optional[GateDecision] = None):
        super().__init__("Gated content replaced by fallback", decision)
        self.body = body
