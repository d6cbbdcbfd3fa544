"""
Gating policy: (ResolutionState, GateRequest) -> GateDecision.

Pure and side-effect free. Rendering and redirects live in
futdash.entitlements.gate.

Fail closed: a state that cannot be verified (resolution error) is always
denied. Only an explicit authenticated=False counts as logged out.
"""

from futdash.entitlements.models import (
    DenialReason,
    GateDecision,
    GateRequest,
    ResolutionState,
    ResolutionStatus,
)


def decide(state: ResolutionState, request: GateRequest) -> GateDecision:
    """
    Evaluate a gate request against the current resolution state.

    Args:
        state: Resolver state for this gate activation
        request: What the page or widget requires

    Returns:
        GateDecision (loading, allow, or deny with a reason)
    """
    if state.status in (ResolutionStatus.IDLE, ResolutionStatus.LOADING):
        return GateDecision.loading()

    if state.status == ResolutionStatus.ERROR:
        return GateDecision.deny(DenialReason.RESOLUTION_ERROR)

    if not request.requires_premium:
        return GateDecision.allow()

    snapshot = state.snapshot
    has_feature = snapshot.has_feature(request.required_feature)

    if not snapshot.is_authenticated:
        return GateDecision.deny(DenialReason.UNAUTHENTICATED)

    if not has_feature:
        return GateDecision.deny(DenialReason.NOT_PREMIUM)

    return GateDecision.allow()
