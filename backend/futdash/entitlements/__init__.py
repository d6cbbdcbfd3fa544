"""
Premium access gating for the trading dashboard.

This module provides:
- EntitlementResolver: Resolve session/plan state through the backend fallback chain
- decide(): Pure gating policy (ResolutionState, GateRequest) → GateDecision
- AccessGate: Render/redirect wrapper aware of widget vs route mode
- create_access_gate(): FastAPI dependency factory
- GateAuditLogger: Log every access denial

Fail closed: if entitlements cannot be verified, access is denied.
"""

from futdash.entitlements.models import (
    ANONYMOUS_SNAPSHOT,
    DecisionKind,
    DenialReason,
    EntitlementSnapshot,
    GateDecision,
    GateMode,
    GateRequest,
    ResolutionState,
    ResolutionStatus,
)
from futdash.entitlements.policy import decide
from futdash.entitlements.resolver import (
    EntitlementResolver,
    snapshot_from_session,
    snapshot_from_usage,
)
from futdash.entitlements.gate import AccessGate, GateOutcome, OutcomeKind
from futdash.entitlements.redirects import (
    billing_redirect,
    login_redirect,
    return_to_from_url,
)
from futdash.entitlements.errors import EntitlementGateError, GateBlocked, GateRedirect
from futdash.entitlements.audit import AccessDenialEvent, GateAuditLogger, get_audit_logger
from futdash.entitlements.dependencies import (
    create_access_gate,
    install_gate_handlers,
    resolve_entitlements,
)

__all__ = [
    # Models
    "ANONYMOUS_SNAPSHOT",
    "DecisionKind",
    "DenialReason",
    "EntitlementSnapshot",
    "GateDecision",
    "GateMode",
    "GateRequest",
    "ResolutionState",
    "ResolutionStatus",
    # Resolution and policy
    "EntitlementResolver",
    "snapshot_from_session",
    "snapshot_from_usage",
    "decide",
    # Presentation
    "AccessGate",
    "GateOutcome",
    "OutcomeKind",
    "billing_redirect",
    "login_redirect",
    "return_to_from_url",
    # FastAPI seam
    "create_access_gate",
    "install_gate_handlers",
    "resolve_entitlements",
    "EntitlementGateError",
    "GateBlocked",
    "GateRedirect",
    # Audit
    "AccessDenialEvent",
    "GateAuditLogger",
    "get_audit_logger",
]
