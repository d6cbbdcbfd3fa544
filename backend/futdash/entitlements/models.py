"""
Entitlement models: canonical types for premium access gating.

Provides:
- EntitlementSnapshot: Normalised, immutable view of a user's session/plan
- ResolutionState: Tagged state of one resolution cycle (idle/loading/ready/error)
- GateRequest: What a gated page or widget requires
- GateDecision: Result of evaluating a GateRequest against a ResolutionState

GateDecision is always computed, never stored.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ResolutionStatus(str, Enum):
    """Variant tag of a ResolutionState."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (ResolutionStatus.READY, ResolutionStatus.ERROR)


class GateMode(str, Enum):
    """How a denial is presented."""
    WIDGET = "widget"  # inline fallback
    ROUTE = "route"    # full-page redirect


class DecisionKind(str, Enum):
    LOADING = "loading"
    ALLOW = "allow"
    DENY = "deny"


class DenialReason(str, Enum):
    """Why access was denied."""
    UNAUTHENTICATED = "unauthenticated"
    NOT_PREMIUM = "not-premium"
    RESOLUTION_ERROR = "resolution-error"


# ---------------------------------------------------------------------------
# Value objects (frozen dataclasses)
# ---------------------------------------------------------------------------

def _freeze(mapping: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    if mapping is None:
        return None
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class EntitlementSnapshot:
    """
    Normalised entitlement state for the current session.

    authenticated=None means the backend did not say; it is treated as
    authenticated. features=None means every gated feature follows
    is_premium. limits are advisory and never used for gating.
    """
    authenticated: Optional[bool] = None
    is_premium: bool = False
    features: Optional[Mapping[str, bool]] = None
    limits: Optional[Mapping[str, Union[int, str]]] = None

    def __post_init__(self):
        object.__setattr__(self, "features", _freeze(self.features))
        object.__setattr__(self, "limits", _freeze(self.limits))

    def __hash__(self) -> int:
        # Limit values may be arbitrary JSON, so only their keys are hashed
        return hash((
            self.authenticated,
            self.is_premium,
            frozenset(self.features.items()) if self.features is not None else None,
            frozenset(self.limits) if self.limits is not None else None,
        ))

    @property
    def is_authenticated(self) -> bool:
        return self.authenticated is not False

    def has_feature(self, feature_key: Optional[str] = None) -> bool:
        """
        Whether the snapshot grants a feature.

        Without a feature key, or without a per-feature table, global
        premium status decides. A key missing from the table is not granted.
        """
        if feature_key is None or self.features is None:
            return self.is_premium
        return bool(self.features.get(feature_key, False))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "authenticated": self.authenticated,
            "is_premium": self.is_premium,
            "features": dict(self.features) if self.features is not None else None,
            "limits": dict(self.limits) if self.limits is not None else None,
        }


ANONYMOUS_SNAPSHOT = EntitlementSnapshot(authenticated=False, is_premium=False)


@dataclass(frozen=True)
class ResolutionState:
    """
    State of one resolution cycle.

    Exactly one variant is active: snapshot is set only for READY and
    error only for ERROR. Build instances through the classmethods.
    """
    status: ResolutionStatus
    snapshot: Optional[EntitlementSnapshot] = None
    error: Optional[BaseException] = None

    def __post_init__(self):
        if (self.status == ResolutionStatus.READY) != (self.snapshot is not None):
            raise ValueError("snapshot must be set exactly when status is ready")
        if (self.status == ResolutionStatus.ERROR) != (self.error is not None):
            raise ValueError("error must be set exactly when status is error")

    @classmethod
    def idle(cls) -> "ResolutionState":
        return cls(ResolutionStatus.IDLE)

    @classmethod
    def loading(cls) -> "ResolutionState":
        return cls(ResolutionStatus.LOADING)

    @classmethod
    def ready(cls, snapshot: EntitlementSnapshot) -> "ResolutionState":
        return cls(ResolutionStatus.READY, snapshot=snapshot)

    @classmethod
    def failed(cls, error: BaseException) -> "ResolutionState":
        return cls(ResolutionStatus.ERROR, error=error)

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal


@dataclass(frozen=True)
class GateRequest:
    """A gated page or widget's declared requirement."""
    require_premium: bool = False
    required_feature: Optional[str] = None
    mode: GateMode = GateMode.WIDGET

    @property
    def requires_premium(self) -> bool:
        return self.require_premium or self.required_feature is not None


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the gating policy. Use the classmethods to construct."""
    kind: DecisionKind
    reason: Optional[DenialReason] = None

    @classmethod
    def loading(cls) -> "GateDecision":
        return cls(DecisionKind.LOADING)

    @classmethod
    def allow(cls) -> "GateDecision":
        return cls(DecisionKind.ALLOW)

    @classmethod
    def deny(cls, reason: DenialReason) -> "GateDecision":
        return cls(DecisionKind.DENY, reason=reason)

    @property
    def allowed(self) -> bool:
        return self.kind == DecisionKind.ALLOW

    @property
    def denied(self) -> bool:
        return self.kind == DecisionKind.DENY
