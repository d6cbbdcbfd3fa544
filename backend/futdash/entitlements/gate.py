"""
Access gate - presentation wrapper around the gating policy.

Maps each GateDecision to what the caller should show:

    loading                      → loading placeholder
    allow                        → protected content
    deny(unauthenticated)        → redirect to login (any mode)
    deny(not-premium | error)    → route:  redirect to billing
                                   widget: fallback (upsell card)

Logged-out users are never shown the upsell; they are sent to login first.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Union

from futdash.entitlements.models import (
    DecisionKind,
    DenialReason,
    GateDecision,
    GateMode,
    GateRequest,
    ResolutionState,
)
from futdash.entitlements.policy import decide
from futdash.entitlements.redirects import billing_redirect, login_redirect
from futdash.entitlements.resolver import EntitlementResolver
from futdash.entitlements.upsell import render_skeleton, render_upsell_card

logger = logging.getLogger(__name__)

# A renderable is either a ready fragment or a function of the current location
Renderable = Union[str, Callable[[str], Any]]
DecisionListener = Callable[[GateDecision], None]


class OutcomeKind(str, Enum):
    CONTENT = "content"
    FALLBACK = "fallback"
    LOADING = "loading"
    REDIRECT = "redirect"


@dataclass(frozen=True)
class GateOutcome:
    """What to render (body) or where to navigate (location)."""
    kind: OutcomeKind
    decision: GateDecision
    body: Any = None
    location: Optional[str] = None

    @property
    def is_redirect(self) -> bool:
        return self.kind == OutcomeKind.REDIRECT


def _default_fallback(location: str) -> str:
    return render_upsell_card(from_path=location)


def _default_loading(location: str) -> str:
    return render_skeleton()


def _render(renderable: Renderable, location: str) -> Any:
    if callable(renderable):
        return renderable(location)
    return renderable


class AccessGate:
    """
    Enforce a GateRequest for one page or widget activation.

    Usage:
        gate = AccessGate(resolver, required_feature="smart_buy", mode=GateMode.ROUTE)
        await gate.settle()
        outcome = gate.render(location="/smart-buy", content=page)
        gate.unmount()
    """

    def __init__(
        self,
        resolver: EntitlementResolver,
        require_premium: bool = False,
        required_feature: Optional[str] = None,
        mode: Union[GateMode, str] = GateMode.WIDGET,
        loading_fallback: Optional[Renderable] = None,
        fallback: Optional[Renderable] = None,
        on_decision: Optional[DecisionListener] = None,
    ):
        """
        Args:
            resolver: Fresh resolver for this activation
            require_premium: Require global premium even without a feature key
            required_feature: Backend feature key; implies require_premium
            mode: "widget" (inline fallback) or "route" (redirect)
            loading_fallback: Placeholder while resolving (default: skeleton)
            fallback: Shown on widget denials (default: upsell card)
            on_decision: Called with the new decision after every state change
        """
        self.request = GateRequest(
            require_premium=require_premium,
            required_feature=required_feature,
            mode=GateMode(mode),
        )
        self._resolver = resolver
        self._loading_fallback = (
            _default_loading if loading_fallback is None else loading_fallback
        )
        self._fallback = _default_fallback if fallback is None else fallback
        self._on_decision = on_decision
        self._task: Optional["asyncio.Task[ResolutionState]"] = None
        self._unsubscribe = resolver.subscribe(self._state_changed)

    def _state_changed(self, state: ResolutionState) -> None:
        decision = decide(state, self.request)
        logger.debug(
            "Gate decision updated",
            extra={
                "status": state.status.value,
                "decision": decision.kind.value,
                "reason": decision.reason.value if decision.reason else None,
                "feature": self.request.required_feature,
            },
        )
        if self._on_decision is not None:
            self._on_decision(decision)

    def decision(self) -> GateDecision:
        return decide(self._resolver.state, self.request)

    def mount(self) -> "asyncio.Task[ResolutionState]":
        """Start resolving in the background. Calling again returns the same task."""
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._resolver.resolve())
        return self._task

    async def settle(self) -> GateDecision:
        """Mount if needed and wait for the resolution cycle to finish."""
        await self.mount()
        return self.decision()

    def unmount(self) -> None:
        """Tear down: late results are discarded and the pending task cancelled."""
        self._unsubscribe()
        self._resolver.cancel()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def render(self, location: str, content: Any = None) -> GateOutcome:
        """
        Turn the current decision into an outcome.

        Args:
            location: Current path+query; used as the return-to target
            content: Protected content returned on allow

        Returns:
            GateOutcome
        """
        decision = self.decision()

        if decision.kind == DecisionKind.LOADING:
            return GateOutcome(
                OutcomeKind.LOADING,
                decision,
                body=_render(self._loading_fallback, location),
            )

        if decision.kind == DecisionKind.ALLOW:
            return GateOutcome(OutcomeKind.CONTENT, decision, body=content)

        if decision.reason == DenialReason.UNAUTHENTICATED:
            return GateOutcome(
                OutcomeKind.REDIRECT, decision, location=login_redirect(location)
            )

        if self.request.mode == GateMode.ROUTE:
            return GateOutcome(
                OutcomeKind.REDIRECT, decision, location=billing_redirect(location)
            )

        return GateOutcome(
            OutcomeKind.FALLBACK,
            decision,
            body=_render(self._fallback, location),
        )
