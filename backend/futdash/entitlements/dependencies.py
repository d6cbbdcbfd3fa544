"""
Access gate dependencies.

Provides reusable FastAPI dependencies that gate dashboard pages (route
mode) and inline fragments (widget mode) on the caller's entitlements.

Each request gets its own resolver and gate; nothing is cached between
requests, so a user who just upgraded is let through on their next load.
"""

import logging
from typing import Callable, Optional, Union

from fastapi import FastAPI, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from futdash.entitlements.audit import AccessDenialEvent, get_audit_logger
from futdash.entitlements.errors import GateBlocked, GateRedirect
from futdash.entitlements.gate import AccessGate, OutcomeKind, Renderable
from futdash.entitlements.models import EntitlementSnapshot, GateMode, ResolutionState
from futdash.entitlements.redirects import return_to_from_url
from futdash.entitlements.resolver import EntitlementResolver
from futdash.integrations.session_api import get_session_api_client

logger = logging.getLogger(__name__)


async def resolve_entitlements(request: Request) -> ResolutionState:
    """Run one resolution cycle with the caller's credentials."""
    client = get_session_api_client(request)
    try:
        return await EntitlementResolver(client).resolve()
    finally:
        await client.close()


def create_access_gate(
    require_premium: bool = False,
    required_feature: Optional[str] = None,
    mode: Union[GateMode, str] = GateMode.WIDGET,
    fallback: Optional[Renderable] = None,
    loading_fallback: Optional[Renderable] = None,
) -> Callable:
    """
    Factory function to create an access gate dependency.

    Args:
        require_premium: Require global premium
        required_feature: Backend feature key (implies require_premium)
        mode: "route" redirects on denial, "widget" renders the fallback
        fallback: Widget fallback (default: upsell card)
        loading_fallback: Placeholder if resolution has not finished

    Returns:
        A FastAPI dependency returning the EntitlementSnapshot when allowed.
        Denials raise GateRedirect or GateBlocked.
    """
    gate_mode = GateMode(mode)

    async def check_access(request: Request) -> EntitlementSnapshot:
        client = get_session_api_client(request)
        resolver = EntitlementResolver(client)
        gate = AccessGate(
            resolver,
            require_premium=require_premium,
            required_feature=required_feature,
            mode=gate_mode,
            loading_fallback=loading_fallback,
            fallback=fallback,
        )
        location = return_to_from_url(str(request.url))

        try:
            await gate.settle()
        finally:
            gate.unmount()
            await client.close()

        outcome = gate.render(location)

        if outcome.kind == OutcomeKind.CONTENT:
            return resolver.state.snapshot

        if outcome.decision.denied:
            get_audit_logger().log_denial(AccessDenialEvent(
                reason=outcome.decision.reason.value,
                mode=gate_mode.value,
                feature_name=required_feature,
                require_premium=gate.request.requires_premium,
                endpoint=request.url.path,
                method=request.method,
                redirect_to=outcome.location,
                ip_address=request.client.host if request.client else None,
                user_agent=request.headers.get("user-agent"),
            ))

        if outcome.is_redirect:
            raise GateRedirect(outcome.location, outcome.decision)

        raise GateBlocked(str(outcome.body), outcome.decision)

    return check_access


async def _gate_redirect_handler(request: Request, exc: GateRedirect):
    return RedirectResponse(url=exc.location, status_code=status.HTTP_303_SEE_OTHER)


async def _gate_blocked_handler(request: Request, exc: GateBlocked):
    return HTMLResponse(content=exc.body, status_code=status.HTTP_200_OK)


def install_gate_handlers(app: FastAPI) -> None:
    """Register the responses for gate redirects and fallbacks."""
    app.add_exception_handler(GateRedirect, _gate_redirect_handler)
    app.add_exception_handler(GateBlocked, _gate_blocked_handler)


# Pre-configured gates for the dashboard's premium features
require_smart_buy = create_access_gate(required_feature="smart_buy", mode=GateMode.ROUTE)
require_trade_finder = create_access_gate(required_feature="trade_finder", mode=GateMode.ROUTE)
require_advanced_analytics = create_access_gate(
    required_feature="advanced_analytics", mode=GateMode.ROUTE
)
smart_buyer_widget = create_access_gate(required_feature="smart_buyer", mode=GateMode.WIDGET)
deal_confidence_widget = create_access_gate(
    required_feature="deal_confidence", mode=GateMode.WIDGET
)
