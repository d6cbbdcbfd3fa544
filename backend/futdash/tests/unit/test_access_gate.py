"""
Tests for the access gate presentation wrapper.

Covers mode-aware rendering, redirect targets, caller-supplied fallbacks
and the mount/unmount lifecycle.
"""

import asyncio

import pytest
from unittest.mock import AsyncMock

from futdash.entitlements.gate import AccessGate, OutcomeKind
from futdash.entitlements.models import (
    DecisionKind,
    DenialReason,
    GateDecision,
    GateMode,
)
from futdash.entitlements.resolver import EntitlementResolver
from futdash.integrations.session_api import (
    SessionApiClient,
    SessionApiConnectionError,
    SessionApiServerError,
    SessionApiUnauthorizedError,
)

LOCATION = "/smart-buy?player=Mbapp%C3%A9&tab=1"
ENCODED_LOCATION = "%2Fsmart-buy%3Fplayer%3DMbapp%25C3%25A9%26tab%3D1"


@pytest.fixture
def mock_client():
    client = AsyncMock(spec=SessionApiClient)
    client.get_session = AsyncMock()
    client.get_watchlist_usage = AsyncMock()
    return client


def _gate(mock_client, **kwargs) -> AccessGate:
    return AccessGate(EntitlementResolver(mock_client), **kwargs)


class TestAccessGateRendering:
    """Decision → outcome mapping."""

    @pytest.mark.asyncio
    async def test_allow_renders_content(self, mock_client, session_payloads):
        """Premium user with the feature sees the widget."""
        mock_client.get_session.return_value = session_payloads["nested_premium"]
        gate = _gate(mock_client, required_feature="smart_buyer", mode="widget")

        decision = await gate.settle()
        outcome = gate.render(LOCATION, content="<div>smart buyer</div>")

        assert decision == GateDecision.allow()
        assert outcome.kind == OutcomeKind.CONTENT
        assert outcome.body == "<div>smart buyer</div>"
        assert outcome.location is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode", [GateMode.WIDGET, GateMode.ROUTE])
    async def test_unauthenticated_redirects_to_login_in_any_mode(self, mock_client, mode):
        mock_client.get_session.side_effect = SessionApiUnauthorizedError()
        gate = _gate(mock_client, require_premium=True, mode=mode)

        await gate.settle()
        outcome = gate.render(LOCATION)

        assert outcome.kind == OutcomeKind.REDIRECT
        assert outcome.decision.reason == DenialReason.UNAUTHENTICATED
        assert outcome.location == f"/auth/login?from={ENCODED_LOCATION}"

    @pytest.mark.asyncio
    async def test_not_premium_route_redirects_to_billing(self, mock_client, session_payloads):
        mock_client.get_session.return_value = session_payloads["free_user"]
        gate = _gate(mock_client, required_feature="smart_buyer", mode=GateMode.ROUTE)

        await gate.settle()
        outcome = gate.render(LOCATION)

        assert outcome.kind == OutcomeKind.REDIRECT
        assert outcome.decision == GateDecision.deny(DenialReason.NOT_PREMIUM)
        assert outcome.location == f"/billing?from={ENCODED_LOCATION}"

    @pytest.mark.asyncio
    async def test_not_premium_widget_renders_upsell(self, mock_client):
        """Primary 500, usage says free: inline upsell carrying the location."""
        mock_client.get_session.side_effect = SessionApiServerError(status_code=500)
        mock_client.get_watchlist_usage.return_value = {"is_premium": False, "max": 3}
        gate = _gate(mock_client, require_premium=True, mode=GateMode.WIDGET)

        await gate.settle()
        outcome = gate.render(LOCATION)

        assert outcome.kind == OutcomeKind.FALLBACK
        assert outcome.decision == GateDecision.deny(DenialReason.NOT_PREMIUM)
        assert 'data-gate="upsell"' in outcome.body
        assert f"/billing?from={ENCODED_LOCATION}" in outcome.body

    @pytest.mark.asyncio
    async def test_resolution_error_route_redirects_to_billing(self, mock_client):
        """Both endpoints unreachable: fail closed to billing, never allow."""
        mock_client.get_session.side_effect = SessionApiConnectionError()
        gate = _gate(mock_client, require_premium=True, mode=GateMode.ROUTE)

        await gate.settle()
        outcome = gate.render(LOCATION)

        assert outcome.decision == GateDecision.deny(DenialReason.RESOLUTION_ERROR)
        assert outcome.location == f"/billing?from={ENCODED_LOCATION}"

    @pytest.mark.asyncio
    async def test_resolution_error_widget_renders_fallback(self, mock_client):
        mock_client.get_session.side_effect = SessionApiConnectionError()
        gate = _gate(mock_client, require_premium=True)

        await gate.settle()
        outcome = gate.render(LOCATION)

        assert outcome.kind == OutcomeKind.FALLBACK
        assert "ConnectionError" not in outcome.body
        assert "Connection error" not in outcome.body

    @pytest.mark.asyncio
    async def test_premium_without_table_allows_any_feature(self, mock_client):
        mock_client.get_session.return_value = {"authenticated": True, "is_premium": True}
        gate = _gate(mock_client, required_feature="anything")

        await gate.settle()

        assert gate.render(LOCATION).kind == OutcomeKind.CONTENT

    @pytest.mark.asyncio
    async def test_custom_fallback_and_callable(self, mock_client, session_payloads):
        mock_client.get_session.return_value = session_payloads["free_user"]
        gate = _gate(
            mock_client,
            required_feature="smart_buyer",
            fallback=lambda location: f"<p>locked {location}</p>",
        )

        await gate.settle()

        assert gate.render("/trades").body == "<p>locked /trades</p>"

    @pytest.mark.asyncio
    async def test_static_fallback(self, mock_client, session_payloads):
        mock_client.get_session.return_value = session_payloads["free_user"]
        gate = _gate(mock_client, require_premium=True, fallback="<p>nope</p>")

        await gate.settle()

        assert gate.render("/").body == "<p>nope</p>"

    @pytest.mark.asyncio
    async def test_empty_fallback_renders_nothing(self, mock_client, session_payloads):
        """An empty fragment is a real fallback, not a request for the default."""
        mock_client.get_session.return_value = session_payloads["free_user"]
        gate = _gate(mock_client, require_premium=True, mode=GateMode.WIDGET, fallback="")

        await gate.settle()
        outcome = gate.render("/x")

        assert outcome.kind == OutcomeKind.FALLBACK
        assert outcome.body == ""

    def test_empty_loading_fallback_renders_nothing(self, mock_client):
        gate = _gate(mock_client, require_premium=True, loading_fallback="")
        assert gate.render("/x").body == ""

    def test_loading_renders_default_skeleton(self, mock_client):
        gate = _gate(mock_client, require_premium=True)

        outcome = gate.render(LOCATION)

        assert outcome.kind == OutcomeKind.LOADING
        assert outcome.decision.kind == DecisionKind.LOADING
        assert 'data-gate="loading"' in outcome.body

    def test_loading_renders_custom_placeholder(self, mock_client):
        gate = _gate(mock_client, loading_fallback="<span>…</span>")
        assert gate.render("/").body == "<span>…</span>"

    def test_invalid_mode_rejected(self, mock_client):
        with pytest.raises(ValueError):
            _gate(mock_client, mode="modal")


class TestAccessGateLifecycle:
    """mount / settle / unmount."""

    @pytest.mark.asyncio
    async def test_mount_is_idempotent(self, mock_client, session_payloads):
        mock_client.get_session.return_value = session_payloads["flat_premium"]
        gate = _gate(mock_client, require_premium=True)

        first = gate.mount()
        second = gate.mount()
        await first

        assert first is second
        assert mock_client.get_session.await_count == 1

    @pytest.mark.asyncio
    async def test_decision_listener_sees_each_change(self, mock_client, session_payloads):
        mock_client.get_session.return_value = session_payloads["flat_premium"]
        decisions = []
        gate = _gate(mock_client, require_premium=True, on_decision=decisions.append)

        await gate.settle()

        assert [d.kind for d in decisions] == [DecisionKind.LOADING, DecisionKind.ALLOW]

    @pytest.mark.asyncio
    async def test_unmount_discards_late_result(self, mock_client):
        release = asyncio.Event()

        async def slow_session():
            await release.wait()
            return {"authenticated": True, "is_premium": True}

        mock_client.get_session.side_effect = slow_session
        gate = _gate(mock_client, require_premium=True)

        task = gate.mount()
        await asyncio.sleep(0)
        gate.unmount()
        release.set()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert gate.decision().kind == DecisionKind.LOADING

    @pytest.mark.asyncio
    async def test_unmount_after_settle_keeps_decision(self, mock_client, session_payloads):
        mock_client.get_session.return_value = session_payloads["flat_premium"]
        gate = _gate(mock_client, require_premium=True)

        await gate.settle()
        gate.unmount()

        assert gate.decision().allowed
