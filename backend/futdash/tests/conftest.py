"""
Root test configuration and fixtures.

Provides:
- settings isolation (cached settings are cleared around every test)
- session_payloads: Backend documents used across resolver and route tests
- make_mock_transport: Factory for httpx.MockTransport backends keyed by path
"""

import os
from typing import Any, Callable, Dict, Union

import httpx
import pytest

from futdash.config import get_settings
from futdash.entitlements.audit import get_audit_logger

# Set test environment
os.environ.setdefault("ENV", "test")

# Value for a path: JSON body (200), (status, body) tuple, or an exception to raise
RouteValue = Union[Dict[str, Any], tuple, Exception]


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch):
    """Drop cached settings and gate env overrides between tests."""
    for name in (
        "SESSION_API_BASE_URL",
        "SESSION_API_TIMEOUT_SECONDS",
        "SESSION_API_CONNECT_TIMEOUT_SECONDS",
        "AUTH_LOGIN_PATH",
        "BILLING_PATH",
        "PRICING_PATH",
        "ENTITLEMENTS_ASSUME_AUTHENTICATED",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    get_audit_logger().reset()
    yield
    get_settings.cache_clear()


@pytest.fixture
def session_payloads() -> Dict[str, Dict[str, Any]]:
    """Representative /api/auth/me documents."""
    return {
        "nested_premium": {
            "authenticated": True,
            "entitlements": {
                "is_premium": True,
                "features": {"smart_buyer": True},
            },
        },
        "flat_premium": {"authenticated": True, "is_premium": True},
        "free_user": {
            "authenticated": True,
            "entitlements": {
                "is_premium": False,
                "features": {"smart_buyer": False},
                "limits": {"watchlist_max": 3},
            },
        },
        "logged_out": {"authenticated": False},
    }


@pytest.fixture
def make_mock_transport() -> Callable[[Dict[str, RouteValue]], httpx.MockTransport]:
    """
    Build an httpx.MockTransport serving fixed responses per path.

    Unknown paths return 404. Every handled request is appended to
    transport.calls for later assertions.
    """

    def factory(routes: Dict[str, RouteValue]) -> httpx.MockTransport:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            route = routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, json={"detail": "Not found"})
            if isinstance(route, Exception):
                raise route
            if isinstance(route, tuple):
                status_code, body = route
                if isinstance(body, (bytes, str)):
                    return httpx.Response(status_code, content=body)
                return httpx.Response(status_code, json=body)
            return httpx.Response(200, json=route)

        transport = httpx.MockTransport(handler)
        transport.calls = calls
        return transport

    return factory
