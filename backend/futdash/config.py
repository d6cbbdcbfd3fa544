"""
Runtime configuration for the dashboard gateway.

All values come from environment variables so the same build can run
against local, staging and production backends.

Usage:
    from futdash.config import get_settings

    settings = get_settings()
    settings.session_api_base_url
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

DEFAULT_SESSION_API_BASE_URL = "http://localhost:8000"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 5.0
DEFAULT_LOGIN_PATH = "/auth/login"
DEFAULT_BILLING_PATH = "/billing"
DEFAULT_PRICING_PATH = "/pricing"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    logger.warning(
        "Ignoring unrecognised boolean environment value",
        extra={"variable": name, "value": raw},
    )
    return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(
            "Ignoring non-numeric environment value",
            extra={"variable": name, "value": raw},
        )
        return default


@dataclass(frozen=True)
class GateSettings:
    """Settings for session resolution and gate redirects."""

    session_api_base_url: str = DEFAULT_SESSION_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout_seconds: float = DEFAULT_CONNECT_TIMEOUT_SECONDS
    login_path: str = DEFAULT_LOGIN_PATH
    billing_path: str = DEFAULT_BILLING_PATH
    pricing_path: str = DEFAULT_PRICING_PATH
    # Backends that omit "authenticated" are treated as logged in unless
    # this is switched off.
    assume_authenticated: bool = True

    @classmethod
    def from_env(cls) -> "GateSettings":
        return cls(
            session_api_base_url=(
                os.getenv("SESSION_API_BASE_URL") or DEFAULT_SESSION_API_BASE_URL
            ).rstrip("/"),
            timeout_seconds=_env_float("SESSION_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            connect_timeout_seconds=_env_float(
                "SESSION_API_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
            ),
            login_path=os.getenv("AUTH_LOGIN_PATH") or DEFAULT_LOGIN_PATH,
            billing_path=os.getenv("BILLING_PATH") or DEFAULT_BILLING_PATH,
            pricing_path=os.getenv("PRICING_PATH") or DEFAULT_PRICING_PATH,
            assume_authenticated=_env_bool("ENTITLEMENTS_ASSUME_AUTHENTICATED", True),
        )


@lru_cache(maxsize=1)
def get_settings() -> GateSettings:
    """Return process-wide settings, read once from the environment."""
    return GateSettings.from_env()
