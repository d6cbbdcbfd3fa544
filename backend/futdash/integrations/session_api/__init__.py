"""
Session API integration.

Reads the end user's session and entitlement documents from the trading
assistant backend on their behalf.
"""

from futdash.integrations.session_api.client import (
    SessionApiClient,
    get_session_api_client,
    SESSION_ENDPOINT,
    WATCHLIST_USAGE_ENDPOINT,
)
from futdash.integrations.session_api.exceptions import (
    SessionApiError,
    SessionApiUnauthorizedError,
    SessionApiNotFoundError,
    SessionApiServerError,
    SessionApiConnectionError,
    SessionApiTimeoutError,
    SessionApiInvalidResponseError,
)

__all__ = [
    # Client
    "SessionApiClient",
    "get_session_api_client",
    "SESSION_ENDPOINT",
    "WATCHLIST_USAGE_ENDPOINT",
    # Exceptions
    "SessionApiError",
    "SessionApiUnauthorizedError",
    "SessionApiNotFoundError",
    "SessionApiServerError",
    "SessionApiConnectionError",
    "SessionApiTimeoutError",
    "SessionApiInvalidResponseError",
]
