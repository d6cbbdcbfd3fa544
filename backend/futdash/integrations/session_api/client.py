"""
Session API client for the trading assistant backend.

This client handles:
- Reading the caller's session/entitlement document (/api/auth/me)
- Reading watchlist usage, the degraded entitlement source (/api/watchlist/usage)
- Mapping HTTP status codes onto typed exceptions

The client carries the end user's credentials (Cookie / Authorization
headers forwarded from the incoming request), so it is created per request.
The underlying httpx.AsyncClient can be injected and shared.

SECURITY:
- Forwarded credentials must never be logged
"""

import logging
import time
from typing import Optional, Dict, Any

import httpx
from fastapi import Request

from futdash.config import get_settings
from futdash.integrations.session_api.exceptions import (
    SessionApiError,
    SessionApiUnauthorizedError,
    SessionApiNotFoundError,
    SessionApiServerError,
    SessionApiConnectionError,
    SessionApiTimeoutError,
    SessionApiInvalidResponseError,
)

logger = logging.getLogger(__name__)

SESSION_ENDPOINT = "/api/auth/me"
WATCHLIST_USAGE_ENDPOINT = "/api/watchlist/usage"

# Headers copied from the incoming request onto backend calls
FORWARDED_HEADERS = ("cookie", "authorization")


class SessionApiClient:
    """
    Async client for the session and usage endpoints.

    All methods are async and should be used with async/await. When an
    http_client is injected it is treated as borrowed and is not closed.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        connect_timeout: Optional[float] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize session API client.

        Args:
            base_url: Backend base URL (default: SESSION_API_BASE_URL env)
            headers: Per-user headers sent with every call (credentials)
            timeout: Request timeout in seconds
            connect_timeout: Connection timeout in seconds
            http_client: Shared httpx.AsyncClient to send requests through
        """
        settings = get_settings()
        self.base_url = (base_url or settings.session_api_base_url).rstrip("/")
        self.headers = dict(headers or {})

        if http_client is not None:
            self._client = http_client
            self._owns_client = False
        else:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    timeout if timeout is not None else settings.timeout_seconds,
                    connect=(
                        connect_timeout
                        if connect_timeout is not None
                        else settings.connect_timeout_seconds
                    ),
                ),
            )
            self._owns_client = True

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "SessionApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _get(self, endpoint: str) -> Dict[str, Any]:
        """
        GET a JSON object from the backend.

        Returns:
            Response body as dictionary

        Raises:
            SessionApiError: On any non-2xx status, transport failure or
                malformed body
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        start_time = time.time()

        try:
            response = await self._client.request(
                method="GET",
                url=url,
                headers={"Accept": "application/json", **self.headers},
            )
        except httpx.TimeoutException as e:
            logger.warning(
                "Session API timeout",
                extra={"endpoint": endpoint, "error": str(e)},
            )
            raise SessionApiTimeoutError(f"Request timeout: {e}")
        except httpx.RequestError as e:
            logger.warning(
                "Session API connection error",
                extra={"endpoint": endpoint, "error": str(e)},
            )
            raise SessionApiConnectionError(f"Connection error: {e}")

        latency_ms = int((time.time() - start_time) * 1000)
        status_code = response.status_code

        if status_code == 401:
            logger.info(
                "Session API reports unauthenticated session",
                extra={"endpoint": endpoint, "latency_ms": latency_ms},
            )
            raise SessionApiUnauthorizedError()

        if status_code == 404:
            logger.warning(
                "Session API endpoint not found",
                extra={"endpoint": endpoint, "latency_ms": latency_ms},
            )
            raise SessionApiNotFoundError(message=f"Resource not found: {endpoint}")

        if status_code >= 500:
            logger.warning(
                "Session API server error",
                extra={
                    "endpoint": endpoint,
                    "status_code": status_code,
                    "latency_ms": latency_ms,
                },
            )
            raise SessionApiServerError(
                message=f"Session API error: {status_code}",
                status_code=status_code,
            )

        if not 200 <= status_code < 300:
            logger.error(
                "Session API unexpected status",
                extra={"endpoint": endpoint, "status_code": status_code},
            )
            raise SessionApiError(
                message=f"Session API unexpected status: {status_code}",
                status_code=status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise SessionApiInvalidResponseError(
                message=f"Non-JSON body from {endpoint}: {e}",
                status_code=status_code,
            )

        if not isinstance(data, dict):
            raise SessionApiInvalidResponseError(
                message=f"Expected JSON object from {endpoint}, got {type(data).__name__}",
                status_code=status_code,
            )

        logger.debug(
            "Session API request successful",
            extra={"endpoint": endpoint, "latency_ms": latency_ms},
        )
        return data

    async def get_session(self) -> Dict[str, Any]:
        """Fetch the primary session/entitlement document."""
        return await self._get(SESSION_ENDPOINT)

    async def get_watchlist_usage(self) -> Dict[str, Any]:
        """Fetch the watchlist usage document."""
        return await self._get(WATCHLIST_USAGE_ENDPOINT)


def get_session_api_client(request: Request) -> SessionApiClient:
    """
    Factory function to create a SessionApiClient for an incoming request.

    Forwards the caller's credentials and reuses the application's shared
    httpx.AsyncClient when one has been set up on app.state.

    Args:
        request: Incoming FastAPI request

    Returns:
        Configured SessionApiClient instance
    """
    headers = {
        name: request.headers[name]
        for name in FORWARDED_HEADERS
        if name in request.headers
    }
    http_client = getattr(request.app.state, "http_client", None)
    return SessionApiClient(headers=headers, http_client=http_client)
