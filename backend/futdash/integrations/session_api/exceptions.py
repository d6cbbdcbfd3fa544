"""
Session API exceptions.

Follows the same pattern as the other integration clients: one base error
carrying the HTTP status, with a subclass per failure class the caller
needs to tell apart.
"""

from typing import Optional, Dict, Any


class SessionApiError(Exception):
    """Base exception for session API errors."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.response = response or {}

    @property
    def is_fallback_eligible(self) -> bool:
        """True for "not found" and server-side failures."""
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, status_code={self.status_code})"


class SessionApiUnauthorizedError(SessionApiError):
    """Raised when the backend reports no valid session (401)."""

    def __init__(
        self,
        message: str = "Session is not authenticated",
        **kwargs,
    ):
        super().__init__(message, status_code=401, **kwargs)


class SessionApiNotFoundError(SessionApiError):
    """Raised when the endpoint does not exist on this backend (404)."""

    def __init__(
        self,
        message: str = "Endpoint not found",
        **kwargs,
    ):
        super().__init__(message, status_code=404, **kwargs)

    @property
    def is_fallback_eligible(self) -> bool:
        return True


class SessionApiServerError(SessionApiError):
    """Raised on 5xx responses."""

    def __init__(
        self,
        message: str = "Session API server error",
        status_code: int = 500,
        **kwargs,
    ):
        super().__init__(message, status_code=status_code, **kwargs)

    @property
    def is_fallback_eligible(self) -> bool:
        return True


class SessionApiConnectionError(SessionApiError):
    """Raised when network/connection errors occur."""

    def __init__(
        self,
        message: str = "Connection error - unable to reach session API",
        **kwargs,
    ):
        super().__init__(message, **kwargs)


class SessionApiTimeoutError(SessionApiError):
    """Raised when request times out."""

    def __init__(
        self,
        message: str = "Request timed out",
        **kwargs,
    ):
        super().__init__(message, **kwargs)


class SessionApiInvalidResponseError(SessionApiError):
    """Raised when a 2xx body is not a JSON object."""

    def __init__(
        self,
        message: str = "Session API returned a malformed response",
        **kwargs,
    ):
        super().__init__(message, **kwargs)
