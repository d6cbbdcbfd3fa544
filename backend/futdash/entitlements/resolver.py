"""
Entitlement resolver - reduce backend session state to one EntitlementSnapshot.

Resolution order:
    1. Primary session document (/api/auth/me)
       - 2xx  → snapshot from nested or flat entitlement fields
       - 401  → anonymous snapshot (not an error)
       - 404/5xx → step 2
    2. Watchlist usage document (/api/watchlist/usage)
       - 2xx  → degraded snapshot (authenticated, premium flag, watchlist limit)
    3. Anything else → error state

A resolver owns exactly one cycle: idle → loading → (ready | error).
Failures are reported through state, never raised to the caller.
"""

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from futdash.config import get_settings
from futdash.entitlements.models import (
    ANONYMOUS_SNAPSHOT,
    EntitlementSnapshot,
    ResolutionState,
)
from futdash.integrations.session_api import (
    SessionApiClient,
    SessionApiError,
    SessionApiUnauthorizedError,
)

logger = logging.getLogger(__name__)

StateListener = Callable[[ResolutionState], None]

WATCHLIST_LIMIT_KEY = "watchlist_max"


# ---------------------------------------------------------------------------
# Payload normalisation
# ---------------------------------------------------------------------------

def _first_present(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _normalize_features(raw: Any) -> Optional[Dict[str, bool]]:
    """Accept {key: flag} tables or plain lists of granted keys."""
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return {str(key): bool(value) for key, value in raw.items()}
    if isinstance(raw, (list, tuple)):
        return {str(key): True for key in raw}
    raise ValueError(f"Unsupported features payload type: {type(raw).__name__}")


def _normalize_limits(raw: Any) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return dict(raw)
    raise ValueError(f"Unsupported limits payload type: {type(raw).__name__}")


def snapshot_from_session(
    payload: Mapping[str, Any],
    assume_authenticated: bool = True,
) -> EntitlementSnapshot:
    """
    Build a snapshot from the primary session document.

    Nested entitlements.* fields win over their top-level equivalents.
    """
    nested = payload.get("entitlements")
    if not isinstance(nested, Mapping):
        nested = {}

    authenticated = payload.get("authenticated")
    if authenticated is None:
        authenticated = assume_authenticated

    is_premium = _first_present(nested.get("is_premium"), payload.get("is_premium"))

    return EntitlementSnapshot(
        authenticated=bool(authenticated),
        is_premium=bool(is_premium),
        features=_normalize_features(
            _first_present(nested.get("features"), payload.get("features"))
        ),
        limits=_normalize_limits(
            _first_present(nested.get("limits"), payload.get("limits"))
        ),
    )


def snapshot_from_usage(payload: Mapping[str, Any]) -> EntitlementSnapshot:
    """
    Build a degraded snapshot from the watchlist usage document.

    A successful call implies a valid session. No per-feature table is
    available, so gated features follow is_premium.
    """
    watchlist_max = payload.get("max")
    return EntitlementSnapshot(
        authenticated=True,
        is_premium=bool(payload.get("is_premium")),
        features=None,
        limits={WATCHLIST_LIMIT_KEY: watchlist_max} if watchlist_max is not None else None,
    )


# ---------------------------------------------------------------------------
# Resolver
# ---------------------------------------------------------------------------

class EntitlementResolver:
    """
    Resolve the current session's entitlements through the fallback chain.

    One instance per gate activation; there is no cross-request cache.

    Usage:
        resolver = EntitlementResolver(SessionApiClient(headers=...))
        state = await resolver.resolve()
    """

    def __init__(
        self,
        client: SessionApiClient,
        assume_authenticated: Optional[bool] = None,
    ):
        """
        Args:
            client: Session API client carrying the caller's credentials
            assume_authenticated: Value used when the session document omits
                "authenticated" (default: ENTITLEMENTS_ASSUME_AUTHENTICATED)
        """
        self._client = client
        self._assume_authenticated = (
            assume_authenticated
            if assume_authenticated is not None
            else get_settings().assume_authenticated
        )
        self._state = ResolutionState.idle()
        self._listeners: List[StateListener] = []
        self._started = False
        self._cancelled = False

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call listener on every state transition. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def cancel(self) -> None:
        """Stop accepting results; anything still in flight is discarded."""
        self._cancelled = True
        self._listeners.clear()

    def _transition(self, state: ResolutionState) -> bool:
        if self._cancelled:
            logger.debug(
                "Discarding entitlement state after cancellation",
                extra={"status": state.status.value},
            )
            return False

        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                logger.exception(
                    "Entitlement state listener failed",
                    extra={"status": state.status.value},
                )
        return True

    async def resolve(self) -> ResolutionState:
        """
        Run the resolution cycle once.

        Returns:
            The state after the cycle (or the current state if the cycle was
            already started or the resolver was cancelled)
        """
        if self._started:
            logger.debug(
                "Entitlement resolution already started; ignoring",
                extra={"status": self._state.status.value},
            )
            return self._state
        self._started = True

        if not self._transition(ResolutionState.loading()):
            return self._state

        try:
            snapshot = await self._fetch_snapshot()
        except Exception as e:
            logger.warning(
                "Entitlement resolution failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            self._transition(ResolutionState.failed(e))
            return self._state

        self._transition(ResolutionState.ready(snapshot))
        return self._state

    async def _fetch_snapshot(self) -> EntitlementSnapshot:
        try:
            payload = await self._client.get_session()
            return snapshot_from_session(payload, self._assume_authenticated)
        except SessionApiUnauthorizedError:
            return ANONYMOUS_SNAPSHOT
        except SessionApiError as e:
            if not e.is_fallback_eligible:
                raise
            logger.info(
                "Primary session endpoint unavailable, using watchlist usage",
                extra={"status_code": e.status_code},
            )

        payload = await self._client.get_watchlist_usage()
        return snapshot_from_usage(payload)
