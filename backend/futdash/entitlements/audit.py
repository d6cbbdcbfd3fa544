"""
Gate audit logging - record every premium access denial.

Provides:
- AccessDenialEvent: Structured event for a denial
- GateAuditLogger: Writes denial events to the "entitlements.audit" logger
- get_audit_logger(): Process-wide instance

Events never contain cookies, tokens or raw backend error detail.
"""

import logging
import uuid
from dataclasses import dataclass, asdict, field
from datetime import datetime, timezone
from threading import Lock
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

# Dedicated audit logger for structured logging
audit_logger = logging.getLogger("entitlements.audit")


@dataclass
class AccessDenialEvent:
    """A single denial of a gated page or widget."""

    reason: str  # DenialReason value
    mode: str  # GateMode value
    feature_name: Optional[str] = None
    require_premium: bool = False
    endpoint: Optional[str] = None
    method: Optional[str] = None
    redirect_to: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class GateAuditLogger:
    """
    Audit logger for gate denials.

    Keeps per-(reason, feature) counters so dashboards can be built from
    the log stream without re-aggregating every event.
    """

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._lock = Lock()

    def log_denial(self, event: AccessDenialEvent) -> None:
        key = f"{event.reason}:{event.feature_name or '*'}"
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1

        audit_logger.info(
            "access_denied",
            extra={
                "event_type": "access_denied",
                "audit_data": event.to_dict(),
            },
        )

    def denial_counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            self._counts.clear()


_audit_logger: Optional[GateAuditLogger] = None
_audit_logger_lock = Lock()


def get_audit_logger() -> GateAuditLogger:
    global _audit_logger
    if _audit_logger is None:
        with _audit_logger_lock:
            if _audit_logger is None:
                _audit_logger = GateAuditLogger()
    return _audit_logger
