"""
Lifecycle events published by the token orchestrator.

Events are immutable records broadcast on the "auth" topic. Observers
receive them through an EventNotifierPort; nothing is returned to the
publisher.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any


AUTH_TOPIC = "auth"

TOKEN_REFRESH = "tokenRefresh"
TOKEN_REFRESH_FAILURE = "tokenRefresh_failure"


@dataclass(frozen=True)
class AuthEvent:
    """Base class for events published on the auth topic."""

    event: str = ""
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {"event": self.event, "occurred_at": self.occurred_at.isoformat()}


@dataclass(frozen=True)
class TokenRefreshed(AuthEvent):
    """Raised after a refreshed token pair has been stored."""

    event: str = TOKEN_REFRESH


@dataclass(frozen=True)
class TokenRefreshFailed(AuthEvent):
    """Raised when a refresh fails with an error that is surfaced to the caller."""

    event: str = TOKEN_REFRESH_FAILURE
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_error(cls, error: BaseException) -> "TokenRefreshFailed":
        return cls(
            error_code=getattr(error, "code", type(error).__name__),
            error_message=str(error),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["error_code"] = self.error_code
        data["error_message"] = self.error_message
        return data
