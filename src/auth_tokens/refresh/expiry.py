"""Token expiry evaluation with clock drift compensation."""

import time
from typing import Optional

from auth_tokens.domain.value_objects import JWT


def current_time_ms() -> int:
    return int(time.time() * 1000)


def is_token_expired(
    expires_at: int,
    clock_drift: int = 0,
    now: Optional[int] = None,
) -> bool:
    """
    Check whether an expiry timestamp has been reached.

    Args:
        expires_at: Expiry in milliseconds since epoch (issuer clock)
        clock_drift: Offset in milliseconds added to expires_at
        now: Current time in milliseconds, defaults to the wall clock

    Returns:
        True if expires_at + clock_drift <= now
    """
    if now is None:
        now = current_time_ms()
    return expires_at + clock_drift <= now


def is_jwt_expired(token: JWT, clock_drift: int = 0, now: Optional[int] = None) -> bool:
    """Expiry check for a decoded token. A token without exp counts as expired."""
    return is_token_expired((token.exp or 0) * 1000, clock_drift, now)
