"""Domain layer for the token lifecycle."""

from auth_tokens.domain.value_objects import (
    JWT,
    TokenPair,
    AuthTokens,
)
from auth_tokens.domain.events import (
    AUTH_TOPIC,
    TOKEN_REFRESH,
    TOKEN_REFRESH_FAILURE,
    AuthEvent,
    TokenRefreshed,
    TokenRefreshFailed,
)
from auth_tokens.domain.errors import (
    AuthTokensError,
    ConfigurationError,
    InvalidTokenError,
    RefreshErrorCategory,
    TokenRefreshError,
    NetworkError,
    NotAuthorizedError,
    TokenRefreshFault,
    categorize,
)

__all__ = [
    # Value objects
    "JWT",
    "TokenPair",
    "AuthTokens",
    # Events
    "AUTH_TOPIC",
    "TOKEN_REFRESH",
    "TOKEN_REFRESH_FAILURE",
    "AuthEvent",
    "TokenRefreshed",
    "TokenRefreshFailed",
    # Errors
    "AuthTokensError",
    "ConfigurationError",
    "InvalidTokenError",
    "RefreshErrorCategory",
    "TokenRefreshError",
    "NetworkError",
    "NotAuthorizedError",
    "TokenRefreshFault",
    "categorize",
]
