"""
Domain errors for the token lifecycle.

Refresh failures form a closed set of tagged variants so the orchestrator
can classify them by type instead of by message text:

- NetworkError:       transient, stored tokens are kept
- NotAuthorizedError: the provider rejected the refresh credential
- TokenRefreshFault:  anything else
"""

from enum import Enum
from typing import Optional, Any


class AuthTokensError(Exception):
    """Base class for all auth token errors."""

    def __init__(
        self,
        message: str,
        code: str = "AUTH_TOKENS_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(AuthTokensError):
    """Raised when the token provider configuration is missing or malformed."""

    def __init__(
        self,
        message: str = "Token provider is not configured",
        code: str = "TOKEN_PROVIDER_NOT_CONFIGURED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class InvalidTokenError(AuthTokensError):
    """Raised when a raw token cannot be decoded."""

    def __init__(
        self,
        message: str = "Invalid token",
        code: str = "INVALID_TOKEN",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class RefreshErrorCategory(str, Enum):
    """Category of a refresh failure."""

    NETWORK = "network"
    UNAUTHORIZED = "unauthorized"
    OTHER = "other"


class TokenRefreshError(AuthTokensError):
    """Base class for failures raised by a token refresher."""

    category: RefreshErrorCategory = RefreshErrorCategory.OTHER

    def __init__(
        self,
        message: str = "Token refresh failed",
        code: str = "REFRESH_FAILED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class NetworkError(TokenRefreshError):
    """The refresh exchange could not reach the identity provider."""

    category = RefreshErrorCategory.NETWORK

    def __init__(
        self,
        message: str = "Network error",
        code: str = "NETWORK_ERROR",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class NotAuthorizedError(TokenRefreshError):
    """The identity provider rejected the refresh credential (revoked or expired)."""

    category = RefreshErrorCategory.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Refresh token is no longer valid",
        code: str = "NOT_AUTHORIZED",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class TokenRefreshFault(TokenRefreshError):
    """Any other refresh failure (unexpected provider response, bad payload, ...)."""

    category = RefreshErrorCategory.OTHER


def categorize(error: BaseException) -> RefreshErrorCategory:
    """
    Return the refresh category of an arbitrary exception.

    Errors outside the TokenRefreshError family count as OTHER.
    """
    if isinstance(error, TokenRefreshError):
        return error.category
    return RefreshErrorCategory.OTHER
