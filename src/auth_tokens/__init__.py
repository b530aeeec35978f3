"""
py-auth-tokens: credential lifecycle orchestration.

Keeps a stored identity/access token pair fresh and coordinates
refreshes through pluggable stores, refreshers and event notifiers.
"""

__version__ = "0.1.0"

from auth_tokens.config import (
    AuthConfig,
    TokenProviderConfig,
    assert_token_provider_config,
)
from auth_tokens.domain import (
    JWT,
    TokenPair,
    AuthTokens,
    AUTH_TOPIC,
    AuthEvent,
    TokenRefreshed,
    TokenRefreshFailed,
    AuthTokensError,
    ConfigurationError,
    InvalidTokenError,
    RefreshErrorCategory,
    TokenRefreshError,
    NetworkError,
    NotAuthorizedError,
    TokenRefreshFault,
)
from auth_tokens.infrastructure.ports import (
    TokenStorePort,
    TokenRefresherPort,
    InflightExchangeWaiter,
    EventNotifierPort,
)
from auth_tokens.refresh import TokenOrchestrator, is_token_expired
from auth_tokens.factory import create_default_orchestrator

__all__ = [
    # Version
    "__version__",
    # Config
    "AuthConfig",
    "TokenProviderConfig",
    "assert_token_provider_config",
    # Domain
    "JWT",
    "TokenPair",
    "AuthTokens",
    "AUTH_TOPIC",
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
    # Ports
    "TokenStorePort",
    "TokenRefresherPort",
    "InflightExchangeWaiter",
    "EventNotifierPort",
    # Orchestration
    "TokenOrchestrator",
    "is_token_expired",
    "create_default_orchestrator",
]
