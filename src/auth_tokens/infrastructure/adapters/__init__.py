"""Concrete infrastructure adapters (stores, refreshers, notifiers)."""
# ruff: noqa: E402, F401

# Token stores (always available - Redis client is passed in)
from auth_tokens.infrastructure.adapters.token_store import (
    InMemoryTokenStore,
    RedisTokenStore,
)

# Event notifiers
from auth_tokens.infrastructure.adapters.events import (
    EventHub,
    InMemoryEventNotifier,
)

# Inflight exchange coordination
from auth_tokens.infrastructure.adapters.inflight import InflightExchange

__all__ = [
    # Token Stores
    "InMemoryTokenStore",
    "RedisTokenStore",
    # Event Notifiers
    "EventHub",
    "InMemoryEventNotifier",
    # Inflight
    "InflightExchange",
]

# Keycloak Refresher (optional - requires python-keycloak)
try:
    from auth_tokens.infrastructure.adapters.keycloak import KeycloakTokenRefresher

    HAS_KEYCLOAK = True
    __all__.append("KeycloakTokenRefresher")
except ImportError:
    HAS_KEYCLOAK = False
