"""Port interfaces (Protocols) for infrastructure adapters."""

from auth_tokens.infrastructure.ports.token_store import TokenStorePort
from auth_tokens.infrastructure.ports.token_refresher import TokenRefresherPort
from auth_tokens.infrastructure.ports.inflight import (
    InflightExchangeWaiter,
    no_inflight_exchange,
)
from auth_tokens.infrastructure.ports.events import EventNotifierPort

__all__ = [
    "TokenStorePort",
    "TokenRefresherPort",
    "InflightExchangeWaiter",
    "no_inflight_exchange",
    "EventNotifierPort",
]
