"""
Factory functions for automatic service creation.

Implements the 'if not provided, create' pattern for wiring a
TokenOrchestrator from the environment.
"""

import logging
from typing import Optional

from auth_tokens.config import AuthConfig
from auth_tokens.infrastructure.adapters.token_store import InMemoryTokenStore
from auth_tokens.infrastructure.ports.events import EventNotifierPort
from auth_tokens.infrastructure.ports.inflight import InflightExchangeWaiter
from auth_tokens.infrastructure.ports.token_refresher import TokenRefresherPort
from auth_tokens.infrastructure.ports.token_store import TokenStorePort
from auth_tokens.refresh.orchestrator import TokenOrchestrator

logger = logging.getLogger(__name__)


def create_default_token_store() -> TokenStorePort:
    """Create a default in-memory token store."""
    return InMemoryTokenStore()


def create_default_refresher(
    auth_config: Optional[AuthConfig] = None,
) -> Optional[TokenRefresherPort]:
    """
    Create a Keycloak refresher if a token provider is configured.

    Returns None when auth is not configured or python-keycloak is not
    installed.
    """
    auth_config = auth_config or AuthConfig.from_env()
    if auth_config.token_provider is None:
        return None

    try:
        from auth_tokens.infrastructure.adapters.keycloak import (
            KeycloakTokenRefresher,
        )
    except ImportError:
        logger.warning("python-keycloak is not installed, no default refresher")
        return None

    return KeycloakTokenRefresher()


def create_default_orchestrator(
    auth_config: Optional[AuthConfig] = None,
    token_store: Optional[TokenStorePort] = None,
    token_refresher: Optional[TokenRefresherPort] = None,
    wait_for_inflight_exchange: Optional[InflightExchangeWaiter] = None,
    event_notifier: Optional[EventNotifierPort] = None,
    single_flight: bool = False,
) -> TokenOrchestrator:
    """Create a TokenOrchestrator, filling in every collaborator not provided."""
    auth_config = auth_config or AuthConfig.from_env()
    return TokenOrchestrator(
        auth_config=auth_config,
        token_store=token_store or create_default_token_store(),
        token_refresher=token_refresher or create_default_refresher(auth_config),
        wait_for_inflight_exchange=wait_for_inflight_exchange,
        event_notifier=event_notifier,
        single_flight=single_flight,
    )
