"""
Pytest configuration for py-auth-tokens tests.
"""

import time

import pytest
from unittest.mock import AsyncMock, MagicMock
from jose import jwt

from auth_tokens.config import AuthConfig, TokenProviderConfig
from auth_tokens.domain.value_objects import TokenPair
from auth_tokens.infrastructure.adapters.events import InMemoryEventNotifier
from auth_tokens.infrastructure.adapters.token_store import InMemoryTokenStore
from auth_tokens.infrastructure.ports.token_refresher import TokenRefresherPort
from auth_tokens.infrastructure.ports.token_store import TokenStorePort
from auth_tokens.refresh.orchestrator import TokenOrchestrator

SIGNING_KEY = "test-signing-key"


# -----------------------------------------------------------------------------
# TOKENS
# -----------------------------------------------------------------------------


@pytest.fixture
def make_token():
    """Build a signed JWT expiring `expires_in` seconds from now."""

    def _make(expires_in: int = 3600, sub: str = "user-123", **claims) -> str:
        now = int(time.time())
        payload = {"sub": sub, "iat": now, "exp": now + expires_in}
        payload.update(claims)
        return jwt.encode(payload, SIGNING_KEY, algorithm="HS256")

    return _make


@pytest.fixture
def make_pair(make_token):
    """Build a TokenPair with configurable expiries."""

    def _make(
        access_expires_in: int = 3600,
        id_expires_in: int = 3600,
        with_id_token: bool = True,
        refresh_token: str = "refresh-1",
        clock_drift=None,
        sub: str = "user-123",
    ) -> TokenPair:
        return TokenPair.from_raw(
            access_token=make_token(access_expires_in, sub),
            id_token=make_token(id_expires_in, sub) if with_id_token else None,
            refresh_token=refresh_token,
            clock_drift=clock_drift,
        )

    return _make


# -----------------------------------------------------------------------------
# CONFIG
# -----------------------------------------------------------------------------


@pytest.fixture
def provider_config():
    return TokenProviderConfig(
        server_url="http://keycloak",
        realm="test-realm",
        client_id="test-client",
    )


@pytest.fixture
def auth_config(provider_config):
    return AuthConfig(token_provider=provider_config)


# -----------------------------------------------------------------------------
# COLLABORATORS
# -----------------------------------------------------------------------------


@pytest.fixture
def token_store():
    return InMemoryTokenStore()


@pytest.fixture
def mock_store():
    mock = MagicMock(spec=TokenStorePort)
    mock.load_tokens = AsyncMock(return_value=None)
    mock.store_tokens = AsyncMock()
    mock.clear_tokens = AsyncMock()
    return mock


@pytest.fixture
def mock_refresher():
    mock = MagicMock(spec=TokenRefresherPort)
    mock.refresh = AsyncMock()
    return mock


@pytest.fixture
def notifier():
    return InMemoryEventNotifier()


@pytest.fixture
def orchestrator(auth_config, token_store, mock_refresher, notifier):
    return TokenOrchestrator(
        auth_config=auth_config,
        token_store=token_store,
        token_refresher=mock_refresher,
        event_notifier=notifier,
    )
