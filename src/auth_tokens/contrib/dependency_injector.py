"""
Dependency Injector integration for auth-tokens.

Provides an optional IoC Container with a pre-wired TokenOrchestrator.
Host applications can extend this container or use it directly.

Usage:
    from auth_tokens.contrib.dependency_injector import TokenContainer

    class AppContainer(TokenContainer):
        token_store = providers.Singleton(RedisTokenStore, redis_client=...)

    container = AppContainer()
    container.config.from_dict({
        "token_provider": {"server_url": ..., "realm": ..., "client_id": ...},
        "refresh": {"single_flight": True},
    })
    tokens = await container.orchestrator().get_tokens()
"""

from dependency_injector import containers, providers

from auth_tokens.config import AuthConfig, TokenProviderConfig
from auth_tokens.infrastructure.adapters.events import EventHub
from auth_tokens.infrastructure.adapters.inflight import InflightExchange
from auth_tokens.infrastructure.adapters.token_store import InMemoryTokenStore
from auth_tokens.refresh.orchestrator import TokenOrchestrator


def _flag(value) -> bool:
    return bool(value)


def _default(default):
    def convert(value):
        return default if value is None else value

    return convert


class TokenContainer(containers.DeclarativeContainer):
    """
    IoC Container for token services.

    External dependencies (can be overridden by host app):
    - token_store: TokenStorePort implementation (default: InMemoryTokenStore)
    - token_refresher: TokenRefresherPort implementation (default: KeycloakTokenRefresher)
    - event_notifier: EventNotifierPort implementation (default: EventHub)
    - inflight_exchange: InflightExchange shared with sign-in flows

    Config (under config.token_provider.*):
    - server_url, realm, client_id: required for token operations
    - client_secret: OAuth client secret
    - scope: requested scope (default: "openid")
    - verify: TLS verification (default: True)

    Config (under config.refresh.*):
    - single_flight: share concurrent refreshes (default: False)
    - compute_clock_drift: derive clock drift from new tokens (default: False)
    """

    config = providers.Configuration()

    auth_config = providers.Singleton(
        AuthConfig,
        token_provider=providers.Factory(
            TokenProviderConfig,
            server_url=config.token_provider.server_url,
            realm=config.token_provider.realm,
            client_id=config.token_provider.client_id,
            client_secret=config.token_provider.client_secret,
            scope=config.token_provider.scope.as_(_default("openid")),
            verify=config.token_provider.verify.as_(_default(True)),
        ),
    )

    # ═══════════════════════════════════════════════════════════════
    # DEFAULT ADAPTERS (can be overridden)
    # ═══════════════════════════════════════════════════════════════

    token_store = providers.Singleton(InMemoryTokenStore)

    token_refresher = providers.Singleton(
        "auth_tokens.infrastructure.adapters.keycloak.KeycloakTokenRefresher",
        compute_clock_drift=config.refresh.compute_clock_drift.as_(_flag),
    )

    event_notifier = providers.Singleton(EventHub)

    inflight_exchange = providers.Singleton(InflightExchange)

    # ═══════════════════════════════════════════════════════════════
    # ORCHESTRATOR
    # ═══════════════════════════════════════════════════════════════

    orchestrator = providers.Singleton(
        TokenOrchestrator,
        auth_config=auth_config,
        token_store=token_store,
        token_refresher=token_refresher,
        wait_for_inflight_exchange=inflight_exchange.provided.wait,
        event_notifier=event_notifier,
        single_flight=config.refresh.single_flight.as_(_flag),
    )
