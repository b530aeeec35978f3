"""
Token orchestration.

Encapsulates the decision of whether to:
- Return the cached tokens (still valid)
- Refresh the tokens (expired or refresh forced)
- Report that there is no session (not configured, nothing stored,
  or the refresh credential was rejected)
"""

import logging
from typing import Optional, Tuple

from auth_tokens.config import AuthConfig, assert_token_provider_config
from auth_tokens.domain.errors import (
    AuthTokensError,
    ConfigurationError,
    RefreshErrorCategory,
    categorize,
)
from auth_tokens.domain.events import AUTH_TOPIC, TokenRefreshed, TokenRefreshFailed
from auth_tokens.domain.value_objects import AuthTokens, TokenPair
from auth_tokens.infrastructure.adapters.events import EventHub
from auth_tokens.infrastructure.ports.events import EventNotifierPort
from auth_tokens.infrastructure.ports.inflight import (
    InflightExchangeWaiter,
    no_inflight_exchange,
)
from auth_tokens.infrastructure.ports.token_refresher import TokenRefresherPort
from auth_tokens.infrastructure.ports.token_store import TokenStorePort
from auth_tokens.refresh.expiry import is_jwt_expired
from auth_tokens.refresh.single_flight import SingleFlight

logger = logging.getLogger(__name__)


class TokenOrchestrator:
    """
    Keeps the stored token pair fresh.

    The orchestrator holds no token state of its own: every call reads
    the store, and a successful refresh is the only path that writes a
    new pair to it.

    Collaborators can be passed to the constructor or set later:
        orchestrator = TokenOrchestrator()
        orchestrator.set_auth_config(AuthConfig.from_env())
        orchestrator.set_token_store(InMemoryTokenStore())
        orchestrator.set_token_refresher(KeycloakTokenRefresher())

        tokens = await orchestrator.get_tokens()

    With single_flight=True, concurrent callers holding the same stale
    pair share one refresh instead of each calling the refresher.
    """

    def __init__(
        self,
        auth_config: Optional[AuthConfig] = None,
        token_store: Optional[TokenStorePort] = None,
        token_refresher: Optional[TokenRefresherPort] = None,
        wait_for_inflight_exchange: Optional[InflightExchangeWaiter] = None,
        event_notifier: Optional[EventNotifierPort] = None,
        single_flight: bool = False,
    ):
        self.auth_config = auth_config or AuthConfig()
        self.token_store = token_store
        self.token_refresher = token_refresher
        self.wait_for_inflight_exchange = (
            wait_for_inflight_exchange or no_inflight_exchange
        )
        self.event_notifier = event_notifier or EventHub()
        self._single_flight = SingleFlight() if single_flight else None

    @property
    def single_flight(self) -> bool:
        return self._single_flight is not None

    def set_auth_config(self, auth_config: AuthConfig) -> None:
        self.auth_config = auth_config

    def set_token_store(self, token_store: TokenStorePort) -> None:
        self.token_store = token_store

    def set_token_refresher(self, token_refresher: TokenRefresherPort) -> None:
        self.token_refresher = token_refresher

    def set_wait_for_inflight_exchange(self, waiter: InflightExchangeWaiter) -> None:
        self.wait_for_inflight_exchange = waiter

    def set_event_notifier(self, event_notifier: EventNotifierPort) -> None:
        self.event_notifier = event_notifier

    async def get_tokens(self, force_refresh: bool = False) -> Optional[AuthTokens]:
        """
        Return the current tokens, refreshing them first if needed.

        Args:
            force_refresh: Refresh even if the stored tokens are still valid

        Returns:
            AuthTokens (access and id token only), or None when there
            is no session

        Raises:
            NetworkError: If the refresh could not reach the provider
                (stored tokens are kept)
            TokenRefreshError: Or any other refresher failure except
                NotAuthorizedError (stored tokens are cleared)
        """
        try:
            assert_token_provider_config(
                getattr(self.auth_config, "token_provider", None)
            )
        except ConfigurationError:
            # Token provider not configured, or no auth config at all
            return None

        store = self._require_store()

        await self.wait_for_inflight_exchange()
        tokens = await store.load_tokens()

        if tokens is None:
            return None

        id_token_expired, access_token_expired = self._expiry(tokens)

        if force_refresh or id_token_expired or access_token_expired:
            logger.debug(
                "Refreshing tokens (forced=%s, id_expired=%s, access_expired=%s)",
                force_refresh,
                id_token_expired,
                access_token_expired,
            )
            tokens = await self._refresh(tokens)

            if tokens is None:
                return None

        return tokens.to_auth_tokens()

    async def _refresh(self, tokens: TokenPair) -> Optional[TokenPair]:
        if self._single_flight is None:
            return await self._refresh_tokens(tokens)

        key = tokens.refresh_token or tokens.access_token.raw
        return await self._single_flight.run(
            key, lambda: self._refresh_if_current(tokens)
        )

    async def _refresh_if_current(self, tokens: TokenPair) -> Optional[TokenPair]:
        """
        Refresh only while the store still holds the caller's snapshot.

        A snapshot loaded just before another refresh wrote its result
        carries a refresh token that may already be rotated. Using it
        would be rejected and end the fresh session.
        """
        current = await self._require_store().load_tokens()

        if current is None:
            logger.debug("Tokens cleared while waiting to refresh")
            return None

        if current != tokens and not any(self._expiry(current)):
            logger.debug("Stored tokens already refreshed, skipping refresh")
            return current

        return await self._refresh_tokens(current)

    @staticmethod
    def _expiry(tokens: TokenPair) -> Tuple[bool, bool]:
        """Return (id_token_expired, access_token_expired)."""
        drift = tokens.effective_clock_drift
        id_token_expired = tokens.id_token is not None and is_jwt_expired(
            tokens.id_token, drift
        )
        return id_token_expired, is_jwt_expired(tokens.access_token, drift)

    async def _refresh_tokens(self, tokens: TokenPair) -> Optional[TokenPair]:
        refresher = self._require_refresher()

        try:
            new_tokens = await refresher.refresh(tokens, self.auth_config)
        except Exception as e:
            return await self._handle_refresh_error(e)

        if new_tokens.clock_drift is None and tokens.clock_drift is not None:
            new_tokens = TokenPair(
                access_token=new_tokens.access_token,
                id_token=new_tokens.id_token,
                refresh_token=new_tokens.refresh_token,
                clock_drift=tokens.clock_drift,
            )

        await self.set_tokens(new_tokens)
        self.event_notifier.publish(AUTH_TOPIC, TokenRefreshed())
        logger.info(f"Tokens refreshed for subject: {new_tokens.access_token.sub}")

        return new_tokens

    async def _handle_refresh_error(self, error: Exception) -> None:
        category = categorize(error)

        if category is not RefreshErrorCategory.NETWORK:
            await self.clear_tokens()

        if category is RefreshErrorCategory.UNAUTHORIZED:
            logger.info("Refresh token rejected, session ended")
            return None

        logger.warning(f"Token refresh failed ({category.value}): {error}")
        self.event_notifier.publish(AUTH_TOPIC, TokenRefreshFailed.from_error(error))
        raise error

    async def set_tokens(self, tokens: TokenPair) -> None:
        await self._require_store().store_tokens(tokens)

    async def clear_tokens(self) -> None:
        await self._require_store().clear_tokens()

    def _require_store(self) -> TokenStorePort:
        if self.token_store is None:
            raise AuthTokensError("Token store is not set", "TOKEN_STORE_NOT_SET")
        return self.token_store

    def _require_refresher(self) -> TokenRefresherPort:
        if self.token_refresher is None:
            raise AuthTokensError(
                "Token refresher is not set", "TOKEN_REFRESHER_NOT_SET"
            )
        return self.token_refresher
