"""
Keycloak Token Refresher Adapter.

Implements TokenRefresherPort with the OpenID Connect refresh-token grant.
Uses python-keycloak for the exchange and python-jose (through JWT.decode)
for reading the returned tokens.
"""

import asyncio
import logging
import time
from typing import Optional, Dict, Any, Tuple

from keycloak import KeycloakOpenID
from keycloak.exceptions import (
    KeycloakConnectionError,
    KeycloakError,
)

from auth_tokens.config import AuthConfig, TokenProviderConfig, assert_token_provider_config
from auth_tokens.domain.errors import (
    ConfigurationError,
    InvalidTokenError,
    NetworkError,
    NotAuthorizedError,
    TokenRefreshFault,
)
from auth_tokens.domain.value_objects import TokenPair
from auth_tokens.infrastructure.ports.token_refresher import TokenRefresherPort

logger = logging.getLogger("auth_tokens.infrastructure.adapters.keycloak")

# OAuth2 error codes meaning the refresh credential itself is dead.
# invalid_client (a bad client secret) is a configuration fault instead.
UNAUTHORIZED_ERROR_CODES = ("invalid_grant", "unauthorized_client")


class KeycloakTokenRefresher(TokenRefresherPort):
    """
    Keycloak implementation of TokenRefresherPort.

    The blocking python-keycloak call runs in a worker thread so the
    event loop is free while the exchange is in flight.

    Example usage:
        refresher = KeycloakTokenRefresher(compute_clock_drift=True)
        orchestrator = TokenOrchestrator(
            auth_config=AuthConfig.from_env(),
            token_store=InMemoryTokenStore(),
            token_refresher=refresher,
        )
    """

    def __init__(
        self,
        keycloak_openid: Optional[KeycloakOpenID] = None,
        compute_clock_drift: bool = False,
    ):
        self._keycloak = keycloak_openid
        self._clients: Dict[Tuple[str, str, str], KeycloakOpenID] = {}
        self.compute_clock_drift = compute_clock_drift

    async def refresh(self, tokens: TokenPair, auth_config: AuthConfig) -> TokenPair:
        """
        Exchange the refresh token of the current pair for a new pair.

        Raises:
            NetworkError: If Keycloak could not be reached
            NotAuthorizedError: If the refresh token was rejected
            TokenRefreshFault: For any other failure
        """
        if not tokens.refresh_token:
            raise TokenRefreshFault("No refresh token available", "NO_REFRESH_TOKEN")

        try:
            provider = assert_token_provider_config(auth_config.token_provider)
        except ConfigurationError as e:
            raise TokenRefreshFault(e.message, e.code)

        client = self._get_client(provider)

        try:
            token_data = await asyncio.to_thread(
                client.refresh_token, tokens.refresh_token
            )
        except KeycloakConnectionError as e:
            raise NetworkError(str(e))
        except KeycloakError as e:
            if self._is_unauthorized(e):
                raise NotAuthorizedError(str(e))
            raise TokenRefreshFault(
                str(e), "REFRESH_FAILED", {"response_code": e.response_code}
            )
        except (ConnectionError, TimeoutError) as e:
            raise NetworkError(str(e))

        return self._to_token_pair(token_data, tokens)

    def _get_client(self, provider: TokenProviderConfig) -> KeycloakOpenID:
        if self._keycloak is not None:
            return self._keycloak

        key = (provider.server_url, provider.realm, provider.client_id)
        if key not in self._clients:
            self._clients[key] = KeycloakOpenID(
                server_url=provider.server_url,
                realm_name=provider.realm,
                client_id=provider.client_id,
                client_secret_key=provider.client_secret,
                verify=provider.verify,
            )
        return self._clients[key]

    @staticmethod
    def _is_unauthorized(error: KeycloakError) -> bool:
        if error.response_code not in (400, 401):
            return False
        body = error.response_body or error.error_message or b""
        if isinstance(body, bytes):
            body = body.decode("utf-8", errors="replace")
        return any(code in str(body) for code in UNAUTHORIZED_ERROR_CODES)

    def _to_token_pair(self, token_data: Dict[str, Any], current: TokenPair) -> TokenPair:
        try:
            new_tokens = TokenPair.from_raw(
                access_token=token_data["access_token"],
                id_token=token_data.get("id_token"),
                # Keycloak may not rotate the refresh token
                refresh_token=token_data.get("refresh_token") or current.refresh_token,
            )
        except (KeyError, TypeError, InvalidTokenError) as e:
            raise TokenRefreshFault(
                f"Malformed token response: {e}", "INVALID_TOKEN_RESPONSE"
            )

        if self.compute_clock_drift and new_tokens.access_token.iat is not None:
            drift = int(time.time() * 1000) - new_tokens.access_token.iat * 1000
            logger.debug(f"Computed clock drift: {drift}ms")
            return TokenPair(
                access_token=new_tokens.access_token,
                id_token=new_tokens.id_token,
                refresh_token=new_tokens.refresh_token,
                clock_drift=drift,
            )

        return new_tokens


__all__ = ["KeycloakTokenRefresher"]
