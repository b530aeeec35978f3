"""
Token Refresher Port.

Defines the interface for exchanging an expired token pair for a new one.
"""

from typing import Protocol

from auth_tokens.config import AuthConfig
from auth_tokens.domain.value_objects import TokenPair


class TokenRefresherPort(Protocol):
    """
    Performs the refresh exchange with the identity provider.

    Implementations handle the specifics of talking to Keycloak,
    Cognito, or other IdPs.
    """

    async def refresh(self, tokens: TokenPair, auth_config: AuthConfig) -> TokenPair:
        """
        Refresh tokens.

        Args:
            tokens: Current (usually expired) token pair
            auth_config: Active auth configuration

        Returns:
            A complete new TokenPair. Leave clock_drift as None to keep
            the drift of the current pair.

        Raises:
            NetworkError: If the provider could not be reached
            NotAuthorizedError: If the refresh credential was rejected
            TokenRefreshFault: For any other failure
        """
        ...
