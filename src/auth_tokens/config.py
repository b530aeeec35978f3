"""
Configuration for the token orchestrator.

The orchestrator only needs to know whether a token provider is set up;
the refresher adapters read the rest (server URL, realm, client
credentials) from the same object.
"""

import os
from dataclasses import dataclass
from typing import Optional, Any

from auth_tokens.domain.errors import ConfigurationError


ENV_PREFIX = "AUTH_TOKENS_"


@dataclass
class TokenProviderConfig:
    """Identity provider settings required for token operations."""

    server_url: str  # e.g., "https://keycloak.example.com"
    realm: str
    client_id: str
    client_secret: Optional[str] = None
    scope: str = "openid"

    # TLS verification for provider calls
    verify: bool = True


@dataclass
class AuthConfig:
    """Active auth configuration. token_provider is None when auth is not set up."""

    token_provider: Optional[TokenProviderConfig] = None

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "AuthConfig":
        """
        Build configuration from AUTH_TOKENS_* environment variables.

        Returns a config without token provider if AUTH_TOKENS_SERVER_URL
        is not set.
        """
        env = os.environ if environ is None else environ
        server_url = env.get(f"{ENV_PREFIX}SERVER_URL")
        if not server_url:
            return cls()

        return cls(
            token_provider=TokenProviderConfig(
                server_url=server_url,
                realm=env.get(f"{ENV_PREFIX}REALM", ""),
                client_id=env.get(f"{ENV_PREFIX}CLIENT_ID", ""),
                client_secret=env.get(f"{ENV_PREFIX}CLIENT_SECRET") or None,
                scope=env.get(f"{ENV_PREFIX}SCOPE", "openid"),
                verify=env.get(f"{ENV_PREFIX}VERIFY", "true").lower() == "true",
            )
        )


def assert_token_provider_config(config: Any) -> TokenProviderConfig:
    """
    Check that token provider settings are present and usable.

    Returns:
        The validated TokenProviderConfig

    Raises:
        ConfigurationError: If the config is missing or malformed
    """
    if config is None:
        raise ConfigurationError()

    if not isinstance(config, TokenProviderConfig):
        raise ConfigurationError(
            f"Expected TokenProviderConfig, got {type(config).__name__}",
            "INVALID_TOKEN_PROVIDER_CONFIG",
        )

    missing = [
        name
        for name in ("server_url", "realm", "client_id")
        if not isinstance(getattr(config, name), str) or not getattr(config, name)
    ]
    if missing:
        raise ConfigurationError(
            f"Token provider config is missing: {', '.join(missing)}",
            "INVALID_TOKEN_PROVIDER_CONFIG",
            {"missing": missing},
        )

    return config
