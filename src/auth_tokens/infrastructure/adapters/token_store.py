"""
Token Store Adapter Implementations.

Provides backends for TokenStorePort:
- InMemoryTokenStore: For development/testing
- RedisTokenStore: For production (shared between processes)
"""

import json
import logging
from typing import Optional, Any

from auth_tokens.domain.errors import InvalidTokenError
from auth_tokens.domain.value_objects import TokenPair
from auth_tokens.infrastructure.ports.token_store import TokenStorePort

logger = logging.getLogger("auth_tokens.infrastructure.adapters.token_store")


# ═══════════════════════════════════════════════════════════════
# IN-MEMORY ADAPTER (Development/Testing)
# ═══════════════════════════════════════════════════════════════


class InMemoryTokenStore(TokenStorePort):
    """
    In-memory implementation of TokenStorePort.

    Suitable for development and testing. Tokens are lost on restart
    and not shared between processes.

    Usage:
        store = InMemoryTokenStore()
        await store.store_tokens(TokenPair.from_raw(access, id_token, refresh))
        tokens = await store.load_tokens()
    """

    def __init__(self, tokens: Optional[TokenPair] = None):
        self._tokens: Optional[TokenPair] = tokens

    async def load_tokens(self) -> Optional[TokenPair]:
        return self._tokens

    async def store_tokens(self, tokens: TokenPair) -> None:
        self._tokens = tokens
        logger.debug("Stored tokens for subject: %s", tokens.access_token.sub)

    async def clear_tokens(self) -> None:
        self._tokens = None
        logger.debug("Cleared tokens")

    def clear(self) -> None:
        """Clear stored tokens synchronously (for testing)."""
        self._tokens = None


# ═══════════════════════════════════════════════════════════════
# REDIS ADAPTER (Production)
# ═══════════════════════════════════════════════════════════════


class RedisTokenStore(TokenStorePort):
    """
    Redis implementation of TokenStorePort.

    The pair is stored as a single JSON value, so SET/GET/DEL keep
    every operation atomic.

    Requires: redis[hiredis]

    Usage:
        import redis.asyncio as redis

        client = redis.Redis.from_url("redis://localhost:6379")
        store = RedisTokenStore(client, key="my-app:alice")
    """

    def __init__(
        self,
        redis_client: Any,
        key: str = "default",
        prefix: str = "auth:tokens:",
    ):
        self._redis = redis_client
        self._key_name = key
        self._prefix = prefix

    def _key(self) -> str:
        return f"{self._prefix}{self._key_name}"

    async def load_tokens(self) -> Optional[TokenPair]:
        data = await self._redis.get(self._key())
        if data is None:
            return None

        try:
            parsed = json.loads(data)
            return TokenPair.from_dict(parsed)
        except (ValueError, KeyError, TypeError, InvalidTokenError) as e:
            # An unreadable pair cannot be refreshed either
            logger.warning(f"Discarding unreadable tokens at {self._key()}: {e}")
            return None

    async def store_tokens(self, tokens: TokenPair) -> None:
        await self._redis.set(self._key(), json.dumps(tokens.to_dict()))
        logger.debug(f"Stored tokens at {self._key()}")

    async def clear_tokens(self) -> None:
        await self._redis.delete(self._key())
        logger.debug(f"Cleared tokens at {self._key()}")


__all__ = [
    "InMemoryTokenStore",
    "RedisTokenStore",
]
