"""
Token Store Port.

Defines the interface for persisting the current token pair.
"""

from typing import Protocol, Optional

from auth_tokens.domain.value_objects import TokenPair


class TokenStorePort(Protocol):
    """
    Storage for the single authoritative token pair.

    Each operation must be atomic: a reader never observes a
    half-written pair.
    """

    async def load_tokens(self) -> Optional[TokenPair]:
        """Load the stored pair. Returns None when there is no session."""
        ...

    async def store_tokens(self, tokens: TokenPair) -> None:
        """Replace the stored pair."""
        ...

    async def clear_tokens(self) -> None:
        """Remove the stored pair."""
        ...
