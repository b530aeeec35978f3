"""
Inflight exchange coordination.

Tracks externally initiated authorization exchanges (an interactive
sign-in, a code-for-token exchange) so that token reads can wait until
they have written their result.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

logger = logging.getLogger("auth_tokens.infrastructure.adapters.inflight")


class InflightExchange:
    """
    Counts exchanges in flight and releases waiters when none are left.

    The event is set while nothing is in flight, so wait() returns
    immediately in the idle state. Overlapping exchanges keep it cleared
    until the last one completes.

    Usage:
        exchange = InflightExchange()
        orchestrator.set_wait_for_inflight_exchange(exchange.wait)

        async with exchange.track():
            tokens = await sign_in(...)
            await store.store_tokens(tokens)
    """

    def __init__(self):
        self._count = 0
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def in_flight(self) -> bool:
        return self._count > 0

    def begin(self) -> None:
        """Mark an exchange as started."""
        self._count += 1
        self._idle.clear()
        logger.debug(f"Authorization exchange started ({self._count} in flight)")

    def complete(self) -> None:
        """Mark one exchange as finished (successfully or not)."""
        if self._count == 0:
            logger.warning("complete() called with no exchange in flight")
            return

        self._count -= 1
        if self._count == 0:
            self._idle.set()
        logger.debug(f"Authorization exchange completed ({self._count} in flight)")

    async def wait(self) -> None:
        """Resolve once no exchange is in flight."""
        await self._idle.wait()

    @asynccontextmanager
    async def track(self) -> AsyncIterator["InflightExchange"]:
        """Mark an exchange as in flight for the duration of the block."""
        self.begin()
        try:
            yield self
        finally:
            self.complete()


__all__ = ["InflightExchange"]
