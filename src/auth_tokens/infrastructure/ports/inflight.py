"""
Inflight Exchange Port.

A waiter lets the orchestrator defer token reads until an unrelated
authorization exchange (e.g. an interactive sign-in) has finished.
"""

from typing import Awaitable, Callable


InflightExchangeWaiter = Callable[[], Awaitable[None]]


async def no_inflight_exchange() -> None:
    """Default waiter: nothing is ever in flight."""
    return None
