"""
Single-flight coordination for token refreshes.

Concurrent callers that ask for the same key share one in-flight task
instead of each starting their own.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlight:
    """
    Maps a key to the task currently computing it.

    Waiters await the shared task through asyncio.shield: a cancelled
    waiter leaves the task running for the others, so a refresh either
    completes fully or not at all.
    """

    def __init__(self):
        self._inflight: Dict[Hashable, "asyncio.Task[Any]"] = {}

    def is_inflight(self, key: Hashable) -> bool:
        return key in self._inflight

    async def run(self, key: Hashable, func: Callable[[], Awaitable[T]]) -> T:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(func())
            self._inflight[key] = task
            task.add_done_callback(lambda t: self._forget(key, t))
        else:
            logger.debug("Joining in-flight refresh")
        return await asyncio.shield(task)

    def _forget(self, key: Hashable, task: "asyncio.Task[Any]") -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        # Mark the exception as retrieved when every waiter was cancelled
        if not task.cancelled():
            task.exception()
