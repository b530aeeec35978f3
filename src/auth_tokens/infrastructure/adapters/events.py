"""
Event Notifier Implementations.

- EventHub: topic-based listener registry for application observers
- InMemoryEventNotifier: records published events (for testing)
"""

import asyncio
import inspect
import logging
from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

from auth_tokens.domain.events import AuthEvent
from auth_tokens.infrastructure.ports.events import EventNotifierPort

logger = logging.getLogger("auth_tokens.infrastructure.adapters.events")

Listener = Callable[[AuthEvent], Any]


class EventHub(EventNotifierPort):
    """
    Fire-and-forget event hub.

    Listeners may be plain callables or coroutine functions. Coroutine
    listeners are scheduled on the running loop and never awaited by the
    publisher. A failing listener is logged and does not affect other
    listeners or the publisher.

    Usage:
        hub = EventHub()
        unsubscribe = hub.listen("auth", lambda event: print(event.event))
        ...
        unsubscribe()
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = defaultdict(list)
        self._pending: set = set()

    def listen(self, topic: str, listener: Listener) -> Callable[[], None]:
        """Register a listener. Returns a callable that removes it again."""
        self._listeners[topic].append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners.get(topic, []):
                self._listeners[topic].remove(listener)

        return unsubscribe

    def publish(self, topic: str, event: AuthEvent) -> None:
        for listener in list(self._listeners.get(topic, [])):
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    self._schedule(topic, result)
            except Exception:
                logger.exception(f"Listener on topic '{topic}' failed for {event.event}")

    def _schedule(self, topic: str, awaitable: Any) -> None:
        task = asyncio.ensure_future(awaitable)
        self._pending.add(task)
        task.add_done_callback(lambda t: self._on_done(topic, t))

    def _on_done(self, topic: str, task: "asyncio.Future") -> None:
        self._pending.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                f"Async listener on topic '{topic}' failed",
                exc_info=task.exception(),
            )

    async def drain(self) -> None:
        """Wait for scheduled async listeners to finish (for shutdown/testing)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class InMemoryEventNotifier(EventNotifierPort):
    """Records every published (topic, event) tuple."""

    def __init__(self):
        self.published: List[Tuple[str, AuthEvent]] = []

    def publish(self, topic: str, event: AuthEvent) -> None:
        self.published.append((topic, event))

    def events(self, topic: str = None) -> List[str]:
        """Event names published, optionally filtered by topic."""
        return [e.event for t, e in self.published if topic is None or t == topic]

    def clear(self) -> None:
        self.published.clear()


__all__ = [
    "EventHub",
    "InMemoryEventNotifier",
]
