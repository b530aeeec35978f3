"""
Event Notifier Port.

Fire-and-forget broadcast of lifecycle events to observers.
"""

from typing import Protocol

from auth_tokens.domain.events import AuthEvent


class EventNotifierPort(Protocol):
    """Publishes events; the publisher never consumes a result."""

    def publish(self, topic: str, event: AuthEvent) -> None:
        """Broadcast an event on a topic."""
        ...
