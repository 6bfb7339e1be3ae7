"""Publish/subscribe channel for import notifications.

One EventBus is created per application and handed to whatever needs
it (services, API dependencies). Nothing in this package keeps a
module-level bus.

Example:
    >>> bus = EventBus()
    >>> bus.subscribe(IMPORT_PARSED, lambda preview: print(preview.format_id))
    >>> bus.publish(IMPORT_PARSED, preview)
"""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

IMPORT_PARSED = "import.parsed"
IMPORT_FAILED = "import.failed"

Handler = Callable[[Any], None]


class EventBus:
    """Synchronous topic-based event bus.

    Handlers run in subscription order on the publisher's thread. A
    handler that raises is logged and skipped; it never breaks the
    publisher or the remaining handlers.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = {}

    def subscribe(self, topic: str, handler: Handler) -> None:
        """Register a handler for a topic.

        Subscribing the same handler twice to one topic is a no-op.
        """
        handlers = self._handlers.setdefault(topic, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, topic: str, handler: Handler) -> None:
        """Remove a handler from a topic (missing handlers are ignored)."""
        handlers = self._handlers.get(topic)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def publish(self, topic: str, payload: Any = None) -> int:
        """Deliver a payload to every handler of a topic.

        Args:
            topic: Topic name (e.g., IMPORT_PARSED)
            payload: Object passed to each handler

        Returns:
            Number of handlers that completed without raising
        """
        delivered = 0
        for handler in list(self._handlers.get(topic, ())):
            try:
                handler(payload)
            except Exception as e:
                logger.warning(
                    "Event handler failed",
                    extra={"topic": topic, "error_type": type(e).__name__},
                )
                continue
            delivered += 1
        return delivered

    def get_topics(self) -> list[str]:
        """Get topics that currently have at least one handler."""
        return [topic for topic, handlers in self._handlers.items() if handlers]
