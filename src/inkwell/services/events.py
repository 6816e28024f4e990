"""In-process publish/subscribe used to push comment events to GraphQL subscribers.

Events are delivered only to subscribers that are listening at publish time;
there is no history or replay.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections import defaultdict
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Any, Final

__all__ = [
    "COMMENT_ADDED",
    "COMMENT_DELETED",
    "COMMENT_UPDATED",
    "VOTE_UPDATED",
    "EventBroker",
    "get_event_broker",
]

logger = logging.getLogger(__name__)

COMMENT_ADDED: Final[str] = "COMMENT_ADDED"
COMMENT_UPDATED: Final[str] = "COMMENT_UPDATED"
COMMENT_DELETED: Final[str] = "COMMENT_DELETED"
VOTE_UPDATED: Final[str] = "VOTE_UPDATED"

_DEFAULT_QUEUE_SIZE: Final[int] = 100


@dataclass(eq=False)
class _Subscriber:
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue[Any]


class EventBroker:
    """Fan out published payloads to every live subscriber of a topic."""

    def __init__(self, queue_size: int = _DEFAULT_QUEUE_SIZE) -> None:
        self._queue_size = queue_size
        self._subscribers: dict[str, set[_Subscriber]] = defaultdict(set)
        self._lock = threading.Lock()

    def publish(self, topic: str, payload: Any) -> int:
        """Deliver ``payload`` to the current subscribers of ``topic``.

        Returns:
            Number of subscribers the payload was handed to.
        """
        with self._lock:
            subscribers = list(self._subscribers.get(topic, ()))

        try:
            current_loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        for subscriber in subscribers:
            if subscriber.loop is current_loop:
                self._offer(subscriber, topic, payload)
            else:
                subscriber.loop.call_soon_threadsafe(self._offer, subscriber, topic, payload)

        logger.debug("Published %s to %d subscriber(s)", topic, len(subscribers))
        return len(subscribers)

    async def subscribe(
        self,
        topic: str,
        predicate: Callable[[Any], bool] | None = None,
    ) -> AsyncIterator[Any]:
        """Yield payloads published to ``topic`` until the consumer stops iterating.

        Args:
            topic: Event name to listen to.
            predicate: Optional filter; payloads for which it returns False are skipped.
        """
        subscriber = _Subscriber(
            loop=asyncio.get_running_loop(),
            queue=asyncio.Queue(maxsize=self._queue_size),
        )
        with self._lock:
            self._subscribers[topic].add(subscriber)
        try:
            while True:
                payload = await subscriber.queue.get()
                if predicate is None or predicate(payload):
                    yield payload
        finally:
            with self._lock:
                self._subscribers[topic].discard(subscriber)
                if not self._subscribers[topic]:
                    del self._subscribers[topic]

    def subscriber_count(self, topic: str) -> int:
        """Return how many subscribers are listening to ``topic``."""
        with self._lock:
            return len(self._subscribers.get(topic, ()))

    @staticmethod
    def _offer(subscriber: _Subscriber, topic: str, payload: Any) -> None:
        try:
            subscriber.queue.put_nowait(payload)
        except asyncio.QueueFull:
            logger.warning("Dropping %s event for a slow subscriber", topic)


_broker = EventBroker()


def get_event_broker() -> EventBroker:
    """Return the process-wide event broker."""
    return _broker
