"""
Poll change feed

In-process publish/subscribe for poll vote changes. Subscribers get an
asyncio queue bound to their event loop; publish() may be called from any
thread. Events only tell clients to refetch, they carry no tallies.
"""
import asyncio
import threading
import logging
from dataclasses import dataclass, field
from typing import Dict, List

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Subscription:
    poll_id: str
    loop: asyncio.AbstractEventLoop
    queue: asyncio.Queue = field(default_factory=asyncio.Queue)


class PollEventBroker:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscribers: Dict[str, List[Subscription]] = {}

    def subscribe(self, poll_id: str) -> Subscription:
        """Register a subscriber. Must be called from inside a running event loop."""
        subscription = Subscription(poll_id=poll_id, loop=asyncio.get_running_loop())
        with self._lock:
            self._subscribers.setdefault(poll_id, []).append(subscription)
        logger.debug(f"Subscribed to poll {poll_id}")
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        with self._lock:
            subscribers = self._subscribers.get(subscription.poll_id, [])
            if subscription in subscribers:
                subscribers.remove(subscription)
            if not subscribers:
                self._subscribers.pop(subscription.poll_id, None)

    def publish(self, poll_id: str, event: dict) -> int:
        """Fan an event out to every subscriber of the poll. Returns the number notified."""
        with self._lock:
            subscribers = list(self._subscribers.get(poll_id, []))
        delivered = 0
        for subscription in subscribers:
            try:
                subscription.loop.call_soon_threadsafe(subscription.queue.put_nowait, event)
                delivered += 1
            except RuntimeError:
                # Loop already closed; the stream is gone
                self.unsubscribe(subscription)
        return delivered

    def subscriber_count(self, poll_id: str) -> int:
        with self._lock:
            return len(self._subscribers.get(poll_id, []))


poll_events = PollEventBroker()


def get_poll_events() -> PollEventBroker:
    return poll_events
