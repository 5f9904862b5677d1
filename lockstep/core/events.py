"""In-memory event hub fanning change notifications out to stream subscribers."""
from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 10
MEDIA_CHANGED = "mediaChanged"


class Subscriber:
    """One open stream's registration: a bounded label queue and a liveness flag.

    Delivery is pushed onto the event loop that created the subscriber, so
    publishers on any thread hand labels over without blocking and in order.
    A subscriber created outside a running loop is fed directly.
    """

    __slots__ = ("_queue", "_loop", "_open")

    def __init__(self, max_queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        self._queue: asyncio.Queue[str] = asyncio.Queue(max_queue_size)
        try:
            self._loop: asyncio.AbstractEventLoop | None = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    def pending(self) -> int:
        return self._queue.qsize()

    def offer(self, label: str) -> None:
        """Queue ``label`` without waiting; a full queue drops it."""

        if self._loop is None:
            self._enqueue(label)
            return
        try:
            self._loop.call_soon_threadsafe(self._enqueue, label)
        except RuntimeError:
            # Owning loop is closed, nobody is left to read.
            self._open = False

    def _enqueue(self, label: str) -> None:
        if not self._open:
            return
        try:
            self._queue.put_nowait(label)
        except asyncio.QueueFull:
            logger.debug("Dropped %s for a subscriber with a full queue", label)

    async def get(self) -> str:
        return await self._queue.get()

    def get_nowait(self) -> str:
        return self._queue.get_nowait()

    def close(self) -> None:
        self._open = False


class EventHub:
    """Thread-safe pub/sub fan-out with bounded, non-blocking delivery."""

    def __init__(self, max_queue_size: int = DEFAULT_QUEUE_SIZE) -> None:
        if max_queue_size < 1:
            raise ValueError("max_queue_size must be at least 1")
        self._subscribers: set[Subscriber] = set()
        self._lock = threading.Lock()
        self._max_queue_size = max_queue_size

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def subscribe(self) -> Subscriber:
        subscriber = Subscriber(self._max_queue_size)
        with self._lock:
            self._subscribers.add(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.discard(subscriber)
        # Callbacks already scheduled by an in-flight broadcast see this and no-op.
        subscriber.close()

    def broadcast(self, label: str) -> int:
        """Offer ``label`` to every registered subscriber and return how many remain registered.

        Never waits on a subscriber: a full queue loses the label for that
        subscriber only.
        """

        with self._lock:
            dead = []
            for subscriber in self._subscribers:
                subscriber.offer(label)
                if not subscriber.is_open:
                    dead.append(subscriber)
            self._subscribers.difference_update(dead)
            if dead:
                logger.info("Pruned %d subscribers whose event loop has closed", len(dead))
            return len(self._subscribers)

    @asynccontextmanager
    async def listen(self) -> AsyncIterator[Subscriber]:
        """Register a subscriber for the duration of the block."""

        subscriber = self.subscribe()
        logger.info("Stream subscriber connected (%d open)", self.subscriber_count)
        try:
            yield subscriber
        finally:
            self.unsubscribe(subscriber)
            logger.info("Stream subscriber disconnected (%d open)", self.subscriber_count)
