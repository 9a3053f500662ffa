"""
Progress channel for search runs.

The scheduler publishes one event per file started. The counter increment
and the delivery to subscribers happen under one lock, so every subscriber
sees current = 1, 2, ..., N in order even though files start on many
threads. The lock is reentrant so a callback may read the channel or
change its subscribers. Delivery is best-effort: a failing subscriber
is logged and never fails the search.
"""

import queue
import threading
from typing import Callable, List, Union

from ..core import get_logger
from .models import ProgressEvent

logger = get_logger(__name__)


ProgressCallback = Callable[[ProgressEvent], None]


class ProgressChannel:
    """Monotonic progress counter with callback and queue subscribers."""

    def __init__(self, total: int = 0):
        self.total = total
        self._current = 0
        self._lock = threading.RLock()
        self._subscribers: List[Union[ProgressCallback, "queue.Queue[ProgressEvent]"]] = []

    @property
    def current(self) -> int:
        with self._lock:
            return self._current

    def subscribe(self, callback: ProgressCallback) -> None:
        """Register a callback invoked with each ProgressEvent."""
        with self._lock:
            self._subscribers.append(callback)

    def unsubscribe(self, subscriber: Union[ProgressCallback, "queue.Queue[ProgressEvent]"]) -> None:
        """Remove a callback or queue; unknown subscribers are ignored."""
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    def subscribe_queue(self, maxsize: int = 0) -> "queue.Queue[ProgressEvent]":
        """
        Register a queue that receives each ProgressEvent.

        Args:
            maxsize: Queue bound; events are dropped when a bounded queue is full.

        Returns:
            The queue to consume events from.
        """
        events: "queue.Queue[ProgressEvent]" = queue.Queue(maxsize=maxsize)
        with self._lock:
            self._subscribers.append(events)
        return events

    def reset(self, total: int) -> None:
        """Start a new run over `total` files."""
        with self._lock:
            self.total = total
            self._current = 0

    def publish(self, current_file: str) -> ProgressEvent:
        """
        Count one more started file and notify subscribers.

        Args:
            current_file: Path of the file that just started.

        Returns:
            The emitted event.
        """
        with self._lock:
            self._current += 1
            event = ProgressEvent(
                current=self._current,
                total=self.total,
                current_file=current_file
            )

            for subscriber in list(self._subscribers):
                self._deliver(subscriber, event)

        return event

    @staticmethod
    def _deliver(subscriber, event: ProgressEvent) -> None:
        if isinstance(subscriber, queue.Queue):
            try:
                subscriber.put_nowait(event)
            except queue.Full:
                logger.debug(f"Progress queue full, dropped event {event.current}/{event.total}")
            return

        try:
            subscriber(event)
        except Exception as e:
            logger.warning(f"Progress subscriber failed on event {event.current}/{event.total}: {e}")
