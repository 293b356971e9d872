"""
Event Sinks Module

A sink is any callable that accepts one event (RecordCreated or VoteCast).
The registry calls its sink after a mutation has been fully applied and
never looks at what the sink does with the event.

Sinks:
- NullSink: discard everything
- CollectingSink: keep events in a list, for tests and local observers
- LoggingSink: write one log line per event
- QueueSink: hand events to asyncio consumers without awaiting them
- FanoutSink: deliver to several sinks
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional

from ..config.settings import settings

logger = logging.getLogger(__name__)

EventSink = Callable[[Any], None]


class NullSink:
    """Sink that discards every event."""

    def __call__(self, event: Any) -> None:
        pass


class CollectingSink:
    """
    Sink that records every event it receives, in delivery order.

    Usage:
        sink = CollectingSink()
        registry = Registry(sink=sink)
        registry.create("alice", "Doge", "https://example.com/doge.jpg")
        sink.events  # [RecordCreated(id=1, ...)]
    """

    def __init__(self):
        self.events: List[Any] = []

    def __call__(self, event: Any) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> List[Any]:
        """Return the collected events that are instances of event_type."""
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()


class LoggingSink:
    """Sink that logs each event at INFO level."""

    def __init__(self, name: str = "memevote.events"):
        self.logger = logging.getLogger(name)

    def __call__(self, event: Any) -> None:
        self.logger.info(f"{type(event).__name__}: {event}")


class QueueSink:
    """
    Sink that pushes events onto an asyncio.Queue.

    Delivery uses put_nowait, so the registry never waits for consumers.
    When the queue is full the event is dropped and a warning is logged.

    asyncio.Queue is not thread-safe. When the registry may be called from
    threads other than the consumer loop, pass that loop: events raised
    off the loop thread are then handed over with call_soon_threadsafe.

    Usage:
        sink = QueueSink()
        registry = Registry(sink=sink)
        ...
        event = await sink.queue.get()
    """

    def __init__(
            self,
            maxsize: int = None,
            queue: Optional[asyncio.Queue] = None,
            loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        """
        Initialize the sink.

        Args:
            maxsize: Queue bound (default from settings.EVENT_QUEUE_SIZE, 0 = unbounded)
            queue: Existing queue to feed instead of creating one
            loop: Loop owning the queue, for delivery from other threads
        """
        if queue is None:
            queue = asyncio.Queue(
                maxsize=maxsize if maxsize is not None else settings.EVENT_QUEUE_SIZE
            )
        self.queue = queue
        self.loop = loop
        self.dropped = 0

    def __call__(self, event: Any) -> None:
        if self.loop is not None and not self._on_loop_thread():
            self.loop.call_soon_threadsafe(self._put, event)
        else:
            self._put(event)

    def _on_loop_thread(self) -> bool:
        try:
            return asyncio.get_running_loop() is self.loop
        except RuntimeError:
            return False

    def _put(self, event: Any) -> None:
        try:
            self.queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(f"Event queue full, dropped {type(event).__name__}")


class FanoutSink:
    """
    Sink that forwards each event to several sinks in order.

    A sink that raises is logged and skipped; the remaining sinks still
    receive the event.
    """

    def __init__(self, *sinks: EventSink):
        self.sinks = list(sinks)

    def add(self, sink: EventSink) -> None:
        self.sinks.append(sink)

    def __call__(self, event: Any) -> None:
        for sink in self.sinks:
            try:
                sink(event)
            except Exception as exc:
                logger.exception(f"Event sink {sink!r} failed: {exc}")
