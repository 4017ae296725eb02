"""Topic-keyed notification bus with filtered multicast subscriptions.

Publishers announce newly created records; every open subscription on the
topic whose filter matches gets its own copy. Publishing never waits for
subscribers to consume anything.
"""

import asyncio
import inspect
import threading
from collections.abc import Awaitable, Callable

import structlog

from eventhub.events.base import Notification
from eventhub.events.topics import Topic
from eventhub.models.base import Record

logger = structlog.get_logger()

NotificationHandler = (
    Callable[[Notification], None] | Callable[[Notification], Awaitable[None]]
)

_CLOSED = object()


class Subscription:
    """A live registration for one topic, consumed as an async iterator.

    Each subscription owns its delivery queue, so a slow consumer only
    delays itself. Iteration ends once the subscription is closed.
    """

    def __init__(
        self,
        bus: "NotificationBus",
        topic: Topic,
        user_id: str | None = None,
        max_pending: int = 0,
    ):
        """Initialize subscription.

        Args:
            bus: Bus this subscription is registered with
            topic: Topic to receive
            user_id: Optional filter on the payload's user_id
            max_pending: Deliveries kept before dropping (0 = unbounded)
        """
        self.bus = bus
        self.topic = topic
        self.user_id = user_id
        self.max_pending = max_pending
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False
        self._loop: asyncio.AbstractEventLoop | None
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            self._loop = None

    @property
    def closed(self) -> bool:
        """Whether the subscription has been unregistered."""
        return self._closed

    @property
    def pending(self) -> int:
        """Number of delivered payloads not yet consumed."""
        return self._queue.qsize()

    def matches(self, notification: Notification) -> bool:
        """Check the subscriber's filter against a notification."""
        if self.user_id is None or not self.topic.filterable:
            return True
        return notification.user_id == self.user_id

    def deliver(self, payload: Record) -> None:
        """Hand a payload to this subscription without blocking."""
        if self._closed:
            return
        self._call_in_loop(self._offer, payload)

    def close(self) -> None:
        """Unregister from the bus and end iteration."""
        if self._closed:
            return
        self._closed = True
        self.bus.unsubscribe(self)
        self._call_in_loop(self._queue.put_nowait, _CLOSED)

    async def get(self) -> Record:
        """Wait for the next payload.

        Raises:
            StopAsyncIteration: If the subscription was closed
        """
        item = await self._queue.get()
        if item is _CLOSED:
            # Keep the marker so repeated reads also stop
            self._queue.put_nowait(_CLOSED)
            raise StopAsyncIteration
        return item

    def _offer(self, payload: Record) -> None:
        if self.max_pending and self._queue.qsize() >= self.max_pending:
            logger.warning(
                "subscription_delivery_dropped",
                topic=self.topic.value,
                user_id=self.user_id,
                pending=self._queue.qsize(),
            )
            return
        self._queue.put_nowait(payload)

    def _call_in_loop(self, func: Callable, *args) -> None:
        """Run ``func`` on the loop that owns the queue."""
        if self._loop is None:
            func(*args)
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is self._loop:
            func(*args)
        elif self._loop.is_closed():
            self._closed = True
        else:
            self._loop.call_soon_threadsafe(func, *args)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> Record:
        return await self.get()

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.close()


class NotificationBus:
    """In-process pub/sub for creation notifications.

    Features:
    - Topic-keyed registry of subscriptions
    - Per-subscriber user_id filters, evaluated independently
    - Fire-and-forget multicast (every matching subscriber gets a copy)
    - Callback listeners with error isolation
    """

    def __init__(self, queue_size: int = 0):
        """Initialize notification bus.

        Args:
            queue_size: Pending deliveries per subscription (0 = unbounded)
        """
        self._subscriptions: dict[Topic, list[Subscription]] = {}
        self._listeners: dict[Topic, list[NotificationHandler]] = {}
        self._queue_size = queue_size
        self._lock = threading.Lock()
        self._tasks: set[asyncio.Task] = set()

    def subscribe(self, topic: Topic, user_id: str | None = None) -> Subscription:
        """Open a subscription on a topic.

        Only notifications published after this call are delivered.

        Args:
            topic: Topic to receive
            user_id: Deliver only payloads whose user_id equals this value

        Returns:
            Subscription to iterate for payloads
        """
        user_filter = str(user_id) if user_id not in (None, "") else None
        subscription = Subscription(
            self, topic, user_id=user_filter, max_pending=self._queue_size
        )
        with self._lock:
            self._subscriptions.setdefault(topic, []).append(subscription)
        logger.debug("subscription_opened", topic=topic.value, user_id=user_filter)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription from the registry."""
        with self._lock:
            subscriptions = self._subscriptions.get(subscription.topic, [])
            if subscription not in subscriptions:
                return
            subscriptions.remove(subscription)
        if not subscription.closed:
            subscription.close()
        logger.debug("subscription_closed", topic=subscription.topic.value)

    def add_listener(self, topic: Topic, handler: NotificationHandler) -> None:
        """Register a callback run for every notification on ``topic``."""
        with self._lock:
            self._listeners.setdefault(topic, []).append(handler)

    def remove_listener(self, topic: Topic, handler: NotificationHandler) -> None:
        """Remove a callback registered with :meth:`add_listener`."""
        with self._lock:
            try:
                self._listeners.get(topic, []).remove(handler)
            except ValueError:
                pass  # Handler wasn't registered

    def publish(self, notification: Notification) -> None:
        """Deliver a notification to every matching subscriber.

        Returns immediately; consumption happens on the subscribers' side.
        A failing filter or listener is logged and skipped.
        """
        topic = notification.topic
        with self._lock:
            subscriptions = list(self._subscriptions.get(topic, []))
            listeners = list(self._listeners.get(topic, []))

        delivered = 0
        for subscription in subscriptions:
            try:
                if not subscription.matches(notification):
                    continue
            except Exception as e:
                logger.error(
                    "subscription_filter_failed", topic=topic.value, error=str(e)
                )
                continue
            subscription.deliver(notification.payload)
            delivered += 1

        for handler in listeners:
            self._run_listener(handler, notification)

        logger.debug(
            "notification_published",
            topic=topic.value,
            record_id=notification.payload.id,
            subscribers=len(subscriptions),
            delivered=delivered,
        )

    def _run_listener(
        self,
        handler: NotificationHandler,
        notification: Notification,
    ) -> None:
        """Start a listener without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if inspect.iscoroutinefunction(handler):
            if loop is None:
                logger.warning(
                    "listener_skipped_no_loop", topic=notification.topic.value
                )
                return
            task = loop.create_task(self._guard(handler, notification))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return

        try:
            handler(notification)
        except Exception as e:
            logger.error(
                "listener_failed", topic=notification.topic.value, error=str(e)
            )

    async def _guard(
        self,
        handler: Callable[[Notification], Awaitable[None]],
        notification: Notification,
    ) -> None:
        """Run an async listener, logging instead of raising."""
        try:
            await handler(notification)
        except Exception as e:
            logger.error(
                "listener_failed", topic=notification.topic.value, error=str(e)
            )

    async def drain(self) -> None:
        """Wait for listener tasks started so far."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Close every open subscription."""
        with self._lock:
            subscriptions = [s for subs in self._subscriptions.values() for s in subs]
        for subscription in subscriptions:
            subscription.close()

    def subscriber_count(self, topic: Topic) -> int:
        """Get number of open subscriptions for a topic."""
        with self._lock:
            return len(self._subscriptions.get(topic, []))
