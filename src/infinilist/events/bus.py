import logging
import threading
import uuid
from collections import defaultdict
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional, Type

from ..config import EVENT_BUS_MAX_WORKERS
from .list_events import DomainEvent

Handler = Callable[[DomainEvent], None]


@dataclass(eq=False)
class Subscription:
    """Token for one registered handler; pass it to ``EventBus.unsubscribe``."""
    event_type: Type[DomainEvent]
    handler: Handler
    threaded: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Publish/subscribe hub for list domain events.

    Handlers registered for a base class also receive its subclasses, so a
    subscriber to :class:`DomainEvent` observes everything published.
    Handlers subscribed with ``async_=True`` run on a small thread pool that
    is created on first use.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, max_workers: int = EVENT_BUS_MAX_WORKERS):
        self._logger = logger or logging.getLogger(__name__)
        self._subscriptions: Dict[Type[DomainEvent], List[Subscription]] = defaultdict(list)
        self._max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[DomainEvent], handler: Handler, async_: bool = False) -> Subscription:
        subscription = Subscription(event_type, handler, threaded=async_)
        with self._lock:
            self._subscriptions[event_type].append(subscription)
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.cancel()
        with self._lock:
            registered = self._subscriptions.get(subscription.event_type)
            if registered and subscription in registered:
                registered.remove(subscription)

    def publish(self, event: DomainEvent) -> None:
        """Run plain handlers inline, then hand threaded ones to the pool."""
        threaded = []
        for subscription in self._matching(event):
            if subscription.threaded:
                threaded.append(subscription)
            else:
                self._invoke(subscription.handler, event)
        for subscription in threaded:
            self._pool().submit(self._invoke, subscription.handler, event)

    def publish_async(self, event: DomainEvent) -> List[Future]:
        """Run every matching handler on the pool and return the futures."""
        return [
            self._pool().submit(self._invoke, subscription.handler, event)
            for subscription in self._matching(event)
        ]

    def shutdown(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    # -- internal ----------------------------------------------------------

    def _matching(self, event: DomainEvent) -> Iterator[Subscription]:
        with self._lock:
            snapshot = [
                subscription
                for klass in type(event).__mro__
                for subscription in self._subscriptions.get(klass, ())
            ]
        return (subscription for subscription in snapshot if subscription.active)

    def _pool(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers,
                    thread_name_prefix="infinilist-events",
                )
            return self._executor

    def _invoke(self, handler: Handler, event: DomainEvent) -> None:
        try:
            handler(event)
        except Exception:
            self._logger.exception("Handler %r failed for %s", handler, type(event).__name__)
