from .bus import EventBus, Subscription
from .list_events import (
    DomainEvent,
    ListExhaustedEvent,
    ListInvalidatedEvent,
    ListReloadedEvent,
    PageLoadedEvent,
)

__all__ = [
    "DomainEvent",
    "EventBus",
    "ListExhaustedEvent",
    "ListInvalidatedEvent",
    "ListReloadedEvent",
    "PageLoadedEvent",
    "Subscription",
]
