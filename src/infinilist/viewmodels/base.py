"""BaseViewModel: subscription lifecycle shared by list view models.

Concrete view models subscribe to ``EventBus`` events through
:meth:`subscribe_event` and have them cancelled automatically by
:meth:`dispose`.
"""

from __future__ import annotations

from typing import Callable, Type

from ..events.bus import EventBus, Subscription


class BaseViewModel:

    def __init__(self) -> None:
        self._subscriptions: list[tuple[EventBus, Subscription]] = []

    def subscribe_event(
        self,
        event_bus: EventBus,
        event_type: Type,
        handler: Callable,
    ) -> Subscription:
        """Subscribe to an event type and track the subscription."""
        sub = event_bus.subscribe(event_type, handler)
        self._subscriptions.append((event_bus, sub))
        return sub

    def dispose(self) -> None:
        """Unsubscribe every tracked event subscription."""
        for bus, sub in self._subscriptions:
            bus.unsubscribe(sub)
        self._subscriptions.clear()
