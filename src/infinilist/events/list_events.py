"""Domain events published by a list machine when an event bus is attached."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4


@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)
    source: str = ""


@dataclass(frozen=True, kw_only=True)
class ListReloadedEvent(DomainEvent):
    count: int = 0


@dataclass(frozen=True, kw_only=True)
class PageLoadedEvent(DomainEvent):
    offset: int = 0
    limit: int = 0
    count: int = 0
    total: int = 0


@dataclass(frozen=True, kw_only=True)
class ListExhaustedEvent(DomainEvent):
    total: int = 0


@dataclass(frozen=True, kw_only=True)
class ListInvalidatedEvent(DomainEvent):
    """Ask list machines to reload.  An empty *list_name* targets every list."""

    list_name: str = ""
