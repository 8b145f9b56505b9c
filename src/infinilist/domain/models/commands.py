"""Events consumed by the list reducer.

``Load`` and ``LoadMore`` are the commands a rendering surface issues.  The
remaining events are produced internally once a fetch settles and are posted
back onto the machine's queue so that every transition is applied by the same
consumer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

from ...errors import FetchError
from .page import EMPTY, PageRequest, Snapshot


@dataclass(frozen=True)
class Load:
    """Initial load, or a full reload from offset zero."""


@dataclass(frozen=True)
class LoadMore:
    """Fetch the next page and append it."""

    limit: Optional[int] = None
    offset: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("limit", "offset"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise TypeError(f"{name} must be an int, got {value!r}")
        if self.limit is not None and self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.offset is not None and self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")


Command = Union[Load, LoadMore]


class FetchOrigin(str, Enum):
    """Which command class started a fetch; decides replace versus append."""

    LOAD = "load"
    LOAD_MORE = "load_more"


@dataclass(frozen=True)
class SeedRestored:
    """First ``Load`` on a seeded machine: publish the seed, skip the source."""

    items: Snapshot = EMPTY


@dataclass(frozen=True)
class PageArrived:
    origin: FetchOrigin
    request: PageRequest
    items: Snapshot = EMPTY
    generation: int = 0


@dataclass(frozen=True)
class PageFailed:
    origin: FetchOrigin
    request: PageRequest
    error: FetchError = field(default_factory=lambda: FetchError("unknown fetch failure"))
    generation: int = 0


ListEvent = Union[Load, LoadMore, SeedRestored, PageArrived, PageFailed]
