"""List status: a tagged union of five frozen variants.

``ListStatus`` is a plain ``Union`` rather than a class hierarchy; consumers
branch on it with ``match`` and close the match with :func:`assert_never` so a
type checker flags any variant left unhandled::

    match status:
        case Idle() | Loading():
            ...
        case Loaded(items=items) | Exhausted(items=items):
            ...
        case Failed(items=items, error=error):
            ...
        case _:
            assert_never(status)

Each variant carries (or, for ``Idle``, implies) the item snapshot the
rendering surface should display.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Generic, TypeVar, Union

from ...errors import FetchError
from .page import EMPTY, Snapshot

T = TypeVar("T")


class StatusKind(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


@dataclass(frozen=True)
class Idle(Generic[T]):
    """No load attempted yet."""

    kind: ClassVar[StatusKind] = StatusKind.IDLE

    @property
    def items(self) -> Snapshot:
        return EMPTY


@dataclass(frozen=True)
class Loading(Generic[T]):
    """A fetch is in flight; *items* is the last known collection."""

    items: Snapshot = EMPTY
    kind: ClassVar[StatusKind] = StatusKind.LOADING


@dataclass(frozen=True)
class Loaded(Generic[T]):
    """The latest fetch succeeded.  *items* may legitimately be empty."""

    items: Snapshot = EMPTY
    kind: ClassVar[StatusKind] = StatusKind.LOADED


@dataclass(frozen=True)
class Exhausted(Generic[T]):
    """A load-more returned no items; *items* is the final collection."""

    items: Snapshot = EMPTY
    kind: ClassVar[StatusKind] = StatusKind.EXHAUSTED


@dataclass(frozen=True)
class Failed(Generic[T]):
    """A fetch raised.  Previously loaded items are retained."""

    items: Snapshot
    error: FetchError
    kind: ClassVar[StatusKind] = StatusKind.FAILED


ListStatus = Union[Idle[T], Loading[T], Loaded[T], Exhausted[T], Failed[T]]


def is_busy(status: ListStatus) -> bool:
    return isinstance(status, Loading)


def can_load_more(status: ListStatus) -> bool:
    """Whether a rendering surface should offer (or auto-trigger) load more."""
    return isinstance(status, Loaded)


def describe(status: ListStatus) -> str:
    """Short human readable summary, used by logging and the CLI."""
    count = len(status.items)
    if isinstance(status, Failed):
        return f"{status.kind.value} ({count} items): {status.error.message}"
    return f"{status.kind.value} ({count} items)"
