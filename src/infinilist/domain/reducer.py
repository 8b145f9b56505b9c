"""Pure transition function for the paginated list.

``reduce`` never performs I/O and never mutates its inputs: given the current
status and one event it returns the next status.  Deciding *what* to fetch is
kept separate in :func:`plan_fetch` so that the offset for an append is always
taken from the collection held before the fetch starts.
"""

from __future__ import annotations

from typing import assert_never

from .models.commands import (
    FetchOrigin,
    ListEvent,
    Load,
    LoadMore,
    PageArrived,
    PageFailed,
    SeedRestored,
)
from .models.page import PageRequest, append_page, as_snapshot, replace_page
from .models.status import Exhausted, Failed, ListStatus, Loaded, Loading


def plan_fetch(status: ListStatus, command: Load | LoadMore, page_size: int) -> tuple[FetchOrigin, PageRequest]:
    """Return the fetch a command triggers when applied to *status*."""
    match command:
        case Load():
            return FetchOrigin.LOAD, PageRequest.first(page_size)
        case LoadMore(limit=limit, offset=offset):
            request = PageRequest.after(status.items, page_size, limit=limit, offset=offset)
            return FetchOrigin.LOAD_MORE, request
        case _:
            assert_never(command)


def reduce(status: ListStatus, event: ListEvent) -> ListStatus:
    match event:
        case Load() | LoadMore():
            return Loading(status.items)
        case SeedRestored(items=items):
            return Loaded(as_snapshot(items))
        case PageArrived(origin=FetchOrigin.LOAD, items=items):
            return Loaded(replace_page(items))
        case PageArrived(origin=FetchOrigin.LOAD_MORE, items=items):
            if not items:
                return Exhausted(status.items)
            return Loaded(append_page(status.items, items))
        case PageFailed(error=error):
            return Failed(status.items, error)
        case _:
            raise TypeError(f"Unsupported list event: {event!r}")
