"""Page requests and immutable item snapshots.

Every collection published in a :mod:`status <infinilist.domain.models.status>`
is a ``tuple``.  The helpers below always build a new tuple, so a snapshot held
by a ``Loading`` status can never be altered by a page that lands later.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Tuple, TypeVar

T = TypeVar("T")

Snapshot = Tuple[T, ...]

EMPTY: Snapshot = ()


@dataclass(frozen=True)
class PageRequest:
    """Window of items to ask the data source for."""

    offset: int
    limit: int

    def __post_init__(self) -> None:
        if isinstance(self.offset, bool) or not isinstance(self.offset, int):
            raise TypeError(f"offset must be an int, got {self.offset!r}")
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise TypeError(f"limit must be an int, got {self.limit!r}")
        if self.offset < 0:
            raise ValueError(f"offset must be non-negative, got {self.offset}")
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")

    @classmethod
    def first(cls, page_size: int) -> "PageRequest":
        return cls(offset=0, limit=page_size)

    @classmethod
    def after(
        cls,
        items: Snapshot,
        page_size: int,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> "PageRequest":
        """Request for the page following *items*.

        Explicit *limit* / *offset* overrides win over the defaults (the
        configured page size and the number of items already held).
        """
        return cls(
            offset=len(items) if offset is None else offset,
            limit=page_size if limit is None else limit,
        )


def as_snapshot(items: Iterable[T] | None) -> Snapshot:
    if items is None:
        return EMPTY
    if isinstance(items, tuple):
        return items
    return tuple(items)


def replace_page(page: Iterable[T]) -> Snapshot:
    """Snapshot for a full reload: the fetched page replaces everything."""
    return as_snapshot(page)


def append_page(items: Snapshot, page: Iterable[T]) -> Snapshot:
    """Return ``items ++ page`` as a new snapshot, in order, without dedup."""
    page = as_snapshot(page)
    if not page:
        return items
    return items + page
