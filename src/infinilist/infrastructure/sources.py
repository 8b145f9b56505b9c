"""Concrete page sources.

``CallablePageSource`` adapts any sync or async ``fetch(limit, offset)``
callable.  ``SequencePageSource`` serves pages from an in-memory sequence and
can inject failures and latency, which makes it the workhorse of the CLI demo
and of the test-suite.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Collection, Generic, List, Sequence, TypeVar, Union

from ..errors import FetchError

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

FetchCallable = Callable[[int, int], Union[Sequence[T], Awaitable[Sequence[T]]]]


class CallablePageSource(Generic[T]):
    """Wrap a ``fetch(limit, offset)`` callable as a :class:`PageSource`.

    Blocking callables are executed with :func:`asyncio.to_thread` so the
    event loop keeps processing commands while a page is fetched.
    """

    def __init__(self, fetch: FetchCallable, *, run_in_thread: bool = True) -> None:
        self._fetch = fetch
        self._run_in_thread = run_in_thread

    async def fetch_page(self, limit: int, offset: int) -> Sequence[T]:
        if inspect.iscoroutinefunction(self._fetch):
            return await self._fetch(limit, offset)
        if self._run_in_thread:
            result: Any = await asyncio.to_thread(self._fetch, limit, offset)
        else:
            result = self._fetch(limit, offset)
        if inspect.isawaitable(result):
            result = await result
        return result


class SequencePageSource(Generic[T]):
    """Serve slices of an in-memory sequence.

    *fail_at* lists offsets whose fetch raises :class:`FetchError`; *delay*
    simulates network latency in seconds.  Every request is recorded on
    :attr:`requests` as ``(limit, offset)``.
    """

    def __init__(
        self,
        items: Sequence[T],
        *,
        fail_at: Collection[int] = (),
        delay: float = 0.0,
    ) -> None:
        self._items = list(items)
        self._fail_at = set(fail_at)
        self._delay = delay
        self.requests: List[tuple[int, int]] = []

    @classmethod
    def generated(cls, total: int, factory: Callable[[int], T] = lambda i: f"Item {i + 1}", **kwargs) -> "SequencePageSource[T]":
        return cls([factory(index) for index in range(total)], **kwargs)

    @property
    def total(self) -> int:
        return len(self._items)

    def break_at(self, offset: int) -> None:
        self._fail_at.add(offset)

    def heal(self, offset: int | None = None) -> None:
        if offset is None:
            self._fail_at.clear()
        else:
            self._fail_at.discard(offset)

    async def fetch_page(self, limit: int, offset: int) -> Sequence[T]:
        self.requests.append((limit, offset))
        if self._delay:
            await asyncio.sleep(self._delay)
        if offset in self._fail_at:
            LOGGER.debug("Injected failure at offset %d", offset)
            raise FetchError(f"Simulated failure at offset {offset}")
        return self._items[offset : offset + limit]
