"""Paginated list state machine on asyncio, with no UI toolkit dependency.

Commands (``Load`` / ``LoadMore``) and fetch outcomes travel through one
ordered ``asyncio.Queue`` drained by a single consumer task.  The consumer is
the only place the status changes: a command is reduced to ``Loading``
straight away and starts a fetch task; when the fetch settles, its outcome is
posted back onto the queue and reduced in turn.  Fetches of overlapping
commands therefore run concurrently, and whichever settles last decides the
final status unless ``discard_stale_results`` is enabled.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Generic, Optional, Sequence, TypeVar

from ..application.interfaces import PageSource
from ..config import STATUS_STREAM_MAXSIZE
from ..domain.models.commands import (
    Command,
    FetchOrigin,
    Load,
    LoadMore,
    PageArrived,
    PageFailed,
    SeedRestored,
)
from ..domain.models.page import PageRequest, Snapshot, as_snapshot
from ..domain.models.status import (
    Exhausted,
    Idle,
    ListStatus,
    Loaded,
    can_load_more,
    describe,
)
from ..domain.reducer import plan_fetch, reduce
from ..errors import FetchError, MachineDisposedError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..events.list_events import (
    ListExhaustedEvent,
    ListInvalidatedEvent,
    ListReloadedEvent,
    PageLoadedEvent,
)
from ..settings.loader import ListConfig
from .base import BaseViewModel
from .signal import ObservableProperty, Signal

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_STREAM_CLOSED = object()


class StatusStream(Generic[T]):
    """Async iterator over status transitions, registered on creation.

    Ends when the machine is disposed or :meth:`close` is called.  At most
    *maxsize* unread statuses are buffered; when a reader falls behind, the
    oldest unread status is dropped so an abandoned stream cannot grow
    without bound.  ``maxsize=0`` disables the limit.
    """

    def __init__(
        self,
        owner: "PaginatedListMachine[T]",
        current: Optional[ListStatus],
        maxsize: int = STATUS_STREAM_MAXSIZE,
    ) -> None:
        if maxsize < 0:
            raise ValueError(f"maxsize must be non-negative, got {maxsize}")
        self._owner = owner
        self._queue: asyncio.Queue = asyncio.Queue()
        self._maxsize = maxsize
        self._closed = False
        self.dropped = 0
        if current is not None:
            self._queue.put_nowait(current)

    def __aiter__(self) -> "StatusStream[T]":
        return self

    async def __anext__(self) -> ListStatus:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        status = await self._queue.get()
        if status is _STREAM_CLOSED:
            raise StopAsyncIteration
        return status

    def push(self, status: ListStatus) -> None:
        if self._closed:
            return
        if self._maxsize and self._queue.qsize() >= self._maxsize:
            self._queue.get_nowait()
            self.dropped += 1
            LOGGER.debug("Status stream full; dropped oldest unread status (%d so far)", self.dropped)
        self._queue.put_nowait(status)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_STREAM_CLOSED)
        self._owner._detach_stream(self)


class PaginatedListMachine(BaseViewModel, Generic[T]):
    """Owns the list status and drives the data source.

    ``status`` is the synchronous snapshot; ``status_changed`` fires
    ``(new, old)`` for every transition; :meth:`statuses` yields the same
    transitions as an async stream.  Commands must be issued from the event
    loop the machine is bound to (the loop running when the first command is
    issued or :meth:`start` is called); other threads use
    :meth:`issue_threadsafe`.
    """

    def __init__(
        self,
        source: PageSource[T],
        config: Optional[ListConfig] = None,
        *,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
        name: str = "",
    ) -> None:
        super().__init__()
        self._source = source
        self._config = config or ListConfig()
        self._event_bus = event_bus
        self._error_handler = error_handler
        self.name = name

        initial: ListStatus = Loaded(self._config.initial_items) if self._config.seeded else Idle()
        self._status: ObservableProperty[ListStatus] = ObservableProperty(initial, name="status")
        self._seed_pending = self._config.seeded

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._queue: Optional[asyncio.Queue] = None
        self._consumer: Optional[asyncio.Task] = None
        self._fetches: set[asyncio.Task] = set()
        self._generation = 0
        self._outstanding = 0
        self._streams: list[StatusStream[T]] = []
        self._disposed = False

        if event_bus is not None:
            self.subscribe_event(event_bus, ListInvalidatedEvent, self._on_list_invalidated)

    # -- observation ---------------------------------------------------------

    @property
    def status(self) -> ListStatus:
        return self._status.value

    @property
    def status_changed(self) -> Signal:
        return self._status.changed

    @property
    def items(self) -> Snapshot:
        return self._status.value.items

    @property
    def config(self) -> ListConfig:
        return self._config

    @property
    def page_size(self) -> int:
        return self._config.page_size

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def in_flight(self) -> int:
        """Number of fetches that have not settled yet."""
        return sum(1 for task in self._fetches if not task.done())

    def statuses(self, *, include_current: bool = True, maxsize: int = STATUS_STREAM_MAXSIZE) -> StatusStream[T]:
        """Return an async iterator of status transitions.

        With *include_current* the current status is yielded first.  *maxsize*
        bounds the unread backlog (see :class:`StatusStream`).
        """
        if self._disposed:
            raise MachineDisposedError("Cannot observe a disposed list")
        stream = StatusStream(self, self.status if include_current else None, maxsize)
        self._streams.append(stream)
        return stream

    # -- commands ------------------------------------------------------------

    def start(self) -> None:
        """Bind to the running event loop without issuing a command."""
        self._ensure_started()

    def issue(self, command: Command) -> None:
        if self._disposed:
            raise MachineDisposedError("Cannot issue commands to a disposed list")
        if not isinstance(command, (Load, LoadMore)):
            raise TypeError(f"Expected Load or LoadMore, got {command!r}")
        self._ensure_started()
        LOGGER.debug("Queued %r", command)
        self._enqueue(command)

    def load(self) -> None:
        self.issue(Load())

    def load_more(self, limit: Optional[int] = None, offset: Optional[int] = None) -> None:
        self.issue(LoadMore(limit=limit, offset=offset))

    def issue_threadsafe(self, command: Command) -> None:
        """Schedule *command* on the bound loop from any thread."""
        if self._loop is None:
            raise RuntimeError("List machine is not bound to an event loop yet; call start() first")
        self._loop.call_soon_threadsafe(self._issue_quietly, command)

    async def wait_idle(self) -> None:
        """Wait until every queued event is applied and no fetch is in flight."""
        if self._queue is None:
            return
        while not self._disposed:
            await self._queue.join()
            pending = [task for task in self._fetches if not task.done()]
            if pending:
                await asyncio.wait(pending)
                continue
            # join() may wake after a fetch has already queued its outcome.
            if self._outstanding == 0:
                return

    def dispose(self) -> None:
        """Cancel outstanding work, end all streams and drop subscriptions."""
        if self._disposed:
            return
        self._disposed = True
        super().dispose()
        if self._consumer is not None:
            self._consumer.cancel()
        for task in list(self._fetches):
            task.cancel()
        for stream in list(self._streams):
            stream.close()
        self._streams.clear()
        self._status.changed.disconnect_all()
        LOGGER.debug("Disposed list machine %s", self.name or hex(id(self)))

    async def aclose(self) -> None:
        """Dispose and wait for the cancelled tasks to unwind."""
        tasks = [task for task in (self._consumer, *self._fetches) if task is not None]
        self.dispose()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # -- consumer ------------------------------------------------------------

    def _ensure_started(self) -> None:
        loop = asyncio.get_running_loop()
        if self._loop is None:
            self._loop = loop
            self._queue = asyncio.Queue()
            self._consumer = loop.create_task(self._consume(), name=f"infinilist-consumer-{self.name or id(self)}")
        elif self._loop is not loop:
            raise RuntimeError("List machine is bound to a different event loop")

    async def _consume(self) -> None:
        assert self._queue is not None
        while True:
            event = await self._queue.get()
            try:
                self._apply(event)
            except Exception:
                LOGGER.exception("Failed to apply %r", event)
            finally:
                self._outstanding -= 1
                self._queue.task_done()

    def _apply(self, event: Any) -> None:
        if self._disposed:
            return
        if isinstance(event, (Load, LoadMore)):
            self._apply_command(event)
        elif isinstance(event, (PageArrived, PageFailed)):
            self._apply_outcome(event)
        else:
            raise TypeError(f"Unexpected queue item {event!r}")

    def _apply_command(self, command: Command) -> None:
        if self._seed_pending:
            self._seed_pending = False
            if isinstance(command, Load):
                LOGGER.debug("First load on a seeded list: publishing %d seed items", len(self._config.initial_items))
                self._transition(reduce(self.status, SeedRestored(self._config.initial_items)))
                return

        if isinstance(command, LoadMore) and self._config.guard_load_more and not can_load_more(self.status):
            LOGGER.warning("Ignoring %r while list is %s", command, self.status.kind.value)
            return

        origin, request = plan_fetch(self.status, command, self._config.page_size)
        self._transition(reduce(self.status, command))
        self._generation += 1
        task = self._loop.create_task(self._fetch(origin, request, self._generation))
        self._fetches.add(task)
        task.add_done_callback(self._fetches.discard)

    async def _fetch(self, origin: FetchOrigin, request: PageRequest, generation: int) -> None:
        LOGGER.debug("Fetching %s page: limit=%d offset=%d", origin.value, request.limit, request.offset)
        try:
            page: Sequence[T] = await self._source.fetch_page(request.limit, request.offset)
            if page is None or isinstance(page, (str, bytes)):
                raise TypeError(f"Page source returned {type(page).__name__}, expected a sequence of items")
            items = as_snapshot(page)
        except Exception as exc:
            outcome: PageArrived | PageFailed = PageFailed(
                origin=origin,
                request=request,
                error=FetchError.wrap(exc),
                generation=generation,
            )
        else:
            outcome = PageArrived(origin=origin, request=request, items=items, generation=generation)
        if self._queue is not None and not self._disposed:
            self._enqueue(outcome)

    def _apply_outcome(self, outcome: PageArrived | PageFailed) -> None:
        if self._config.discard_stale_results and outcome.generation != self._generation:
            LOGGER.debug(
                "Discarding stale %s result (generation %d, latest %d)",
                outcome.origin.value,
                outcome.generation,
                self._generation,
            )
            return

        status = reduce(self.status, outcome)
        self._transition(status)

        if isinstance(outcome, PageFailed):
            self._report_failure(outcome)
        else:
            self._publish_outcome(outcome, status)

    def _transition(self, status: ListStatus) -> None:
        old = self.status
        if not self._status.set(status):
            return
        LOGGER.debug("%s -> %s", describe(old), describe(status))
        for stream in list(self._streams):
            stream.push(status)

    def _enqueue(self, event: Any) -> None:
        self._outstanding += 1
        self._queue.put_nowait(event)

    def _detach_stream(self, stream: StatusStream[T]) -> None:
        if stream in self._streams:
            self._streams.remove(stream)

    def _issue_quietly(self, command: Command) -> None:
        try:
            self.issue(command)
        except MachineDisposedError:
            LOGGER.warning("Dropped %r scheduled after the list was disposed", command)

    # -- side channels -------------------------------------------------------

    def _report_failure(self, outcome: PageFailed) -> None:
        LOGGER.debug("Fetch failed at offset %d: %s", outcome.request.offset, outcome.error.message)
        if self._error_handler is None:
            return
        self._error_handler.handle(
            outcome.error,
            ErrorSeverity.ERROR,
            context={
                "list": self.name,
                "origin": outcome.origin.value,
                "offset": outcome.request.offset,
                "limit": outcome.request.limit,
            },
        )

    def _publish_outcome(self, outcome: PageArrived, status: ListStatus) -> None:
        if self._event_bus is None:
            return
        source = self.name or "paginated_list"
        if outcome.origin is FetchOrigin.LOAD:
            event = ListReloadedEvent(count=len(outcome.items), source=source)
        elif isinstance(status, Exhausted):
            event = ListExhaustedEvent(total=len(status.items), source=source)
        else:
            event = PageLoadedEvent(
                offset=outcome.request.offset,
                limit=outcome.request.limit,
                count=len(outcome.items),
                total=len(status.items),
                source=source,
            )
        self._event_bus.publish(event)

    def _on_list_invalidated(self, event: ListInvalidatedEvent) -> None:
        if event.list_name and event.list_name != self.name:
            return
        if self._loop is None:
            LOGGER.warning("List %s invalidated before it was started; ignoring", self.name or hex(id(self)))
            return
        self.issue_threadsafe(Load())
