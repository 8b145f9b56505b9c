"""Tests for EventBus and the events a list machine publishes."""

from __future__ import annotations

import asyncio

import pytest

from infinilist.errors import FetchError
from infinilist.errors.handler import ErrorHandler, ErrorOccurredEvent, ErrorSeverity
from infinilist.events import (
    DomainEvent,
    EventBus,
    ListExhaustedEvent,
    ListInvalidatedEvent,
    ListReloadedEvent,
    PageLoadedEvent,
)
from infinilist.infrastructure.sources import SequencePageSource
from infinilist.settings.loader import ListConfig
from infinilist.viewmodels.paginated_list import PaginatedListMachine


# ---------------------------------------------------------------------------
# EventBus
# ---------------------------------------------------------------------------


class TestEventBus:
    def test_publish_to_exact_type(self):
        bus = EventBus()
        received = []
        bus.subscribe(ListExhaustedEvent, received.append)

        bus.publish(ListExhaustedEvent(total=3))
        bus.publish(ListReloadedEvent(count=1))

        assert [type(e) for e in received] == [ListExhaustedEvent]

    def test_base_class_subscription_receives_subclasses(self):
        bus = EventBus()
        received = []
        bus.subscribe(DomainEvent, received.append)

        bus.publish(ListExhaustedEvent(total=3))
        bus.publish(PageLoadedEvent(offset=0, limit=10, count=10, total=10))

        assert len(received) == 2

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        sub = bus.subscribe(ListReloadedEvent, received.append)
        bus.unsubscribe(sub)

        bus.publish(ListReloadedEvent(count=1))

        assert received == []
        assert sub.active is False

    def test_cancelled_subscription_is_skipped(self):
        bus = EventBus()
        received = []
        sub = bus.subscribe(ListReloadedEvent, received.append)
        sub.cancel()

        bus.publish(ListReloadedEvent(count=1))

        assert received == []

    def test_failing_handler_does_not_block_others(self):
        bus = EventBus()
        received = []

        def _boom(event):
            raise RuntimeError("nope")

        bus.subscribe(ListReloadedEvent, _boom)
        bus.subscribe(ListReloadedEvent, received.append)

        bus.publish(ListReloadedEvent(count=2))

        assert len(received) == 1

    def test_async_handlers_run_on_pool(self):
        bus = EventBus()
        received = []
        bus.subscribe(ListReloadedEvent, received.append, async_=True)

        futures = bus.publish_async(ListReloadedEvent(count=4))
        for future in futures:
            future.result(timeout=5)
        bus.shutdown()

        assert [e.count for e in received] == [4]


# ---------------------------------------------------------------------------
# ErrorHandler
# ---------------------------------------------------------------------------


class TestErrorHandler:
    def test_logs_publishes_and_notifies(self, caplog):
        bus = EventBus()
        published = []
        bus.subscribe(ErrorOccurredEvent, published.append)
        handler = ErrorHandler(event_bus=bus)
        ui = []
        handler.register_ui_callback(lambda message, severity: ui.append((message, severity)))

        handler.handle(FetchError("offline"), context={"offset": 10})

        assert "offline" in caplog.text
        assert published[0].context == {"offset": 10}
        assert published[0].severity is ErrorSeverity.ERROR
        assert ui == [("offline", ErrorSeverity.ERROR)]

    def test_warnings_are_not_forwarded_to_ui(self):
        handler = ErrorHandler()
        ui = []
        handler.register_ui_callback(lambda message, severity: ui.append(message))

        handler.handle(FetchError("slow"), ErrorSeverity.WARNING)

        assert ui == []


# ---------------------------------------------------------------------------
# Machine integration
# ---------------------------------------------------------------------------


class TestMachineEvents:
    @pytest.mark.asyncio
    async def test_publishes_reload_page_and_exhaustion(self):
        bus = EventBus()
        received = []
        bus.subscribe(DomainEvent, received.append)
        machine = PaginatedListMachine(
            SequencePageSource(range(15)), ListConfig(page_size=10), event_bus=bus, name="feed"
        )
        try:
            machine.load()
            await machine.wait_idle()
            machine.load_more()
            await machine.wait_idle()
            machine.load_more()
            await machine.wait_idle()
        finally:
            await machine.aclose()

        assert [type(e) for e in received] == [ListReloadedEvent, PageLoadedEvent, ListExhaustedEvent]
        reload, page, exhausted = received
        assert reload.count == 10
        assert (page.offset, page.limit, page.count, page.total) == (10, 10, 5, 15)
        assert exhausted.total == 15
        assert {e.source for e in received} == {"feed"}

    @pytest.mark.asyncio
    async def test_failure_is_reported_through_error_handler(self):
        bus = EventBus()
        errors = []
        bus.subscribe(ErrorOccurredEvent, errors.append)
        machine = PaginatedListMachine(
            SequencePageSource(range(15), fail_at={0}),
            event_bus=bus,
            error_handler=ErrorHandler(event_bus=bus),
            name="feed",
        )
        try:
            machine.load()
            await machine.wait_idle()
        finally:
            await machine.aclose()

        assert len(errors) == 1
        assert errors[0].context == {"list": "feed", "origin": "load", "offset": 0, "limit": 10}

    @pytest.mark.asyncio
    async def test_invalidation_triggers_reload(self):
        bus = EventBus()
        source = SequencePageSource(range(15))
        machine = PaginatedListMachine(source, event_bus=bus, name="feed")
        try:
            machine.load()
            await machine.wait_idle()

            bus.publish(ListInvalidatedEvent(list_name="other"))
            bus.publish(ListInvalidatedEvent(list_name="feed"))
            for _ in range(10):
                await asyncio.sleep(0)
            await machine.wait_idle()
        finally:
            await machine.aclose()

        assert source.requests == [(10, 0), (10, 0)]

    @pytest.mark.asyncio
    async def test_dispose_drops_bus_subscription(self):
        bus = EventBus()
        source = SequencePageSource(range(15))
        machine = PaginatedListMachine(source, event_bus=bus)
        machine.start()
        await machine.aclose()

        bus.publish(ListInvalidatedEvent())
        await asyncio.sleep(0)

        assert source.requests == []

    def test_invalidation_before_start_is_ignored(self, caplog):
        bus = EventBus()
        source = SequencePageSource(range(15))
        PaginatedListMachine(source, event_bus=bus, name="feed")

        bus.publish(ListInvalidatedEvent())

        assert source.requests == []
        assert "before it was started" in caplog.text
