"""Tests for the list status union and the page/snapshot helpers."""

from __future__ import annotations

import dataclasses

import pytest

from infinilist.domain.models.page import (
    EMPTY,
    PageRequest,
    append_page,
    as_snapshot,
    replace_page,
)
from infinilist.domain.models.status import (
    Exhausted,
    Failed,
    Idle,
    Loaded,
    Loading,
    StatusKind,
    can_load_more,
    describe,
    is_busy,
)
from infinilist.errors import FetchError


# ---------------------------------------------------------------------------
# Status variants
# ---------------------------------------------------------------------------


class TestStatusVariants:
    def test_idle_has_no_items(self):
        assert Idle().items == ()
        assert Idle().kind is StatusKind.IDLE

    def test_kinds_are_distinct(self):
        error = FetchError("x")
        kinds = {
            Idle().kind,
            Loading().kind,
            Loaded().kind,
            Exhausted().kind,
            Failed((), error).kind,
        }
        assert len(kinds) == 5

    def test_empty_loaded_differs_from_empty_exhausted(self):
        assert Loaded(()) != Exhausted(())
        assert Loaded(()).kind is StatusKind.LOADED
        assert Exhausted(()).kind is StatusKind.EXHAUSTED

    def test_value_equality(self):
        assert Loaded((1, 2)) == Loaded((1, 2))
        assert Loading((1,)) != Loaded((1,))

    def test_statuses_are_frozen(self):
        status = Loaded((1, 2))
        with pytest.raises(dataclasses.FrozenInstanceError):
            status.items = (3,)

    def test_failed_keeps_items_and_error(self):
        error = FetchError("offline")
        status = Failed((1, 2), error)
        assert status.items == (1, 2)
        assert status.error is error

    def test_match_statement_dispatch(self):
        def label(status):
            match status:
                case Idle():
                    return "idle"
                case Loading(items=items):
                    return f"loading:{len(items)}"
                case Loaded(items=()):
                    return "empty"
                case Loaded(items=items):
                    return f"loaded:{len(items)}"
                case Exhausted():
                    return "no more"
                case Failed(error=error):
                    return f"error:{error.message}"

        assert label(Idle()) == "idle"
        assert label(Loading((1,))) == "loading:1"
        assert label(Loaded(())) == "empty"
        assert label(Loaded((1, 2))) == "loaded:2"
        assert label(Exhausted(())) == "no more"
        assert label(Failed((), FetchError("boom"))) == "error:boom"


class TestStatusHelpers:
    def test_is_busy_only_while_loading(self):
        assert is_busy(Loading())
        assert not is_busy(Loaded())
        assert not is_busy(Idle())

    def test_can_load_more_only_when_loaded(self):
        assert can_load_more(Loaded((1,)))
        assert can_load_more(Loaded(()))
        assert not can_load_more(Exhausted((1,)))
        assert not can_load_more(Loading((1,)))
        assert not can_load_more(Failed((1,), FetchError("x")))
        assert not can_load_more(Idle())

    def test_describe(self):
        assert describe(Loaded((1, 2, 3))) == "loaded (3 items)"
        assert describe(Failed((1,), FetchError("timeout"))) == "failed (1 items): timeout"


# ---------------------------------------------------------------------------
# PageRequest
# ---------------------------------------------------------------------------


class TestPageRequest:
    def test_first_page(self):
        assert PageRequest.first(10) == PageRequest(offset=0, limit=10)

    def test_after_uses_collection_length(self):
        request = PageRequest.after(("a", "b", "c"), 10)
        assert request == PageRequest(offset=3, limit=10)

    def test_after_honours_overrides(self):
        request = PageRequest.after(("a", "b"), 10, limit=4, offset=7)
        assert request == PageRequest(offset=7, limit=4)

    def test_offset_zero_override_is_respected(self):
        assert PageRequest.after(("a", "b"), 10, offset=0).offset == 0

    @pytest.mark.parametrize("offset, limit", [(-1, 10), (0, 0), (0, -5)])
    def test_rejects_out_of_range_values(self, offset, limit):
        with pytest.raises(ValueError):
            PageRequest(offset=offset, limit=limit)

    def test_rejects_non_int(self):
        with pytest.raises(TypeError):
            PageRequest(offset=0, limit=2.5)
        with pytest.raises(TypeError):
            PageRequest(offset=True, limit=1)


# ---------------------------------------------------------------------------
# Snapshot accumulation
# ---------------------------------------------------------------------------


class TestSnapshots:
    def test_as_snapshot_converts_to_tuple(self):
        assert as_snapshot([1, 2]) == (1, 2)
        assert as_snapshot(None) == EMPTY

    def test_as_snapshot_keeps_tuple_identity(self):
        items = (1, 2)
        assert as_snapshot(items) is items

    def test_append_builds_new_tuple_in_order(self):
        before = (1, 2)
        after = append_page(before, [3, 4])
        assert after == (1, 2, 3, 4)
        assert before == (1, 2)

    def test_append_keeps_duplicates(self):
        assert append_page((1, 2), [2, 1]) == (1, 2, 2, 1)

    def test_append_empty_page_returns_same_snapshot(self):
        before = (1, 2)
        assert append_page(before, []) is before

    def test_replace_discards_previous(self):
        assert replace_page(["x"]) == ("x",)

    def test_source_list_mutation_does_not_leak(self):
        page = [1, 2]
        snapshot = append_page((), page)
        page.append(3)
        assert snapshot == (1, 2)
