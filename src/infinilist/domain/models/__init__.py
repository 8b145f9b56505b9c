from .commands import (
    Command,
    FetchOrigin,
    ListEvent,
    Load,
    LoadMore,
    PageArrived,
    PageFailed,
    SeedRestored,
)
from .page import EMPTY, PageRequest, Snapshot, append_page, as_snapshot, replace_page
from .status import (
    Exhausted,
    Failed,
    Idle,
    ListStatus,
    Loaded,
    Loading,
    StatusKind,
    can_load_more,
    describe,
    is_busy,
)

__all__ = [
    "EMPTY",
    "Command",
    "Exhausted",
    "Failed",
    "FetchOrigin",
    "Idle",
    "ListEvent",
    "ListStatus",
    "Load",
    "LoadMore",
    "Loaded",
    "Loading",
    "PageArrived",
    "PageFailed",
    "PageRequest",
    "SeedRestored",
    "Snapshot",
    "StatusKind",
    "append_page",
    "as_snapshot",
    "can_load_more",
    "describe",
    "is_busy",
    "replace_page",
]
