"""Paginated "infinite scroll" list state machine."""

from .application.interfaces import PageSource
from .domain.models import (
    Exhausted,
    Failed,
    Idle,
    ListStatus,
    Load,
    LoadMore,
    Loaded,
    Loading,
    PageRequest,
    StatusKind,
    can_load_more,
    is_busy,
)
from .errors import FetchError, InfinilistError, MachineDisposedError
from .infrastructure.sources import CallablePageSource, SequencePageSource
from .settings.loader import ListConfig, config_from_mapping, load_config
from .viewmodels.paginated_list import PaginatedListMachine

__version__ = "0.1.0"

__all__ = [
    "CallablePageSource",
    "Exhausted",
    "Failed",
    "FetchError",
    "Idle",
    "InfinilistError",
    "ListConfig",
    "ListStatus",
    "Load",
    "LoadMore",
    "Loaded",
    "Loading",
    "MachineDisposedError",
    "PageRequest",
    "PageSource",
    "PaginatedListMachine",
    "SequencePageSource",
    "StatusKind",
    "can_load_more",
    "config_from_mapping",
    "is_busy",
    "load_config",
]
