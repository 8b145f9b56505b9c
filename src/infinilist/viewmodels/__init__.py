from .base import BaseViewModel
from .paginated_list import PaginatedListMachine, StatusStream
from .signal import ObservableProperty, Signal

__all__ = [
    "BaseViewModel",
    "ObservableProperty",
    "PaginatedListMachine",
    "Signal",
    "StatusStream",
]
