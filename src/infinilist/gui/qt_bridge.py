"""Qt adapter exposing a :class:`PaginatedListMachine` to PySide6 views.

The machine runs on an asyncio loop (typically in a background thread); the
bridge lives on the Qt side.  Status changes are re-emitted as a Qt signal,
which Qt queues onto the receiver's thread, and the slots hand commands back
to the machine's loop with ``issue_threadsafe``.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal, Slot

from ..domain.models.commands import Load, LoadMore
from ..domain.models.status import ListStatus, can_load_more, is_busy
from ..viewmodels.paginated_list import PaginatedListMachine

_logger = logging.getLogger(__name__)


class QtListBridge(QObject):
    """Forward list statuses to Qt and list gestures to the machine."""

    statusChanged = Signal(object)

    def __init__(self, machine: PaginatedListMachine, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._machine = machine
        self._last: ListStatus = machine.status
        self._disconnect = machine.status_changed.connect(self._on_status_changed)

    @property
    def status(self) -> ListStatus:
        return self._last

    @Slot()
    def load(self) -> None:
        """Initial load or pull-to-refresh."""
        self._machine.issue_threadsafe(Load())

    @Slot()
    def loadMore(self) -> None:
        """Scroll-near-end or "Load more" button."""
        if not can_load_more(self._last):
            _logger.debug("loadMore ignored while list is %s", self._last.kind.value)
            return
        self._machine.issue_threadsafe(LoadMore())

    @Slot(result=bool)
    def canLoadMore(self) -> bool:
        return can_load_more(self._last)

    @Slot(result=bool)
    def isBusy(self) -> bool:
        return is_busy(self._last)

    def detach(self) -> None:
        """Stop forwarding statuses; the machine itself is left untouched."""
        self._disconnect()

    def _on_status_changed(self, new: ListStatus, old: ListStatus) -> None:
        self._last = new
        self.statusChanged.emit(new)
