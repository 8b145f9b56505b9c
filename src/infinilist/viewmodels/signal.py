"""Pure Python signals for observing list state without any UI toolkit.

``Signal`` is a minimal observer hub; ``ObservableProperty`` holds one value
and announces every change of it.  The list machine publishes its status
through an ``ObservableProperty`` so both synchronous callbacks and the async
status stream hang off the same notification.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Generic, TypeVar

_logger = logging.getLogger(__name__)

V = TypeVar("V")


class Signal:
    """Observer hub.

    Thread-safe: handler registration and the snapshot taken for an emission
    are protected by a lock.  A handler that raises is logged and skipped so
    the remaining handlers still run.
    """

    def __init__(self, name: str = "") -> None:
        self._name = name
        self._handlers: list[Callable[..., Any]] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable[..., Any]) -> Callable[[], None]:
        """Register *handler*; returns a callable that disconnects it again."""
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)

        def _disconnect() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return _disconnect

    def disconnect(self, handler: Callable[..., Any]) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def disconnect_all(self) -> None:
        with self._lock:
            self._handlers.clear()

    def emit(self, *args: Any, **kwargs: Any) -> None:
        with self._lock:
            handlers = list(self._handlers)
        for handler in handlers:
            try:
                handler(*args, **kwargs)
            except Exception:
                _logger.exception("Handler %r of signal %s failed", handler, self._name or "<anonymous>")

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)


class ObservableProperty(Generic[V]):
    """Single observable value.

    Emits ``changed(new_value, old_value)`` when assigned a value that does not
    compare equal to the current one; equal assignments are silently dropped.
    """

    def __init__(self, initial_value: V, name: str = "") -> None:
        self._value = initial_value
        self.changed = Signal(name)

    @property
    def value(self) -> V:
        return self._value

    @value.setter
    def value(self, new_value: V) -> None:
        self.set(new_value)

    def set(self, new_value: V) -> bool:
        """Assign *new_value*; returns ``True`` when observers were notified."""
        if self._value == new_value:
            return False
        old_value = self._value
        self._value = new_value
        self.changed.emit(new_value, old_value)
        return True
