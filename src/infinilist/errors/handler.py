import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from ..events.bus import EventBus
from ..events.list_events import DomainEvent


class ErrorSeverity(Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True, kw_only=True)
class ErrorOccurredEvent(DomainEvent):
    error: Exception
    severity: ErrorSeverity
    context: dict = field(default_factory=dict)


class ErrorHandler:
    """Single reporting point for fetch failures.

    Logs the error, publishes :class:`ErrorOccurredEvent` when a bus is
    attached and forwards serious failures to an optional UI callback.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, event_bus: Optional[EventBus] = None):
        self._logger = logger or logging.getLogger(__name__)
        self._events = event_bus
        self._ui_callback: Optional[Callable[[str, ErrorSeverity], None]] = None

    def register_ui_callback(self, callback: Callable[[str, ErrorSeverity], None]):
        self._ui_callback = callback

    def handle(self, error: Exception, severity: ErrorSeverity = ErrorSeverity.ERROR, context: Optional[dict] = None):
        context = dict(context or {})

        log_method = getattr(self._logger, severity.value, self._logger.error)
        log_method(
            "%s: %s",
            error.__class__.__name__,
            error,
            extra={"infinilist_context": context},
        )

        if self._events is not None:
            self._events.publish(ErrorOccurredEvent(
                error=error,
                severity=severity,
                context=context,
                source="error_handler",
            ))

        if self._ui_callback and severity in (ErrorSeverity.ERROR, ErrorSeverity.CRITICAL):
            self._ui_callback(str(error), severity)
