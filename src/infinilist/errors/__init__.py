"""Custom exception hierarchy for infinilist."""

from __future__ import annotations


class InfinilistError(Exception):
    """Base class for all custom errors raised by infinilist."""


class FetchError(InfinilistError):
    """Raised (or carried by a ``Failed`` status) when a page fetch fails.

    Wraps whatever the data source raised.  The original exception is kept on
    :attr:`cause` and chained as ``__cause__`` when the error is raised.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    @classmethod
    def wrap(cls, exc: BaseException) -> "FetchError":
        """Return *exc* unchanged if it is already a ``FetchError``."""
        if isinstance(exc, FetchError):
            return exc
        message = str(exc) or exc.__class__.__name__
        return cls(message, cause=exc)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FetchError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.message == other.message
            and self.cause is other.cause
        )

    def __hash__(self) -> int:
        return hash((type(self), self.message, id(self.cause)))

    def __repr__(self) -> str:
        if self.cause is None:
            return f"FetchError({self.message!r})"
        return f"FetchError({self.message!r}, cause={self.cause!r})"


class MachineDisposedError(InfinilistError):
    """Raised when a command is issued to a disposed list machine."""


class SettingsError(InfinilistError):
    """Base class for configuration related failures."""


class SettingsLoadError(SettingsError):
    """Raised when a configuration file cannot be read or parsed."""


class SettingsValidationError(SettingsError):
    """Raised when configuration data fails schema validation."""
