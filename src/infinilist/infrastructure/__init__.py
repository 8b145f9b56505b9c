from .sources import CallablePageSource, SequencePageSource

__all__ = ["CallablePageSource", "SequencePageSource"]
