from .interfaces import PageSource

__all__ = ["PageSource"]
