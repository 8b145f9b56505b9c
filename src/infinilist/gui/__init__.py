"""Toolkit adapters.  Importing :mod:`infinilist.gui.qt_bridge` requires PySide6."""
