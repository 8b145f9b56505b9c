"""Default configuration values for infinilist."""

from __future__ import annotations

from typing import Final

# Number of items requested per page when neither the configuration nor the
# individual ``LoadMore`` command supplies a limit.
DEFAULT_PAGE_SIZE: Final[int] = 10

SETTINGS_SCHEMA_TAG: Final[str] = "infinilist/list@1"

# Worker threads used by ``EventBus`` for handlers subscribed with ``async_``.
EVENT_BUS_MAX_WORKERS: Final[int] = 2

# Unread statuses buffered per status stream before the oldest is dropped.
STATUS_STREAM_MAXSIZE: Final[int] = 256

# ---------------------------------------------------------------------------
# CLI demo defaults
# ---------------------------------------------------------------------------

DEMO_TOTAL_ITEMS: Final[int] = 25
DEMO_MAX_PAGES: Final[int] = 100
