import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make the package importable without an editable install.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from infinilist.infrastructure.sources import SequencePageSource  # noqa: E402


@pytest.fixture
def numbered_source():
    """Factory for an in-memory source holding ``total`` integers 0..total-1."""

    def _make(total: int = 20, **kwargs) -> SequencePageSource:
        return SequencePageSource(list(range(total)), **kwargs)

    return _make
