"""List configuration: the ``ListConfig`` value and its file/mapping loaders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Tuple

from ..config import DEFAULT_PAGE_SIZE, SETTINGS_SCHEMA_TAG
from ..errors import SettingsLoadError, SettingsValidationError
from .schema import merge_settings, validation_errors


@dataclass(frozen=True)
class ListConfig:
    """Construction-time configuration of a paginated list machine.

    ``guard_load_more`` ignores ``LoadMore`` commands unless the list is
    ``Loaded``.  ``discard_stale_results`` drops the outcome of any fetch
    superseded by a later one.  Both are off by default, leaving ordering to
    the caller.
    """

    page_size: int = DEFAULT_PAGE_SIZE
    initial_items: Tuple[Any, ...] = field(default_factory=tuple)
    guard_load_more: bool = False
    discard_stale_results: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.page_size, bool) or not isinstance(self.page_size, int):
            raise SettingsValidationError(f"page_size must be an int, got {self.page_size!r}")
        if self.page_size <= 0:
            raise SettingsValidationError(f"page_size must be positive, got {self.page_size}")
        if not isinstance(self.initial_items, tuple):
            object.__setattr__(self, "initial_items", tuple(self.initial_items))

    @property
    def seeded(self) -> bool:
        return bool(self.initial_items)

    def to_mapping(self) -> dict[str, Any]:
        return {
            "schema": SETTINGS_SCHEMA_TAG,
            "page_size": self.page_size,
            "initial_items": list(self.initial_items),
            "guard_load_more": self.guard_load_more,
            "discard_stale_results": self.discard_stale_results,
        }


def config_from_mapping(data: Mapping[str, Any] | None) -> ListConfig:
    """Validate *data* against the settings schema and build a ``ListConfig``."""

    payload = dict(data or {})
    payload.setdefault("schema", SETTINGS_SCHEMA_TAG)
    merged = merge_settings(payload)
    problems = validation_errors(merged)
    if problems:
        raise SettingsValidationError("; ".join(problems))
    return ListConfig(
        page_size=merged["page_size"],
        initial_items=tuple(merged["initial_items"]),
        guard_load_more=merged["guard_load_more"],
        discard_stale_results=merged["discard_stale_results"],
    )


def load_config(path: Path) -> ListConfig:
    """Load a JSON configuration file."""

    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SettingsLoadError(f"Cannot read list settings from {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SettingsValidationError(f"{path}: expected a JSON object, got {type(payload).__name__}")
    return config_from_mapping(payload)


__all__ = ["ListConfig", "config_from_mapping", "load_config"]
