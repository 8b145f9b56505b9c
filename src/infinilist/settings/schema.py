"""Schema helpers for list machine configuration."""

from __future__ import annotations

from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import DEFAULT_PAGE_SIZE, SETTINGS_SCHEMA_TAG

LIST_SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "infinilist/list.schema.json",
    "type": "object",
    "required": ["schema", "page_size"],
    "properties": {
        "schema": {"const": SETTINGS_SCHEMA_TAG},
        "page_size": {"type": "integer", "minimum": 1},
        "initial_items": {"type": "array"},
        "guard_load_more": {"type": "boolean"},
        "discard_stale_results": {"type": "boolean"},
    },
    "additionalProperties": False,
}

DEFAULT_LIST_SETTINGS: dict[str, Any] = {
    "schema": SETTINGS_SCHEMA_TAG,
    "page_size": DEFAULT_PAGE_SIZE,
    "initial_items": [],
    "guard_load_more": False,
    "discard_stale_results": False,
}

_validator = Draft202012Validator(LIST_SETTINGS_SCHEMA)


def merge_settings(data: dict[str, Any] | None) -> dict[str, Any]:
    """Overlay *data* on :data:`DEFAULT_LIST_SETTINGS` without validating."""

    merged = deepcopy(DEFAULT_LIST_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "initial_items" and isinstance(value, tuple):
                value = list(value)
            merged[key] = value
    return merged


def validation_errors(data: dict[str, Any]) -> list[str]:
    """Return every schema violation in *data* as ``path: message`` strings."""

    errors = sorted(_validator.iter_errors(data), key=lambda err: [str(part) for part in err.path])
    return [
        f"{'.'.join(str(part) for part in err.path) or '<root>'}: {err.message}"
        for err in errors
    ]


__all__ = [
    "DEFAULT_LIST_SETTINGS",
    "LIST_SETTINGS_SCHEMA",
    "merge_settings",
    "validation_errors",
]
