from .loader import ListConfig, config_from_mapping, load_config
from .schema import DEFAULT_LIST_SETTINGS, LIST_SETTINGS_SCHEMA

__all__ = [
    "DEFAULT_LIST_SETTINGS",
    "LIST_SETTINGS_SCHEMA",
    "ListConfig",
    "config_from_mapping",
    "load_config",
]
