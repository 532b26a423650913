"""Convenience exports for common utility helpers."""
from __future__ import annotations

from .config import Settings, find_config_in_parents, load_settings
from .ids import generate_nano_id
from .logger import (
    configure_logging,
    get_correlation_id,
    get_logger,
    log_event,
    set_correlation_id,
)
from .naming import generate_project_name, slugify
from .state import StateFileError, StateStore

__all__ = [
    "Settings",
    "StateFileError",
    "StateStore",
    "configure_logging",
    "find_config_in_parents",
    "generate_nano_id",
    "generate_project_name",
    "get_correlation_id",
    "get_logger",
    "load_settings",
    "log_event",
    "set_correlation_id",
    "slugify",
]
