"""Core utilities shared by the migration engine and the CLI."""
from __future__ import annotations

from .utils import (
    Settings,
    StateFileError,
    StateStore,
    configure_logging,
    generate_nano_id,
    generate_project_name,
    get_logger,
    load_settings,
)

__all__ = [
    "Settings",
    "StateFileError",
    "StateStore",
    "configure_logging",
    "generate_nano_id",
    "generate_project_name",
    "get_logger",
    "load_settings",
]
