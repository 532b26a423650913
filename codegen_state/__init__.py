"""Public package interface for the workflow state migration toolkit."""
from __future__ import annotations

from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("codegen-state")
except _metadata.PackageNotFoundError:  # pragma: no cover - fallback when not installed
    __version__ = "0.1.0"

from . import core, migration, schemas
from .core import (
    Settings,
    StateFileError,
    StateStore,
    configure_logging,
    generate_nano_id,
    generate_project_name,
    get_logger,
    load_settings,
)
from .migration import MigrationReport, StateMigration, migrate_if_needed
from .schemas import StateValidationError, WorkflowStateModel, validate_workflow_state

__all__ = [
    "__version__",
    "MigrationReport",
    "Settings",
    "StateFileError",
    "StateMigration",
    "StateStore",
    "StateValidationError",
    "WorkflowStateModel",
    "configure_logging",
    "core",
    "generate_nano_id",
    "generate_project_name",
    "get_logger",
    "load_settings",
    "migrate_if_needed",
    "migration",
    "schemas",
    "validate_workflow_state",
]
