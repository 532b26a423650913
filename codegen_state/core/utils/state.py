"""Load, migrate and persist workflow state snapshots."""
from __future__ import annotations

import json
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from .logger import get_logger

LOGGER = get_logger(__name__)

BACKUP_SUFFIX = ".bak"


class StateFileError(ValueError):
    """Raised when a state file cannot be parsed into a state mapping."""


@dataclass
class StateStore:
    """JSON-backed store for a single workflow state snapshot.

    ``load_migrated`` implements the rehydration contract: the snapshot is
    migrated once and written back only when the migration produced a new
    state.
    """

    state_file: Path
    backup_before_migrate: bool = False
    validate_after_migrate: bool = True
    migration: Any = None
    _cache: Optional[Dict[str, Any]] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.state_file = Path(self.state_file)
        if self.migration is None:
            from codegen_state.migration import StateMigration

            self.migration = StateMigration()

    @classmethod
    def from_settings(cls, settings: Any, state_file: Optional[Path] = None) -> "StateStore":
        from codegen_state.migration import StateMigration

        return cls(
            state_file=state_file or settings.state_file,
            backup_before_migrate=settings.backup_before_migrate,
            validate_after_migrate=settings.validate_after_migrate,
            migration=StateMigration.from_settings(settings),
        )

    def load(self) -> Dict[str, Any]:
        """Return the raw snapshot stored on disk."""
        if self._cache is not None:
            return self._cache
        try:
            with self.state_file.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise StateFileError(f"Invalid JSON in state file {self.state_file}: {exc}") from exc
        if not isinstance(data, dict):
            raise StateFileError(f"State file {self.state_file} must contain a JSON object")
        self._cache = data
        return data

    def save(self, data: Dict[str, Any], path: Optional[Path] = None) -> None:
        """Write ``data`` atomically to ``path`` (defaults to the state file)."""
        target = Path(path) if path is not None else self.state_file
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(target.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, target)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        if target == self.state_file:
            self._cache = data
        LOGGER.debug("State written to %s", target)

    def backup(self) -> Path:
        """Copy the current state file next to itself with a ``.bak`` suffix."""
        backup_path = self.state_file.with_name(self.state_file.name + BACKUP_SUFFIX)
        shutil.copy2(self.state_file, backup_path)
        LOGGER.info("Backed up state file to %s", backup_path)
        return backup_path

    def migrate(self) -> Optional[Dict[str, Any]]:
        """Return the migrated snapshot, or ``None`` when it is already current."""
        migrated = self.migration.migrate_if_needed(self.load())
        if migrated is not None and self.validate_after_migrate:
            from codegen_state.schemas import validate_workflow_state

            validate_workflow_state(migrated)
        return migrated

    def load_migrated(self, *, persist: bool = True) -> Tuple[Dict[str, Any], bool]:
        """Load the snapshot, migrating and persisting it when needed.

        Returns the state to continue with and whether a migration happened.
        """
        original = self.load()
        migrated = self.migrate()
        if migrated is None:
            LOGGER.debug("State at %s is current", self.state_file)
            return original, False
        if persist:
            if self.backup_before_migrate:
                self.backup()
            self.save(migrated)
        return migrated, True


__all__ = ["BACKUP_SUFFIX", "StateFileError", "StateStore"]
