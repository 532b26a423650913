"""Configuration loading utilities for the state migration tooling."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore

from .constants import MIN_MESSAGES_FOR_CLEANUP, PROJECT_NAME_MAX_LENGTH

CONFIG_FILENAMES: tuple[str, ...] = (".codegen-state.toml", "codegen-state.toml")
DEFAULT_CONFIG_PATHS = (
    Path.home() / ".config" / "codegen-state" / "config.toml",
    Path.home() / ".codegen-state.toml",
)
ENV_PREFIX = "CODEGEN_STATE_"

_BOOL_FIELDS = {"structured_logging", "backup_before_migrate", "validate_after_migrate"}
_INT_FIELDS = {"cleanup_threshold", "project_name_max_length"}
_PATH_FIELDS = {"state_file"}


def find_config_in_parents(
    start_path: Path, config_name: str | Sequence[str] = CONFIG_FILENAMES
) -> Optional[Path]:
    """Search parent directories starting from ``start_path`` for configuration files."""

    if isinstance(config_name, str):
        candidate_names: tuple[str, ...] = (config_name,)
    else:
        candidate_names = tuple(config_name)

    current = start_path.resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in candidate_names:
            candidate = current / name
            if candidate.is_file():
                return candidate.resolve()
        if current.parent == current:
            break
        current = current.parent
    return None


@dataclass
class Settings:
    """Runtime configuration for loading and migrating workflow state."""

    state_file: Path = Path(".codegen/state.json")
    log_level: str = "INFO"
    structured_logging: bool = False
    cleanup_threshold: int = MIN_MESSAGES_FOR_CLEANUP
    project_name_max_length: int = PROJECT_NAME_MAX_LENGTH
    backup_before_migrate: bool = False
    validate_after_migrate: bool = True

    def __post_init__(self) -> None:
        if self.cleanup_threshold < 0:
            raise ValueError("cleanup_threshold must not be negative")
        if self.project_name_max_length < 1:
            raise ValueError("project_name_max_length must be positive")


def _cast_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in {"1", "true", "on", "yes", "y"}
    return bool(value)


def _coerce(field: str, value: Any) -> Any:
    if field in _BOOL_FIELDS:
        return _cast_bool(value)
    if field in _INT_FIELDS:
        return int(value)
    if field in _PATH_FIELDS:
        return Path(value)
    return value


def _load_from_file(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        return {}
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    return {k.replace("-", "_"): v for k, v in data.items()}


def _load_from_env(prefix: str = ENV_PREFIX) -> Dict[str, Any]:
    env: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        env[key[len(prefix) :].lower()] = value
    return env


def load_settings(explicit_path: Optional[Path] = None) -> Settings:
    """Load configuration, merging file and environment sources."""

    file_data: Dict[str, Any] = {}
    if explicit_path:
        file_data.update(_load_from_file(explicit_path))
    else:
        search_paths = []
        project_config = find_config_in_parents(Path.cwd(), CONFIG_FILENAMES)
        if project_config:
            search_paths.append(project_config)
        search_paths.extend(DEFAULT_CONFIG_PATHS)
        for candidate in search_paths:
            file_data = _load_from_file(candidate)
            if file_data:
                break

    merged: Dict[str, Any] = {**file_data, **_load_from_env()}

    known_fields = set(Settings.__dataclass_fields__)
    init_kwargs = {key: _coerce(key, value) for key, value in merged.items() if key in known_fields}
    return Settings(**init_kwargs)


__all__ = ["CONFIG_FILENAMES", "Settings", "find_config_in_parents", "load_settings"]
