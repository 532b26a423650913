"""Bring persisted workflow state up to the current schema."""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from codegen_state.core.utils.constants import (
    FILES_KEY,
    INFERENCE_CONTEXT_KEY,
    MESSAGES_KEY,
    MIN_MESSAGES_FOR_CLEANUP,
    PROJECT_NAME_KEY,
    PROJECT_NAME_MAX_LENGTH,
    TEMPLATE_NAME_KEY,
    UPDATES_ACCUMULATOR_KEY,
)
from codegen_state.core.utils.ids import generate_nano_id
from codegen_state.core.utils.logger import get_logger, log_event
from codegen_state.core.utils.naming import generate_project_name

from .conversation import consolidate_conversation
from .fields import (
    IdGenerator,
    NameGenerator,
    Reconciliation,
    backfill_project_name,
    reconcile_fields,
    strip_inference_secrets,
)
from .files import normalize_files
from .models import PassResult

LOGGER = get_logger(__name__)

# Sink for pass events emitted while inspecting.
_SILENT_LOGGER = get_logger(f"{__name__}.inspect")
_SILENT_LOGGER.addHandler(logging.NullHandler())
_SILENT_LOGGER.propagate = False


@dataclass(frozen=True)
class MigrationReport:
    """Which passes want to rewrite a snapshot."""

    files: bool
    conversation: bool
    inference_context: bool
    deprecated_fields: bool
    project_name: bool
    original_message_count: int
    final_message_count: int

    @property
    def needs_migration(self) -> bool:
        return any(
            (self.files, self.conversation, self.inference_context, self.deprecated_fields, self.project_name)
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["needs_migration"] = self.needs_migration
        return data


@dataclass(frozen=True)
class _PassOutputs:
    files: PassResult[Dict[str, Any]]
    conversation: PassResult[Any]
    inference_context: PassResult[Any]
    reconciliation: PassResult[Reconciliation]
    project_name: PassResult[Any]

    def report(self, state: Mapping[str, Any]) -> MigrationReport:
        original = state.get(MESSAGES_KEY)
        final = self.conversation.value
        return MigrationReport(
            files=self.files.changed,
            conversation=self.conversation.changed,
            inference_context=self.inference_context.changed,
            deprecated_fields=self.reconciliation.changed,
            project_name=self.project_name.changed,
            original_message_count=len(original) if isinstance(original, list) else 0,
            final_message_count=len(final) if isinstance(final, list) else 0,
        )


class StateMigration:
    """Structural, version-less migration of persisted workflow state.

    Each pass reads the original snapshot. When none of them reports a change,
    :meth:`migrate_if_needed` returns ``None`` so callers can skip persisting.
    The input mapping is never modified.
    """

    def __init__(
        self,
        *,
        logger: Optional[logging.Logger] = None,
        cleanup_threshold: int = MIN_MESSAGES_FOR_CLEANUP,
        project_name_max_length: int = PROJECT_NAME_MAX_LENGTH,
        id_generator: IdGenerator = generate_nano_id,
        name_generator: NameGenerator = generate_project_name,
        clock_ms: Optional[Callable[[], int]] = None,
    ) -> None:
        self.logger = logger or LOGGER
        self.cleanup_threshold = cleanup_threshold
        self.project_name_max_length = project_name_max_length
        self.id_generator = id_generator
        self.name_generator = name_generator
        self.clock_ms = clock_ms

    @classmethod
    def from_settings(cls, settings: Any, **kwargs: Any) -> "StateMigration":
        return cls(
            cleanup_threshold=settings.cleanup_threshold,
            project_name_max_length=settings.project_name_max_length,
            **kwargs,
        )

    def _run_passes(self, state: Mapping[str, Any], logger: logging.Logger) -> _PassOutputs:
        reconciliation = reconcile_fields(state, logger=logger)
        return _PassOutputs(
            files=normalize_files(state),
            conversation=consolidate_conversation(
                state.get(MESSAGES_KEY),
                logger=logger,
                threshold=self.cleanup_threshold,
                invocation_ms=self.clock_ms() if self.clock_ms else None,
            ),
            inference_context=strip_inference_secrets(state),
            reconciliation=reconciliation,
            project_name=backfill_project_name(
                state,
                reconciliation.value.template_name,
                logger=logger,
                id_generator=self.id_generator,
                name_generator=self.name_generator,
                max_length=self.project_name_max_length,
            ),
        )

    def inspect(self, state: Mapping[str, Any]) -> MigrationReport:
        """Report which passes would rewrite ``state`` without building it or logging pass events."""
        return self._run_passes(state, _SILENT_LOGGER).report(state)

    def migrate_if_needed(self, state: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        outputs = self._run_passes(state, self.logger)
        report = outputs.report(state)
        if not report.needs_migration:
            return None

        log_event(
            self.logger,
            "Migrating state: schema format, conversation cleanup, security fixes, and bootstrap setup",
            {
                "generatedFilesCount": len(outputs.files.value),
                "finalConversationCount": report.final_message_count,
                "removedUserApiKeys": outputs.inference_context.changed,
            },
        )

        reconciliation = outputs.reconciliation.value
        migrated = {key: value for key, value in state.items() if key not in reconciliation.dropped_keys}
        migrated.update(
            {
                FILES_KEY: outputs.files.value,
                MESSAGES_KEY: outputs.conversation.value,
                UPDATES_ACCUMULATOR_KEY: [],
                PROJECT_NAME_KEY: outputs.project_name.value,
            }
        )
        if reconciliation.template_name is not None or TEMPLATE_NAME_KEY in state:
            migrated[TEMPLATE_NAME_KEY] = reconciliation.template_name
        if INFERENCE_CONTEXT_KEY in state:
            migrated[INFERENCE_CONTEXT_KEY] = outputs.inference_context.value
        return migrated


def migrate_if_needed(
    state: Mapping[str, Any], logger: Optional[logging.Logger] = None
) -> Optional[Dict[str, Any]]:
    """Migrate ``state`` with default settings; ``None`` means no change."""
    return StateMigration(logger=logger).migrate_if_needed(state)


__all__ = ["MigrationReport", "StateMigration", "migrate_if_needed"]
