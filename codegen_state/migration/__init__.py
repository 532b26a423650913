"""Structural migration of persisted code-generation workflow state."""
from __future__ import annotations

from .conversation import consolidate_conversation
from .engine import MigrationReport, StateMigration, migrate_if_needed
from .fields import backfill_project_name, reconcile_fields, strip_inference_secrets
from .files import normalize_files
from .models import ConversationMessage, PassResult, StructuredContent, TextContent

__all__ = [
    "ConversationMessage",
    "MigrationReport",
    "PassResult",
    "StateMigration",
    "StructuredContent",
    "TextContent",
    "backfill_project_name",
    "consolidate_conversation",
    "migrate_if_needed",
    "normalize_files",
    "reconcile_fields",
    "strip_inference_secrets",
]
