"""Normalize generated file records to the current field naming."""
from __future__ import annotations

from typing import Any, Dict, Mapping

from codegen_state.core.utils.constants import FILES_KEY

from .models import PassResult, build_file_record


def normalize_files(state: Mapping[str, Any]) -> PassResult[Dict[str, Any]]:
    """Rebuild every entry of ``generatedFilesMap`` with current field names.

    Every record is rebuilt as a new dict. The pass only reports a change when a
    rebuilt record differs in value from its original, so a state that is
    already current stays untouched.
    """
    files = state.get(FILES_KEY)
    if not isinstance(files, Mapping):
        return PassResult({}, changed=False)

    migrated: Dict[str, Any] = {}
    changed = False
    for key, record in files.items():
        if not isinstance(record, Mapping):
            migrated[key] = record
            continue
        rebuilt = build_file_record(record)
        if rebuilt != dict(record):
            changed = True
        migrated[key] = rebuilt
    return PassResult(migrated, changed=changed)


__all__ = ["normalize_files"]
