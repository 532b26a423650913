"""Pydantic models describing the current persisted workflow state schema."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from codegen_state.core.utils.constants import DEPRECATED_STATE_KEYS, USER_API_KEYS_KEY


class StateValidationError(ValueError):
    """Raised when a snapshot does not match the current schema."""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class FileRecordModel(BaseModel):
    """One generated source file."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    file_path: str = Field(..., alias="filePath")
    file_contents: str = Field(..., alias="fileContents")
    file_purpose: str = Field(..., alias="filePurpose")
    last_diff: str = Field(..., alias="lastDiff")


class WorkflowStateModel(BaseModel):
    """Durable snapshot of one code-generation session after migration."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    generated_files_map: Dict[str, FileRecordModel] = Field(default_factory=dict, alias="generatedFilesMap")
    conversation_messages: List[Dict[str, Any]] = Field(default_factory=list, alias="conversationMessages")
    inference_context: Optional[Dict[str, Any]] = Field(default=None, alias="inferenceContext")
    project_updates_accumulator: List[Any] = Field(..., alias="projectUpdatesAccumulator")
    template_name: Optional[str] = Field(default=None, alias="templateName")
    project_name: str = Field(..., min_length=1, alias="projectName")
    query: Optional[str] = None
    blueprint: Optional[Dict[str, Any]] = None

    @model_validator(mode="before")
    @classmethod
    def _reject_deprecated_keys(cls, values: Any) -> Any:
        if isinstance(values, Mapping):
            present = [key for key in DEPRECATED_STATE_KEYS if key in values]
            if present:
                raise ValueError(f"deprecated fields present: {', '.join(present)}")
        return values

    @field_validator("inference_context")
    @classmethod
    def _reject_user_api_keys(cls, value: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if value is not None and USER_API_KEYS_KEY in value:
            raise ValueError(f"{USER_API_KEYS_KEY} must not be persisted")
        return value


def validate_workflow_state(state: Mapping[str, Any]) -> WorkflowStateModel:
    """Validate ``state`` against the current schema."""
    try:
        return WorkflowStateModel.model_validate(dict(state))
    except ValidationError as exc:
        raise StateValidationError(
            f"State does not match the current schema ({exc.error_count()} error(s))",
            errors=exc.errors(include_url=False),
        ) from exc


__all__ = [
    "FileRecordModel",
    "StateValidationError",
    "WorkflowStateModel",
    "validate_workflow_state",
]
