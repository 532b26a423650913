"""Value types shared by the migration passes."""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Optional, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class PassResult(Generic[T]):
    """Output of one migration pass and whether it differs from the input."""

    value: T
    changed: bool = False


@dataclass(frozen=True)
class TextContent:
    text: str

    def as_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class StructuredContent:
    value: Any

    def as_text(self) -> str:
        # Missing payloads serialize like an empty string.
        payload = "" if self.value is None else self.value
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


MessageContent = Union[TextContent, StructuredContent]


def project_content(content: Any) -> MessageContent:
    """Wrap raw message content in its tagged variant."""
    if isinstance(content, str):
        return TextContent(content)
    return StructuredContent(content)


@dataclass(frozen=True)
class ConversationMessage:
    """Read-only view over one persisted conversation message."""

    role: Optional[str]
    content: MessageContent
    conversation_id: Optional[str]
    raw: Any

    @classmethod
    def from_raw(cls, raw: Any) -> "ConversationMessage":
        if not isinstance(raw, Mapping):
            return cls(role=None, content=StructuredContent(raw), conversation_id=None, raw=raw)
        token = raw.get("conversationId")
        return cls(
            role=raw.get("role"),
            content=project_content(raw.get("content")),
            conversation_id=token if isinstance(token, str) and token else None,
            raw=raw,
        )

    @property
    def text(self) -> str:
        return self.content.as_text()


@dataclass(frozen=True)
class FileField:
    """Current and legacy spelling of one FileRecord attribute."""

    current: str
    legacy: Optional[str] = None

    def detect(self, record: Mapping[str, Any]) -> Optional[Any]:
        value = record.get(self.current)
        if value is not None:
            return value
        if self.legacy is not None:
            return record.get(self.legacy)
        return None


FILE_FIELDS = (
    FileField("filePath", "file_path"),
    FileField("fileContents", "file_contents"),
    FileField("filePurpose", "file_purpose"),
    FileField("lastDiff"),
)
LEGACY_FILE_KEYS = frozenset(field.legacy for field in FILE_FIELDS if field.legacy)


def build_file_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``record`` rebuilt with current field names and every field present."""
    rebuilt = {key: value for key, value in record.items() if key not in LEGACY_FILE_KEYS}
    for field in FILE_FIELDS:
        value = field.detect(record)
        rebuilt[field.current] = "" if value is None else value
    return rebuilt


__all__ = [
    "ConversationMessage",
    "FILE_FIELDS",
    "FileField",
    "LEGACY_FILE_KEYS",
    "MessageContent",
    "PassResult",
    "StructuredContent",
    "TextContent",
    "build_file_record",
    "project_content",
]
