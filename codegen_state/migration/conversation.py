"""Deduplicate, order and prune persisted conversation history."""
from __future__ import annotations

import logging
import re
import time
from typing import Any, List, Optional, Sequence, Set

from codegen_state.core.utils.constants import (
    CONVERSATION_ID_PREFIX,
    FINGERPRINT_CHARS,
    INTERNAL_MEMO_MARKERS,
    MIN_MESSAGES_FOR_CLEANUP,
)
from codegen_state.core.utils.logger import get_logger, log_event

from .models import ConversationMessage, PassResult

LOGGER = get_logger(__name__)

_SEQUENCE_PATTERN = re.compile(rf"^{re.escape(CONVERSATION_ID_PREFIX)}([0-9]+)")


def dedup_key(message: ConversationMessage, position: int, invocation_ms: int) -> str:
    """Return the key used to detect duplicate messages.

    Messages without a correlation token get a key that embeds the invocation
    time and their position, so they never collide with one another.
    """
    if message.conversation_id:
        return message.conversation_id
    fingerprint = message.text[:FINGERPRINT_CHARS]
    return f"{message.role or 'unknown'}_{fingerprint}_{invocation_ms}_{position}"


def sequence_number(message: ConversationMessage) -> int:
    """Extract the numeric sequence from a ``conv-<n>`` token, or 0."""
    if not message.conversation_id:
        return 0
    match = _SEQUENCE_PATTERN.match(message.conversation_id)
    if match is None:
        return 0
    try:
        return int(match.group(1))
    except ValueError:
        # Digit runs beyond the interpreter's int conversion limit.
        return 0


def is_internal_memo(message: ConversationMessage) -> bool:
    text = message.text
    return any(marker in text for marker in INTERNAL_MEMO_MARKERS)


def deduplicate(
    messages: Sequence[ConversationMessage], invocation_ms: int
) -> List[ConversationMessage]:
    seen: Set[str] = set()
    unique: List[ConversationMessage] = []
    for position, message in enumerate(messages):
        key = dedup_key(message, position, invocation_ms)
        if key in seen:
            continue
        seen.add(key)
        unique.append(message)
    return unique


def consolidate_conversation(
    messages: Any,
    *,
    logger: Optional[logging.Logger] = None,
    threshold: int = MIN_MESSAGES_FOR_CLEANUP,
    invocation_ms: Optional[int] = None,
) -> PassResult[Any]:
    """Deduplicate and order ``messages``; strip internal memos from long logs.

    Returns the retained raw messages. A change is reported only when the
    number of messages differs from the input.
    """
    logger = logger or LOGGER
    if not isinstance(messages, list):
        return PassResult([] if messages is None else messages, changed=False)
    if not messages:
        return PassResult(messages, changed=False)

    if invocation_ms is None:
        invocation_ms = int(time.time() * 1000)

    original_count = len(messages)
    unique = deduplicate([ConversationMessage.from_raw(raw) for raw in messages], invocation_ms)
    unique.sort(key=sequence_number)

    retained = unique
    if len(unique) > threshold:
        real = [message for message in unique if not is_internal_memo(message)]
        log_event(
            logger,
            "Conversation cleanup analysis",
            {
                "totalUniqueMessages": len(unique),
                "realConversations": len(real),
                "internalMemos": len(unique) - len(real),
                "willRemoveInternalMemos": True,
            },
        )
        retained = real

    changed = len(retained) != original_count
    if changed:
        log_event(
            logger,
            "Fixed conversation message exponential bloat",
            {
                "originalCount": original_count,
                "deduplicatedCount": len(unique),
                "finalCount": len(retained),
                "duplicatesRemoved": original_count - len(unique),
                "internalMemosRemoved": len(unique) - len(retained),
            },
        )
    return PassResult([message.raw for message in retained], changed=changed)


__all__ = [
    "consolidate_conversation",
    "dedup_key",
    "deduplicate",
    "is_internal_memo",
    "sequence_number",
]
