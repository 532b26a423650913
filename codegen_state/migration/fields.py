"""Top-level field migrations: secrets, deprecated keys and identity backfill."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple

from codegen_state.core.utils.constants import (
    BLUEPRINT_KEY,
    INFERENCE_CONTEXT_KEY,
    PROJECT_NAME_KEY,
    PROJECT_NAME_MAX_LENGTH,
    QUERY_KEY,
    SCREENSHOT_KEY,
    TEMPLATE_DETAILS_KEY,
    TEMPLATE_NAME_KEY,
    UPDATES_ACCUMULATOR_KEY,
    USER_API_KEYS_KEY,
)
from codegen_state.core.utils.ids import generate_nano_id
from codegen_state.core.utils.logger import get_logger, log_event
from codegen_state.core.utils.naming import generate_project_name

from .models import PassResult

LOGGER = get_logger(__name__)

IdGenerator = Callable[[], str]
NameGenerator = Callable[[Optional[str], str, int], str]


def strip_inference_secrets(state: Mapping[str, Any]) -> PassResult[Any]:
    """Drop persisted per-user API keys from the inference context.

    The context object is returned as-is when there is nothing to remove.
    """
    context = state.get(INFERENCE_CONTEXT_KEY)
    if not isinstance(context, Mapping) or USER_API_KEYS_KEY not in context:
        return PassResult(context, changed=False)
    stripped = {key: value for key, value in context.items() if key != USER_API_KEYS_KEY}
    return PassResult(stripped, changed=True)


@dataclass(frozen=True)
class Reconciliation:
    template_name: Any
    has_screenshot: bool
    missing_accumulator: bool
    has_template_details: bool

    @property
    def dropped_keys(self) -> Tuple[str, ...]:
        keys = []
        if self.has_screenshot:
            keys.append(SCREENSHOT_KEY)
        if self.has_template_details:
            keys.append(TEMPLATE_DETAILS_KEY)
        return tuple(keys)


def _template_details_name(details: Any) -> Optional[Any]:
    if isinstance(details, Mapping):
        return details.get("name")
    return None


def reconcile_fields(
    state: Mapping[str, Any], *, logger: Optional[logging.Logger] = None
) -> PassResult[Reconciliation]:
    """Detect deprecated keys and the missing updates accumulator."""
    logger = logger or LOGGER
    has_template_details = TEMPLATE_DETAILS_KEY in state
    template_name = state.get(TEMPLATE_NAME_KEY)
    if has_template_details:
        template_name = _template_details_name(state[TEMPLATE_DETAILS_KEY])
        log_event(logger, "Migrating templateDetails to templateName", {"templateName": template_name})

    result = Reconciliation(
        template_name=template_name,
        has_screenshot=SCREENSHOT_KEY in state,
        missing_accumulator=UPDATES_ACCUMULATOR_KEY not in state,
        has_template_details=has_template_details,
    )
    changed = result.has_screenshot or result.missing_accumulator or result.has_template_details
    return PassResult(result, changed=changed)


def backfill_project_name(
    state: Mapping[str, Any],
    template_name: Any,
    *,
    logger: Optional[logging.Logger] = None,
    id_generator: IdGenerator = generate_nano_id,
    name_generator: NameGenerator = generate_project_name,
    max_length: int = PROJECT_NAME_MAX_LENGTH,
) -> PassResult[Any]:
    """Generate a project name for states persisted before names existed."""
    logger = logger or LOGGER
    project_name = state.get(PROJECT_NAME_KEY)
    if project_name:
        return PassResult(project_name, changed=False)

    blueprint = state.get(BLUEPRINT_KEY)
    blueprint_name = blueprint.get(PROJECT_NAME_KEY) if isinstance(blueprint, Mapping) else None
    seed = blueprint_name or template_name or state.get(QUERY_KEY)
    generated = name_generator(seed if isinstance(seed, str) else None, id_generator(), max_length)
    log_event(logger, "Generating missing projectName", {"projectName": generated})
    return PassResult(generated, changed=True)


__all__ = [
    "Reconciliation",
    "backfill_project_name",
    "reconcile_fields",
    "strip_inference_secrets",
]
