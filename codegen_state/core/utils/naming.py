"""Project name generation for workflows created before names were tracked."""
from __future__ import annotations

import re
import unicodedata
from typing import Optional

from .constants import DEFAULT_PROJECT_SEED, PROJECT_NAME_MAX_LENGTH

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
SUFFIX_CHARS = 4


def slugify(value: Optional[str]) -> str:
    """Lowercase ASCII slug with single hyphens between alphanumeric runs."""
    if not value:
        return ""
    ascii_text = unicodedata.normalize("NFKD", str(value)).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", ascii_text.lower()).strip("-")


def generate_project_name(
    seed: Optional[str],
    unique_token: str,
    max_length: int = PROJECT_NAME_MAX_LENGTH,
) -> str:
    """Build a readable, bounded project name from ``seed`` and ``unique_token``.

    The result is never empty and never longer than ``max_length``. A short
    fragment of the token is appended so two projects seeded from the same
    template do not collide.
    """
    if max_length < 1:
        raise ValueError("max_length must be positive")

    slug = slugify(seed) or DEFAULT_PROJECT_SEED
    suffix = _NON_ALNUM.sub("", (unique_token or "").lower())[:SUFFIX_CHARS]

    room = max_length - len(suffix) - 1
    if not suffix or room < 1:
        return slug[:max_length].rstrip("-")

    base = slug[:room].rstrip("-")
    return f"{base}-{suffix}"


__all__ = ["generate_project_name", "slugify"]
