"""Short identifier generation."""
from __future__ import annotations

import secrets

from .constants import NANO_ID_ALPHABET, NANO_ID_SIZE


def generate_nano_id(size: int = NANO_ID_SIZE) -> str:
    """Return a URL-safe random token of ``size`` characters."""
    if size < 1:
        raise ValueError("size must be positive")
    return "".join(secrets.choice(NANO_ID_ALPHABET) for _ in range(size))


__all__ = ["generate_nano_id"]
