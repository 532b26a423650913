"""Command line entry points."""
from __future__ import annotations

from .commands import cli


def main() -> None:
    cli(prog_name="codegen-state")


__all__ = ["cli", "main"]
