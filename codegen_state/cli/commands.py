"""Command line interface for inspecting and migrating workflow state."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click

from codegen_state.core.utils.config import Settings, load_settings
from codegen_state.core.utils.logger import configure_logging, get_logger, set_correlation_id
from codegen_state.core.utils.state import StateFileError, StateStore
from codegen_state.schemas import StateValidationError, validate_workflow_state

LOGGER = get_logger(__name__)


def _open_store(ctx: click.Context, state_file: Optional[Path]) -> StateStore:
    settings: Settings = ctx.obj["settings"]
    path = state_file or settings.state_file
    set_correlation_id(Path(path).stem)
    if not Path(path).is_file():
        raise click.ClickException(f"State file not found: {path}")
    return StateStore.from_settings(settings, state_file=path)


@click.group()
@click.option("--config", "config_path", type=click.Path(path_type=Path), help="Path to config file.")
@click.option("--verbose", is_flag=True, help="Enable verbose logging output.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Migrate persisted code-generation workflow state to the current schema."""
    settings = load_settings(config_path)
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings.log_level, structured=settings.structured_logging)
    ctx.obj = {"settings": settings}


@cli.command()
@click.argument("state_file", required=False, type=click.Path(path_type=Path))
@click.option("--dry-run", is_flag=True, help="Report the result without writing it.")
@click.option("--output", "output_path", type=click.Path(path_type=Path), help="Write the migrated state here.")
@click.pass_context
def migrate(ctx: click.Context, state_file: Optional[Path], dry_run: bool, output_path: Optional[Path]) -> None:
    """Migrate STATE_FILE in place (or to --output)."""
    store = _open_store(ctx, state_file)
    try:
        original = store.load()
        migrated = store.migrate()
    except (StateFileError, StateValidationError) as exc:
        raise click.ClickException(str(exc)) from exc

    if migrated is None:
        click.echo("No migration needed.")
        return

    files = migrated.get("generatedFilesMap") or {}
    before = original.get("conversationMessages")
    after = migrated.get("conversationMessages")
    click.echo(f"Migrated state for project '{migrated.get('projectName')}'.")
    click.echo(f"  files: {len(files)}")
    click.echo(
        "  messages: "
        f"{len(before) if isinstance(before, list) else 0} -> {len(after) if isinstance(after, list) else 0}"
    )

    if dry_run:
        click.echo("Dry run: nothing written.")
        return
    if output_path is None and store.backup_before_migrate:
        store.backup()
    store.save(migrated, output_path)
    LOGGER.debug("Persisted migrated state for %s", store.state_file)
    click.echo(f"Wrote {output_path or store.state_file}")


@cli.command()
@click.argument("state_file", required=False, type=click.Path(path_type=Path))
@click.pass_context
def inspect(ctx: click.Context, state_file: Optional[Path]) -> None:
    """Print which migration passes would rewrite STATE_FILE."""
    store = _open_store(ctx, state_file)
    try:
        report = store.migration.inspect(store.load())
    except StateFileError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(json.dumps(report.to_dict(), indent=2, sort_keys=True))


@cli.command()
@click.argument("state_file", required=False, type=click.Path(path_type=Path))
@click.pass_context
def validate(ctx: click.Context, state_file: Optional[Path]) -> None:
    """Check STATE_FILE against the current schema."""
    store = _open_store(ctx, state_file)
    try:
        validate_workflow_state(store.load())
    except (StateFileError, StateValidationError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo("State matches the current schema.")


__all__ = ["cli", "inspect", "migrate", "validate"]
