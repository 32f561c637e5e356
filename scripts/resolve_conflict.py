#!/usr/bin/env python3
"""
Inspect and resolve conflicting case-study copies.

Examples:
    # Show which watched fields differ between a local edit and the stored copy
    python scripts/resolve_conflict.py detect local.yaml server.yaml

    # Resolve with a strategy (server, local, merge, cancel) and save the result
    python scripts/resolve_conflict.py resolve local.yaml server.yaml merge -o resolved.yaml

    # Diff two saved versions
    python scripts/resolve_conflict.py compare v3.yaml v4.yaml
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from folio.contexts.collaboration import ConflictResolver, UnknownStrategyError
from folio.contexts.collaboration.conflicts import format_value
from folio.contexts.collaboration.logger import setup_collaboration_logger
from folio.contexts.templating import DocumentTypeError
from folio.utils.document_io import dump_document, load_document, save_document
from folio.utils.timestamp import format_timestamp

app = typer.Typer(
    help="Inspect and resolve conflicting case-study copies",
    add_completion=False,
)


def _load_pair(first: Path, second: Path):
    try:
        return load_document(first), load_document(second)
    except FileNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("detect")
def detect_command(
    local_path: Annotated[Path, typer.Argument(help="Locally edited copy")],
    server_path: Annotated[Path, typer.Argument(help="Stored copy")],
):
    """List conflicting fields; exits 1 if there are any."""
    local, server = _load_pair(local_path, server_path)
    resolver = ConflictResolver()

    try:
        conflicts = resolver.detect(local, server)
    except DocumentTypeError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    updated_field = resolver.settings.updated_at_field
    for name, document in (("Local", local), ("Server", server)):
        if document.get(updated_field):
            typer.echo(f"{name} last updated: {format_timestamp(str(document[updated_field]))}")
    if resolver.has_concurrent_update(local, server):
        typer.secho("Stored copy is newer than the local copy", fg=typer.colors.YELLOW)

    if not conflicts:
        typer.secho("✓ No conflicting fields", fg=typer.colors.GREEN, bold=True)
        return

    for summary in resolver.summarize(conflicts):
        typer.secho(summary.label, bold=True)
        typer.echo(f"  local:  {summary.local}")
        typer.echo(f"  server: {summary.server}")
    raise typer.Exit(code=1)


@app.command("resolve")
def resolve_command(
    local_path: Annotated[Path, typer.Argument(help="Locally edited copy")],
    server_path: Annotated[Path, typer.Argument(help="Stored copy")],
    strategy: Annotated[str, typer.Argument(help="server, local, merge or cancel")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the resolved copy here instead of stdout"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for a detailed session log"),
    ] = None,
):
    """Resolve a conflict with the given strategy."""
    if log_dir:
        setup_collaboration_logger(log_dir)

    local, server = _load_pair(local_path, server_path)

    try:
        outcome = ConflictResolver().resolve(local, server, strategy)
    except (UnknownStrategyError, DocumentTypeError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)

    if outcome.cancelled:
        typer.secho("Resolution cancelled; nothing to save", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)

    if output:
        save_document(outcome.document, output)
        typer.secho(f"✓ Resolved with '{outcome.strategy.value}'", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Output: {output}")
    else:
        typer.echo(dump_document(outcome.document), nl=False)


@app.command("compare")
def compare_command(
    old_path: Annotated[Path, typer.Argument(help="Earlier version")],
    new_path: Annotated[Path, typer.Argument(help="Later version")],
):
    """Show field-level differences between two versions."""
    old, new = _load_pair(old_path, new_path)
    diff = ConflictResolver().compare(old, new)

    typer.secho(
        f"{diff.total_changes} change(s), {diff.change_percentage}% of fields", bold=True
    )
    for change in diff.added:
        typer.secho(f"  + {change.field}: {format_value(change.new)}", fg=typer.colors.GREEN)
    for change in diff.removed:
        typer.secho(f"  - {change.field}: {format_value(change.old)}", fg=typer.colors.RED)
    for change in diff.modified:
        typer.secho(
            f"  ~ {change.field}: {format_value(change.old)} -> {format_value(change.new)}",
            fg=typer.colors.YELLOW,
        )


if __name__ == "__main__":
    app()
