#!/usr/bin/env python3
"""
Render, inspect and validate content templates.

Examples:
    # Render a template with variable values and print the result
    python scripts/process_template.py render templates/case_study.yaml --variables vars.yaml

    # Save the rendered content instead of printing it
    python scripts/process_template.py render templates/case_study.yaml -V vars.yaml -o out.yaml

    # List the variables a template references
    python scripts/process_template.py variables templates/case_study.yaml

    # Check template structure
    python scripts/process_template.py validate templates/case_study.yaml
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from folio.contexts.templating import (
    DocumentTypeError,
    TemplateProcessor,
    extract_variables,
)
from folio.contexts.templating.logger import log_validation_result, setup_templating_logger
from folio.utils.document_io import dump_document, load_document, save_document

app = typer.Typer(
    help="Render, inspect and validate content templates",
    add_completion=False,
)


def _load_or_exit(path: Path):
    try:
        return load_document(path)
    except FileNotFoundError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    template_path: Annotated[Path, typer.Argument(help="Template YAML/JSON file")],
    variables_path: Annotated[
        Optional[Path],
        typer.Option("--variables", "-V", help="YAML/JSON file of variable values"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write rendered content here instead of stdout"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for a detailed session log"),
    ] = None,
):
    """
    Render a template with variable values.

    Unresolved references are left in the output and listed as a warning.
    """
    if log_dir:
        setup_templating_logger(log_dir, phase="render")

    template = _load_or_exit(template_path)
    variables = _load_or_exit(variables_path) if variables_path else {}

    processor = TemplateProcessor()
    try:
        preview = processor.preview(template, variables)
    except DocumentTypeError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output:
        save_document(preview.content, output)
        typer.secho("✓ Template rendered", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Output: {output}")
    else:
        typer.echo(dump_document(preview.content), nl=False)

    if preview.unresolved:
        typer.secho(
            f"Unresolved variables: {', '.join(preview.unresolved)}",
            fg=typer.colors.YELLOW,
            err=True,
        )


@app.command("variables")
def variables_command(
    template_path: Annotated[Path, typer.Argument(help="Template YAML/JSON file")],
):
    """List the variables a template references, with generated labels."""
    template = _load_or_exit(template_path)

    definitions = extract_variables(template)
    if not definitions:
        typer.echo("No variables")
        return

    width = max(len(d.name) for d in definitions)
    for definition in definitions:
        typer.echo(f"{definition.name:<{width}}  {definition.label}")


@app.command("validate")
def validate_command(
    template_path: Annotated[Path, typer.Argument(help="Template YAML/JSON file")],
):
    """Check template structure; exits 1 if problems are found."""
    template = _load_or_exit(template_path)

    result = TemplateProcessor().validate(template)
    log_validation_result(template_path.name, result)

    if result.valid:
        typer.secho("✓ Template is valid", fg=typer.colors.GREEN, bold=True)
        return

    for error in result.errors:
        typer.secho(f"  ✗ {error}", fg=typer.colors.RED)
    raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
