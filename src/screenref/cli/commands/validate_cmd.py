"""screenref validate — static checks over a match document."""

from __future__ import annotations

from pathlib import Path

import typer

from screenref.core.config import read_document
from screenref.core.exceptions import ConfigError
from screenref.engine.validation import check_document


def validate_command(
    document: str = typer.Argument(help="Match document (JSON or YAML)."),
    lenient: bool = typer.Option(
        False,
        "--lenient",
        help="Accept sources with invalid geometry (reported, not fatal).",
    ),
) -> None:
    """Validate a match document."""
    path = Path(document)
    try:
        doc = read_document(path, strict_geometry=not lenient)
    except ConfigError as e:
        typer.echo(typer.style(f"ERROR - {e}", fg=typer.colors.RED), err=True)
        raise typer.Exit(code=1) from e

    problems = check_document(doc)
    for problem in problems:
        typer.echo(f"  {typer.style('ERROR', fg=typer.colors.RED)} - {problem}")

    typer.echo("")
    typer.echo(
        f"{path.name}: {len(doc.sources)} source(s), "
        f"{len(doc.references)} reference(s), {len(problems)} problem(s)"
    )
    if problems:
        raise typer.Exit(code=1)
