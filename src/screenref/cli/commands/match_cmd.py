"""screenref match — evaluate sources against a screen capture."""

from __future__ import annotations

import json

import typer

from screenref.cli.commands._common import build_matcher, build_settings, read_screen


def match_command(
    document: str = typer.Argument(help="Match document (JSON or YAML)."),
    screen: str = typer.Argument(help="Screen capture image."),
    sources: list[str] = typer.Argument(help="Source names to evaluate."),
    settings: str | None = typer.Option(None, "--settings", "-s", help="Settings YAML."),
    as_json: bool = typer.Option(False, "--json", help="Print outcomes as JSON."),
) -> None:
    """Print the matched reference (or OCR text) for each source."""
    matcher = build_matcher(document, build_settings(settings))
    image = read_screen(screen)

    outcomes = [matcher.evaluate(name, image) for name in sources]

    if as_json:
        typer.echo(json.dumps([o.model_dump(mode="json") for o in outcomes], indent=2))
        return

    for outcome in outcomes:
        if outcome.found:
            value = typer.style(outcome.matched, fg=typer.colors.GREEN)
        else:
            value = typer.style("-", fg=typer.colors.YELLOW)
        typer.echo(f"{outcome.source}: {value}")
