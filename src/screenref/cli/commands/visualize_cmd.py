"""screenref visualize — draw source markers onto a screen capture."""

from __future__ import annotations

import cv2
import typer

from screenref.cli.commands._common import (
    build_matcher,
    build_settings,
    fail,
    read_screen,
)


def visualize_command(
    document: str = typer.Argument(help="Match document (JSON or YAML)."),
    screen: str = typer.Argument(help="Screen capture image."),
    output: str = typer.Argument(help="Where to write the annotated PNG."),
    sources: list[str] | None = typer.Argument(None, help="Source names (default: all)."),
    settings: str | None = typer.Option(None, "--settings", "-s", help="Settings YAML."),
) -> None:
    """Write a copy of SCREEN with the given sources outlined."""
    matcher = build_matcher(document, build_settings(settings))
    image = read_screen(screen)

    names = sources or [s.name for s in matcher.document.sources]
    annotated = matcher.visualize(image, names)

    if not cv2.imwrite(output, annotated):
        raise fail(f"Cannot write image: {output}")
    typer.echo(f"Wrote {output} ({len(names)} source(s))")
