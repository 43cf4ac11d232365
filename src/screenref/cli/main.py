"""screenref CLI entry point."""

import logging

import typer

app = typer.Typer(
    name="screenref",
    help="screenref — match screen sources against declared references",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    if value:
        from screenref import __version__

        typer.echo(f"screenref {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """screenref — match screen sources against declared references."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# -- Register commands --------------------------------------------------------

from screenref.cli.commands.match_cmd import match_command  # noqa: E402
from screenref.cli.commands.validate_cmd import validate_command  # noqa: E402
from screenref.cli.commands.visualize_cmd import visualize_command  # noqa: E402

app.command(name="match")(match_command)
app.command(name="visualize")(visualize_command)
app.command(name="validate")(validate_command)
