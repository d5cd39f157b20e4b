"""Entry point wiring the dupetree sub-commands together."""

import typer

from dupetree import __version__
from dupetree.commands import config, duplicates

app = typer.Typer(
    name="dupetree",
    help="Find files that duplicate a target directory's contents elsewhere, and optionally remove them.",
    no_args_is_help=True,
)
app.add_typer(duplicates.app, name="dupes")
app.add_typer(config.app, name="config")


def _print_version(value: bool):
    if value:
        typer.echo(f"dupetree version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Print the dupetree version",
        callback=_print_version,
        is_eager=True,
    )
):
    """Compare a target tree against a wider context tree by file content."""


if __name__ == "__main__":
    app()
