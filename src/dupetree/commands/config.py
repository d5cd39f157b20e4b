"""Configuration management commands."""

import typer
from rich.table import Table

from dupetree.utils.config import get_config
from dupetree.utils.console import console

app = typer.Typer(help="Configuration management")


@app.command()
def init():
    """Create a default config file at ~/.config/dupetree/config.toml."""
    config = get_config()

    if config.config_file.exists():
        console.print(f"[warning]Config file already exists:[/warning] {config.config_file}")
        raise typer.Exit(0)

    try:
        config.create_example_config()
    except OSError as e:
        console.print(f"[error]Could not write config file: {e}[/error]")
        raise typer.Exit(1)
    console.print(f"[success]Created config file:[/success] {config.config_file}")


@app.command()
def show():
    """Show the effective settings and where each one comes from."""
    config = get_config()

    console.print(f"[bold]Config file:[/bold] {config.config_file}")
    if not config.config_file.exists():
        console.print("[info]No config file, using defaults. Run 'dupetree config init' to create one[/info]")
    console.print()

    table = Table(title="Settings", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")
    for section, key, value, from_file in config.settings():
        table.add_row(f"{section}.{key}", str(value).lower() if isinstance(value, bool) else str(value),
                      "file" if from_file else "default")
    console.print(table)


@app.command()
def path():
    """Show the config file path."""
    console.print(str(get_config().config_file), soft_wrap=True)
