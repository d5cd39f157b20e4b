"""Duplicate detection and removal commands."""

import csv
import json
from pathlib import Path

import typer
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn

from dupetree.core.matcher import (
    DuplicateGroup,
    TargetIndex,
    build_index,
    find_duplicates,
    remove_duplicates,
)
from dupetree.core.scanner import materialize_context, materialize_target
from dupetree.errors import DupetreeError
from dupetree.utils.config import get_config
from dupetree.utils.console import console, displayable, format_size, print_path
from dupetree.utils.log import setup_logging

app = typer.Typer(help="Duplicate detection operations")

EXPORT_FORMATS = ("csv", "json")


@app.command()
def find(
    target: Path = typer.Argument(..., help="Directory holding the original files"),
    context: Path = typer.Argument(None, help="Directory to search for duplicates (default: current directory)"),
    force: bool = typer.Option(False, "--force", "-f", help="Delete duplicates found outside the target"),
    silent: bool = typer.Option(False, "--silent", "-s", help="Do not report deleted files"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Report the kept target file instead of deleting"),
    export: Path = typer.Option(None, "--export", "-e", help="Export duplicate groups to file"),
    export_format: str = typer.Option(None, "--format", help="Export format: csv or json"),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Show debug logging on stderr"),
):
    """Find files under CONTEXT that duplicate files under TARGET."""
    config = get_config()
    silent = silent or config.get("find", "silent", False)
    debug = debug or config.get("find", "debug", False)
    export_format = export_format or config.get("find", "export_format", "csv")
    setup_logging(verbose or config.get("general", "verbose", False))

    if export and export_format not in EXPORT_FORMATS:
        console.print(f"[error]Invalid format: {export_format}. Use 'csv' or 'json'[/error]")
        raise typer.Exit(1)

    if export and force:
        console.print("[error]--export only applies to listing and cannot be combined with --force[/error]")
        raise typer.Exit(1)

    working_dir = Path.cwd().resolve()
    target_root = Path(target).expanduser()
    context_root = Path(context).expanduser() if context else working_dir

    if not target_root.exists():
        console.print(f"[error]Path not found: {escape(displayable(target_root))}[/error]", soft_wrap=True)
        raise typer.Exit(1)

    try:
        target_set = materialize_target(target_root, working_dir)
        if not target_set:
            console.print("[warning]No files found in target[/warning]")
            raise typer.Exit(0)

        context_list = materialize_context(context_root, target_set, working_dir)
        console.print(
            f"\n[info]Comparing {len(context_list)} files against {len(target_set)} target files...[/info]"
        )

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Fingerprinting target files...", total=None)
            index = build_index(sorted(target_set), working_dir)

        if force:
            _remove(index, context_list, working_dir, silent=silent, debug=debug)
        else:
            groups = find_duplicates(index, context_list, working_dir)
            _report(groups)
            if export and groups:
                _export(groups, export, export_format)
            elif export:
                console.print("[warning]Nothing to export, no file written[/warning]")

    except KeyboardInterrupt:
        console.print("\n[warning]Operation cancelled by user[/warning]")
        raise typer.Exit(130)
    except DupetreeError as e:
        console.print(f"[error]{escape(displayable(str(e)))}[/error]", soft_wrap=True)
        raise typer.Exit(1)


def _report(groups: list[DuplicateGroup]):
    """Print each group as its target path followed by indented duplicates."""
    if not groups:
        console.print("\n[success]No duplicates found![/success]")
        return

    console.print()
    for group in groups:
        print_path(group.canonical, style="canonical")
        for duplicate in group.duplicates:
            print_path(duplicate, indent=4)

    total_duplicates = sum(len(group.duplicates) for group in groups)
    wasted = sum(group.wasted for group in groups)

    console.print(f"\n[bold]Summary:[/bold]")
    console.print(f"  Duplicate groups: [bold]{len(groups)}[/bold]")
    console.print(f"  Duplicate files: [bold]{total_duplicates}[/bold]")
    console.print(f"  Wasted space: [bold]{format_size(wasted)}[/bold]")
    console.print()
    console.print("[info]Dry run: No files deleted[/info]")
    console.print("[info]Run with --force to delete the duplicates outside the target[/info]")


def _remove(index: TargetIndex, context_list: list[Path], working_dir: Path, silent: bool, debug: bool):
    """Delete (or with debug, only report) every matched context file."""
    deleted_count = 0
    kept_count = 0

    try:
        for removal in remove_duplicates(index, context_list, debug=debug, working_dir=working_dir):
            if removal.deleted:
                deleted_count += 1
                if not silent:
                    print_path(removal.path, prefix="Deleted ")
            else:
                kept_count += 1
                console.print(
                    f"Keeping {escape(displayable(removal.canonical))} (duplicate: {escape(displayable(removal.path))})",
                    soft_wrap=True,
                    highlight=False,
                )
    except DupetreeError:
        if deleted_count:
            console.print(f"[warning]Deleted {deleted_count} files before the error[/warning]")
        raise

    if debug:
        console.print(f"\n[info]Debug: {kept_count} duplicates found, no files deleted[/info]")
    elif not silent:
        if deleted_count:
            console.print(f"\n[success]Successfully deleted {deleted_count} duplicate files[/success]")
        else:
            console.print("\n[success]No duplicates found![/success]")


def _export(groups: list[DuplicateGroup], export: Path, export_format: str):
    export_path = Path(export).expanduser().resolve()
    try:
        if export_format == "json":
            data = [
                {
                    "canonical": str(group.canonical),
                    "size": group.size,
                    "duplicates": [str(path) for path in group.duplicates],
                }
                for group in groups
            ]
            with open(export_path, "w") as f:
                json.dump(data, f, indent=2)
        else:  # CSV
            with open(export_path, "w", newline="", encoding="utf-8", errors="surrogateescape") as f:
                writer = csv.writer(f)
                writer.writerow(["canonical", "duplicate", "size"])
                for group in groups:
                    for path in group.duplicates:
                        writer.writerow([str(group.canonical), str(path), group.size])

        console.print(f"\n[success]Exported to: {escape(displayable(export_path))}[/success]", soft_wrap=True)
    except OSError as e:
        console.print(f"\n[error]Export failed: {e}[/error]")
        raise typer.Exit(1)
