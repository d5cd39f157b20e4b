"""Rich console setup and shared output helpers."""

import os
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

custom_theme = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "canonical": "bold cyan",
        "path": "dim",
    }
)

console = Console(theme=custom_theme)
err_console = Console(stderr=True, theme=custom_theme)


def displayable(value: str | os.PathLike) -> str:
    """Text that can always be written to the console.

    Bytes of a file name that are not valid UTF-8 are shown as ``\\xNN``
    escapes instead of raising on output.
    """
    return os.fsencode(value).decode("utf-8", "backslashreplace")


def print_path(path: Path, style: str | None = None, indent: int = 0, prefix: str = "") -> None:
    """Print a path on its own line, unwrapped and safe from markup."""
    text = escape(prefix + displayable(path))
    if style:
        text = f"[{style}]{text}[/{style}]"
    console.print(" " * indent + text, soft_wrap=True, highlight=False)


def format_size(size_bytes: int) -> str:
    """Format byte size as human-readable string (KB, MB, GB)."""
    if size_bytes >= 1024**3:
        return f"{size_bytes / 1024**3:.2f} GB"
    elif size_bytes >= 1024**2:
        return f"{size_bytes / 1024**2:.2f} MB"
    elif size_bytes >= 1024:
        return f"{size_bytes / 1024:.2f} KB"
    return f"{size_bytes} bytes"
