"""Logging setup for the CLI."""

import logging

from rich.logging import RichHandler

from dupetree.utils.console import err_console

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """Route log records to the stderr console.

    WARNING and above are shown by default; ``verbose`` enables DEBUG output
    from the scanner, fingerprinting and removal steps.
    """
    root = logging.getLogger("dupetree")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)

    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
