"""
Command-line interface for partyhunt.

Provides the CLI command group and registers individual subcommands.
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from .. import __version__
from .analyze import analyze
from .export import export
from .history import history
from .transfers import transfers


def configure_logging(verbose: bool) -> logging.Logger:
    """Send partyhunt log records to stderr through Rich."""
    logger = logging.getLogger("partyhunt")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return logger


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(verbose):
    """partyhunt - Party hunt session parser and loot settlement tool."""
    configure_logging(verbose)


# Register CLI subcommands
main.add_command(analyze)
main.add_command(transfers)
main.add_command(export)
main.add_command(history)


if __name__ == "__main__":
    main()
