"""Command-line interface for picshelf.

This package provides the Typer app and global console for all CLI commands and
user-facing output.

- app: The Typer application object, used by all CLI entrypoints and subcommands.
- console: Rich Console instance for consistent, styled output.
- Commands live in :mod:`picshelf.cli.commands` and register themselves on app.
"""

import os

import typer
from rich.traceback import install

from picshelf.cli.console import ENV_DISABLE_RICH, console
from picshelf.utils.debug import debug_enabled, setup_logger

# Install rich traceback handler for all CLI commands
install(show_locals=True)

app = typer.Typer(
    name="picshelf",
    help="List images in folders and zip archives and extract archive entries.",
    add_completion=True,
)


@app.callback()
def callback(
    ctx: typer.Context,  # noqa: D401 – Typer requires ctx param first
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help=(
            "Disable Rich coloured output. "
            "Can also be set with the PICSHELF_NO_RICH environment variable."
        ),
    ),
) -> None:
    """Top-level CLI callback adding global options.

    The *--no-rich* flag sets the ``PICSHELF_NO_RICH`` environment variable so
    that :class:`~picshelf.cli.console.ConsoleManager` responds the same way
    whether the flag is passed or the variable is set externally.
    """
    if debug_enabled():
        setup_logger()
    if no_rich:
        os.environ[ENV_DISABLE_RICH] = "1"


@app.command()
def version() -> None:
    """Show the version of picshelf."""
    from picshelf.__about__ import __version__

    console.print(f"Picshelf version: [bold]{__version__}[/bold]")


# Registers the remaining commands on app.
from picshelf.cli import commands  # noqa: E402,F401

__all__ = ["app", "console"]
