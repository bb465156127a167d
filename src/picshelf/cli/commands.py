"""CLI commands for picshelf.

This module implements the user-facing commands that mirror the host
operations: listing images in a directory, listing images in a zip archive,
reading one archive entry, invoking a bridge command by name, and viewing
or saving settings.
- Uses Typer for declarative CLI structure and option parsing.
- Human output goes through Rich; ``--json`` writes plain JSON to stdout.
- Options left unset fall back to ``resolve_setting`` (env var, then config
  file, then built-in default).
"""

import json
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import tomli
import typer
from rich.markup import escape
from rich.table import Table

from picshelf.bridge import COMMANDS, invoke
from picshelf.cli import app
from picshelf.cli.console import ConsoleManager
from picshelf.core.archive import list_images_in_zip, read_zip_image
from picshelf.core.ordering import natural_sorted
from picshelf.core.scanner import MAX_DEPTH, list_images_in_dir
from picshelf.errors import PicshelfError
from picshelf.models.core import CommandResponse
from picshelf.utils.config import resolve_setting, set_setting
from picshelf.utils.debug import debug


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1


DIRECTORY = Annotated[
    Path,
    typer.Argument(help="Directory to list images from"),
]

ARCHIVE = Annotated[
    Path,
    typer.Argument(help="Zip archive to read"),
]

ENTRY = Annotated[
    str,
    typer.Argument(help="Exact entry name inside the archive"),
]

MAX_DEPTH_OPTION = Annotated[
    Optional[int],
    typer.Option(
        "--max-depth",
        "-d",
        min=1,
        help=f"Deepest directory level to visit (default {MAX_DEPTH})",
    ),
]

NATURAL = Annotated[
    Optional[bool],
    typer.Option(
        "--natural/--no-natural",
        help="Sort by file name in natural order (page2 before page10)",
    ),
]

JSON_OUTPUT = Annotated[
    bool,
    typer.Option(
        "--json",
        help="Output results in JSON format",
    ),
]

DATA_URL = Annotated[
    bool,
    typer.Option(
        "--data-url",
        help="Print the entry as a data: URL",
    ),
]


def _fail(error: Exception) -> NoReturn:
    """Print *error* and exit with an error code."""
    with ConsoleManager() as out:
        out.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    raise typer.Exit(ExitCode.ERROR)


def _write_json(value: object) -> None:
    sys.stdout.write(json.dumps(value, indent=2) + "\n")


def _emit_names(names: List[str], json_output: bool) -> None:
    if json_output:
        _write_json(names)
        return
    with ConsoleManager() as out:
        if not names:
            out.print("[yellow]No images found.[/yellow]")
            return
        for name in names:
            out.print(name, markup=False, highlight=False, soft_wrap=True)


def _natural_enabled(cli_value: Optional[bool]) -> bool:
    return resolve_setting("output.natural_sort", default=False, cli_value=cli_value)


@app.command("dir")
def list_dir(
    directory: DIRECTORY,
    max_depth: MAX_DEPTH_OPTION = None,
    natural: NATURAL = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """List image files in a directory, up to a few levels deep."""
    depth = resolve_setting("scan.max_depth", default=MAX_DEPTH, cli_value=max_depth)
    debug(f"Listing {directory} to depth {depth}")
    try:
        paths = list_images_in_dir(directory, max_depth=depth)
    except (PicshelfError, ValueError) as e:
        _fail(e)
    if _natural_enabled(natural):
        paths = natural_sorted(paths)
    _emit_names(paths, json_output)


@app.command("zip")
def list_zip(
    archive: ARCHIVE,
    natural: NATURAL = None,
    json_output: JSON_OUTPUT = False,
) -> None:
    """List image entries in a zip archive."""
    debug(f"Listing entries of {archive}")
    try:
        names = list_images_in_zip(archive)
    except PicshelfError as e:
        _fail(e)
    if _natural_enabled(natural):
        names = natural_sorted(names)
    _emit_names(names, json_output)


@app.command("read")
def read_entry(
    archive: ARCHIVE,
    entry: ENTRY,
    data_url: DATA_URL = False,
    json_output: JSON_OUTPUT = False,
) -> None:
    """Extract one archive entry as base64 with its MIME type."""
    debug(f"Reading {entry!r} from {archive}")
    try:
        image = read_zip_image(archive, entry)
    except PicshelfError as e:
        _fail(e)

    if json_output:
        _write_json(image.model_dump())
    elif data_url:
        sys.stdout.write(image.to_data_url() + "\n")
    else:
        table = Table(title=escape(entry), show_header=False)
        table.add_row("MIME type", image.mime_type)
        table.add_row("Size", f"{len(image.decode())} bytes")
        table.add_row("Base64 length", str(len(image.data)))
        with ConsoleManager() as out:
            out.print(table)


@app.command("invoke")
def invoke_command(
    command: Annotated[
        str,
        typer.Argument(help=f"Command name: {', '.join(COMMANDS)}"),
    ],
    args_json: Annotated[
        str,
        typer.Argument(help='Arguments as a JSON object, e.g. \'{"path": "a.zip"}\''),
    ] = "{}",
) -> None:
    """Run a host command and print its JSON response."""
    try:
        args = json.loads(args_json)
    except json.JSONDecodeError as e:
        response = CommandResponse.failure(f"Invalid JSON arguments: {e}")
    else:
        if isinstance(args, dict):
            response = invoke(command, args)
        else:
            response = CommandResponse.failure("Arguments must be a JSON object")

    sys.stdout.write(response.model_dump_json() + "\n")
    if not response.ok:
        raise typer.Exit(ExitCode.ERROR)


# Settings the CLI reads, with their built-in defaults
KNOWN_SETTINGS = {
    "scan.max_depth": MAX_DEPTH,
    "output.natural_sort": False,
}

config_app = typer.Typer(help="Show or change persistent settings.")
app.add_typer(config_app, name="config")

SETTING_KEY = Annotated[
    str,
    typer.Argument(help=f"Setting name: {', '.join(KNOWN_SETTINGS)}"),
]


def _parse_setting(key: str, raw: str) -> object:
    """Parse *raw* as a TOML value of the type *key* expects.

    Raises:
        ValueError: If the key is unknown or the value has the wrong type.
    """
    if key not in KNOWN_SETTINGS:
        raise ValueError(f"Unknown setting: {key}")
    default = KNOWN_SETTINGS[key]
    try:
        value = tomli.loads(f"value = {raw}")["value"]
    except tomli.TOMLDecodeError as e:
        raise ValueError(f"Invalid value for {key}: {raw}") from e
    if type(value) is not type(default):
        raise ValueError(f"{key} expects a {type(default).__name__}: {raw}")
    if key == "scan.max_depth" and value < 1:
        raise ValueError(f"{key} must be at least 1: {raw}")
    return value


@config_app.command("set")
def config_set(
    key: SETTING_KEY,
    value: Annotated[str, typer.Argument(help="New value, e.g. 2 or true")],
) -> None:
    """Save a setting to the config file."""
    try:
        parsed = _parse_setting(key, value)
        set_setting(key, parsed)
    except (ValueError, OSError) as e:
        _fail(e)
    with ConsoleManager() as out:
        out.print(f"Saved [bold]{escape(key)}[/bold] = {json.dumps(parsed)}")


@config_app.command("get")
def config_get(key: SETTING_KEY) -> None:
    """Show the effective value of a setting."""
    if key not in KNOWN_SETTINGS:
        _fail(ValueError(f"Unknown setting: {key}"))
    value = resolve_setting(key, default=KNOWN_SETTINGS[key])
    sys.stdout.write(json.dumps(value) + "\n")


def main() -> None:
    """Main entry point for the CLI."""
    app()
