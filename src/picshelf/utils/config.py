"""Config utility for persistent picshelf settings.

Settings live in ~/.config/picshelf/config.toml (or under $XDG_CONFIG_HOME).
Uses tomli/tomli-w for TOML parsing and writing. Values are resolved with the
precedence CLI option > PICSHELF_* environment variable > config file >
built-in default.
"""

from pathlib import Path
from typing import TypeVar, Any, cast
import os
import contextlib

import tomli
import tomli_w

# Determine config directory respecting XDG_CONFIG_HOME if set.
_xdg_config_home = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
CONFIG_DIR = _xdg_config_home / "picshelf"
CONFIG_FILE = CONFIG_DIR / "config.toml"

ENV_PREFIX = "PICSHELF_"

_TRUTHY = {"1", "true", "yes", "on"}

T = TypeVar("T")


def _read_config_file() -> dict[str, Any]:
    """Read the TOML config file if it exists, returning a (nested) dict."""

    if not CONFIG_FILE.exists():
        return {}
    with CONFIG_FILE.open("rb") as f:
        return tomli.load(f)


def _lookup_nested(data: dict[str, Any], dotted_key: str) -> Any | None:
    """Retrieve a nested value from *data* given a dotted key path.

    Example: dotted_key="scan.max_depth" will attempt
    ``data["scan"]["max_depth"]`` returning None if any level is missing.
    """

    current: Any = data
    for part in dotted_key.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def _make_env_var_name(dotted_key: str, prefix: str = ENV_PREFIX) -> str:
    """Convert a dotted key path to an uppercase ENV var name.

    Example: "scan.max_depth" -> "PICSHELF_SCAN_MAX_DEPTH".
    """

    return prefix + dotted_key.replace(".", "_").upper()


def _coerce(raw: Any, default: T) -> T:
    """Coerce *raw* to the type of *default*, falling back to *default*."""
    if isinstance(default, bool):
        if isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            return cast(T, raw.lower() in _TRUTHY)
        return default
    if isinstance(default, int):
        if isinstance(raw, int) and not isinstance(raw, bool):
            return cast(T, raw)
        if isinstance(raw, str):
            with contextlib.suppress(ValueError):
                return cast(T, int(raw))
        return default
    if isinstance(default, float):
        if isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return cast(T, float(raw))
        if isinstance(raw, str):
            with contextlib.suppress(ValueError):
                return cast(T, float(raw))
        return default
    if default is None and isinstance(raw, str):
        # Type unknown, try int/float before giving up and keeping the string
        if raw.isdigit():
            return cast(T, int(raw))
        with contextlib.suppress(ValueError):
            return cast(T, float(raw))
    return cast(T, raw)


def resolve_setting(
    key: str,
    *,
    default: T,
    cli_value: T | None = None,
) -> T:
    """Resolve a configuration *key* using precedence CLI > env > config > default.

    Args:
        key: Dotted key path, e.g. ``"scan.max_depth"``.
        default: Value to fall back to when no overrides found.
        cli_value: Value passed from CLI option (may be ``None`` when not provided).

    Returns:
        The resolved value with type matching *default* (or *cli_value*).
    """

    # 1. CLI value wins if provided (and not ``None`` to mimic Typer semantics).
    if cli_value is not None:
        return cli_value

    # 2. Environment variable
    env_var = _make_env_var_name(key)
    if env_var in os.environ:
        return _coerce(os.environ[env_var], default)

    # 3. Config file lookup
    file_val = _lookup_nested(_read_config_file(), key)
    if file_val is not None:
        return _coerce(file_val, default)

    # 4. Default
    return default


def set_setting(key: str, value: Any) -> None:
    """Persist *value* under the dotted *key* in config.toml.

    Intermediate tables are created as needed; other settings are kept.

    Args:
        key: Dotted key path, e.g. ``"output.natural_sort"``.
        value: A TOML-serialisable value.

    Raises:
        ValueError: If a parent of *key* already holds a non-table value.
    """
    data = _read_config_file()
    *parents, leaf = key.split(".")
    table = data
    for part in parents:
        table = table.setdefault(part, {})
        if not isinstance(table, dict):
            raise ValueError(f"Config key {part!r} is not a table")
    table[leaf] = value

    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    with CONFIG_FILE.open("wb") as f:
        tomli_w.dump(data, f)
