"""Request/response bridge between the host application and the core.

The host invokes a command by name with string arguments and always gets a
:class:`~picshelf.models.core.CommandResponse` back. This is the only place
where :class:`~picshelf.errors.PicshelfError` is flattened into a message
string; the core itself keeps raising typed errors.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping, Tuple

from picshelf.core.archive import list_images_in_zip, read_zip_image
from picshelf.core.scanner import list_images_in_dir
from picshelf.errors import PicshelfError
from picshelf.models.core import CommandResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Command:
    """A host-callable operation and the argument names it takes."""

    handler: Callable[..., Any]
    params: Tuple[str, ...]


def _list_dir(dir: str) -> list[str]:  # noqa: A002 - host argument name
    return list_images_in_dir(dir)


def _list_zip(path: str) -> list[str]:
    return list_images_in_zip(path)


def _read_zip(path: str, entry: str) -> list[str]:
    return list(read_zip_image(path, entry).as_tuple())


COMMANDS: Mapping[str, Command] = MappingProxyType(
    {
        "list_images_in_dir": Command(_list_dir, ("dir",)),
        "list_images_in_zip": Command(_list_zip, ("path",)),
        "read_zip_image": Command(_read_zip, ("path", "entry")),
    }
)


def _check_args(name: str, command: Command, args: Mapping[str, Any]) -> str | None:
    """Return a message describing what is wrong with *args*, if anything."""
    missing = [p for p in command.params if p not in args]
    if missing:
        return f"Missing argument(s) for {name}: {', '.join(missing)}"
    unexpected = sorted(set(args) - set(command.params))
    if unexpected:
        return f"Unexpected argument(s) for {name}: {', '.join(unexpected)}"
    wrong_type = [p for p in command.params if not isinstance(args[p], str)]
    if wrong_type:
        return f"Argument(s) must be strings for {name}: {', '.join(wrong_type)}"
    return None


def invoke(command: str, args: Mapping[str, Any]) -> CommandResponse:
    """Run a host command and wrap its outcome.

    Args:
        command: Command name, one of :data:`COMMANDS`.
        args: Keyword arguments, all strings.

    Returns:
        A successful response with the command's value, or a failed response
        whose ``error`` is the description of what went wrong.
    """
    spec = COMMANDS.get(command)
    if spec is None:
        return CommandResponse.failure(f"Unknown command: {command}")

    problem = _check_args(command, spec, args)
    if problem:
        return CommandResponse.failure(problem)

    try:
        value = spec.handler(**{p: args[p] for p in spec.params})
    except PicshelfError as e:
        logger.debug("%s failed (%s): %s", command, e.kind.value, e)
        return CommandResponse.failure(str(e))
    return CommandResponse.success(value)
