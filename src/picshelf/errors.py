"""Error taxonomy for picshelf.

Every failure raised by the core is a :class:`PicshelfError` carrying an
:class:`ErrorKind`, so callers can branch on the kind while the host boundary
(bridge and CLI) only ever needs ``str(error)``.
"""

from enum import Enum
from pathlib import Path
from typing import Optional, Union


class ErrorKind(str, Enum):
    """Kind of failure reported by a listing or extraction call."""

    NOT_FOUND = "not_found"
    IO = "io"
    ARCHIVE_FORMAT = "archive_format"
    ENTRY_NOT_FOUND = "entry_not_found"


class PicshelfError(Exception):
    """Base class for all picshelf errors."""

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(message)
        self.path = str(path) if path is not None else None


class NotFoundError(PicshelfError):
    """The directory passed to the directory lister does not exist."""

    kind = ErrorKind.NOT_FOUND


class ReadError(PicshelfError):
    """A file or directory exists but could not be opened or read."""

    kind = ErrorKind.IO


class ArchiveFormatError(PicshelfError):
    """The bytes could not be parsed or decompressed as a zip container."""

    kind = ErrorKind.ARCHIVE_FORMAT


class EntryNotFoundError(PicshelfError):
    """No entry with the exact requested name exists in the archive."""

    kind = ErrorKind.ENTRY_NOT_FOUND

    def __init__(self, entry: str, path: Optional[Union[str, Path]] = None) -> None:
        super().__init__(f"Entry not found in archive: {entry}", path)
        self.entry = entry


__all__ = [
    "ErrorKind",
    "PicshelfError",
    "NotFoundError",
    "ReadError",
    "ArchiveFormatError",
    "EntryNotFoundError",
]
