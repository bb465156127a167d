"""Zip archive listing and single-entry extraction.

Each call reads the whole archive file into memory and parses it from scratch;
no handle or index survives between a listing and a later extraction. The
caller re-supplies the exact entry name it got from the listing.
"""

import base64
import io
import logging
import lzma
import zipfile
import zlib
from pathlib import Path
from typing import List, Union

from picshelf.core.mime import entry_extension, is_image_extension, mime_type_for
from picshelf.errors import ArchiveFormatError, EntryNotFoundError, ReadError
from picshelf.models.core import ExtractedImage

logger = logging.getLogger(__name__)

# Raised while decompressing a damaged or unsupported entry. The archive is
# already in memory, so an OSError here comes from the bz2 decompressor.
_DECOMPRESS_ERRORS = (
    zipfile.BadZipFile,
    zlib.error,
    lzma.LZMAError,
    OSError,
    EOFError,
    NotImplementedError,
    RuntimeError,
)


def _read_archive(path: Union[str, Path]) -> zipfile.ZipFile:
    """Read an archive fully into memory and parse its central directory."""
    try:
        data = Path(path).read_bytes()
    except OSError as e:
        raise ReadError(f"Error reading archive {path}: {e}", path) from e

    logger.debug("Read %d bytes from %s", len(data), path)
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, zlib.error, EOFError, ValueError) as e:
        raise ArchiveFormatError(f"Invalid zip archive {path}: {e}", path) from e


def is_image_entry(info: zipfile.ZipInfo) -> bool:
    """Check whether a zip entry is a file with a recognized image extension."""
    if info.is_dir():
        return False
    return is_image_extension(entry_extension(info.filename))


def list_images_in_zip(path: Union[str, Path]) -> List[str]:
    """List image entries of a zip archive.

    Args:
        path: Path to the zip file

    Returns:
        Full entry names, sorted by plain string order on their original case.

    Raises:
        ReadError: If the file cannot be opened or read
        ArchiveFormatError: If the file is not a valid zip archive
    """
    with _read_archive(path) as archive:
        names = [info.filename for info in archive.infolist() if is_image_entry(info)]
    names.sort()
    logger.debug("Found %d image entries in %s", len(names), path)
    return names


def read_zip_image(path: Union[str, Path], entry: str) -> ExtractedImage:
    """Extract one entry of a zip archive as base64 with its MIME type.

    The MIME type comes from the entry name's extension only; the bytes are
    not inspected.

    Args:
        path: Path to the zip file
        entry: Exact, case-sensitive entry name as returned by
            :func:`list_images_in_zip`

    Returns:
        The extracted payload.

    Raises:
        ReadError: If the file cannot be opened or read
        ArchiveFormatError: If the archive or the entry data is invalid
        EntryNotFoundError: If no entry has exactly this name
    """
    with _read_archive(path) as archive:
        try:
            info = archive.getinfo(entry)
        except KeyError as e:
            raise EntryNotFoundError(entry, path) from e
        try:
            content = archive.read(info)
        except _DECOMPRESS_ERRORS as e:
            raise ArchiveFormatError(
                f"Cannot extract {entry} from {path}: {e}", path
            ) from e

    logger.debug("Extracted %s (%d bytes) from %s", entry, len(content), path)
    return ExtractedImage(
        mime_type=mime_type_for(entry),
        data=base64.b64encode(content).decode("ascii"),
    )
