"""Extension classification shared by the directory and archive listers.

Both listers decide what counts as an image purely from the file extension, and
the extractor derives the MIME type from the same table. Nothing here looks at
file contents.
"""

from pathlib import PurePath
from types import MappingProxyType
from typing import Mapping

FALLBACK_MIME_TYPE = "application/octet-stream"

# Keys are lowercase extensions without the leading dot.
IMAGE_MIME_TYPES: Mapping[str, str] = MappingProxyType(
    {
        "jpg": "image/jpeg",
        "jpeg": "image/jpeg",
        "png": "image/png",
        "gif": "image/gif",
        "webp": "image/webp",
        "avif": "image/avif",
        "bmp": "image/bmp",
    }
)

IMAGE_EXTENSIONS: frozenset[str] = frozenset(IMAGE_MIME_TYPES)


def path_extension(path: PurePath) -> str:
    """Return the lowercased filesystem extension of *path* without the dot.

    Follows pathlib rules, so ``photo.JPG`` gives ``"jpg"`` while dotfiles such
    as ``.png`` and names without a suffix give ``""``.
    """
    return path.suffix[1:].lower()


def entry_extension(name: str) -> str:
    """Return the lowercased text after the last ``.`` in an archive entry name.

    Entry names are matched as plain strings, internal ``/`` separators
    included. A name without any ``.`` has no extension.
    """
    if "." not in name:
        return ""
    return name.rsplit(".", 1)[1].lower()


def is_image_extension(extension: str) -> bool:
    """Check whether a lowercase extension is a recognized image type."""
    return extension in IMAGE_EXTENSIONS


def mime_type_for(name: str) -> str:
    """Infer the MIME type of an archive entry from its name.

    Args:
        name: Entry name, e.g. ``"img/Photo.PNG"``.

    Returns:
        The canonical MIME type, or ``application/octet-stream`` when the
        extension is absent or not recognized.
    """
    return IMAGE_MIME_TYPES.get(entry_extension(name), FALLBACK_MIME_TYPE)
