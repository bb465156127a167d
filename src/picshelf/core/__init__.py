"""Core functionality for picshelf.

This package exposes the listing and extraction functions used by the command
bridge and the CLI.
- list_images_in_dir: Lists image files below a directory, bounded in depth.
- list_images_in_zip: Lists image entries of a zip archive.
- read_zip_image: Extracts one archive entry as base64 with its MIME type.
- natural_sorted: Optional natural ordering for page-like names.
"""

from picshelf.core.archive import list_images_in_zip, read_zip_image
from picshelf.core.mime import IMAGE_EXTENSIONS, IMAGE_MIME_TYPES, mime_type_for
from picshelf.core.ordering import natural_sorted
from picshelf.core.scanner import list_images_in_dir

__all__ = [
    "IMAGE_EXTENSIONS",
    "IMAGE_MIME_TYPES",
    "list_images_in_dir",
    "list_images_in_zip",
    "mime_type_for",
    "natural_sorted",
    "read_zip_image",
]
