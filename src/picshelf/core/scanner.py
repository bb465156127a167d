"""Directory scanner for image files.

This module walks a directory tree down to a bounded depth and returns the
absolute paths of files whose extension marks them as images.

Depth is counted from the supplied root: the root itself is depth 0 and is
never returned, its children are depth 1, and traversal stops after depth
``MAX_DEPTH``. Unlike a best-effort media scan, any error while reading a
directory aborts the whole call so callers never see a silently incomplete
listing.
"""

import logging
import stat
import time
from pathlib import Path
from typing import List, Optional, Tuple, Union

from picshelf.core.mime import is_image_extension, path_extension
from picshelf.errors import NotFoundError, ReadError

# Logger for this module
logger = logging.getLogger(__name__)

MIN_DEPTH = 1
MAX_DEPTH = 3

# (lowercased file name, absolute path) pairs used only for sorting
DirectoryEntry = Tuple[str, str]


def _stat_mode(path: Path) -> Optional[int]:
    """Return the mode of *path* following symlinks, or None if it is gone.

    A dangling symlink has no target and is reported as missing. Every other
    ``OSError`` propagates so that callers cannot mistake an unreadable entry
    for a non-image.
    """
    try:
        return path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return None


def is_image_file(path: Path) -> bool:
    """Check if a path is a regular file with a recognized image extension.

    Symlinks are classified by their target, so a link to an image file
    counts as an image file.

    Args:
        path: The path to check

    Returns:
        True if the path is an image file, False otherwise

    Raises:
        OSError: If the path exists but cannot be stat'ed
    """
    mode = _stat_mode(path)
    return (
        mode is not None
        and stat.S_ISREG(mode)
        and is_image_extension(path_extension(path))
    )


def _process_directory(
    current_dir: Path, depth: int, max_depth: int, found: List[DirectoryEntry]
) -> None:
    """Collect image files below *current_dir*.

    Args:
        current_dir: Directory to read, located at *depth* below the root
        depth: Depth of *current_dir* relative to the root
        max_depth: Deepest level whose entries are still visited
        found: List the discovered entries are appended to

    Raises:
        ReadError: If any directory or entry in the subtree cannot be read
    """
    child_depth = depth + 1
    try:
        children = list(current_dir.iterdir())
    except OSError as e:
        raise ReadError(
            f"Error accessing directory {current_dir}: {e}", current_dir
        ) from e

    for item in children:
        try:
            mode = _stat_mode(item)
            if mode is None:
                continue
            if stat.S_ISREG(mode):
                if is_image_extension(path_extension(item)):
                    found.append((item.name.lower(), str(item)))
                continue
            # Linked directories are listed but never entered
            descend = (
                child_depth < max_depth
                and stat.S_ISDIR(mode)
                and not stat.S_ISLNK(item.lstat().st_mode)
            )
        except OSError as e:
            raise ReadError(f"Error accessing {item}: {e}", item) from e
        if descend:
            _process_directory(item, child_depth, max_depth, found)


def list_images_in_dir(
    directory: Union[str, Path], *, max_depth: int = MAX_DEPTH
) -> List[str]:
    """List image files below a directory.

    Args:
        directory: The directory to scan
        max_depth: Deepest level to visit; the root's children are level 1

    Returns:
        Absolute paths sorted by lowercased file name. Files sharing a
        lowercased name are ordered by their full path.

    Raises:
        NotFoundError: If the directory doesn't exist
        ReadError: If part of the tree cannot be read
        ValueError: If max_depth is below 1
    """
    if max_depth < MIN_DEPTH:
        raise ValueError(f"max_depth must be at least {MIN_DEPTH}: {max_depth}")

    root_dir = Path(directory)
    try:
        root_mode = _stat_mode(root_dir)
    except OSError as e:
        raise ReadError(f"Error accessing {directory}: {e}", directory) from e
    if root_mode is None:
        raise NotFoundError(f"Directory not found: {directory}", directory)

    # A plain file has no children to visit
    if not stat.S_ISDIR(root_mode):
        logger.debug("Not a directory, nothing to scan: %s", root_dir)
        return []

    # Use absolute path so the results are absolute too
    root_dir = root_dir.absolute()

    start_time = time.time()
    found: List[DirectoryEntry] = []
    _process_directory(root_dir, 0, max_depth, found)
    found.sort()

    logger.debug(
        "Found %d image(s) under %s in %.3fs",
        len(found),
        root_dir,
        time.time() - start_time,
    )
    return [path for _, path in found]
