"""Natural ordering for page-like file names.

Comic and photo archives usually number their pages without zero padding, so
plain string order puts ``page10`` before ``page2``. :func:`natural_sorted`
compares names the way a reader expects. It is opt-in: the listers keep their
own documented order.
"""

import functools
import posixpath
import re
from typing import Iterable, List

_DIGITS = "0123456789"
_CHUNK_RE = re.compile(r"[0-9]+|[^0-9]+")


def _chunks(name: str) -> List[str]:
    # Only the basename takes part, folded to lowercase
    return _CHUNK_RE.findall(posixpath.basename(name.replace("\\", "/")).lower())


def natural_compare(a: str, b: str) -> int:
    """Compare two names in natural order.

    Digit runs compare by numeric value (leading zeros ignored, then by
    digits), other runs compare as strings. When every shared run is equal
    the name with fewer runs comes first.

    Returns:
        A negative number, zero or a positive number, like ``cmp``.
    """
    a_chunks, b_chunks = _chunks(a), _chunks(b)
    for sa, sb in zip(a_chunks, b_chunks):
        if sa[0] in _DIGITS and sb[0] in _DIGITS:
            ta, tb = sa.lstrip("0"), sb.lstrip("0")
            if len(ta) != len(tb):
                return -1 if len(ta) < len(tb) else 1
            if ta != tb:
                return -1 if ta < tb else 1
        elif sa != sb:
            return -1 if sa < sb else 1
    if len(a_chunks) != len(b_chunks):
        return -1 if len(a_chunks) < len(b_chunks) else 1
    return 0


natural_key = functools.cmp_to_key(natural_compare)


def natural_sorted(names: Iterable[str]) -> List[str]:
    """Return *names* in natural order (stable for equal names)."""
    return sorted(names, key=natural_key)
