"""Utility modules for picshelf."""

from picshelf.utils.config import resolve_setting, set_setting

__all__ = [
    "resolve_setting",
    "set_setting",
]
