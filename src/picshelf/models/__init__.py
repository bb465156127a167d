"""Domain models for the picshelf application."""

from picshelf.models.core import CommandResponse, ExtractedImage

__all__ = [
    "CommandResponse",
    "ExtractedImage",
]
