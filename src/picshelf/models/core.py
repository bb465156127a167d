"""Core data models for picshelf.

This module defines the payloads that cross the boundary between the core and
its host.
- ExtractedImage is the result of reading one archive entry.
- CommandResponse is the envelope the command bridge hands back to the host.

Design:
- Models are pydantic so the host can serialise them with ``model_dump`` or
  ``model_dump_json`` without custom encoders.
- ExtractedImage is frozen; an extraction result is never edited after the
  fact.
"""

import base64
from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class ExtractedImage(BaseModel):
    """A fully buffered archive entry, base64 encoded for transport."""

    model_config = ConfigDict(frozen=True)

    mime_type: str
    """MIME type inferred from the entry name's extension."""

    data: str
    """Standard padded base64 of the raw entry bytes, without line breaks."""

    def as_tuple(self: "ExtractedImage") -> Tuple[str, str]:
        """Return the ``(mime_type, data)`` pair the host expects."""
        return self.mime_type, self.data

    def to_data_url(self: "ExtractedImage") -> str:
        """Format the payload as a ``data:`` URL usable as an image source."""
        return f"data:{self.mime_type};base64,{self.data}"

    def decode(self: "ExtractedImage") -> bytes:
        """Return the raw entry bytes."""
        return base64.b64decode(self.data, validate=True)


class CommandResponse(BaseModel):
    """Result of a bridge command.

    Exactly one of ``value`` and ``error`` is meaningful, selected by ``ok``.
    """

    ok: bool
    value: Optional[Any] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "CommandResponse":
        """Build a successful response."""
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, message: str) -> "CommandResponse":
        """Build a failed response carrying a human readable message."""
        return cls(ok=False, error=message)

    @model_validator(mode="after")
    def validate_error(self: "CommandResponse") -> "CommandResponse":
        """Ensure failed responses always say why.

        Raises:
            ValueError: If ``ok`` is false and no error message is set.
        """
        if not self.ok and not self.error:
            raise ValueError("A failed response needs an error message")
        return self
