"""Attachment descriptor supplied by the caller for every render."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AttachmentDescriptor:
    """Describes one attachment to preview.

    A fresh descriptor is built by the caller each time the target width
    changes; instances are never mutated.

    Attributes:
        content_type: Declared MIME-like content type (e.g. "image/png")
        source_locator: URL, file path or data URI of the attachment
        display_width: Target width in pixels, or None for natural width
    """

    content_type: str
    source_locator: str
    display_width: Optional[float] = None

    def __post_init__(self):
        """Validate that content type and locator are non-empty strings."""
        if not isinstance(self.content_type, str) or not self.content_type.strip():
            raise ValueError(f"content_type must be a non-empty string, got {self.content_type!r}")
        if not isinstance(self.source_locator, str) or not self.source_locator.strip():
            raise ValueError(f"source_locator must be a non-empty string, got {self.source_locator!r}")
