"""Loaded document handle and page data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass
class DocumentHandle:
    """Opaque reference to a document opened by a DocumentLoader.

    Attributes:
        locator: Locator the document was opened from
        page_count: Number of pages in document
        native: Backend document object (pdfplumber.PDF or fitz.Document)
        loader_name: Name of the loader that produced the handle
        content: Raw document bytes, kept for rasterising pages
        metadata: Optional additional metadata
        closed: True once the loader has released the native document
    """

    locator: str
    page_count: int
    native: Any = None
    loader_name: str = ""
    content: bytes = field(default=b"", repr=False)
    metadata: Dict[str, Any] = field(default_factory=dict)
    closed: bool = False

    def __post_init__(self):
        """Validate page count is not negative."""
        if self.page_count < 0:
            raise ValueError(f"Page count must be >= 0, got {self.page_count}")


@dataclass
class LoadedPage:
    """A single page fetched from a DocumentHandle.

    Attributes:
        page_number: Page number (starts at 1)
        view_box: Native viewport box [x0, y0, x1, y1] in points, if known
    """

    page_number: int
    view_box: Optional[Tuple[float, ...]] = None

    def __post_init__(self):
        """Validate page number is positive."""
        if self.page_number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.page_number}")
