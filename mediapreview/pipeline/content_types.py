"""Content type classification and sniffing for attachments."""

from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable, Optional
from urllib.parse import unquote, urlparse

import filetype

OCTET_STREAM = "application/octet-stream"
PDF = "application/pdf"

# Extension to canonical MIME type mapping, used when a locator is served as
# octet-stream or magic bytes are inconclusive.
EXTENSION_TO_MIME = {
    ".pdf": PDF,
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".txt": "text/plain",
    ".html": "text/html",
    ".json": "application/json",
}


class ContentCategory(Enum):
    """Renderer strategy an attachment is routed to."""

    IMAGE = "image"
    DOCUMENT = "document"
    UNSUPPORTED = "unsupported"


def normalize_content_type(content_type: Optional[str]) -> str:
    """Lowercase a content type and drop parameters such as charset."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_image(content_type: Optional[str]) -> bool:
    return normalize_content_type(content_type).startswith("image/")


def is_pdf(content_type: Optional[str], document_types: Iterable[str] = (PDF,)) -> bool:
    return normalize_content_type(content_type) in {normalize_content_type(t) for t in document_types}


def classify(content_type: Optional[str], document_types: Iterable[str] = (PDF,)) -> ContentCategory:
    """Classify a content type into exactly one renderer category.

    Args:
        content_type: Declared content type
        document_types: Content types rendered as documents

    Returns:
        ContentCategory.IMAGE for image/*, DOCUMENT for a configured document
        type, UNSUPPORTED otherwise
    """
    if is_image(content_type):
        return ContentCategory.IMAGE
    if is_pdf(content_type, document_types):
        return ContentCategory.DOCUMENT
    return ContentCategory.UNSUPPORTED


def guess_content_type_from_filename(filename: str) -> str:
    """Guess a content type from a file name or locator's extension.

    Returns:
        Canonical MIME type, or application/octet-stream if the extension is unknown
    """
    if not filename:
        return OCTET_STREAM
    path = filename
    if "://" in filename:
        path = unquote(urlparse(filename).path)
    suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
    return EXTENSION_TO_MIME.get(suffix, OCTET_STREAM)


def resolve_declared_type(content_type: Optional[str], locator: str) -> str:
    """Replace an ambiguous declared type with a guess from the locator.

    Only an empty or application/octet-stream type is replaced.
    """
    normalized = normalize_content_type(content_type)
    if normalized and normalized != OCTET_STREAM:
        return normalized
    if locator.startswith("data:"):
        return normalize_content_type(locator[5:].split(",", 1)[0]) or OCTET_STREAM
    return guess_content_type_from_filename(locator)


def sniff_content_type(filename: str, head: bytes) -> str:
    """Detect a content type from the leading bytes of a file.

    Magic bytes win; the file extension is used when they are inconclusive.

    Args:
        filename: File name, used as fallback
        head: Leading bytes of the file (the first 8 KB are enough)

    Returns:
        Detected MIME type, or application/octet-stream
    """
    kind = filetype.guess(head) if head else None
    if kind is not None:
        return kind.mime
    return guess_content_type_from_filename(filename)
