"""Pipeline stages for media previews."""

from .content_types import ContentCategory, classify, is_image, is_pdf
from .dispatcher import ContentDispatcher
from .document_loader import DocumentLoadError, DocumentLoader, get_document_loader
from .document_scaler import DocumentScaler
from .file_preview import FilePreviewPipeline
from .file_reader import DataUriFileReader, FileDecodeError, FileReader
from .scaling import compute_scale_state

__all__ = [
    "ContentCategory",
    "classify",
    "is_image",
    "is_pdf",
    "ContentDispatcher",
    "DocumentLoadError",
    "DocumentLoader",
    "get_document_loader",
    "DocumentScaler",
    "FilePreviewPipeline",
    "DataUriFileReader",
    "FileDecodeError",
    "FileReader",
    "compute_scale_state",
]
