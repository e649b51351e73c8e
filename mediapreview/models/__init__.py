"""Data models for media previews."""

from .attachment import AttachmentDescriptor
from .directive import DirectiveKind, RenderDirective
from .document import DocumentHandle, LoadedPage
from .file_selection import FileSelection, SelectedFile
from .geometry import PageGeometry, ScaleState, ScalerStatus

__all__ = [
    "AttachmentDescriptor",
    "DirectiveKind",
    "RenderDirective",
    "DocumentHandle",
    "LoadedPage",
    "FileSelection",
    "SelectedFile",
    "PageGeometry",
    "ScaleState",
    "ScalerStatus",
]
