"""Payload models handed to the presentation layer."""

from typing import Optional

from pydantic import BaseModel, Field

from ..models.directive import RenderDirective
from ..models.file_selection import FileSelection
from ..models.geometry import ScaleState


class ScaleStateResponse(BaseModel):
    """Scale of a document page fitted to the display width."""

    scale_factor: float = 1.0
    rendered_height: float = 0.0

    @classmethod
    def from_state(cls, state: ScaleState) -> "ScaleStateResponse":
        return cls(scale_factor=state.scale_factor, rendered_height=state.rendered_height)


class RenderDirectiveResponse(BaseModel):
    """Response model for a render directive."""

    kind: str = Field(..., description="image, document, empty or error")
    locator: Optional[str] = None
    width: Optional[float] = Field(None, description="Target width in pixels; None means natural width")
    height: Optional[float] = None
    status: Optional[str] = Field(None, description="Scaler status for documents")
    scale: Optional[ScaleStateResponse] = None
    error: Optional[str] = None
    renderable: bool = False

    @classmethod
    def from_directive(cls, directive: RenderDirective) -> "RenderDirectiveResponse":
        return cls(
            kind=directive.kind.value,
            locator=directive.locator,
            width=directive.width,
            height=directive.height,
            status=directive.status.value if directive.status else None,
            scale=ScaleStateResponse.from_state(directive.scale) if directive.scale else None,
            error=directive.error,
            renderable=directive.is_renderable,
        )


class FileSelectionResponse(BaseModel):
    """Response model for a file selection."""

    name: str
    path: Optional[str] = None
    size: Optional[int] = None
    content_type: Optional[str] = None
    preview_data_uri: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_selection(cls, selection: FileSelection) -> "FileSelectionResponse":
        raw = selection.raw_file
        return cls(
            name=raw.name,
            path=str(raw.path) if raw.path is not None else None,
            size=raw.size,
            content_type=raw.content_type,
            preview_data_uri=selection.preview_data_uri,
            error=selection.error,
        )
