"""Render directives returned to the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .geometry import ScaleState, ScalerStatus


class DirectiveKind(Enum):
    """What the presentation layer should draw."""

    IMAGE = "image"
    DOCUMENT = "document"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class RenderDirective:
    """Tagged result of dispatching an attachment.

    Attributes:
        kind: DirectiveKind of the result
        locator: Source locator the directive refers to
        width: Target width in pixels (None means natural width)
        height: Rendered height in pixels (documents only)
        status: Scaler status (documents only)
        scale: Current ScaleState (documents only)
        error: Error message (ERROR directives only)
    """

    kind: DirectiveKind
    locator: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None
    status: Optional[ScalerStatus] = None
    scale: Optional[ScaleState] = None
    error: Optional[str] = None

    @classmethod
    def image(cls, locator: str, width: Optional[float] = None) -> RenderDirective:
        return cls(kind=DirectiveKind.IMAGE, locator=locator, width=width)

    @classmethod
    def document(
        cls,
        locator: Optional[str],
        width: Optional[float],
        scale: ScaleState,
        status: ScalerStatus,
    ) -> RenderDirective:
        return cls(
            kind=DirectiveKind.DOCUMENT,
            locator=locator,
            width=width,
            height=scale.rendered_height,
            status=status,
            scale=scale,
        )

    @classmethod
    def empty(cls, locator: Optional[str] = None) -> RenderDirective:
        return cls(kind=DirectiveKind.EMPTY, locator=locator)

    @classmethod
    def error(cls, locator: Optional[str], message: str) -> RenderDirective:
        return cls(
            kind=DirectiveKind.ERROR,
            locator=locator,
            status=ScalerStatus.FAILED,
            error=message,
        )

    @property
    def is_renderable(self) -> bool:
        """True when there is something to draw right now."""
        if self.kind == DirectiveKind.IMAGE:
            return True
        if self.kind == DirectiveKind.DOCUMENT:
            return self.status == ScalerStatus.READY and bool(self.height)
        return False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "kind": self.kind.value,
            "locator": self.locator,
            "width": self.width,
            "height": self.height,
            "status": self.status.value if self.status else None,
            "scale_factor": self.scale.scale_factor if self.scale else None,
            "error": self.error,
        }
