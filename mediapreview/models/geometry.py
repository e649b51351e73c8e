"""Page geometry and scale state for document previews."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class ScalerStatus(Enum):
    """Lifecycle of a document scaler."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"
    GEOMETRY_UNAVAILABLE = "geometry_unavailable"
    FAILED = "failed"


def _as_number(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class PageGeometry:
    """Native size of a document page in PDF points.

    Attributes:
        intrinsic_width: Right edge of the page view box (x1)
        intrinsic_height: Bottom edge of the page view box (y1)
    """

    intrinsic_width: float
    intrinsic_height: float

    @classmethod
    def from_view_box(cls, view_box: Optional[Sequence]) -> Optional[PageGeometry]:
        """Build geometry from a view box [x0, y0, x1, y1].

        The origin is assumed at (0, 0), so x1 and y1 are taken as the page
        width and height.

        Returns:
            PageGeometry, or None if the box is absent or x1/y1 are missing
        """
        if view_box is None:
            return None
        try:
            if len(view_box) < 4:
                return None
            width = _as_number(view_box[2])
            height = _as_number(view_box[3])
        except TypeError:
            return None
        if width is None or height is None:
            return None
        return cls(intrinsic_width=width, intrinsic_height=height)


@dataclass(frozen=True)
class ScaleState:
    """Scale factor and derived height for a rendered page.

    Attributes:
        scale_factor: display_width / intrinsic_width (1.0 until known)
        rendered_height: intrinsic_height * scale_factor (0 until known)
    """

    scale_factor: float = 1.0
    rendered_height: float = 0.0
