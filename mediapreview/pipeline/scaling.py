"""Responsive scale computation for document pages."""

import math
from typing import Optional

from ..models.geometry import PageGeometry, ScaleState

DEFAULT_SCALE_STATE = ScaleState(scale_factor=1.0, rendered_height=0.0)


def _positive(value: Optional[float]) -> bool:
    if value is None or isinstance(value, bool):
        return False
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(number) and number > 0


def compute_scale_state(geometry: Optional[PageGeometry], display_width: Optional[float]) -> ScaleState:
    """Compute the scale needed to fit a page into display_width.

    scale_factor = display_width / intrinsic_width and
    rendered_height = intrinsic_height * scale_factor. Absent, zero,
    negative or non-finite inputs give ScaleState(1.0, 0.0), so NaN or
    Infinity never reach layout.

    Args:
        geometry: Page geometry, or None if not known yet
        display_width: Target width in pixels

    Returns:
        New ScaleState
    """
    if geometry is None:
        return DEFAULT_SCALE_STATE
    if not _positive(display_width) or not _positive(geometry.intrinsic_width):
        return DEFAULT_SCALE_STATE
    scale = float(display_width) / float(geometry.intrinsic_width)
    height = float(geometry.intrinsic_height) * scale
    if not math.isfinite(height) or height < 0:
        return ScaleState(scale_factor=scale, rendered_height=0.0)
    return ScaleState(scale_factor=scale, rendered_height=height)
