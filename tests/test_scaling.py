"""Unit tests for scale computation."""

import math

import pytest

from mediapreview.models.geometry import PageGeometry, ScaleState
from mediapreview.pipeline.scaling import compute_scale_state


def test_scale_fits_page_into_width():
    """200x100 page at width 400 gives scale 2.0 and height 200."""
    state = compute_scale_state(PageGeometry(200, 100), 400)
    assert state == ScaleState(scale_factor=2.0, rendered_height=200.0)


def test_scale_down():
    state = compute_scale_state(PageGeometry(595, 842), 297.5)
    assert state.scale_factor == pytest.approx(0.5)
    assert state.rendered_height == pytest.approx(421.0)


def test_zero_intrinsic_width_falls_back():
    """Degenerate geometry gives scale 1.0 and height 0 without raising."""
    state = compute_scale_state(PageGeometry(0, 100), 400)
    assert state == ScaleState(1.0, 0.0)


@pytest.mark.parametrize("width", [None, 0, -10, float("nan"), float("inf")])
def test_bad_display_width_falls_back(width):
    state = compute_scale_state(PageGeometry(200, 100), width)
    assert state == ScaleState(1.0, 0.0)
    assert not math.isnan(state.scale_factor)


def test_unknown_geometry_gives_default():
    assert compute_scale_state(None, 400) == ScaleState(1.0, 0.0)


def test_result_is_a_new_instance():
    """A recompute builds a new ScaleState; earlier states stay unchanged."""
    first = compute_scale_state(PageGeometry(200, 100), 400)
    second = compute_scale_state(PageGeometry(200, 100), 200)
    assert first == ScaleState(2.0, 200.0)
    assert second == ScaleState(1.0, 100.0)
