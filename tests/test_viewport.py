import math

import pytest
from hypothesis import given, strategies as st

from graphwalk.viewport import ViewportTransform, clamp

coords = st.floats(min_value=-1e4, max_value=1e4, allow_nan=False)


@given(tx=coords, ty=coords, scale=st.floats(min_value=0.25, max_value=4), x=coords, y=coords)
def test_screen_to_world_inverts_world_to_screen(tx, ty, scale, x, y):
    view = ViewportTransform(tx, ty, scale)
    assert view.screen_to_world(*view.world_to_screen(x, y)) == pytest.approx((x, y), abs=1e-6)


def test_world_to_screen():
    view = ViewportTransform(10, 20, 2)
    assert view.world_to_screen(3, 4) == (16, 28)


def test_zoom_keeps_point_under_cursor():
    view = ViewportTransform(15, -40, 1.3)
    before = view.screen_to_world(200, 150)
    view.zoom_at(200, 150, 2.6)
    assert view.scale == 2.6
    assert view.screen_to_world(200, 150) == pytest.approx(before)


def test_zoom_is_clamped():
    view = ViewportTransform()
    view.zoom_at(0, 0, 100)
    assert view.scale == 4
    view.zoom_at(0, 0, 0.001)
    assert view.scale == 0.25


def test_wheel_zoom():
    view = ViewportTransform()
    view.zoom_by_wheel(-100, 50, 50)
    assert view.scale == pytest.approx(math.exp(0.11))
    view.zoom_by_wheel(100, 50, 50)
    assert view.scale == pytest.approx(1.0)
    assert view.world_to_screen(50, 50) == pytest.approx((50, 50))


def test_pan_accumulates():
    view = ViewportTransform(1, 1, 1)
    view.pan(5, -3)
    view.pan(5, -3)
    assert (view.tx, view.ty) == (11, -5)


def test_clamp():
    assert clamp(14, 36, 50) == 36
    assert clamp(14, 36, 1) == 14
    assert clamp(14, 36, 20) == 20
