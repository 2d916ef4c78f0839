import math

import pytest

from graphwalk.config import EdgeStyle
from graphwalk.edges import (
    EdgePair,
    arrow_on_line,
    arrow_on_quad,
    classify_edges,
    edge_endpoints,
    quad_point_and_tangent,
    route_edge,
)

NO_HUB = EdgeStyle(hub=0)


def direction_of(arrow):
    """Unit vector from the arrow base midpoint to its tip."""
    bx = (arrow.left[0] + arrow.right[0]) / 2
    by = (arrow.left[1] + arrow.right[1]) / 2
    dx = arrow.tip[0] - bx
    dy = arrow.tip[1] - by
    length = math.hypot(dx, dy)
    return dx / length, dy / length


class TestClassification:

    def test_bidirectional_pair(self):
        assert classify_edges([(1, 2), (2, 1)]) == [EdgePair("bi", 1, 2)]

    def test_unidirectional_keeps_direction(self):
        assert classify_edges([(5, 3)]) == [EdgePair("uni", 5, 3)]
        assert classify_edges([(3, 5)]) == [EdgePair("uni", 3, 5)]

    def test_canonical_pair_count(self, store):
        pairs = classify_edges(store.edges())
        assert len(pairs) == 27
        assert sum(1 for p in pairs if p.kind == "bi") == 9
        assert EdgePair("bi", 10, 11) in pairs


class TestEndpoints:

    def test_vertical_trim(self):
        start, end = edge_endpoints((0, 0), (10, 100), 20)
        assert start == (0, 20)
        assert end == (10, 80)

    def test_horizontal_trim(self):
        start, end = edge_endpoints((100, 0), (0, 10), 20)
        assert start == (80, 0)
        assert end == (20, 10)

    def test_diagonal_trim_is_radial(self):
        start, end = edge_endpoints((0, 0), (40, 42), 5.8)
        assert start == pytest.approx((4, 4.2))
        assert end == pytest.approx((36, 37.8))

    def test_coincident_points(self):
        assert edge_endpoints((5, 5), (5, 5), 10) == ((5, 5), (5, 5))


class TestArrowheads:

    def test_arrow_on_line(self):
        arrow = arrow_on_line((0, 0), (10, 0), 10)
        assert arrow.tip == (10, 0)
        assert arrow.left == pytest.approx((0, 4.5))
        assert arrow.right == pytest.approx((0, -4.5))

    def test_arrow_on_quad_follows_tangent(self):
        p0, c, p2 = (0, 0), (50, 50), (100, 0)
        point, tangent = quad_point_and_tangent(p0, c, p2, 0.5)
        assert point == pytest.approx((50, 25))
        assert tangent == pytest.approx((100, 0))
        arrow = arrow_on_quad(p0, c, p2, 0.5, 10)
        assert arrow.tip == pytest.approx((50, 25))
        assert direction_of(arrow) == pytest.approx((1, 0))

    def test_flipped_arrow_points_backwards(self):
        arrow = arrow_on_quad((0, 0), (50, 50), (100, 0), 0.5, 10, flip=True)
        assert direction_of(arrow) == pytest.approx((-1, 0))


class TestRouting:

    def test_hub_edges_are_straight(self):
        geom = route_edge(EdgePair("uni", 1, 4), (0, 0), (0, 200), 1.0)
        assert geom.shape == "line"
        assert geom.control is None
        assert len(geom.arrows) == 1
        assert geom.arrows[0].tip == (0, 178)
        assert geom.path().startswith("M 0.0,22.0 L")

    def test_hub_bidirectional_has_arrow_at_each_end(self):
        geom = route_edge(EdgePair("bi", 1, 2), (0, 0), (0, 200), 1.0)
        assert geom.shape == "line"
        assert [a.tip for a in geom.arrows] == [(0, 178), (0, 22)]

    def test_uni_curve_sign_follows_parity(self):
        even = route_edge(EdgePair("uni", 2, 4), (0, 0), (200, 0), 1.0, NO_HUB)
        odd = route_edge(EdgePair("uni", 2, 3), (0, 0), (200, 0), 1.0, NO_HUB)
        assert even.shape == odd.shape == "quad"
        assert even.control == pytest.approx((100, 12.48))
        assert odd.control == pytest.approx((100, -12.48))
        assert len(even.arrows) == 1

    def test_uni_arrow_sits_near_the_end(self):
        geom = route_edge(EdgePair("uni", 2, 4), (0, 0), (200, 0), 1.0, NO_HUB)
        point, _ = quad_point_and_tangent(geom.start, geom.control, geom.end, 0.88)
        assert geom.arrows[0].tip == pytest.approx(point)

    def test_bidirectional_curve_has_two_arrows_on_one_arc(self):
        geom = route_edge(EdgePair("bi", 1, 2), (0, 0), (200, 0), 1.0, NO_HUB)
        assert geom.shape == "quad"
        assert geom.control == pytest.approx((100, -max(16, 12.48 + 3)))
        forward, reverse = geom.arrows
        assert forward.tip == pytest.approx(quad_point_and_tangent(geom.start, geom.control, geom.end, 0.78)[0])
        assert reverse.tip == pytest.approx(quad_point_and_tangent(geom.start, geom.control, geom.end, 0.22)[0])
        assert direction_of(forward)[0] > 0
        assert direction_of(reverse)[0] < 0

    def test_curve_offset_is_capped(self):
        geom = route_edge(EdgePair("uni", 2, 4), (0, 0), (10000, 0), 1.0, NO_HUB)
        assert geom.control[1] == pytest.approx(160)

    def test_scale_changes_sizes(self):
        small = route_edge(EdgePair("uni", 1, 4), (0, 0), (0, 400), 0.5)
        large = route_edge(EdgePair("uni", 1, 4), (0, 0), (0, 400), 3.0)
        assert small.start == (0, 14)
        assert large.start == (0, 66)
        assert large.stroke_width > small.stroke_width

    def test_to_dict(self):
        data = route_edge(EdgePair("bi", 3, 5), (0, 0), (200, 50), 1.0).to_dict()
        assert data["kind"] == "bi"
        assert data["shape"] == "quad"
        assert len(data["arrows"]) == 2
        assert data["path"].startswith("M ")
