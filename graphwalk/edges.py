from __future__ import annotations

import math
from dataclasses import dataclass, field

from .config import EdgeStyle


@dataclass(frozen=True)
class EdgePair:
    """One drawable edge between an unordered node pair.

    For ``kind == "uni"`` the edge runs ``a -> b``. For ``kind == "bi"`` both
    directions exist and ``a < b``.
    """

    kind: str
    a: int
    b: int


@dataclass(frozen=True)
class Arrowhead:
    tip: tuple
    left: tuple
    right: tuple

    def points(self):
        return [self.tip, self.left, self.right]


@dataclass(frozen=True)
class EdgeGeometry:
    pair: EdgePair
    shape: str
    start: tuple
    end: tuple
    control: tuple | None = None
    arrows: tuple = field(default_factory=tuple)
    stroke_width: float = 1.0

    def path(self):
        x1, y1 = self.start
        x2, y2 = self.end
        if self.shape == "quad":
            cx, cy = self.control
            return "M {:.1f},{:.1f} Q {:.1f},{:.1f} {:.1f},{:.1f}".format(x1, y1, cx, cy, x2, y2)
        return "M {:.1f},{:.1f} L {:.1f},{:.1f}".format(x1, y1, x2, y2)

    def to_dict(self):
        return {
            "kind": self.pair.kind,
            "a": self.pair.a,
            "b": self.pair.b,
            "shape": self.shape,
            "start": list(self.start),
            "end": list(self.end),
            "control": list(self.control) if self.control else None,
            "arrows": [[list(p) for p in arrow.points()] for arrow in self.arrows],
            "stroke_width": self.stroke_width,
            "path": self.path(),
        }


def sign(value):
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def classify_edges(edges):
    pairs = {}
    for u, v in edges:
        a, b = min(u, v), max(u, v)
        rec = pairs.setdefault((a, b), [False, False])
        if (u, v) == (a, b):
            rec[0] = True
        if (u, v) == (b, a):
            rec[1] = True

    out = []
    for (a, b), (has_ab, has_ba) in sorted(pairs.items()):
        if has_ab and has_ba:
            out.append(EdgePair("bi", a, b))
        elif has_ab:
            out.append(EdgePair("uni", a, b))
        else:
            out.append(EdgePair("uni", b, a))
    return out


def edge_endpoints(p1, p2, radius, dominance=1.15):
    """Trim both ends of ``p1 -> p2`` so the edge starts on the node rims."""
    dx = p2[0] - p1[0]
    dy = p2[1] - p1[1]
    adx = abs(dx)
    ady = abs(dy)

    if ady >= adx * dominance:
        return (p1[0], p1[1] + sign(dy) * radius), (p2[0], p2[1] - sign(dy) * radius)
    if adx >= ady * dominance:
        return (p1[0] + sign(dx) * radius, p1[1]), (p2[0] - sign(dx) * radius, p2[1])

    dist = math.hypot(dx, dy) or 1.0
    ux = dx / dist
    uy = dy / dist
    return (p1[0] + ux * radius, p1[1] + uy * radius), (p2[0] - ux * radius, p2[1] - uy * radius)


def quad_point_and_tangent(p0, c, p2, t):
    mt = 1.0 - t
    bx = mt * mt * p0[0] + 2 * mt * t * c[0] + t * t * p2[0]
    by = mt * mt * p0[1] + 2 * mt * t * c[1] + t * t * p2[1]
    dx = 2 * mt * (c[0] - p0[0]) + 2 * t * (p2[0] - c[0])
    dy = 2 * mt * (c[1] - p0[1]) + 2 * t * (p2[1] - c[1])
    return (bx, by), (dx, dy)


def arrowhead(tip, direction, size, flip=False, half_width=0.45):
    ux, uy = direction
    length = math.hypot(ux, uy) or 1.0
    ux /= length
    uy /= length
    if flip:
        ux, uy = -ux, -uy
    ox, oy = -uy, ux
    bx, by = tip
    spread = size * half_width
    left = (bx - ux * size + ox * spread, by - uy * size + oy * spread)
    right = (bx - ux * size - ox * spread, by - uy * size - oy * spread)
    return Arrowhead(tip=(bx, by), left=left, right=right)


def arrow_on_line(start, end, size, half_width=0.45):
    direction = (end[0] - start[0], end[1] - start[1])
    return arrowhead(end, direction, size, half_width=half_width)


def arrow_on_quad(p0, c, p2, t, size, flip=False, half_width=0.45):
    point, tangent = quad_point_and_tangent(p0, c, p2, t)
    return arrowhead(point, tangent, size, flip=flip, half_width=half_width)


def node_radius(scale):
    return max(14.0, 22.0 * scale)


def control_point(start, end, magnitude):
    mx = (start[0] + end[0]) / 2.0
    my = (start[1] + end[1]) / 2.0
    pdx = end[0] - start[0]
    pdy = end[1] - start[1]
    pdist = math.hypot(pdx, pdy) or 1.0
    return mx + (-pdy / pdist) * magnitude, my + (pdx / pdist) * magnitude


def route_edge(pair, p_a, p_b, scale, style=None):
    """Screen-space geometry for ``pair`` drawn from ``p_a`` to ``p_b``."""
    style = style or EdgeStyle()
    start, end = edge_endpoints(p_a, p_b, node_radius(scale), style.dominance)
    half = style.arrow_half_width

    if style.hub in (pair.a, pair.b):
        size = max(10.0, 9.0 * scale)
        arrows = [arrow_on_line(start, end, size, half)]
        if pair.kind == "bi":
            arrows.append(arrow_on_line(end, start, size, half))
        return EdgeGeometry(
            pair=pair,
            shape="line",
            start=start,
            end=end,
            arrows=tuple(arrows),
            stroke_width=max(1.2, 2.0 * scale * 0.25),
        )

    pdist = math.hypot(end[0] - start[0], end[1] - start[1]) or 1.0
    base = min(style.curve_cap, pdist * style.curve_ratio)
    size = max(9.0, 8.5 * scale)

    if pair.kind == "bi":
        magnitude = max(style.bi_min_curve, base + (abs(pair.a - pair.b) % 5) * 3)
        direction = 1 if pair.a > pair.b else -1
        control = control_point(start, end, magnitude * direction)
        arrows = (
            arrow_on_quad(start, control, end, style.bi_forward_t, size, half_width=half),
            arrow_on_quad(start, control, end, style.bi_reverse_t, size, flip=True, half_width=half),
        )
    else:
        span = math.hypot(p_b[0] - p_a[0], p_b[1] - p_a[1]) or 1.0
        magnitude = max(style.uni_min_curve, base + (abs(p_b[1] - p_a[1]) / span) * 6)
        direction = 1 if (pair.a + pair.b) % 2 == 0 else -1
        control = control_point(start, end, magnitude * direction)
        arrows = (arrow_on_quad(start, control, end, style.uni_arrow_t, size, half_width=half),)

    return EdgeGeometry(
        pair=pair,
        shape="quad",
        start=start,
        end=end,
        control=control,
        arrows=arrows,
        stroke_width=max(1.0, 1.6 * scale * 0.25),
    )
