from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LayoutConfig:
    x_gap: float = 280.0
    y_gap: float = 140.0
    special_roots: tuple[int, ...] = (18, 20)
    special_spread: float = 0.28
    fallback_dy: float = 10.0
    # fit-to-screen
    node_radius: float = 20.0
    margin: float = 80.0
    min_world_width: float = 720.0
    min_world_height: float = 520.0
    min_view_width: float = 600.0
    min_view_height: float = 420.0
    fit_padding: float = 0.98
    fit_bias: float = 1.02


@dataclass(frozen=True)
class ViewportLimits:
    min_scale: float = 0.25
    max_scale: float = 4.0
    wheel_rate: float = 0.0011


@dataclass(frozen=True)
class EdgeStyle:
    hub: int = 1
    dominance: float = 1.15
    curve_cap: float = 160.0
    curve_ratio: float = 0.08
    uni_min_curve: float = 12.0
    bi_min_curve: float = 16.0
    uni_arrow_t: float = 0.88
    bi_forward_t: float = 0.78
    bi_reverse_t: float = 0.22
    arrow_half_width: float = 0.45


@dataclass(frozen=True)
class TraversalTimings:
    bfs_delay: float = 0.9
    dfs_delay: float = 0.65
    long_press: float = 0.7


@dataclass(frozen=True)
class Palette:
    background: str = "#0b1624"
    node_default: str = "#ffd358"
    node_visited: str = "#43aa8b"
    node_active: str = "#e63946"
    node_selected: str = "#3bacf7"
    node_label: str = "#031826"
    edge: str = "#2b9fe9"
    arrow_fill: str = "rgba(255,211,88,0.92)"
    arrow_stroke: str = "rgba(1,30,40,0.95)"
    text: str = "#bfefff"

    def node_fill(self, category: str) -> str:
        return {
            "selected": self.node_selected,
            "active": self.node_active,
            "visited": self.node_visited,
        }.get(category, self.node_default)


@dataclass(frozen=True)
class GraphConfig:
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    viewport: ViewportLimits = field(default_factory=ViewportLimits)
    edges: EdgeStyle = field(default_factory=EdgeStyle)
    timings: TraversalTimings = field(default_factory=TraversalTimings)
    palette: Palette = field(default_factory=Palette)


@dataclass(frozen=True)
class ViewerSettings:
    host: str = "0.0.0.0"
    port: int = 5000
    width: float = 1100.0
    height: float = 720.0

    @classmethod
    def from_env(cls) -> "ViewerSettings":
        return cls(
            host=os.environ.get("GW_HOST", "0.0.0.0"),
            port=int(os.environ.get("GW_PORT", "5000")),
            width=float(os.environ.get("GW_WIDTH", "1100")),
            height=float(os.environ.get("GW_HEIGHT", "720")),
        )
