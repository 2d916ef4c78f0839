from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any

from . import sample_graph
from .config import GraphConfig
from .edges import EdgeGeometry, classify_edges, route_edge
from .errors import SelectionRequiredError
from .graph_store import GraphStore
from .layout import compute_layout, fit_to_screen
from .traversal import TraversalEngine
from .viewport import ViewportTransform, clamp

logger = logging.getLogger(__name__)

LEFT_BUTTON = 0
MIDDLE_BUTTON = 1
RIGHT_BUTTON = 2


@dataclass(frozen=True)
class NodeView:
    node: int
    world: tuple
    screen: tuple
    radius: float
    category: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.node,
            "world": list(self.world),
            "screen": list(self.screen),
            "radius": self.radius,
            "category": self.category,
        }


@dataclass(frozen=True)
class Frame:
    nodes: list[NodeView]
    edges: list[EdgeGeometry]
    info: dict[str, Any] = field(default_factory=dict)
    scale: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "info": self.info,
            "scale": self.scale,
        }


class GraphSession:
    """One canvas: graph, layout, viewport, traversal state and selection.

    Every mutation goes through this object; the viewer and the CLI each own
    exactly one instance.
    """

    def __init__(self, nodes=None, edges=None, width: float = 1100.0, height: float = 720.0,
                 root: int = sample_graph.ROOT, config: GraphConfig | None = None):
        self.config = config or GraphConfig()
        self.store = GraphStore(
            sample_graph.NODES if nodes is None else nodes,
            sample_graph.EDGES if edges is None else edges,
        )
        self.root = root
        self.width = width
        self.height = height
        self.viewport = ViewportTransform(limits=self.config.viewport)
        self.traversal = TraversalEngine(self.store, self.config.timings)
        self.selected: list[int] = []
        self.positions: dict[int, tuple] = {}
        self.run = None
        self.relayout()

    # layout / view

    def relayout(self) -> None:
        self.positions = compute_layout(self.store, self.root, self.config.layout)
        self.fit()

    def fit(self) -> None:
        fit_to_screen(self.positions, self.viewport, self.width, self.height, self.config.layout)

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.fit()

    def wheel(self, delta_y: float, sx: float, sy: float) -> None:
        self.viewport.zoom_by_wheel(delta_y, sx, sy)

    def pan(self, dx: float, dy: float) -> None:
        self.viewport.pan(dx, dy)

    def node_at(self, sx: float, sy: float):
        best = None
        best_d = math.inf
        threshold = max(20.0, 34.0 * self.viewport.scale)
        for node in self.store.nodes:
            px, py = self.viewport.world_to_screen(*self.positions[node])
            d = math.hypot(sx - px, sy - py)
            if d < best_d and d <= threshold:
                best_d = d
                best = node
        return best

    # selection

    def select(self, node) -> None:
        if node in self.store:
            self.selected = [node]

    def toggle(self, node) -> None:
        if node not in self.store:
            return
        if node in self.selected:
            self.selected.remove(node)
        else:
            self.selected.append(node)

    # input surface

    def pointer_down(self, button: int, sx: float, sy: float, shift: bool = False):
        node = self.node_at(sx, sy)
        if node is None:
            return None
        if button == MIDDLE_BUTTON:
            return self.start_traversal("bfs", node)
        if button == RIGHT_BUTTON or (button == LEFT_BUTTON and shift):
            self.toggle(node)
        elif button == LEFT_BUTTON:
            self.select(node)
        return None

    def long_press(self, sx: float, sy: float):
        node = self.node_at(sx, sy)
        if node is None:
            return None
        return self.start_traversal("bfs", node)

    def key(self, key: str):
        k = (key or "").lower()
        if k == "enter" and len(self.selected) == 2:
            u, v = self.selected
            if self.store.remove_edge(u, v):
                logger.info("deleted edge %s -> %s", u, v)
            self.selected = []
        elif k == "c":
            self.clear_traversal()
        elif k == "a" and self.selected:
            return self.start_traversal("bfs", self.selected[0])
        return None

    # control surface

    def clear_traversal(self) -> None:
        self.traversal.clear()
        self.run = None

    def clear(self) -> None:
        self.selected = []
        self.clear_traversal()

    def start_traversal(self, kind: str, node):
        run = self.traversal.start(kind, node)
        if run is not None:
            self.run = run
        return run

    def start_from_selection(self, kind: str):
        if not self.selected:
            raise SelectionRequiredError("select a node first")
        return self.start_traversal(kind, self.selected[0])

    def start_bfs(self):
        return self.start_from_selection("bfs")

    def start_dfs(self):
        return self.start_from_selection("dfs")

    def step(self):
        """Advance the current run by one frame; ``None`` when nothing is running."""
        if self.run is None:
            return None
        frame = next(self.run, None)
        if frame is None or frame.done:
            self.run = None
        return frame

    def restore(self) -> None:
        self.traversal.clear()
        self.run = None
        self.store.reset()
        self.selected = []
        self.relayout()
        logger.info("graph restored to %d canonical edges", self.store.edge_count())

    # render consumer

    def node_category(self, node) -> str:
        if node in self.selected:
            return "selected"
        if node in self.traversal.active:
            return "active"
        if node in self.traversal.visited:
            return "visited"
        return "default"

    def info(self) -> dict[str, Any]:
        return {
            "nodes_total": len(self.store),
            "components": self.store.weak_component_count(),
            "visited": len(self.traversal.visited),
            "level": self.traversal.level,
            "selected": list(self.selected),
            "state": self.traversal.state,
        }

    def tooltip(self, node) -> str:
        return "Node {} - out: {} - in: {}".format(node, self.store.out_degree(node), self.store.in_degree(node))

    def frame(self) -> Frame:
        scale = self.viewport.scale
        screen = {n: self.viewport.world_to_screen(*p) for n, p in self.positions.items()}
        radius = clamp(14.0, 36.0, 22.0 * scale)

        nodes = [
            NodeView(node, self.positions[node], screen[node], radius, self.node_category(node))
            for node in self.store.nodes
        ]
        edges = [
            route_edge(pair, screen[pair.a], screen[pair.b], scale, self.config.edges)
            for pair in classify_edges(self.store.edges())
            if pair.a in screen and pair.b in screen
        ]
        return Frame(nodes=nodes, edges=edges, info=self.info(), scale=scale)
