from __future__ import annotations

import logging

from .config import LayoutConfig

logger = logging.getLogger(__name__)


def bfs_levels(store, root):
    """Hop distance from ``root`` over outgoing edges.

    Nodes the root cannot reach are stacked after the deepest level, one
    level each, in id order.
    """
    levels = {}
    if root not in store:
        return levels
    levels[root] = 0
    queue = [root]
    idx = 0
    while idx < len(queue):
        u = queue[idx]
        idx += 1
        for v in store.successors(u):
            if v not in levels:
                levels[v] = levels[u] + 1
                queue.append(v)

    next_level = max(levels.values()) + 1
    for node in store.nodes:
        if node not in levels:
            levels[node] = next_level
            next_level += 1
    return levels


def compute_layout(store, root, config=None):
    config = config or LayoutConfig()
    levels = bfs_levels(store, root)

    layers = {}
    for node, level in levels.items():
        layers.setdefault(level, []).append(node)

    special = store.descendants(config.special_roots)
    special.update(r for r in config.special_roots if r in store)

    positions = {}
    for level in sorted(layers):
        layer = sorted(layers[level])
        center = (len(layer) - 1) / 2.0
        for idx, node in enumerate(layer):
            offset = idx - center
            x = offset * config.x_gap
            if node in special:
                x += offset * config.x_gap * config.special_spread
            positions[node] = (x, level * config.y_gap)

    max_level = max(layers) if layers else 0
    for node in store.nodes:
        if node not in positions:
            positions[node] = (0.0, (max_level + 1) * config.y_gap + config.fallback_dy)

    logger.debug("layout computed for %d nodes over %d levels", len(positions), len(layers))
    return positions


def bounding_box(positions):
    xs = [x for x, _ in positions.values()]
    ys = [y for _, y in positions.values()]
    return min(xs), min(ys), max(xs), max(ys)


def fit_to_screen(positions, viewport, width, height, config=None):
    """Scale and center every position inside a ``width`` x ``height`` view."""
    config = config or LayoutConfig()
    if not positions:
        return viewport

    min_x, min_y, max_x, max_y = bounding_box(positions)
    pad = config.node_radius + config.margin
    min_x -= pad
    min_y -= pad
    max_x += pad
    max_y += pad

    world_w = max(config.min_world_width, max_x - min_x)
    world_h = max(config.min_world_height, max_y - min_y)
    view_w = max(config.min_view_width, width)
    view_h = max(config.min_view_height, height)

    scale = min(view_w / world_w, view_h / world_h) * config.fit_padding
    viewport.scale = viewport.clamp_scale(scale * config.fit_bias)

    center_x = (min_x + max_x) / 2.0
    center_y = (min_y + max_y) / 2.0
    viewport.tx = view_w / 2.0 - viewport.scale * center_x
    viewport.ty = view_h / 2.0 - viewport.scale * center_y
    return viewport
