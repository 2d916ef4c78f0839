from __future__ import annotations

import logging
from typing import Iterable

from .errors import InvalidEdgeError

logger = logging.getLogger(__name__)


class GraphStore:
    """Directed adjacency over a fixed node universe.

    The edge list passed at construction is canonical: ``reset()`` always
    returns to it. Reverse adjacency is derived in full by
    ``rebuild_reverse()`` after every structural change.
    """

    def __init__(self, nodes: Iterable[int], edges: Iterable[tuple[int, int]]):
        self.nodes = tuple(sorted(set(nodes)))
        self._universe = frozenset(self.nodes)
        self.canonical_edges = tuple((u, v) for u, v in edges)
        self.adjacency: dict[int, set[int]] = {}
        self.reverse: dict[int, set[int]] = {}
        self.initialize(self.canonical_edges)

    def __contains__(self, node) -> bool:
        return node in self._universe

    def __len__(self) -> int:
        return len(self.nodes)

    def initialize(self, edge_list: Iterable[tuple[int, int]]) -> None:
        edge_list = list(edge_list)
        for u, v in edge_list:
            if u not in self._universe or v not in self._universe:
                raise InvalidEdgeError(u, v)

        adjacency = {node: set() for node in self.nodes}
        for u, v in edge_list:
            adjacency[u].add(v)
        self.adjacency = adjacency
        self.rebuild_reverse()
        logger.debug("graph initialized: %d nodes, %d edges", len(self.nodes), self.edge_count())

    def rebuild_reverse(self) -> None:
        reverse = {node: set() for node in self.nodes}
        for u, targets in self.adjacency.items():
            for v in targets:
                reverse[v].add(u)
        self.reverse = reverse

    def remove_edge(self, u, v) -> bool:
        targets = self.adjacency.get(u)
        if targets is None or v not in targets:
            return False
        targets.discard(v)
        sources = self.reverse.get(v)
        if sources is not None:
            sources.discard(u)
        logger.debug("edge removed: %s -> %s", u, v)
        return True

    def reset(self) -> None:
        self.initialize(self.canonical_edges)

    def has_edge(self, u, v) -> bool:
        return v in self.adjacency.get(u, ())

    def successors(self, u) -> tuple[int, ...]:
        return tuple(sorted(self.adjacency.get(u, ())))

    def predecessors(self, v) -> tuple[int, ...]:
        return tuple(sorted(self.reverse.get(v, ())))

    def out_degree(self, u) -> int:
        return len(self.adjacency.get(u, ()))

    def in_degree(self, v) -> int:
        return len(self.reverse.get(v, ()))

    def edges(self) -> list[tuple[int, int]]:
        return [(u, v) for u in self.nodes for v in self.successors(u)]

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.adjacency.values())

    def descendants(self, roots: Iterable[int]) -> set[int]:
        """Forward-reachable nodes from ``roots``; a root is included only if reachable."""
        out = set()
        queue = [root for root in roots if root in self._universe]
        while queue:
            u = queue.pop(0)
            for v in self.successors(u):
                if v not in out:
                    out.add(v)
                    queue.append(v)
        return out

    def weak_component_count(self) -> int:
        seen = set()
        count = 0
        for node in self.nodes:
            if node in seen:
                continue
            count += 1
            stack = [node]
            while stack:
                u = stack.pop()
                if u in seen:
                    continue
                seen.add(u)
                for w in self.adjacency[u] | self.reverse[u]:
                    if w not in seen:
                        stack.append(w)
        return count
