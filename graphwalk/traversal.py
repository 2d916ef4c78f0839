"""Animated BFS / DFS over a GraphStore.

A traversal is a generator of ``TraversalFrame`` snapshots. Each frame is
published after the shared highlight/visited state has been mutated and
carries the delay the caller should hold it on screen before asking for the
next one. The engine never sleeps by itself; ``run()`` is a plain synchronous
driver and the web viewer drives frames from the browser instead.

Only one traversal runs at a time. Starting another one, or clearing the
state, bumps the generation token and the older run stops at its next step
without touching any state.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from .config import TraversalTimings

logger = logging.getLogger(__name__)

BFS = "bfs"
DFS = "dfs"
KINDS = (BFS, DFS)


@dataclass(frozen=True)
class TraversalFrame:
    kind: str
    generation: int
    level: int
    active: frozenset = field(default_factory=frozenset)
    visited: frozenset = field(default_factory=frozenset)
    delay: float = 0.0
    done: bool = False

    def to_dict(self):
        return {
            "kind": self.kind,
            "generation": self.generation,
            "level": self.level,
            "active": sorted(self.active),
            "visited": sorted(self.visited),
            "delay": self.delay,
            "done": self.done,
        }


class TraversalRun:
    def __init__(self, engine, kind, start, generation, steps):
        self.engine = engine
        self.kind = kind
        self.start = start
        self.generation = generation
        self._steps = steps
        self.finished = False

    def __repr__(self):
        return "TraversalRun({}, start={}, generation={})".format(self.kind, self.start, self.generation)

    def __iter__(self):
        return self

    def __next__(self):
        if self.finished:
            raise StopIteration
        if self.cancelled:
            self.finished = True
            self._steps.close()
            logger.debug("%r cancelled", self)
            raise StopIteration
        try:
            return next(self._steps)
        except StopIteration:
            self.finished = True
            raise

    @property
    def cancelled(self):
        return self.engine.generation != self.generation


class TraversalEngine:
    def __init__(self, store, timings=None):
        self.store = store
        self.timings = timings or TraversalTimings()
        self.visited = set()
        self.active = frozenset()
        self.level = 0
        self.generation = 0
        self.running = None

    @property
    def state(self):
        if self.running is None:
            return "idle"
        return "running"

    def snapshot(self, kind="", delay=0.0, done=False):
        return TraversalFrame(
            kind=kind,
            generation=self.generation,
            level=self.level,
            active=self.active,
            visited=frozenset(self.visited),
            delay=delay,
            done=done,
        )

    def cancel(self):
        if self.running is not None:
            logger.debug("cancelling %s run (generation %d)", self.running[0], self.running[1])
        self.generation += 1
        self.running = None
        self.active = frozenset()
        self.level = 0

    def clear(self):
        self.cancel()
        self.visited.clear()

    def start(self, kind, node):
        if kind not in KINDS:
            raise ValueError("unknown traversal kind: {}".format(kind))
        if node not in self.store:
            logger.debug("ignoring %s from unknown node %r", kind, node)
            return None
        self.cancel()
        generation = self.generation
        self.running = (kind, generation)
        steps = self._bfs(node) if kind == BFS else self._dfs(node)
        logger.debug("%s started from %s (generation %d)", kind, node, generation)
        return TraversalRun(self, kind, node, generation, steps)

    def start_bfs(self, node):
        return self.start(BFS, node)

    def start_dfs(self, node):
        return self.start(DFS, node)

    def _finish(self, kind):
        self.active = frozenset()
        self.level = 0
        self.running = None
        logger.debug("%s finished, %d nodes visited", kind, len(self.visited))
        return self.snapshot(kind, done=True)

    def _bfs(self, start):
        visited = set()
        queue = [start]
        level = 0
        while queue:
            layer = []
            for u in queue:
                if u not in visited and u not in layer:
                    layer.append(u)
            if not layer:
                break
            queue = []
            visited.update(layer)
            self.visited.update(layer)
            self.level = level + 1
            self.active = frozenset(layer)
            yield self.snapshot(BFS, delay=self.timings.bfs_delay)

            self.active = frozenset()
            for u in layer:
                for v in self.store.successors(u):
                    if v not in visited:
                        queue.append(v)
            level += 1
        yield self._finish(BFS)

    def _dfs(self, start):
        visited = set()
        stack = [start]
        while stack:
            u = stack.pop()
            if u in visited:
                continue
            visited.add(u)
            self.visited.add(u)
            self.level += 1
            self.active = frozenset([u])
            yield self.snapshot(DFS, delay=self.timings.dfs_delay)

            self.active = frozenset()
            for v in reversed(self.store.successors(u)):
                if v not in visited:
                    stack.append(v)
        yield self._finish(DFS)

    def run(self, run, sleep=time.sleep, on_frame=None):
        """Drive ``run`` to completion, holding each frame for its delay."""
        frames = []
        if run is None:
            return frames
        for frame in run:
            frames.append(frame)
            if on_frame is not None:
                on_frame(frame)
            if frame.delay:
                sleep(frame.delay)
        return frames
