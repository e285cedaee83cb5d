"""Maze generation pipeline.

High-level phases:
    * Start from a fully walled grid.
    * Visit every cell once and flip a coin: clear the wall on its left
      (vertical) or the wall below it (horizontal).
    * Create one node per accessible cell and link nodes through cleared walls.
    * Repair connectivity until a single component remains.
    * Pick the start node ((0, 0) when present) and draw the goal by
      rejection sampling over the whole grid.

All randomness comes from one ``random.Random`` instance, either injected or
seeded from ``MazeConfig.seed``, so a seed fully determines the maze.

Public contract consumed elsewhere:
    generate_maze(config=None, *, rng=None, **overrides) -> Maze
    Maze: config, seed, walls (WallGrid), graph (NodeGraph), start, goal, metrics
"""
from __future__ import annotations

import random
import time
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from ..logging_utils import get_logger
from .config import MazeConfig
from .connectivity import repair_connectivity
from .errors import EmptyMazeError
from .graph import NodeGraph, build_node_graph
from .grid import Coord2D, WallGrid
from .metrics import init_metrics

log = get_logger("maze.generator")


@dataclass
class Maze:
    config: MazeConfig
    walls: WallGrid
    graph: NodeGraph
    start: Coord2D
    goal: Coord2D
    seed: Optional[int] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.walls.width

    @property
    def height(self) -> int:
        return self.walls.height

    def is_cell_accessible(self, x: int, z: int) -> bool:
        return self.walls.is_cell_accessible(x, z)

    @property
    def start_node(self):
        return self.graph[self.start]

    @property
    def goal_node(self):
        return self.graph[self.goal]


class MazeGenerator:
    def __init__(self, config: Optional[MazeConfig] = None, rng: Optional[random.Random] = None):
        # own copy: the seed picked below must not leak into the caller's config
        self.config = replace(config or MazeConfig()).validate()
        if rng is None:
            # 0 is a valid deterministic seed; None means pick one and record it
            if self.config.seed is None:
                self.config.seed = random.randint(1, 1_000_000)
            rng = random.Random(self.config.seed)
        self._rng = rng
        self.seed = self.config.seed
        self.metrics: Dict[str, Any] = init_metrics() if self.config.enable_metrics else {}
        self.walls: Optional[WallGrid] = None
        self.graph: Optional[NodeGraph] = None

    def prune_walls(self) -> int:
        """One coin flip per cell; returns how many interior walls were opened."""
        walls = self.walls
        opened = 0
        for x, z in walls.cells():
            if self._rng.random() < 0.5:
                walls.clear_vertical(x, z)
                opened += 1 if x > 0 else 0
            else:
                walls.clear_horizontal(x, z)
                opened += 1 if z > 0 else 0
        return opened

    def assign_start(self) -> Coord2D:
        if (0, 0) in self.graph:
            start = (0, 0)
        else:
            start = self.graph.keys()[0]
        log.debug(event="start_assigned", x=start[0], z=start[1])
        return start

    def place_goal(self) -> Coord2D:
        width, height = self.walls.width, self.walls.height
        draws = 0
        while True:
            draws += 1
            x = self._rng.randrange(width)
            z = self._rng.randrange(height)
            if self.walls.is_cell_accessible(x, z):
                break
        if self.config.enable_metrics:
            self.metrics["goal_draws"] = draws
        log.debug(event="goal_assigned", x=x, z=z, draws=draws)
        return (x, z)

    def run(self) -> Maze:
        """Execute the ordered generation phases with per-phase timing."""
        if self.config.enable_metrics:
            started = time.perf_counter()
            phase_times: Dict[str, int] = {}

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter()
                r = fn(*a, **k)
                phase_times[label] = int((time.perf_counter() - ps) * 1000)
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        cfg = self.config
        self.walls = WallGrid(cfg.width, cfg.height)
        opened = _phase("prune_walls", self.prune_walls)
        self.graph = _phase("build_graph", build_node_graph, self.walls)
        if not len(self.graph):
            log.warn(event="maze_empty", width=cfg.width, height=cfg.height, seed=self.seed)
            raise EmptyMazeError(cfg.width, cfg.height)
        _phase("repair_connectivity", repair_connectivity, self.walls, self.graph, self.metrics if cfg.enable_metrics else None)
        start = _phase("assign_start", self.assign_start)
        goal = _phase("place_goal", self.place_goal)

        if cfg.enable_metrics:
            cells = cfg.width * cfg.height
            self.metrics.update(
                cells=cells,
                accessible_cells=len(self.graph),
                inaccessible_cells=cells - len(self.graph),
                walls_cleared_initial=opened,
                edges=self.graph.edge_count(),
                runtime_ms=int((time.perf_counter() - started) * 1000),
                phase_ms=phase_times,
            )
        log.info(
            event="maze_generated",
            width=cfg.width,
            height=cfg.height,
            seed=self.seed,
            nodes=len(self.graph),
            start=f"{start[0]},{start[1]}",
            goal=f"{goal[0]},{goal[1]}",
        )
        return Maze(
            config=cfg,
            walls=self.walls,
            graph=self.graph,
            start=start,
            goal=goal,
            seed=self.seed,
            metrics=self.metrics,
        )


def generate_maze(config: Optional[MazeConfig] = None, *, rng: Optional[random.Random] = None, **overrides) -> Maze:
    """Generate a maze from a config (or keyword overrides such as width/height/seed)."""
    cfg = config if config is not None else MazeConfig()
    if overrides:
        cfg = cfg.with_overrides(**overrides)
    return MazeGenerator(cfg, rng=rng).run()


__all__ = ["Maze", "MazeGenerator", "generate_maze"]
