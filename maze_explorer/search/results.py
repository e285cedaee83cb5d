from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ..maze.grid import Coord2D


@dataclass
class SearchResult:
    """DFS outcome: full walk (with backtracking), start->goal route, discoveries."""

    trace: List[Coord2D] = field(default_factory=list)
    final_path: List[Coord2D] = field(default_factory=list)
    expansions: int = 0
    found: bool = False
    algorithm: str = "dfs"

    @property
    def path_length(self) -> int:
        return len(self.final_path)

    @property
    def route(self) -> List[Coord2D]:
        """Coordinates a renderer walks through: the whole trace."""
        return self.trace

    def to_dict(self):
        return {
            "algorithm": self.algorithm,
            "found": self.found,
            "expansions": self.expansions,
            "path_length": self.path_length,
            "trace": [list(c) for c in self.trace],
            "final_path": [list(c) for c in self.final_path],
        }


@dataclass
class PathResult:
    """A* outcome: optimal path (empty when unreachable) and expansion count."""

    path: List[Coord2D] = field(default_factory=list)
    expansions: int = 0
    found: bool = False
    algorithm: str = "astar"

    @property
    def path_length(self) -> int:
        return len(self.path)

    @property
    def route(self) -> List[Coord2D]:
        return self.path

    def to_dict(self):
        return {
            "algorithm": self.algorithm,
            "found": self.found,
            "expansions": self.expansions,
            "path_length": self.path_length,
            "path": [list(c) for c in self.path],
        }


__all__ = ["SearchResult", "PathResult"]
