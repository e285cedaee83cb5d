"""A* shortest path over the node graph.

Every step costs 1 and the heuristic is the Manhattan distance, which never
overestimates on a 4-connected grid, so the returned path is optimal.

Open set selection takes the lowest f score; ties go to the member that
entered the open set first. The open set is a heap of (f, entry, key)
tuples with lazy deletion: ``entry`` is the sequence number given when the
node joined the open set, so an improved score keeps its original position.
"""
from __future__ import annotations

import heapq
import math
from typing import Dict, List, Optional

from ..logging_utils import get_logger
from ..maze.errors import MissingStartOrGoalError, NoPathFoundError
from ..maze.graph import NodeGraph
from ..maze.grid import Coord2D
from .results import PathResult

log = get_logger("search.astar")

STEP_COST = 1


def manhattan(a: Coord2D, b: Coord2D) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def reconstruct_path(came_from: Dict[Coord2D, Coord2D], current: Coord2D) -> List[Coord2D]:
    path = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def find_path(graph: NodeGraph, start: Optional[Coord2D], goal: Optional[Coord2D]) -> PathResult:
    if start is None or goal is None or start not in graph or goal not in graph:
        raise MissingStartOrGoalError(start, goal)
    start, goal = tuple(start), tuple(goal)

    g_score: Dict[Coord2D, float] = {key: math.inf for key in graph.keys()}
    f_score: Dict[Coord2D, float] = {key: math.inf for key in graph.keys()}
    came_from: Dict[Coord2D, Coord2D] = {}
    g_score[start] = 0
    f_score[start] = manhattan(start, goal)

    seq = 0
    open_entry: Dict[Coord2D, int] = {start: seq}
    heap = [(f_score[start], seq, start)]
    expansions = 0

    while heap:
        f, entry, current = heapq.heappop(heap)
        if open_entry.get(current) != entry or f != f_score[current]:
            continue  # stale
        if current == goal:
            path = reconstruct_path(came_from, current)
            log.info(event="astar_complete", found=True, expansions=expansions, path_length=len(path))
            return PathResult(path=path, expansions=expansions, found=True)
        del open_entry[current]
        expansions += 1
        for nb in graph.neighbors(current):
            tentative = g_score[current] + STEP_COST
            if tentative < g_score[nb]:
                came_from[nb] = current
                g_score[nb] = tentative
                f_score[nb] = tentative + manhattan(nb, goal)
                if nb not in open_entry:
                    seq += 1
                    open_entry[nb] = seq
                heapq.heappush(heap, (f_score[nb], open_entry[nb], nb))

    log.info(event="astar_complete", found=False, expansions=expansions, path_length=0)
    return PathResult(path=[], expansions=expansions, found=False)


def find_path_or_raise(graph: NodeGraph, start: Optional[Coord2D], goal: Optional[Coord2D]) -> PathResult:
    """Like find_path but a missing path raises NoPathFoundError."""
    result = find_path(graph, start, goal)
    if not result.found:
        raise NoPathFoundError(start, goal, result.expansions)
    return result


__all__ = ["find_path", "find_path_or_raise", "manhattan", "reconstruct_path"]
