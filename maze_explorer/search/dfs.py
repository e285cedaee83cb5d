"""Depth-first exploration with a full walk trace.

The trace reproduces the route an agent physically walks: every arrival at a
node is logged, and when a node's branches are exhausted without reaching the
goal the node is logged once more (the step back). A node is expanded at most
once; it may appear in the trace several times.

All per-run state lives in a ``SearchContext`` so runs never share state and
the graph is only read.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..logging_utils import get_logger
from ..maze.errors import MissingStartOrGoalError
from ..maze.graph import NodeGraph
from ..maze.grid import Coord2D
from .results import SearchResult

log = get_logger("search.dfs")

# Above this many nodes the explicit-stack walker is used (recursion depth
# can reach the node count).
MAX_RECURSIVE_NODES = 400


@dataclass
class SearchContext:
    goal: Coord2D
    visited: Set[Coord2D] = field(default_factory=set)
    trace: List[Coord2D] = field(default_factory=list)
    parents: Dict[Coord2D, Coord2D] = field(default_factory=dict)
    expansions: int = 0
    found: bool = False

    def arrive(self, key: Coord2D) -> None:
        self.trace.append(key)
        if key not in self.visited:
            self.visited.add(key)
            self.expansions += 1
        if key == self.goal:
            self.found = True


def _check_endpoints(graph: NodeGraph, start, goal) -> Tuple[Coord2D, Coord2D]:
    if start is None or goal is None or start not in graph or goal not in graph:
        raise MissingStartOrGoalError(start, goal)
    return tuple(start), tuple(goal)


def _visit(graph: NodeGraph, current: Coord2D, ctx: SearchContext) -> bool:
    ctx.arrive(current)
    if ctx.found:
        return True
    for nb in graph.neighbors(current):
        if not ctx.found and nb not in ctx.visited:
            ctx.parents[nb] = current
            if _visit(graph, nb, ctx):
                return True
    if not ctx.found:
        ctx.trace.append(current)
    return ctx.found


def _walk_iterative(graph: NodeGraph, start: Coord2D, ctx: SearchContext) -> bool:
    ctx.arrive(start)
    if ctx.found:
        return True
    stack: List[Tuple[Coord2D, Iterator[Coord2D]]] = [(start, iter(graph.neighbors(start)))]
    while stack:
        current, pending = stack[-1]
        child = None
        for nb in pending:
            if nb not in ctx.visited:
                child = nb
                break
        if child is None:
            # branches exhausted: step back onto current
            ctx.trace.append(current)
            stack.pop()
            continue
        ctx.parents[child] = current
        ctx.arrive(child)
        if ctx.found:
            return True
        stack.append((child, iter(graph.neighbors(child))))
    return False


def _route_to(ctx: SearchContext, start: Coord2D) -> List[Coord2D]:
    if not ctx.found:
        return []
    path = [ctx.goal]
    while path[-1] != start:
        path.append(ctx.parents[path[-1]])
    path.reverse()
    return path


def explore(graph: NodeGraph, start: Optional[Coord2D], goal: Optional[Coord2D], *, iterative: Optional[bool] = None) -> SearchResult:
    """Depth-first walk from start until goal is reached or everything is exhausted.

    ``iterative`` forces the explicit-stack walker (True) or recursion (False);
    by default recursion is used for graphs up to ``MAX_RECURSIVE_NODES``.
    Both produce the same trace.
    """
    start, goal = _check_endpoints(graph, start, goal)
    ctx = SearchContext(goal=goal)
    if iterative is None:
        iterative = len(graph) > MAX_RECURSIVE_NODES
    if iterative:
        _walk_iterative(graph, start, ctx)
    else:
        _visit(graph, start, ctx)
    result = SearchResult(
        trace=ctx.trace,
        final_path=_route_to(ctx, start),
        expansions=ctx.expansions,
        found=ctx.found,
    )
    log.info(
        event="dfs_complete",
        found=ctx.found,
        expansions=ctx.expansions,
        trace_len=len(ctx.trace),
        path_length=result.path_length,
    )
    return result


def explore_iterative(graph: NodeGraph, start: Optional[Coord2D], goal: Optional[Coord2D]) -> SearchResult:
    return explore(graph, start, goal, iterative=True)


__all__ = ["SearchContext", "explore", "explore_iterative", "MAX_RECURSIVE_NODES"]
