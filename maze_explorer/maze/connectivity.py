"""Connectivity analysis and repair.

Flood fill over the node adjacency partitions the graph into components; the
repair pass knocks down walls until a single component remains.
"""
from __future__ import annotations

from collections import deque
from typing import Any, Dict, List, Optional, Set

from ..logging_utils import get_logger
from .graph import NodeGraph
from .grid import Coord2D, WallGrid

log = get_logger("maze.connectivity")


def flood(graph: NodeGraph, start: Coord2D) -> List[Coord2D]:
    """BFS over stored neighbors; returns reached keys in discovery order."""
    q = deque([start])
    seen = {start}
    order = []
    while q:
        cur = q.popleft()
        order.append(cur)
        for nb in graph.neighbors(cur):
            if nb not in seen:
                seen.add(nb)
                q.append(nb)
    return order


def find_components(graph: NodeGraph) -> List[List[Coord2D]]:
    components = []
    visited: Set[Coord2D] = set()
    for key in graph.keys():
        if key in visited:
            continue
        comp = flood(graph, key)
        visited.update(comp)
        components.append(comp)
    return components


def is_connected(graph: NodeGraph) -> bool:
    return len(find_components(graph)) <= 1


def _merge_into_first(walls: WallGrid, graph: NodeGraph, first: Set[Coord2D], other: List[Coord2D]) -> bool:
    # First wall found between `other` and the first component wins.
    for key in other:
        for _, cell in walls.adjacent_cells(*key):
            if cell in first and walls.wall_between(key, cell):
                walls.clear_between(key, cell)
                return True
    return False


def _carve_stalled(walls: WallGrid, graph: NodeGraph, components: List[List[Coord2D]]) -> Optional[Coord2D]:
    """Open one wall out of a component toward a foreign or inaccessible cell.

    Used only when no component touches the first one directly, which happens
    when inaccessible cells separate them (1xN strips). Returns the cell on the
    far side of the cleared wall, or None if nothing could be carved.
    """
    owner: Dict[Coord2D, int] = {}
    for idx, comp in enumerate(components):
        for key in comp:
            owner[key] = idx
    ordered = list(range(1, len(components))) + [0]
    for idx in ordered:
        for key in components[idx]:
            for _, cell in walls.adjacent_cells(*key):
                if owner.get(cell) == idx or not walls.wall_between(key, cell):
                    continue
                walls.clear_between(key, cell)
                if cell not in graph:
                    graph.add_node(*cell)
                return cell
    return None


def repair_connectivity(walls: WallGrid, graph: NodeGraph, metrics: Optional[Dict[str, Any]] = None) -> int:
    """Clear walls until the node graph forms exactly one component.

    Each pass tries to join every non-first component to the first one by a
    single wall, then rebuilds the adjacency from scratch. Returns the number
    of passes performed.
    """
    components = find_components(graph)
    if metrics is not None:
        metrics["components_initial"] = len(components)
    passes = 0
    cleared = 0
    stall_carves = 0
    while len(components) > 1:
        passes += 1
        first = set(components[0])
        merged = 0
        for comp in components[1:]:
            if _merge_into_first(walls, graph, first, comp):
                merged += 1
        if not merged:
            cell = _carve_stalled(walls, graph, components)
            if cell is None:
                # unreachable for a grid-connected accessible region; fail loudly rather than spin
                raise RuntimeError(f"connectivity repair stalled with {len(components)} components")
            stall_carves += 1
            log.debug(event="repair_stall_carve", cell=cell, components=len(components))
        cleared += merged
        graph.rebuild_adjacency(walls)
        components = find_components(graph)
    if metrics is not None:
        metrics["repair_passes"] = passes
        metrics["walls_cleared_repair"] = cleared
        metrics["stall_carves"] = stall_carves
    if passes:
        log.debug(event="repair_complete", passes=passes, walls_cleared=cleared, stall_carves=stall_carves)
    return passes


__all__ = ["flood", "find_components", "is_connected", "repair_connectivity"]
