"""Renderer-facing views of a generated maze.

Renderers are driven purely by these plain-data outputs and never see the
live graph objects. World positions follow the cell layout used for drawing:
a cell (x, z) is centered at ((x + 0.5) * cell_size, (z + 0.5) * cell_size),
vertical wall (x, z) sits at (x * cell_size, (z + 0.5) * cell_size) and
horizontal wall (x, z) at ((x + 0.5) * cell_size, z * cell_size).

Perimeter segments are always reported as present: they are fixed
boundaries even when the pruning pass flipped their flag.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Set

from .generator import Maze
from .grid import VERTICAL, Coord2D, WallGrid


def _is_perimeter(walls: WallGrid, orientation: str, x: int, z: int) -> bool:
    if orientation == VERTICAL:
        return x == 0 or x == walls.width
    return z == 0 or z == walls.height


def wall_segments(maze: Maze) -> List[Dict[str, Any]]:
    size = maze.config.cell_size
    walls = maze.walls
    segments = walls.present_walls()
    # a pruned perimeter flag is still drawn
    segments += [w for w in walls.cleared_walls() if _is_perimeter(walls, *w)]
    out = []
    for orientation, x, z in segments:
        perimeter = _is_perimeter(walls, orientation, x, z)
        if orientation == VERTICAL:
            pos = [x * size, (z + 0.5) * size]
        else:
            pos = [(x + 0.5) * size, z * size]
        out.append({"orientation": orientation, "x": x, "z": z, "position": pos, "perimeter": perimeter})
    return out


def node_markers(maze: Maze) -> List[Dict[str, Any]]:
    size = maze.config.cell_size
    return [
        {
            "x": node.x,
            "z": node.z,
            "position": [(node.x + 0.5) * size, (node.z + 0.5) * size],
            "neighbors": [list(n) for n in node.neighbors],
        }
        for node in maze.graph.nodes()
    ]


def render_payload(maze: Maze) -> Dict[str, Any]:
    """Everything a renderer needs, in drawing order: walls, nodes, start, goal."""
    return {
        "width": maze.width,
        "height": maze.height,
        "cell_size": maze.config.cell_size,
        "seed": maze.seed,
        "walls": wall_segments(maze),
        "nodes": node_markers(maze),
        "start": list(maze.start),
        "goal": list(maze.goal),
    }


def trace_payload(result) -> Dict[str, Any]:
    """Explorer output for playback: DFS trace or A* path plus stats."""
    data = result.to_dict()
    data["route"] = [list(c) for c in result.route]
    return data


def render_ascii(maze: Maze, path: Optional[Iterable[Coord2D]] = None) -> str:
    """Text drawing with z growing upward; S start, G goal, * path, x no node."""
    walls = maze.walls
    marked: Set[Coord2D] = {tuple(c) for c in path} if path else set()
    lines = []
    for z in range(walls.height - 1, -1, -1):
        top = "+"
        for x in range(walls.width):
            closed = walls.horizontal[x][z + 1] or z + 1 == walls.height
            top += ("---" if closed else "   ") + "+"
        lines.append(top)
        row = ""
        for x in range(walls.width):
            closed = walls.vertical[x][z] or x == 0
            row += "|" if closed else " "
            key = (x, z)
            if key == maze.start:
                mark = "S"
            elif key == maze.goal:
                mark = "G"
            elif key in marked:
                mark = "*"
            elif key not in maze.graph:
                mark = "x"
            else:
                mark = " "
            row += f" {mark} "
        row += "|"
        lines.append(row)
    lines.append("+" + "---+" * walls.width)
    return "\n".join(lines)


__all__ = ["render_payload", "trace_payload", "render_ascii", "wall_segments", "node_markers"]
