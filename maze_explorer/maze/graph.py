"""Node graph: an arena of nodes keyed by grid coordinate.

Adjacency is stored as ordered lists of coordinate keys, never as object
references, so a node graph has no reference cycles and serializes trivially.
"""
from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .grid import Coord2D, WallGrid


class Node:
    """Lightweight container for one accessible cell."""

    __slots__ = ("x", "z", "neighbors")

    def __init__(self, x: int, z: int):
        self.x = x
        self.z = z
        self.neighbors: List[Coord2D] = []

    @property
    def key(self) -> Coord2D:
        return (self.x, self.z)

    def add_neighbor(self, key: Optional[Coord2D]) -> None:
        if key is not None and key != self.key and key not in self.neighbors:
            self.neighbors.append(key)

    def clear_neighbors(self) -> None:
        self.neighbors.clear()

    def to_dict(self):
        return {"x": self.x, "z": self.z, "neighbors": [list(n) for n in self.neighbors]}

    def __repr__(self):
        return f"<Node ({self.x},{self.z}) n={len(self.neighbors)}>"


class NodeGraph:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self._nodes: Dict[Coord2D, Node] = {}

    def add_node(self, x: int, z: int) -> Node:
        key = (x, z)
        node = self._nodes.get(key)
        if node is None:
            node = Node(x, z)
            self._nodes[key] = node
        return node

    def get(self, key: Optional[Coord2D]) -> Optional[Node]:
        if key is None:
            return None
        return self._nodes.get(tuple(key))

    def __contains__(self, key) -> bool:
        return key is not None and tuple(key) in self._nodes

    def __getitem__(self, key: Coord2D) -> Node:
        return self._nodes[tuple(key)]

    def __len__(self) -> int:
        return len(self._nodes)

    def keys(self) -> List[Coord2D]:
        """Node keys in row-major (x outer, z inner) scan order."""
        return sorted(self._nodes)

    def nodes(self) -> Iterator[Node]:
        for key in self.keys():
            yield self._nodes[key]

    def __iter__(self) -> Iterator[Node]:
        return self.nodes()

    def neighbors(self, key: Coord2D) -> List[Coord2D]:
        return self._nodes[tuple(key)].neighbors

    def are_neighbors(self, a: Coord2D, b: Coord2D) -> bool:
        node = self.get(a)
        return node is not None and tuple(b) in node.neighbors

    def clear_adjacency(self) -> None:
        for node in self._nodes.values():
            node.clear_neighbors()

    def rebuild_adjacency(self, walls: WallGrid) -> None:
        """Clear and rebuild every neighbor list from the wall grid.

        Two nodes are neighbors iff they are grid-adjacent, the wall between
        them is cleared and both exist. Per-node order is Up, Down, Right, Left.
        """
        self.clear_adjacency()
        for node in self.nodes():
            for _, cell in walls.adjacent_cells(node.x, node.z):
                if cell in self._nodes and walls.is_open_between(node.key, cell):
                    node.add_neighbor(cell)

    def edge_count(self) -> int:
        return sum(len(n.neighbors) for n in self._nodes.values()) // 2

    def to_dict(self):
        return {
            "width": self.width,
            "height": self.height,
            "nodes": [n.to_dict() for n in self.nodes()],
        }

    def __repr__(self):
        return f"<NodeGraph {self.width}x{self.height} nodes={len(self)}>"


def build_node_graph(walls: WallGrid) -> NodeGraph:
    """One node per accessible cell, adjacency derived from cleared walls."""
    graph = NodeGraph(walls.width, walls.height)
    for x, z in walls.cells():
        if walls.is_cell_accessible(x, z):
            graph.add_node(x, z)
    graph.rebuild_adjacency(walls)
    return graph


__all__ = ["Node", "NodeGraph", "build_node_graph"]
