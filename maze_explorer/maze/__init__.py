"""Public maze package interface."""

from .config import MazeConfig, load_config  # noqa: F401
from .connectivity import find_components, is_connected, repair_connectivity  # noqa: F401
from .errors import (  # noqa: F401
    EmptyMazeError,
    InvalidConfigError,
    InvalidDimensionsError,
    MazeError,
    MissingStartOrGoalError,
    NoPathFoundError,
)
from .generator import Maze, MazeGenerator, generate_maze  # noqa: F401
from .graph import Node, NodeGraph, build_node_graph  # noqa: F401
from .grid import DIRECTIONS, HORIZONTAL, VERTICAL, WallGrid  # noqa: F401
from .render import render_ascii, render_payload, trace_payload  # noqa: F401

__all__ = [
    "MazeConfig",
    "load_config",
    "WallGrid",
    "DIRECTIONS",
    "VERTICAL",
    "HORIZONTAL",
    "Node",
    "NodeGraph",
    "build_node_graph",
    "find_components",
    "is_connected",
    "repair_connectivity",
    "Maze",
    "MazeGenerator",
    "generate_maze",
    "render_payload",
    "trace_payload",
    "render_ascii",
    "MazeError",
    "InvalidDimensionsError",
    "InvalidConfigError",
    "EmptyMazeError",
    "MissingStartOrGoalError",
    "NoPathFoundError",
]
