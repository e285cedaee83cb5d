"""Exception taxonomy for maze generation and exploration.

Generation faults (``InvalidDimensionsError``, ``EmptyMazeError``) abort the
whole run, as does ``InvalidConfigError`` for an unparsable ``MAZE_*``
setting. ``MissingStartOrGoalError`` aborts a single explorer run.
``NoPathFoundError`` is a negative search result rather than a fault; callers
that prefer a flag use ``PathResult.found`` instead.
"""
from __future__ import annotations

from typing import Optional, Tuple


class MazeError(Exception):
    """Base class for every error raised by the maze core."""

    code = "maze_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class InvalidDimensionsError(MazeError, ValueError):
    code = "invalid_dimensions"

    def __init__(self, width, height):
        super().__init__(f"maze dimensions must be positive integers, got width={width!r} height={height!r}")
        self.width = width
        self.height = height


class InvalidConfigError(MazeError, ValueError):
    code = "invalid_config"

    def __init__(self, field: str, raw):
        super().__init__(f"maze config {field} has an unusable value {raw!r}")
        self.field = field
        self.raw = raw


class EmptyMazeError(MazeError):
    code = "empty_maze"

    def __init__(self, width: int, height: int):
        super().__init__(f"no accessible cell in a {width}x{height} maze")
        self.width = width
        self.height = height


class MissingStartOrGoalError(MazeError):
    code = "missing_start_or_goal"

    def __init__(self, start: Optional[Tuple[int, int]], goal: Optional[Tuple[int, int]]):
        super().__init__(f"explorer needs a start and goal node in the graph (start={start}, goal={goal})")
        self.start = start
        self.goal = goal


class NoPathFoundError(MazeError):
    code = "no_path"

    def __init__(self, start: Tuple[int, int], goal: Tuple[int, int], expansions: int = 0):
        super().__init__(f"no path from {start} to {goal}")
        self.start = start
        self.goal = goal
        self.expansions = expansions


__all__ = [
    "MazeError",
    "InvalidDimensionsError",
    "InvalidConfigError",
    "EmptyMazeError",
    "MissingStartOrGoalError",
    "NoPathFoundError",
]
