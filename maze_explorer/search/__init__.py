"""Search algorithms over a generated maze graph."""

from .astar import find_path, find_path_or_raise, manhattan  # noqa: F401
from .dfs import SearchContext, explore, explore_iterative  # noqa: F401
from .results import PathResult, SearchResult  # noqa: F401
from .stats import (  # noqa: F401
    ALGORITHMS,
    DatabaseStatsLogger,
    LogStatsLogger,
    MemoryStatsLogger,
    RunRecord,
    StatsLogger,
    run_explorer,
)

__all__ = [
    "explore",
    "explore_iterative",
    "SearchContext",
    "SearchResult",
    "find_path",
    "find_path_or_raise",
    "manhattan",
    "PathResult",
    "ALGORITHMS",
    "RunRecord",
    "StatsLogger",
    "MemoryStatsLogger",
    "LogStatsLogger",
    "DatabaseStatsLogger",
    "run_explorer",
]
