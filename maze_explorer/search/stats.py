"""Per-run statistics records and the loggers that store them.

Each explorer run produces exactly one ``RunRecord``; loggers are append-only
and never touch the maze. Storage is the logger's business: memory, the
structured event log, or the ``exploration_runs`` table.
"""
from __future__ import annotations

import datetime
from dataclasses import asdict, dataclass, field
from typing import Callable, Dict, List, Optional, Union

from ..logging_utils import get_logger
from ..maze.generator import Maze
from . import astar, dfs
from .results import PathResult, SearchResult

ExplorerResult = Union[SearchResult, PathResult]

ALGORITHMS: Dict[str, Callable] = {
    "dfs": lambda maze: dfs.explore(maze.graph, maze.start, maze.goal),
    "astar": lambda maze: astar.find_path(maze.graph, maze.start, maze.goal),
}


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


@dataclass
class RunRecord:
    algorithm: str
    expansions: int
    path_length: int
    found: bool = True
    seed: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    timestamp: datetime.datetime = field(default_factory=_utcnow)

    @classmethod
    def from_result(cls, maze: Maze, result: ExplorerResult) -> "RunRecord":
        return cls(
            algorithm=result.algorithm,
            expansions=result.expansions,
            path_length=result.path_length,
            found=result.found,
            seed=maze.seed,
            width=maze.width,
            height=maze.height,
        )

    def to_dict(self):
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


class StatsLogger:
    """Append-only sink for RunRecords."""

    def record(self, rec: RunRecord) -> None:  # pragma: no cover - interface
        raise NotImplementedError


class MemoryStatsLogger(StatsLogger):
    def __init__(self):
        self.records: List[RunRecord] = []

    def record(self, rec: RunRecord) -> None:
        self.records.append(rec)


class LogStatsLogger(StatsLogger):
    def __init__(self, name: str = "search.stats"):
        self._log = get_logger(name)

    def record(self, rec: RunRecord) -> None:
        self._log.info(event="explorer_run", **rec.to_dict())


class DatabaseStatsLogger(StatsLogger):
    """Writes one ExplorationRun row per record; needs a Flask app context."""

    def record(self, rec: RunRecord) -> None:
        from ..models.exploration_run import ExplorationRun
        from .. import db

        db.session.add(ExplorationRun.from_record(rec))
        db.session.commit()


def run_explorer(maze: Maze, algorithm: str, stats_logger: Optional[StatsLogger] = None) -> ExplorerResult:
    """Run one explorer over a generated maze and record its statistics."""
    try:
        runner = ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"unknown algorithm {algorithm!r}; expected one of {sorted(ALGORITHMS)}") from None
    result = runner(maze)
    if stats_logger is not None:
        stats_logger.record(RunRecord.from_result(maze, result))
    return result


__all__ = [
    "ALGORITHMS",
    "RunRecord",
    "StatsLogger",
    "MemoryStatsLogger",
    "LogStatsLogger",
    "DatabaseStatsLogger",
    "run_explorer",
]
