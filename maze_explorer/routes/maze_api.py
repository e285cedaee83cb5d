"""
project: Maze Explorer
module: maze_api.py
License: MIT

Maze generation and exploration API routes.

Endpoints return plain JSON for a renderer: wall segments, node markers,
start/goal and, for exploration, the DFS trace or A* path with its stats.

    GET /api/maze?width=&height=&seed=
    GET /api/maze/explore/<algorithm>?width=&height=&seed=   (dfs | astar)
    GET /api/maze/runs?limit=
"""

import hashlib
import random
import threading

from flask import Blueprint, current_app, jsonify, request

from maze_explorer import db
from maze_explorer.logging_utils import get_logger
from maze_explorer.maze import MazeConfig, MazeError, generate_maze, load_config, render_payload, trace_payload
from maze_explorer.models import ExplorationRun
from maze_explorer.search import ALGORITHMS, DatabaseStatsLogger, run_explorer

bp_maze = Blueprint("maze", __name__)
log = get_logger("maze.api")

SEED_MAX = 2**63 - 1

STATUS_BY_CODE = {
    "invalid_dimensions": 400,
    "bad_request": 400,
    "empty_maze": 422,
    "invalid_config": 500,
}

# (seed, width, height, cell_size) -> Maze. Mazes are read-only after generation.
_maze_cache = {}
_maze_cache_lock = threading.Lock()
_MAZE_CACHE_MAX = 16


class BadRequest(MazeError):
    code = "bad_request"


def coerce_seed(raw):
    """Convert a query seed (digits or any text) into a bounded int; None -> random."""
    if raw is None:
        return random.randint(1, 1_000_000)
    s = str(raw).strip()
    if not s:
        return random.randint(1, 1_000_000)
    if s.lstrip("-").isdigit():
        try:
            return int(s) % SEED_MAX
        except ValueError:
            pass  # "--5", superscript digits: hashed below
    h = hashlib.sha256(s.encode("utf-8")).digest()
    return int.from_bytes(h[:8], "big") % SEED_MAX


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise BadRequest(f"{name} must be an integer") from None


def _request_config() -> MazeConfig:
    base = load_config()
    raw_seed = request.args.get("seed")
    cfg = base.with_overrides(
        width=_int_arg("width", base.width),
        height=_int_arg("height", base.height),
        seed=coerce_seed(raw_seed or base.seed),
    )
    cfg.validate()
    limit = current_app.config.get("MAZE_MAX_DIMENSION", 200)
    if cfg.width > limit or cfg.height > limit:
        raise BadRequest(f"width and height are limited to {limit}")
    return cfg


def get_cached_maze(cfg: MazeConfig):
    key = (cfg.seed, cfg.width, cfg.height, cfg.cell_size)
    with _maze_cache_lock:
        maze = _maze_cache.get(key)
        if maze is not None:
            return maze
    maze = generate_maze(cfg)
    with _maze_cache_lock:
        _maze_cache[key] = maze
        if len(_maze_cache) > _MAZE_CACHE_MAX:
            first_key = next(iter(_maze_cache.keys()))
            if first_key != key:
                _maze_cache.pop(first_key, None)
    return maze


def clear_cache():
    with _maze_cache_lock:
        _maze_cache.clear()


@bp_maze.errorhandler(MazeError)
def _maze_error(err):
    status = STATUS_BY_CODE.get(err.code, 400)
    log.warn(event="api_error", code=err.code, path=request.path, error=err.message)
    return jsonify(err.to_dict()), status


@bp_maze.route("/api/maze")
def maze_layout():
    """Generated maze for the renderer.

    Response: { width, height, cell_size, seed, walls, nodes, start, goal, metrics }
    """
    maze = get_cached_maze(_request_config())
    payload = render_payload(maze)
    payload["metrics"] = maze.metrics
    return jsonify(payload)


@bp_maze.route("/api/maze/explore/<algorithm>")
def maze_explore(algorithm):
    """Run one explorer over the requested maze and record its stats.

    Response: { maze: <layout>, result: { algorithm, found, expansions, path_length, route, ... } }
    """
    if algorithm not in ALGORITHMS:
        return jsonify({"error": f"unknown algorithm {algorithm}", "code": "unknown_algorithm"}), 404
    maze = get_cached_maze(_request_config())
    stats_logger = DatabaseStatsLogger() if current_app.config.get("MAZE_RECORD_RUNS", True) else None
    result = run_explorer(maze, algorithm, stats_logger)
    return jsonify({"maze": render_payload(maze), "result": trace_payload(result)})


@bp_maze.route("/api/maze/runs")
def maze_runs():
    """Most recent exploration records, newest first."""
    limit = _int_arg("limit", 20)
    if limit <= 0:
        raise BadRequest("limit must be positive")
    rows = (
        db.session.execute(db.select(ExplorationRun).order_by(ExplorationRun.id.desc()).limit(min(limit, 500)))
        .scalars()
        .all()
    )
    return jsonify({"runs": [r.to_dict() for r in rows]})
