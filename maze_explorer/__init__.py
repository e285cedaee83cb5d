"""
project: Maze Explorer
module: __init__.py
License: MIT

Flask application factory and core extensions setup.

The maze core (``maze_explorer.maze`` / ``maze_explorer.search``) has no web
dependency; this module wires the HTTP surface and the SQLAlchemy-backed stats
log around it. Configuration is sourced from environment variables (a local
``.env`` is loaded when present) with defaults suited to development. The
instance/ directory holds the SQLite database and log files.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy

load_dotenv()

db = SQLAlchemy()


def _env_flag(name: str, default: str = "1") -> bool:
    return os.getenv(name, default).strip().lower() not in ("0", "false", "no", "off", "")


def create_app(test_config=None):
    """Build the Flask app, register the maze blueprint and create tables.

    ``test_config`` (a mapping) is applied last, so tests can point the
    database at ``sqlite:///:memory:`` or pin ``MAZE_*`` generation settings.
    """
    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        pass

    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        db_path = Path(app.instance_path) / "maze.db"
        database_url = f"sqlite:///{db_path.as_posix()}"

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        SQLALCHEMY_DATABASE_URI=database_url,
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        # Generation defaults for the API; MazeConfig fields of the same name
        MAZE_WIDTH=os.getenv("MAZE_WIDTH"),
        MAZE_HEIGHT=os.getenv("MAZE_HEIGHT"),
        MAZE_CELL_SIZE=os.getenv("MAZE_CELL_SIZE"),
        MAZE_ENABLE_METRICS=_env_flag("MAZE_ENABLE_METRICS"),
        MAZE_MAX_DIMENSION=int(os.getenv("MAZE_MAX_DIMENSION", "200")),
        MAZE_RECORD_RUNS=_env_flag("MAZE_RECORD_RUNS"),
    )
    if test_config:
        app.config.update(test_config)

    db.init_app(app)

    from maze_explorer.routes.maze_api import bp_maze

    app.register_blueprint(bp_maze)

    with app.app_context():
        from maze_explorer import models  # noqa: F401

        db.create_all()

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not found", "code": "not_found"}), 404

    return app
