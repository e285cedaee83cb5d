"""
project: Maze Explorer
module: server.py
License: MIT

Server bootstrap helpers: logging setup and the development web server.
"""

import logging
import os
from logging.handlers import RotatingFileHandler

from maze_explorer import create_app


def start_server(host="0.0.0.0", port=5000, debug: bool = False):  # pragma: no cover (runtime only)
    """Create the app, configure logging and serve it with the Flask server."""
    app = create_app()
    _configure_logging(app.instance_path)
    logging.getLogger(__name__).info("Starting maze server on %s:%s", host, port)
    app.run(host=host, port=port, debug=debug)


def _configure_logging(log_dir: str):
    """Configure logging to both console and a rotating file in instance/.

    The file path will be instance/maze.log. Retains a few backups to avoid growth.
    """
    try:
        os.makedirs(log_dir, exist_ok=True)
    except OSError:
        pass
    log_path = os.path.join(log_dir, "maze.log")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(fmt)

    console = logging.StreamHandler()
    console.setLevel(logging.INFO)
    console.setFormatter(fmt)

    # Avoid duplicate handlers if reconfigured
    for h in list(root.handlers):
        root.removeHandler(h)

    root.addHandler(file_handler)
    root.addHandler(console)
    return log_path
