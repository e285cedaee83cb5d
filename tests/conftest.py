import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from maze_explorer import create_app, db  # noqa: E402
from maze_explorer.routes.maze_api import clear_cache  # noqa: E402


@pytest.fixture()
def test_app(monkeypatch):
    for key in ("MAZE_WIDTH", "MAZE_HEIGHT", "MAZE_SEED", "MAZE_CELL_SIZE", "DATABASE_URL"):
        monkeypatch.delenv(key, raising=False)
    app = create_app({"TESTING": True, "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:"})
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_maze_cache():
    """Generated mazes are cached per (seed, size); keep tests independent."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(autouse=True)
def _quiet_structured_log(monkeypatch):
    monkeypatch.setenv("MAZE_LOG_LEVEL", "warn")
