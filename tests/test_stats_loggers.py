import json

import pytest

from maze_explorer import db
from maze_explorer.maze import generate_maze
from maze_explorer.models import ExplorationRun
from maze_explorer.search import (
    DatabaseStatsLogger,
    LogStatsLogger,
    MemoryStatsLogger,
    RunRecord,
    run_explorer,
)


def test_one_record_per_run():
    m = generate_maze(width=7, height=7, seed=11)
    sink = MemoryStatsLogger()
    dfs = run_explorer(m, 'dfs', sink)
    astar = run_explorer(m, 'astar', sink)
    assert [r.algorithm for r in sink.records] == ['dfs', 'astar']
    assert sink.records[0].expansions == dfs.expansions
    assert sink.records[1].path_length == astar.path_length
    assert all(r.seed == 11 and r.width == 7 and r.height == 7 for r in sink.records)
    assert all(r.found for r in sink.records)


def test_run_without_logger_and_unknown_algorithm():
    m = generate_maze(width=4, height=4, seed=1)
    assert run_explorer(m, 'astar').found
    with pytest.raises(ValueError):
        run_explorer(m, 'bfs')


def test_logging_does_not_touch_maze():
    m = generate_maze(width=6, height=6, seed=8)
    before = (m.walls.snapshot(), m.graph.to_dict())
    run_explorer(m, 'dfs', MemoryStatsLogger())
    run_explorer(m, 'astar', MemoryStatsLogger())
    assert (m.walls.snapshot(), m.graph.to_dict()) == before


def test_record_to_dict():
    rec = RunRecord(algorithm='dfs', expansions=4, path_length=3, seed=9, width=2, height=2)
    d = rec.to_dict()
    assert d['algorithm'] == 'dfs' and d['expansions'] == 4 and d['path_length'] == 3
    assert isinstance(d['timestamp'], str) and 'T' in d['timestamp']


def test_log_stats_logger_emits_event(monkeypatch, capsys):
    monkeypatch.setenv('MAZE_LOG_LEVEL', 'info')
    monkeypatch.setenv('MAZE_LOG_JSON', '1')
    LogStatsLogger().record(RunRecord(algorithm='astar', expansions=12, path_length=7, seed=3))
    lines = [ln for ln in capsys.readouterr().out.splitlines() if ln.strip()]
    rec = json.loads(lines[-1])
    assert rec['event'] == 'explorer_run'
    assert rec['algorithm'] == 'astar' and rec['expansions'] == 12


def test_database_stats_logger(test_app):
    m = generate_maze(width=5, height=5, seed=21)
    with test_app.app_context():
        run_explorer(m, 'dfs', DatabaseStatsLogger())
        run_explorer(m, 'astar', DatabaseStatsLogger())
        rows = db.session.execute(db.select(ExplorationRun).order_by(ExplorationRun.id)).scalars().all()
        assert [r.algorithm for r in rows] == ['dfs', 'astar']
        assert rows[0].seed == 21
        d = rows[1].to_dict()
        assert d['width'] == 5 and d['found'] is True and d['timestamp']
