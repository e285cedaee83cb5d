import importlib
import json
import os
import sys

import pytest

# run.py is imported as a module; start_server is patched so nothing binds a port.


@pytest.fixture()
def run_module(monkeypatch):
    # Ensure a clean import each time (run.py reads VERSION once)
    if 'run' in sys.modules:
        del sys.modules['run']
    return importlib.import_module('run')


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(['--version'])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert ver in out
    assert 'Maze Explorer' in out


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == 'server'


def test_server_main_invokes_start_server(monkeypatch, run_module, capsys):
    calls = {}

    def fake_start_server(host, port, debug):
        calls['args'] = (host, port, debug)

    import maze_explorer.server as server_mod

    monkeypatch.setattr(server_mod, 'start_server', fake_start_server)
    monkeypatch.delenv('DATABASE_URL', raising=False)
    rc = run_module.main(['server', '--host', '127.0.0.1', '--port', '5055', '--debug'])
    assert rc == 0
    assert calls['args'] == ('127.0.0.1', 5055, True)
    out = capsys.readouterr().out
    assert 'Maze Explorer Server' in out
    assert '5055' in out


def test_server_db_flag_sets_database_url(monkeypatch, run_module):
    import maze_explorer.server as server_mod

    monkeypatch.setattr(server_mod, 'start_server', lambda host, port, debug: None)
    monkeypatch.setenv('DATABASE_URL', 'sqlite:///:memory:')
    run_module.main(['server', '--db', 'sqlite:///cli.db'])
    assert os.environ['DATABASE_URL'] == 'sqlite:///cli.db'


def test_explore_text(run_module, capsys):
    rc = run_module.main(['explore', '--width', '6', '--height', '5', '--seed', '3'])
    assert rc == 0
    out = capsys.readouterr().out
    assert '6x5' in out
    assert 'DFS:' in out and 'ASTAR:' in out
    assert 'found=True' in out


def test_explore_ascii_single_algorithm(run_module, capsys):
    rc = run_module.main(['explore', '--width', '4', '--height', '3', '--seed', '9', '--algorithm', 'astar', '--ascii'])
    assert rc == 0
    out = capsys.readouterr().out
    assert 'ASTAR:' in out and 'DFS:' not in out
    assert '+---+---+---+---+' in out
    assert 'S' in out


def test_explore_json(monkeypatch, run_module, capsys):
    # run_explore silences the structured log; register the key so it is restored
    monkeypatch.setenv('MAZE_LOG_LEVEL', 'warn')
    rc = run_module.main(['explore', '--width', '7', '--height', '7', '--seed', '12', '--json'])
    assert rc == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc['maze']['seed'] == 12
    assert [r['algorithm'] for r in doc['results']] == ['dfs', 'astar']
    assert [r['algorithm'] for r in doc['runs']] == ['dfs', 'astar']
    assert doc['results'][1]['path_length'] == doc['runs'][1]['path_length']


def test_explore_invalid_dimensions(run_module, capsys):
    rc = run_module.main(['explore', '--width', '0', '--seed', '1'])
    assert rc == 2
    assert '[ERROR]' in capsys.readouterr().err


def test_explore_bad_seed_setting(monkeypatch, run_module, capsys):
    monkeypatch.setenv('MAZE_SEED', 'banana')
    rc = run_module.main(['explore', '--width', '4', '--height', '4'])
    assert rc == 2
    assert 'banana' in capsys.readouterr().err
