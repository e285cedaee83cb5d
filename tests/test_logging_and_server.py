import json
import logging

from maze_explorer.logging_utils import get_logger
from maze_explorer.server import _configure_logging


def test_key_value_format(monkeypatch, capsys):
    monkeypatch.setenv('MAZE_LOG_LEVEL', 'debug')
    monkeypatch.delenv('MAZE_LOG_JSON', raising=False)
    get_logger('test.kv').info(event='maze_generated', width=4, note='two words', skipped=None)
    out = capsys.readouterr().out.strip()
    assert out.startswith('level=info ts=')
    assert 'event=maze_generated' in out and 'width=4' in out
    assert 'note=two_words' in out
    assert 'skipped' not in out
    assert 'logger=test.kv' in out


def test_json_mode(monkeypatch, capsys):
    monkeypatch.setenv('MAZE_LOG_LEVEL', 'info')
    monkeypatch.setenv('MAZE_LOG_JSON', 'yes')
    get_logger('test.json').warn(event='api_error', code='empty_maze')
    rec = json.loads(capsys.readouterr().out.strip())
    assert rec['level'] == 'warn' and rec['event'] == 'api_error' and rec['logger'] == 'test.json'
    assert isinstance(rec['ts'], int)


def test_level_filter_and_stderr(monkeypatch, capsys):
    monkeypatch.setenv('MAZE_LOG_LEVEL', 'warn')
    log = get_logger('test.level')
    log.debug(event='a')
    log.info(event='b')
    log.error(event='c')
    captured = capsys.readouterr()
    assert captured.out == ''
    assert 'event=c' in captured.err


def test_get_logger_cached():
    assert get_logger('same') is get_logger('same')


def test_configure_logging_writes_instance_log(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        path = _configure_logging(str(tmp_path / 'instance'))
        assert path.endswith('maze.log')
        assert len(root.handlers) == 2
        logging.getLogger('maze.test').info('hello log file')
        for h in root.handlers:
            h.flush()
        with open(path, encoding='utf-8') as f:
            assert 'hello log file' in f.read()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
