import importlib
import os

from jumble import config


def _reload_from(monkeypatch, directory, **env):
    with monkeypatch.context() as m:
        m.chdir(directory)
        for key, value in env.items():
            m.setenv(key, value)
        importlib.reload(config)


def test_settings_read_from_dotenv(monkeypatch, tmp_path):
    (tmp_path / '.env').write_text(
        'JUMBLE_GAME_LENGTH=7\nJUMBLE_LOG_LEVEL=debug\n', encoding='utf-8',
    )
    monkeypatch.delenv('JUMBLE_GAME_LENGTH', raising=False)
    monkeypatch.delenv('JUMBLE_LOG_LEVEL', raising=False)
    try:
        _reload_from(monkeypatch, tmp_path)
        assert config.DEFAULT_GAME_LENGTH == 7
        assert config.LOG_LEVEL == 'DEBUG'
    finally:
        os.environ.pop('JUMBLE_GAME_LENGTH', None)
        os.environ.pop('JUMBLE_LOG_LEVEL', None)
        importlib.reload(config)


def test_environment_wins_over_dotenv(monkeypatch, tmp_path):
    (tmp_path / '.env').write_text('JUMBLE_GAME_MIN_LENGTH=5\n', encoding='utf-8')
    try:
        _reload_from(monkeypatch, tmp_path, JUMBLE_GAME_MIN_LENGTH='4')
        assert config.DEFAULT_MIN_LENGTH == 4
    finally:
        importlib.reload(config)
