"""Tests for environment and .env driven configuration."""
import pytest

from pydeadcode.config import Config, get_config, reset_config, split_patterns


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ('PYDEADCODE_MIN_CONFIDENCE', 'PYDEADCODE_EXCLUDE', 'PYDEADCODE_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


def test_defaults():
    config = Config()

    assert config.min_confidence == 60
    assert config.exclude_patterns == []
    assert config.log_level == 'WARNING'


def test_environment_values(monkeypatch):
    monkeypatch.setenv('PYDEADCODE_MIN_CONFIDENCE', '75')
    monkeypatch.setenv('PYDEADCODE_EXCLUDE', 'build/*, *_pb2.py')
    monkeypatch.setenv('PYDEADCODE_LOG_LEVEL', 'debug')

    config = Config()

    assert config.min_confidence == 75
    assert config.exclude_patterns == ['build/*', '*_pb2.py']
    assert config.log_level == 'DEBUG'


def test_dotenv_file(monkeypatch, tmp_path):
    env_file = tmp_path / 'custom.env'
    env_file.write_text("PYDEADCODE_MIN_CONFIDENCE=70\n", encoding='utf-8')
    # load_dotenv writes straight into os.environ; let monkeypatch restore it
    monkeypatch.setenv('PYDEADCODE_MIN_CONFIDENCE', '')
    monkeypatch.delenv('PYDEADCODE_MIN_CONFIDENCE')

    config = Config(env_file)

    assert config.min_confidence == 70


def test_environment_wins_over_dotenv(monkeypatch, tmp_path):
    (tmp_path / '.env').write_text("PYDEADCODE_MIN_CONFIDENCE=70\n", encoding='utf-8')
    monkeypatch.setenv('PYDEADCODE_MIN_CONFIDENCE', '90')

    assert Config().min_confidence == 90


@pytest.mark.parametrize("value", ['abc', '101', '-5'])
def test_invalid_min_confidence(monkeypatch, value):
    monkeypatch.setenv('PYDEADCODE_MIN_CONFIDENCE', value)

    with pytest.raises(ValueError):
        Config()


def test_singleton():
    assert get_config() is get_config()

    first = get_config()
    reset_config()
    assert get_config() is not first


@pytest.mark.parametrize("raw, expected", [
    ('', []),
    ('a', ['a']),
    ('a,b', ['a', 'b']),
    (' a , ,b ', ['a', 'b']),
])
def test_split_patterns(raw, expected):
    assert split_patterns(raw) == expected
