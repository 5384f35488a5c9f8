"""Tests for configuration functions in core/config.py

All file access goes to pytest's tmp_path, never the real ~/.config/huey.
"""

import json
import os
import stat
from unittest.mock import patch

import pytest

from core.config import Config, config_path, load_config, log_path, save_config
from core.errors import ConfigError
from models.types import Session


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('HUEY_CONFIG', 'HUEY_BRIDGE_IP', 'HUEY_USERNAME'):
        monkeypatch.delenv(name, raising=False)


class TestPaths:
    """Test config file locations."""

    def test_default_path(self, monkeypatch, tmp_path):
        monkeypatch.setenv('HOME', str(tmp_path))
        assert config_path() == tmp_path / '.config' / 'huey' / 'config.json'

    def test_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv('HUEY_CONFIG', str(tmp_path / 'other.json'))
        assert config_path() == tmp_path / 'other.json'

    def test_log_next_to_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv('HUEY_CONFIG', str(tmp_path / 'config.json'))
        assert log_path() == tmp_path / 'huey.log'


class TestLoadConfig:
    """Test configuration file loading."""

    def test_missing_file_is_empty(self, tmp_path):
        config = load_config(tmp_path / 'missing.json')

        assert config == Config()
        assert not config.is_configured()

    def test_reads_fields(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'bridge_ip': '10.0.0.5', 'username': 'cred'}))

        config = load_config(path)

        assert config.is_configured()
        assert config.to_session() == Session(bridge_address='10.0.0.5', credential='cred')

    def test_invalid_json(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{not json')

        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('[1, 2]')

        with pytest.raises(ConfigError):
            load_config(path)

    def test_env_overrides_file(self, monkeypatch, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'bridge_ip': '10.0.0.5', 'username': 'cred'}))
        monkeypatch.setenv('HUEY_BRIDGE_IP', '10.0.0.9')

        config = load_config(path)

        assert config.bridge_ip == '10.0.0.9'
        assert config.username == 'cred'

    def test_env_only(self, monkeypatch, tmp_path):
        monkeypatch.setenv('HUEY_BRIDGE_IP', '10.0.0.9')
        monkeypatch.setenv('HUEY_USERNAME', 'envcred')

        assert load_config(tmp_path / 'missing.json').is_configured()

    def test_file_only(self, monkeypatch, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text(json.dumps({'bridge_ip': '10.0.0.5', 'username': ''}))
        monkeypatch.setenv('HUEY_USERNAME', 'envcred')

        config = load_config(path, use_env=False)

        assert config == Config(bridge_ip='10.0.0.5')


class TestSaveConfig:
    """Test configuration file saving."""

    def test_round_trip_and_permissions(self, tmp_path):
        path = tmp_path / 'nested' / 'config.json'

        written = save_config(Config(bridge_ip='10.0.0.5', username='cred'), path)

        assert written == path
        assert json.loads(path.read_text()) == {'bridge_ip': '10.0.0.5', 'username': 'cred'}
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_existing_file_tightened(self, tmp_path):
        path = tmp_path / 'config.json'
        path.write_text('{}')
        path.chmod(0o644)

        save_config(Config(bridge_ip='10.0.0.5', username='cred'), path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_created_with_private_mode(self, tmp_path):
        path = tmp_path / 'config.json'

        with patch('core.config.os.open', wraps=os.open) as mock_open:
            save_config(Config(bridge_ip='10.0.0.5', username='cred'), path)

        flags, mode = mock_open.call_args.args[1:]
        assert flags & os.O_CREAT
        assert mode == 0o600

    def test_default_path_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv('HUEY_CONFIG', str(tmp_path / 'c.json'))

        save_config(Config(bridge_ip='1.2.3.4', username='u'))

        assert load_config().bridge_ip == '1.2.3.4'
