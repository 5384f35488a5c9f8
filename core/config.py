"""Configuration management.

This module handles:
- Locating the config file (~/.config/huey/config.json, or $HUEY_CONFIG)
- Loading/saving the bridge address and credential
- Environment variable overrides (HUEY_BRIDGE_IP, HUEY_USERNAME)
"""

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path

from core.errors import ConfigError
from models.types import Session


def config_path() -> Path:
    """Return the config file path, honouring $HUEY_CONFIG."""
    override = os.getenv('HUEY_CONFIG')
    if override:
        return Path(override).expanduser()
    return Path.home() / '.config' / 'huey' / 'config.json'


def log_path() -> Path:
    """Return the debug log file used by the terminal UI."""
    return config_path().parent / 'huey.log'


@dataclass
class Config:
    """Persisted bridge connection settings."""
    bridge_ip: str = ''
    username: str = ''

    def is_configured(self) -> bool:
        """True if both the bridge address and credential are set."""
        return bool(self.bridge_ip) and bool(self.username)

    def to_session(self) -> Session:
        return Session(bridge_address=self.bridge_ip, credential=self.username)


def with_env_overrides(config: Config) -> Config:
    """Return a copy of config with HUEY_BRIDGE_IP / HUEY_USERNAME applied.

    The copy is only for connecting; it is never what gets saved back.
    """
    return replace(
        config,
        bridge_ip=os.getenv('HUEY_BRIDGE_IP', config.bridge_ip),
        username=os.getenv('HUEY_USERNAME', config.username),
    )


def load_config(path: Path | None = None, use_env: bool = True) -> Config:
    """Load configuration from the config file.

    A missing file is not an error; it yields an empty Config. Values from
    HUEY_BRIDGE_IP / HUEY_USERNAME override whatever the file holds unless
    use_env is False.

    Args:
        path: Config file to read (defaults to config_path())
        use_env: Apply the environment overrides

    Returns:
        Loaded Config

    Raises:
        ConfigError: The file exists but is unreadable or not valid JSON
    """
    path = path or config_path()
    config = Config()

    if path.exists():
        try:
            with open(path, 'r') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigError(f"cannot read config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"cannot read config {path}: expected a JSON object")

        config.bridge_ip = str(data.get('bridge_ip') or '')
        config.username = str(data.get('username') or '')

    return with_env_overrides(config) if use_env else config


def save_config(config: Config, path: Path | None = None) -> Path:
    """Save configuration to file.

    Creates the config directory if it doesn't exist. The file is created
    with mode 600 (user read/write only) so the credential, which grants full
    control of the bridge, is never readable by others, even briefly.

    Args:
        config: Configuration to save
        path: Config file to write (defaults to config_path())

    Returns:
        The path written
    """
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, 'w') as f:
        json.dump({'bridge_ip': config.bridge_ip, 'username': config.username}, f, indent=2)

    # O_CREAT only applies the mode to new files
    os.chmod(path, 0o600)
    return path
