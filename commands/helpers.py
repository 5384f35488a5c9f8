"""
Helper functions for CLI commands.

Shared utilities used across the one-shot commands:
- Building an authenticated BridgeClient
- Reporting errors on stderr with exit code 1
- Validating mutually exclusive on/off/toggle flags
"""

import functools

import click

from core.auth import ensure_authenticated
from core.client import BridgeClient
from core.errors import HueyError, ValidationError


def get_client() -> BridgeClient:
    """Return a BridgeClient for the configured bridge, running setup if needed."""
    return BridgeClient(ensure_authenticated())


def fail(message: str):
    """Print an error to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    click.get_current_context().exit(1)


def reports_errors(f):
    """Turn any HueyError raised by a command into an error line and exit 1."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except HueyError as e:
            fail(str(e))
    return wrapper


def switch_target(on: bool, off: bool, toggle: bool) -> str | None:
    """Work out which of --on/--off/--toggle was given.

    Returns:
        'on', 'off', 'toggle', or None if no flag was given

    Raises:
        ValidationError: More than one flag was given
    """
    chosen = [name for name, flag in (('on', on), ('off', off), ('toggle', toggle)) if flag]
    if len(chosen) > 1:
        raise ValidationError("use only one of --on, --off, or --toggle")
    return chosen[0] if chosen else None


def on_off(on: bool) -> str:
    return 'on' if on else 'off'
