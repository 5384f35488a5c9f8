"""Logging helpers for huey.

Provides ``get_logger`` for modules and ``enable_debug_logging`` for the CLI's
``--debug`` flag. Nothing is emitted unless debug logging is switched on, so
one-shot command output and the terminal UI stay clean by default.
"""

import logging
from pathlib import Path

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a module, typically called with ``__name__``."""
    logger = logging.getLogger(f'huey.{name}')
    if not logging.getLogger('huey').handlers:
        logging.getLogger('huey').addHandler(logging.NullHandler())
    return logger


def enable_debug_logging(log_file: Path | None = None) -> logging.Handler:
    """Attach a DEBUG handler to the huey logger tree.

    Args:
        log_file: Write to this file instead of stderr (used by the TUI,
            which owns the terminal)

    Returns:
        The handler that was attached
    """
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger('huey')
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler
