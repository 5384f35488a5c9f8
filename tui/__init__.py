"""Interactive terminal UI.

This package contains:
- session: InteractiveSession state machine (modes, cursors, reconciliation)
- messages: Events fed into the session
- operations: Bridge calls the session asks the host to run
- keys: Key bindings
- styles: Immutable presentation Theme
- views: Rendering of session state
- app: Textual host application
"""

import os

from core.client import BridgeClient
from tui.styles import DEFAULT_THEME, MONOCHROME_THEME, Theme


def choose_theme() -> Theme:
    """Pick the presentation for this terminal (honours NO_COLOR)."""
    if os.getenv('NO_COLOR'):
        return MONOCHROME_THEME
    return DEFAULT_THEME


def run(client: BridgeClient, presentation: Theme | None = None):
    """Run the terminal UI until the user quits."""
    from tui.app import HueyApp

    HueyApp(client, presentation or choose_theme()).run()
