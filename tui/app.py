"""Textual application hosting the InteractiveSession.

Every event (key press or finished bridge call) is applied to the session on
the app's event loop, one at a time. Operations returned by the session run
in thread workers; each worker hands its single completion message back with
call_from_thread, so no result is ever applied concurrently with another.
"""

from functools import partial

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from core.client import BridgeClient
from core.log import get_logger
from tui.keys import normalise_key
from tui.messages import KeyPress
from tui.operations import Operation, run_operation
from tui.session import InteractiveSession
from tui.styles import DEFAULT_THEME, Theme
from tui.views import render

# Textual treats these as focus/quit shortcuts unless we claim them first
CLAIMED_KEYS = ('tab', 'shift+tab', 'ctrl+c')

logger = get_logger(__name__)


class HueyApp(App):
    """Terminal UI for browsing and switching lights, groups and scenes."""

    TITLE = 'huey'
    CSS = """
    #view {
        padding: 1 2;
    }
    """
    BINDINGS = [
        Binding(key, f"press('{key}')", show=False, priority=True)
        for key in CLAIMED_KEYS
    ]

    def __init__(self, client: BridgeClient, presentation: Theme = DEFAULT_THEME,
                 session: InteractiveSession | None = None):
        super().__init__()
        self.client = client
        self.presentation = presentation
        self.session = session or InteractiveSession()

    def compose(self) -> ComposeResult:
        yield Static(id='view')

    def on_mount(self):
        self.start_operations(self.session.start())
        self.refresh_view()

    def on_key(self, event: events.Key):
        key = normalise_key(event.key, event.character)
        if key in CLAIMED_KEYS:
            return
        event.stop()
        event.prevent_default()
        self.apply_event(KeyPress(key))

    def action_press(self, key: str):
        self.apply_event(KeyPress(key))

    def apply_event(self, event):
        """Apply one event to the session, start its follow-ups and redraw."""
        operations = self.session.update(event)
        if self.session.quitting:
            self.exit()
            return
        self.start_operations(operations)
        self.refresh_view()

    def start_operations(self, operations: list[Operation]):
        for operation in operations:
            logger.debug("Starting %s", operation)
            self.run_worker(partial(self._run_in_thread, operation), thread=True, group='bridge')

    def _run_in_thread(self, operation: Operation):
        message = run_operation(operation, self.client)
        if self.is_running:
            self.call_from_thread(self.apply_event, message)

    def refresh_view(self):
        self.query_one('#view', Static).update(render(self.session, self.presentation))
