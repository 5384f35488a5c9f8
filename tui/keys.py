"""Key bindings for the interactive session.

Keys are the normalised names produced by the app: printable characters as
themselves (case-sensitive), plus 'up', 'down', 'enter', 'space', 'escape',
'backspace', 'tab', 'shift+tab' and 'ctrl+c'.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    keys: tuple[str, ...]
    help_key: str
    help_text: str

    def matches(self, key: str) -> bool:
        return key in self.keys


UP = KeyBinding(('up', 'k'), '↑/k', 'up')
DOWN = KeyBinding(('down', 'j'), '↓/j', 'down')
TOGGLE = KeyBinding(('space', 'enter'), 'space', 'toggle')
RENAME = KeyBinding(('r',), 'r', 'rename')
DELETE = KeyBinding(('d',), 'd', 'delete')
ADD = KeyBinding(('a',), 'a', 'add')
INFO = KeyBinding(('i',), 'i', 'info')
REFRESH = KeyBinding(('R',), 'R', 'refresh')
TAB_NEXT = KeyBinding(('tab', 'l'), 'tab', 'switch')
TAB_PREV = KeyBinding(('shift+tab', 'h'), 'shift+tab', 'prev tab')
QUIT = KeyBinding(('q', 'escape', 'ctrl+c'), 'q', 'quit')

# Sub-mode keys
CONFIRM = KeyBinding(('enter',), 'enter', 'confirm')
CANCEL = KeyBinding(('escape',), 'esc', 'cancel')
YES = KeyBinding(('y', 'enter'), 'y/enter', 'delete')
NO = KeyBinding(('n', 'escape'), 'n/esc', 'cancel')
SELECT = KeyBinding(('space',), 'space', 'toggle')
BACKSPACE = KeyBinding(('backspace',), 'backspace', 'delete')
BACK = KeyBinding(('escape', 'q', 'enter', 'i'), 'esc', 'back')
ROOM = KeyBinding(('r',), 'r', 'room')
ZONE = KeyBinding(('z',), 'z', 'zone')

# Keys that never count as text input
NAMED_KEYS = {'up', 'down', 'left', 'right', 'enter', 'escape', 'backspace',
              'tab', 'shift+tab', 'ctrl+c', 'delete', 'home', 'end'}


def normalise_key(key: str, character: str | None) -> str:
    """Map a terminal key event to the session's key names.

    Printable characters win over the key name so that 'R' and 'r' stay
    distinct; the space bar becomes 'space'.
    """
    if key in NAMED_KEYS:
        return key
    if character and len(character) == 1 and character.isprintable():
        return 'space' if character == ' ' else character
    return key


def text_character(key: str) -> str | None:
    """Return the character a key types into a text field, if any."""
    if key == 'space':
        return ' '
    if len(key) == 1 and key.isprintable():
        return key
    return None
