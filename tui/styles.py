"""Presentation configuration for the terminal UI.

A Theme maps each semantic state the views draw (on, off, partially on,
selected row, ...) to a Rich style string. It is immutable, built once at
startup and passed to render(); nothing reads styles from module state.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    title: str = 'bold color(229) on color(57)'
    tab_active: str = 'bold color(229) on color(57)'
    tab_inactive: str = 'color(252)'
    selected: str = 'bold color(229)'
    normal: str = 'color(252)'
    on: str = 'color(220)'
    off: str = 'color(240)'
    partial: str = 'color(208)'
    type: str = 'color(245)'
    help: str = 'color(241)'
    input: str = 'color(229)'
    error: str = 'bold color(196)'
    status: str = 'color(114)'


DEFAULT_THEME = Theme()

# Without colour (NO_COLOR, dumb terminals) only emphasis remains
MONOCHROME_THEME = Theme(
    title='bold reverse',
    tab_active='bold reverse',
    tab_inactive='',
    selected='bold',
    normal='',
    on='bold',
    off='dim',
    partial='',
    type='dim',
    help='dim',
    input='bold',
    error='bold',
    status='',
)
