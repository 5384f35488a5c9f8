"""Tests for terminal UI rendering, checked as plain text."""

from core.errors import BridgeError, TransportError
from models.types import Group
from tui.messages import GroupsLoaded, KeyPress, OperationFailed
from tui.session import InteractiveSession, Tab
from tui.styles import DEFAULT_THEME, MONOCHROME_THEME
from tui.views import render


def screen(session):
    return render(session, DEFAULT_THEME).plain


def press(session, *keys):
    for key in keys:
        session.update(KeyPress(key))


def test_loading_state():
    session = InteractiveSession()

    assert 'Loading lights...' in screen(session)


def test_lights_list(loaded_session):
    text = screen(loaded_session)

    assert 'huey - Hue Light Control' in text
    assert '> Hall' in text
    assert '● on' in text
    assert '○ off' in text


def test_groups_list(loaded_session):
    press(loaded_session, 'tab')
    text = screen(loaded_session)

    assert 'Living' in text
    assert '(Room)' in text
    assert '◐ some on' in text
    assert '○ all off' in text


def test_scenes_list_shows_group_or_placeholder(loaded_session):
    press(loaded_session, 'shift+tab')
    text = screen(loaded_session)

    assert '[Living]' in text
    assert '[(no group)]' in text


def test_empty_groups():
    session = InteractiveSession()
    session.tab = Tab.GROUPS
    session.update(GroupsLoaded([], session.load(Tab.GROUPS).seq))

    assert 'No groups found.' in screen(session)


def test_transport_error_message(loaded_session):
    loaded_session.update(OperationFailed(TransportError('timed out')))

    assert 'Cannot reach Hue bridge. Are you on the same network?' in screen(loaded_session)


def test_bridge_error_message(loaded_session):
    loaded_session.update(OperationFailed(BridgeError('resource not available')))

    assert 'Error: bridge error: resource not available' in screen(loaded_session)


def test_rename_shows_input(loaded_session):
    press(loaded_session, 'r')

    text = screen(loaded_session)
    assert 'Hall█' in text
    assert 'enter confirm' in text


def test_delete_prompt(loaded_session):
    press(loaded_session, 'tab', 'd')

    assert 'Delete "Living"? (y/n)' in screen(loaded_session)


def test_group_info(loaded_session):
    press(loaded_session, 'tab', 'i')

    text = screen(loaded_session)
    assert 'Group: Living' in text
    assert 'Hall' in text
    assert 'Desk' in text


def test_group_info_unknown_light(loaded_session):
    loaded_session.groups.items.append(Group(id='9', name='Ghost', type='Zone', light_ids=['42']))
    press(loaded_session, 'tab', 'down', 'down', 'i')

    assert '(unknown light)' in screen(loaded_session)


def test_create_group_lights_checkboxes(loaded_session):
    press(loaded_session, 'tab', 'a', 'z', 'O', 'enter', 'space')

    text = screen(loaded_session)
    assert 'Create Zone: O' in text
    assert '[✓] 1 Hall' in text
    assert '[ ] 2 Desk' in text


def test_create_scene_name_screen(loaded_session):
    press(loaded_session, 'shift+tab', 'a', 'enter')

    assert 'Create Scene for Living' in screen(loaded_session)


def test_names_are_not_markup(loaded_session):
    loaded_session.lights.items[0].name = '[bold]Hall[/bold]'

    assert '[bold]Hall[/bold]' in screen(loaded_session)


def test_monochrome_theme_renders_same_text(loaded_session):
    assert render(loaded_session, MONOCHROME_THEME).plain == screen(loaded_session)
