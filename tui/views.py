"""Rendering for the terminal UI.

Pure functions from an InteractiveSession and a Theme to a Rich Text. Names
from the bridge are appended as plain text, never parsed as markup.
"""

from dataclasses import replace

from rich.text import Text

from core.errors import TransportError
from models.utils import create_name_lookup
from tui.session import (
    CreateGroupLights,
    CreateGroupName,
    CreateGroupType,
    CreateSceneGroup,
    CreateSceneName,
    DeleteConfirm,
    DeleteSceneConfirm,
    GroupInfo,
    InteractiveSession,
    Rename,
    Tab,
    TAB_ORDER,
)
from tui import keys
from tui.styles import Theme

TITLE = 'huey - Hue Light Control'
INPUT_CURSOR = '█'


def help_line(*bindings: keys.KeyBinding) -> str:
    return ' • '.join(f'{b.help_key} {b.help_text}' for b in bindings)


HELP = {
    Tab.LIGHTS: help_line(keys.UP, keys.DOWN, keys.TOGGLE, keys.RENAME, keys.REFRESH,
                          keys.TAB_NEXT, keys.QUIT),
    Tab.GROUPS: help_line(keys.UP, keys.DOWN, keys.TOGGLE, keys.ADD, keys.RENAME, keys.DELETE,
                          keys.INFO, keys.TAB_NEXT, keys.QUIT),
    Tab.SCENES: help_line(keys.UP, keys.DOWN, replace(keys.TOGGLE, help_text='activate'), keys.ADD,
                          keys.DELETE, keys.TAB_NEXT, keys.QUIT),
}
TEXT_HELP = help_line(keys.CONFIRM, keys.CANCEL)


def light_status(on: bool, theme: Theme) -> Text:
    if on:
        return Text('● on', style=theme.on)
    return Text('○ off', style=theme.off)


def group_status(all_on: bool, any_on: bool, theme: Theme) -> Text:
    if all_on:
        return Text('● all on', style=theme.on)
    if any_on:
        return Text('◐ some on', style=theme.partial)
    return Text('○ all off', style=theme.off)


def text_input(text: str, theme: Theme) -> Text:
    return Text(text + INPUT_CURSOR, style=theme.input)


def render(session: InteractiveSession, theme: Theme) -> Text:
    """Render the whole screen for the session's current mode."""
    mode = session.mode
    if session.quitting:
        return Text()
    if isinstance(mode, GroupInfo):
        return render_group_info(session, mode, theme)
    if isinstance(mode, CreateGroupType):
        return render_create_group_type(theme)
    if isinstance(mode, CreateGroupName):
        return render_create_group_name(session, mode, theme)
    if isinstance(mode, CreateGroupLights):
        return render_create_group_lights(session, mode, theme)
    if isinstance(mode, CreateSceneGroup):
        return render_create_scene_group(session, mode, theme)
    if isinstance(mode, CreateSceneName):
        return render_create_scene_name(session, mode, theme)
    return render_main(session, theme)


def render_main(session: InteractiveSession, theme: Theme) -> Text:
    out = Text()
    out.append(TITLE, style=theme.title)
    out.append('\n\n')
    out.append_text(render_tabs(session.tab, theme))
    out.append('\n\n')

    out.append_text(render_error(session, theme))

    if session.tab is Tab.LIGHTS:
        out.append_text(render_lights(session, theme))
    elif session.tab is Tab.GROUPS:
        out.append_text(render_groups(session, theme))
    else:
        out.append_text(render_scenes(session, theme))

    mode = session.mode
    if isinstance(mode, DeleteConfirm):
        out.append(f'\nDelete "{mode.name}"? (y/n)', style=theme.input)
    elif isinstance(mode, DeleteSceneConfirm):
        out.append(f'\nDelete "{mode.name}"? (y/n)', style=theme.input)

    if session.last_status and session.last_error is None:
        out.append('\n')
        out.append(session.last_status, style=theme.status)

    out.append('\n')
    if isinstance(mode, Rename):
        out.append(TEXT_HELP, style=theme.help)
    elif isinstance(mode, (DeleteConfirm, DeleteSceneConfirm)):
        out.append(help_line(keys.YES, keys.NO), style=theme.help)
    else:
        out.append(HELP[session.tab], style=theme.help)
    return out


def render_tabs(active: Tab, theme: Theme) -> Text:
    out = Text()
    for i, tab in enumerate(TAB_ORDER):
        if i:
            out.append('  ')
        style = theme.tab_active if tab is active else theme.tab_inactive
        out.append(f' {tab.value} ', style=style)
    return out


def render_error(session: InteractiveSession, theme: Theme) -> Text:
    error = session.last_error
    if error is None:
        return Text()
    if isinstance(error, TransportError):
        message = f'Cannot reach Hue bridge. Are you on the same network? ({error})'
    else:
        message = f'Error: {error}'
    return Text(message + '\n\n', style=theme.error)


def _row(cursor: bool, theme: Theme) -> tuple[str, str]:
    if cursor:
        return '> ', theme.selected
    return '  ', theme.normal


def render_lights(session: InteractiveSession, theme: Theme) -> Text:
    lights = session.lights
    if not lights.loaded and session.last_error is None:
        return Text('Loading lights...\n')
    if not lights.items:
        return Text('No lights found.\n')

    mode = session.mode
    out = Text()
    for i, light in enumerate(lights.items):
        is_selected = i == lights.cursor
        prefix, style = _row(is_selected, theme)
        out.append(prefix, style=style)
        if isinstance(mode, Rename) and mode.tab is Tab.LIGHTS and mode.target_id == light.id:
            out.append_text(text_input(mode.text, theme))
            out.append(' ')
        else:
            out.append(f'{light.name:<24} ', style=style)
        out.append_text(light_status(light.on, theme))
        out.append('\n')
    return out


def render_groups(session: InteractiveSession, theme: Theme) -> Text:
    groups = session.groups
    if not groups.loaded and session.last_error is None:
        return Text('Loading groups...\n')
    if not groups.items:
        return Text('No groups found.\n')

    mode = session.mode
    out = Text()
    for i, group in enumerate(groups.items):
        is_selected = i == groups.cursor
        prefix, style = _row(is_selected, theme)
        out.append(prefix, style=style)
        if isinstance(mode, Rename) and mode.tab is Tab.GROUPS and mode.target_id == group.id:
            out.append_text(text_input(mode.text, theme))
            out.append(' ')
        else:
            out.append(f'{group.name:<20} ', style=style)
        out.append(f'{"(" + group.type + ")":<8} ', style=theme.type)
        out.append_text(group_status(group.all_on, group.any_on, theme))
        out.append('\n')
    return out


def render_scenes(session: InteractiveSession, theme: Theme) -> Text:
    scenes = session.scenes
    if not scenes.loaded and session.last_error is None:
        return Text('Loading scenes...\n')
    if not scenes.items:
        return Text('No scenes found.\n')

    group_names = create_name_lookup(session.groups.items)
    out = Text()
    for i, scene in enumerate(scenes.items):
        prefix, style = _row(i == scenes.cursor, theme)
        out.append(prefix, style=style)
        out.append(f'{scene.name:<24} ', style=style)
        out.append(f'[{group_names.get(scene.group_id, "(no group)")}]', style=theme.type)
        out.append('\n')
    return out


def render_group_info(session: InteractiveSession, mode: GroupInfo, theme: Theme) -> Text:
    group = session.groups.find(mode.group_id)
    if group is None:
        out = Text('Group not found\n\n')
        out.append(help_line(keys.BACK), style=theme.help)
        return out

    lights_by_id = {light.id: light for light in session.lights.items}

    out = Text()
    out.append(f'Group: {group.name}', style=theme.title)
    out.append('\n')
    out.append(f'Type: {group.type}', style=theme.type)
    out.append('\n\nLights:\n')
    if not group.light_ids:
        out.append('  (none)\n')
    for light_id in group.light_ids:
        light = lights_by_id.get(light_id)
        if light is None:
            out.append('  (unknown light)\n')
            continue
        out.append(f'  {light.name:<24} ')
        out.append_text(light_status(light.on, theme))
        out.append('\n')

    out.append('\n')
    out.append(help_line(keys.BACK), style=theme.help)
    return out


def render_create_group_type(theme: Theme) -> Text:
    out = Text()
    out.append('Create Group', style=theme.title)
    out.append('\n\nSelect type:\n\n')
    out.append('  [r] Room - A light can only be in one room\n')
    out.append('  [z] Zone - A light can be in multiple zones\n')
    out.append('\n')
    out.append(help_line(keys.ROOM, keys.ZONE, keys.CANCEL), style=theme.help)
    return out


def render_create_group_name(session: InteractiveSession, mode: CreateGroupName, theme: Theme) -> Text:
    out = Text()
    out.append(f'Create {mode.group_type}', style=theme.title)
    out.append('\n\n')
    out.append_text(render_error(session, theme))
    out.append('Enter name:\n\n  ')
    out.append_text(text_input(mode.text, theme))
    out.append('\n\n')
    out.append(TEXT_HELP, style=theme.help)
    return out


def render_create_group_lights(session: InteractiveSession, mode: CreateGroupLights, theme: Theme) -> Text:
    out = Text()
    out.append(f'Create {mode.group_type}: {mode.name}', style=theme.title)
    out.append('\n\nSelect lights (space to toggle):\n\n')

    if not session.lights.items:
        out.append('  No lights found.\n')
    for i, light in enumerate(session.lights.items):
        prefix, style = _row(i == mode.cursor, theme)
        checkbox = '[✓]' if light.id in mode.selected else '[ ]'
        out.append(f'{prefix}{checkbox} {light.id} {light.name}', style=style)
        out.append('\n')

    out.append('\n')
    out.append(help_line(keys.UP, keys.DOWN, keys.SELECT, replace(keys.CONFIRM, help_text='create'), keys.CANCEL),
               style=theme.help)
    return out


def render_create_scene_group(session: InteractiveSession, mode: CreateSceneGroup, theme: Theme) -> Text:
    out = Text()
    out.append('Create Scene', style=theme.title)
    out.append('\n\nSelect group to capture:\n\n')

    out.append_text(render_error(session, theme))
    if not session.groups.items:
        out.append('  No groups found.\n')
    for i, group in enumerate(session.groups.items):
        prefix, style = _row(i == mode.cursor, theme)
        out.append(f'{prefix}{group.name}', style=style)
        out.append('\n')

    out.append('\n')
    out.append(help_line(keys.UP, keys.DOWN, replace(keys.CONFIRM, help_text='select'), keys.CANCEL),
               style=theme.help)
    return out


def render_create_scene_name(session: InteractiveSession, mode: CreateSceneName, theme: Theme) -> Text:
    group = session.groups.find(mode.group_id)
    group_name = group.name if group is not None else mode.group_id

    out = Text()
    out.append(f'Create Scene for {group_name}', style=theme.title)
    out.append('\n\n')
    out.append_text(render_error(session, theme))
    out.append('Enter scene name:\n\n  ')
    out.append_text(text_input(mode.text, theme))
    out.append('\n\n')
    out.append(TEXT_HELP, style=theme.help)
    return out
