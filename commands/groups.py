"""
Group commands: list, show, switch, rename, create and delete rooms and zones.
"""

import click

from commands.helpers import get_client, on_off, reports_errors, switch_target
from core.errors import ValidationError
from models.types import GroupAction
from models.utils import clean_name, group_status, parse_light_ids

GROUP_TYPES = {'room': 'Room', 'zone': 'Zone'}


def normalise_group_type(value: str) -> str:
    """Map 'room'/'zone' (any case) to the bridge's 'Room'/'Zone'."""
    group_type = GROUP_TYPES.get(value.strip().lower())
    if group_type is None:
        raise ValidationError(f"group type must be room or zone, not '{value}'")
    return group_type


@click.command(name='groups')
@reports_errors
def groups_command():
    """List all rooms and zones."""
    client = get_client()
    for group in client.list_groups():
        click.echo(f"{group.id:<4} {group.name:<20} {group.type:<10} {group_status(group)}")


@click.command(name='group')
@click.argument('group_id')
@click.option('--on', 'turn_on', is_flag=True, help='Turn every light in the group on')
@click.option('--off', 'turn_off', is_flag=True, help='Turn every light in the group off')
@click.option('--toggle', is_flag=True, help='Turn off if any light is on, otherwise on')
@click.option('--name', help='Rename the group')
@click.option('--delete', is_flag=True, help='Delete the group')
@reports_errors
def group_command(group_id: str, turn_on: bool, turn_off: bool, toggle: bool,
                  name: str | None, delete: bool):
    """Show, switch, rename or delete a room or zone.

    \b
    Examples:
      huey group 1
      huey group 1 --off
      huey group 3 --name "Upstairs"
      huey group 7 --delete
    """
    target = switch_target(turn_on, turn_off, toggle)
    if delete and (target is not None or name is not None):
        raise ValidationError("--delete cannot be combined with other options")
    if name is not None:
        name = clean_name(name)

    client = get_client()

    if delete:
        group = client.get_group(group_id)
        client.delete_group(group_id)
        click.echo(f"✓ Deleted group \"{group.name}\"")
        return

    if name is not None:
        client.rename_group(group_id, name)
        click.echo(f"✓ Group {group_id} renamed to \"{name}\"")

    if target is not None:
        if target == 'toggle':
            on = not client.get_group(group_id).any_on
        else:
            on = target == 'on'
        client.set_group_state(group_id, GroupAction(on=on))
        click.echo(f"✓ Group {group_id} turned {on_off(on)}")

    if target is None and name is None:
        group = client.get_group(group_id)
        click.echo(f"ID:     {group.id}")
        click.echo(f"Name:   {group.name}")
        click.echo(f"Type:   {group.type}")
        click.echo(f"State:  {group_status(group)}")
        click.echo(f"Lights: {', '.join(group.light_ids) or '(none)'}")


@click.command(name='group-create')
@click.option('--name', required=True, help='Name of the new group')
@click.option('--type', 'group_type', default='zone', show_default=True,
              help='room (a light can be in one room) or zone (any number of zones)')
@click.option('--lights', default='', help='Comma-separated light IDs, e.g. 1,2,3')
@reports_errors
def group_create_command(name: str, group_type: str, lights: str):
    """Create a room or zone.

    \b
    Examples:
      huey group-create --name Office --lights 3,4
      huey group-create --name Kitchen --type room --lights 5
    """
    name = clean_name(name)
    bridge_type = normalise_group_type(group_type)
    light_ids = parse_light_ids(lights)

    client = get_client()
    group_id = client.create_group(name, bridge_type, light_ids)
    click.echo(f"✓ Created {bridge_type.lower()} \"{name}\" with ID {group_id}")
