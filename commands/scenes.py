"""
Scene commands: list, activate, create and delete scenes.
"""

import click

from commands.helpers import get_client, reports_errors
from models.utils import clean_name, create_name_lookup


@click.command(name='scenes')
@reports_errors
def scenes_command():
    """List all scenes with the group they belong to."""
    client = get_client()
    scenes = client.list_scenes()
    group_names = create_name_lookup(client.list_groups())

    for scene in scenes:
        group_name = group_names.get(scene.group_id, '(no group)')
        click.echo(f"{scene.id:<18} {scene.name:<24} [{group_name}]")


@click.command(name='scene')
@click.argument('scene_id')
@click.option('--delete', is_flag=True, help='Delete the scene instead of activating it')
@reports_errors
def scene_command(scene_id: str, delete: bool):
    """Activate (or delete) a scene by its ID.

    \b
    Examples:
      huey scene abc123
      huey scene abc123 --delete
    """
    client = get_client()
    scene = client.get_scene(scene_id)

    if delete:
        client.delete_scene(scene_id)
        click.echo(f"✓ Deleted scene \"{scene.name}\"")
    else:
        client.activate_scene(scene_id)
        click.echo(f"✓ Activated scene \"{scene.name}\"")


@click.command(name='scene-create')
@click.option('--name', required=True, help='Name of the new scene')
@click.option('--group', 'group_id', required=True, help='ID of the group whose current state is captured')
@reports_errors
def scene_create_command(name: str, group_id: str):
    """Save a group's current light states as a new scene.

    \b
    Example:
      huey scene-create --name "Movie Night" --group 1
    """
    name = clean_name(name)

    client = get_client()
    scene_id = client.create_scene(name, group_id)
    click.echo(f"✓ Created scene \"{name}\" with ID {scene_id}")
