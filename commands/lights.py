"""
Light commands: list, show, switch and rename individual lights.
"""

import click

from commands.helpers import get_client, on_off, reports_errors, switch_target
from models.types import LightState
from models.utils import clean_name


@click.command(name='lights')
@reports_errors
def lights_command():
    """List all lights."""
    client = get_client()
    for light in client.list_lights():
        click.echo(f"{light.id:<4} {light.name:<24} {on_off(light.on)}")


@click.command(name='light')
@click.argument('light_id')
@click.option('--on', 'turn_on', is_flag=True, help='Turn the light on')
@click.option('--off', 'turn_off', is_flag=True, help='Turn the light off')
@click.option('--toggle', is_flag=True, help='Flip the light\'s current state')
@click.option('--name', help='Rename the light')
@reports_errors
def light_command(light_id: str, turn_on: bool, turn_off: bool, toggle: bool, name: str | None):
    """Show, switch or rename a single light.

    \b
    Examples:
      huey light 1
      huey light 1 --toggle
      huey light 1 --name "Desk Lamp"
    """
    target = switch_target(turn_on, turn_off, toggle)
    if name is not None:
        name = clean_name(name)
    client = get_client()

    if name is not None:
        client.rename_light(light_id, name)
        click.echo(f"✓ Light {light_id} renamed to \"{name}\"")

    if target is not None:
        if target == 'toggle':
            on = not client.get_light(light_id).on
        else:
            on = target == 'on'
        client.set_light_state(light_id, LightState(on=on))
        click.echo(f"✓ Light {light_id} turned {on_off(on)}")

    if target is None and name is None:
        light = client.get_light(light_id)
        click.echo(f"ID:         {light.id}")
        click.echo(f"Name:       {light.name}")
        click.echo(f"Type:       {light.type}")
        click.echo(f"State:      {on_off(light.on)}")
        click.echo(f"Brightness: {light.brightness}")
