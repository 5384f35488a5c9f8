#!/usr/bin/env python3
"""
huey - Philips Hue bridge CLI and terminal UI
List, switch, rename, group and scene-activate lights over the bridge's local API.
"""

import click

import tui
from core.auth import ensure_authenticated
from core.client import BridgeClient
from core.config import log_path
from core.log import enable_debug_logging

from commands.helpers import reports_errors
from commands.setup import ColouredGroup, help_command, setup_command, configure_command
from commands.lights import lights_command, light_command
from commands.groups import groups_command, group_command, group_create_command
from commands.scenes import scenes_command, scene_command, scene_create_command

__version__ = '0.1.0'


@click.group(
    cls=ColouredGroup,
    invoke_without_command=True,
    context_settings={
        'help_option_names': ['-h', '--help'],
        'max_content_width': 999  # Very wide to prevent wrapping on wide terminals
    }
)
@click.option('--debug', is_flag=True, help='Log bridge requests (to ~/.config/huey/huey.log for the UI)')
@click.version_option(version=__version__, prog_name='huey')
@click.pass_context
@reports_errors
def cli(ctx, debug: bool):
    """huey - Control your Philips Hue lights from the terminal.

Run with no command to open the interactive UI.

Authentication: ~/.config/huey/config.json -> Interactive setup (press the link button)
Run 'configure' for first-time setup or 'setup' to check configuration.

Use 'help' for a quick reference of all commands.
Use 'COMMAND -h' or 'COMMAND --help' for detailed help on a specific command."""
    interactive = ctx.invoked_subcommand is None

    if debug:
        # The UI owns the terminal, so its log goes to a file
        enable_debug_logging(log_path() if interactive else None)

    if interactive:
        session = ensure_authenticated()
        tui.run(BridgeClient(session))


# Register setup and help commands
cli.add_command(help_command)
cli.add_command(setup_command, name='setup')
cli.add_command(configure_command, name='configure')

# Register light commands
cli.add_command(lights_command, name='lights')
cli.add_command(light_command, name='light')

# Register group commands
cli.add_command(groups_command, name='groups')
cli.add_command(group_command, name='group')
cli.add_command(group_create_command, name='group-create')

# Register scene commands
cli.add_command(scenes_command, name='scenes')
cli.add_command(scene_command, name='scene')
cli.add_command(scene_create_command, name='scene-create')


if __name__ == '__main__':
    cli()
