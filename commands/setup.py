"""
Setup and help commands for huey.

Contains the custom Click group class for coloured help output and typo
suggestions, the quick-reference help, and bridge configuration commands.
"""

from dataclasses import dataclass

import click

from commands.helpers import reports_errors
from core.auth import ensure_authenticated
from core.client import BridgeClient
from core.config import config_path, load_config
from models.utils import find_similar_strings


@dataclass(frozen=True)
class CommandSection:
    """Represents a section in the help command."""
    name: str
    commands: list[tuple[str, str]]


COMMAND_SECTIONS = [
    CommandSection(
        name="INTERACTIVE",
        commands=[
            ("huey", "Open the terminal UI (lights, groups, scenes)"),
        ]
    ),
    CommandSection(
        name="LIGHTS",
        commands=[
            ("lights", "List all lights"),
            ("light <id>", "Show one light"),
            ("light <id> --on/--off/--toggle", "Switch a light"),
            ("light <id> --name <name>", "Rename a light"),
        ]
    ),
    CommandSection(
        name="GROUPS",
        commands=[
            ("groups", "List all rooms and zones"),
            ("group <id>", "Show one group"),
            ("group <id> --on/--off/--toggle", "Switch every light in a group"),
            ("group <id> --name <name>", "Rename a group"),
            ("group <id> --delete", "Delete a group"),
            ("group-create --name N --type zone --lights 1,2", "Create a room or zone"),
        ]
    ),
    CommandSection(
        name="SCENES",
        commands=[
            ("scenes", "List all scenes"),
            ("scene <id>", "Activate a scene"),
            ("scene <id> --delete", "Delete a scene"),
            ("scene-create --name N --group <id>", "Save a group's current state as a scene"),
        ]
    ),
    CommandSection(
        name="SETUP",
        commands=[
            ("configure", "Set bridge address and register with the link button"),
            ("setup", "Show configuration and test the connection"),
        ]
    ),
]


class ColouredGroup(click.Group):
    """Custom Group class that adds colour to help output and suggests similar commands."""

    def resolve_command(self, ctx, args):
        """Resolve command with suggestions for typos."""
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            if 'No such command' in str(e):
                cmd_name = args[0] if args else ''
                suggestions = self._get_suggestions(ctx, cmd_name)

                if suggestions:
                    error_msg = f"No such command '{cmd_name}'.\n\n"
                    error_msg += click.style("Did you mean one of these?\n", fg='yellow')
                    for suggestion in suggestions:
                        error_msg += click.style(f"  • {suggestion}\n", fg='green')
                    raise click.UsageError(error_msg, ctx) from e
            raise

    def _get_suggestions(self, ctx, cmd_name, max_suggestions=3):
        """Get command suggestions based on similarity."""
        if not cmd_name:
            return []

        visible = []
        for command in self.list_commands(ctx):
            cmd_obj = self.get_command(ctx, command)
            if cmd_obj and not cmd_obj.hidden:
                visible.append(command)

        return find_similar_strings(cmd_name, visible, limit=max_suggestions)

    def format_usage(self, ctx, formatter):
        """Format the usage line with colour."""
        formatter.write_paragraph()
        formatter.write_text(
            click.style('Usage: ', fg='cyan', bold=True) +
            click.style(f'{ctx.command_path} [OPTIONS] [COMMAND] [ARGS]...', fg='white')
        )

    def format_commands(self, ctx, formatter):
        """Format commands with colour."""
        commands = []
        for subcommand in self.list_commands(ctx):
            cmd = self.get_command(ctx, subcommand)
            if cmd is None or cmd.hidden:
                continue
            commands.append((subcommand, cmd.get_short_help_str(limit=500)))

        if commands:
            formatter.write_paragraph()
            formatter.write_text(click.style('Commands:', fg='yellow', bold=True))

            max_len = max(max(len(cmd[0]) for cmd in commands), 14)

            with formatter.indentation():
                for subcommand, help_text in commands:
                    formatter.write_text(
                        click.style(subcommand.ljust(max_len), fg='green') + '  ' +
                        click.style(help_text, fg='white', dim=True)
                    )


@click.command(name='help')
def help_command():
    """Display a quick reference of all commands."""
    click.echo()
    click.secho("huey - Quick Reference", fg='cyan', bold=True)
    click.echo()

    for section in COMMAND_SECTIONS:
        click.secho(section.name, fg='yellow', bold=True)
        for cmd, desc in section.commands:
            click.echo("  ", nl=False)
            click.secho(cmd, fg='green', nl=False)
            click.echo(" " * max(1, 48 - len(cmd)) + desc)
        click.echo()

    click.secho("For detailed help on any command:", fg='cyan')
    click.echo(f"  huey {click.style('<command> -h', fg='white', bold=True)}")
    click.echo()


@click.command(name='configure')
@click.option('--reset', is_flag=True, help='Discard the saved credential and register again')
@reports_errors
def configure_command(reset: bool):
    """Set up the bridge address and register with the link button.

    Prompts for the bridge IP if none is saved, then asks you to press the
    bridge's link button and registers huey. Credentials are saved to
    ~/.config/huey/config.json (readable only by you).
    """
    config = load_config()
    if config.is_configured() and not reset:
        click.echo(f"✓ Already configured for bridge {config.bridge_ip}")
        click.echo("Run 'huey configure --reset' to register again.")
        return

    session = ensure_authenticated(reset=reset)
    click.secho(f"✓ Ready to use bridge {session.bridge_address}", fg='green')


@click.command(name='setup')
@reports_errors
def setup_command():
    """Show the current configuration and test the bridge connection."""
    click.echo()
    click.secho("=== huey Configuration ===", fg='cyan', bold=True)
    click.echo()

    config = load_config()
    click.echo(f"  Config file: {config_path()}")
    click.echo(f"  Bridge IP:   {config.bridge_ip or click.style('not set', fg='yellow')}")
    click.echo(f"  Credential:  {click.style('set', fg='green') if config.username else click.style('not set', fg='yellow')}")
    click.echo()

    if not config.is_configured():
        click.secho("⚠ Not configured", fg='yellow', bold=True)
        click.echo("Run this command to set up authentication:")
        click.echo(click.style("  huey configure", fg='green', bold=True))
        return

    click.echo("Testing connection to bridge...")
    lights = BridgeClient(config.to_session()).list_lights()
    click.secho(f"✓ Connected to bridge at {config.bridge_ip} ({len(lights)} lights)", fg='green', bold=True)
