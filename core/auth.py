"""
Authentication module for the Hue bridge.

Produces a ready Session for the CLI and the terminal UI: loads the saved
bridge address and credential, prompting for the address and running
link-button registration when either is missing, then persists the result.
"""

import socket

import click

from core.client import BridgeClient
from core.config import Config, load_config, save_config, with_env_overrides
from core.errors import RegistrationError, ValidationError
from core.log import get_logger
from models.types import Session

APP_NAME = 'huey'
LINK_BUTTON_NOT_PRESSED = 'link button not pressed'
MAX_REGISTRATION_ATTEMPTS = 3

logger = get_logger(__name__)


def device_label() -> str:
    """Return the devicetype to register as, "huey#<hostname>"."""
    try:
        hostname = socket.gethostname()
    except OSError:
        hostname = ''
    return f"{APP_NAME}#{hostname or 'cli'}"


def prompt_bridge_ip() -> str:
    """Ask the user for the bridge IP address.

    Raises:
        ValidationError: Nothing was entered
    """
    click.echo("No Hue bridge configured.")
    click.echo("Find your bridge IP at: https://discovery.meethue.com/")
    click.echo()

    bridge_ip = click.prompt("Enter bridge IP address", default='', show_default=False).strip()
    if not bridge_ip:
        raise ValidationError("bridge IP cannot be empty")
    return bridge_ip


def register_with_bridge(bridge_ip: str, max_attempts: int = MAX_REGISTRATION_ATTEMPTS) -> str:
    """Create a new credential via link button authentication.

    Requires the user to press the physical link button on the bridge.
    Retries up to max_attempts times if the button was not pressed; any
    other error is raised straight away.

    Args:
        bridge_ip: Bridge IP address
        max_attempts: How many times to offer the link button prompt

    Returns:
        The new credential

    Raises:
        RegistrationError: The bridge refused every attempt
        TransportError: The bridge could not be reached
    """
    client = BridgeClient(Session(bridge_address=bridge_ip, credential=''))
    label = device_label()

    for attempt in range(1, max_attempts + 1):
        click.echo()
        click.secho("To authorise huey, press the link button on your Hue bridge.", fg='yellow', bold=True)
        click.pause("Press Enter when ready...")
        click.echo(f"Registering with bridge... (attempt {attempt}/{max_attempts})")

        try:
            credential = client.register(label)
        except RegistrationError as e:
            if e.description == LINK_BUTTON_NOT_PRESSED and attempt < max_attempts:
                click.secho(f"✗ {e.description}. Please try again.", fg='red')
                continue
            raise

        click.secho("✓ Registered successfully", fg='green')
        logger.debug("Registered %s on %s", label, bridge_ip)
        return credential

    raise RegistrationError(LINK_BUTTON_NOT_PRESSED)


def ensure_authenticated(reset: bool = False) -> Session:
    """Return a Session, running first-time setup if needed.

    Values from HUEY_BRIDGE_IP / HUEY_USERNAME are used for the session but
    never written to the config file; only what the file already held and
    what was prompted for or registered is saved.

    Args:
        reset: Discard the saved credential and register again

    Returns:
        Session for the configured bridge
    """
    stored = load_config(use_env=False)
    config = with_env_overrides(stored)
    if reset:
        stored.username = ''
        config = Config(bridge_ip=config.bridge_ip)

    if config.is_configured():
        return config.to_session()

    if not config.bridge_ip:
        config.bridge_ip = stored.bridge_ip = prompt_bridge_ip()

    if not config.username:
        config.username = stored.username = register_with_bridge(config.bridge_ip)

    path = save_config(stored)
    click.secho(f"✓ Configuration saved to {path}", fg='green')
    return config.to_session()
