"""Error types raised by huey.

Every failure the core can report is one of these. The CLI turns them into
an "Error: ..." line and exit code 1; the interactive session stores them as
its last error and keeps running.
"""


class HueyError(Exception):
    """Base class for all huey errors."""


class TransportError(HueyError):
    """The bridge could not be reached (connection refused, DNS, timeout)."""


class ProtocolError(HueyError):
    """The bridge answered with something that is not the expected JSON shape."""


class BridgeError(HueyError):
    """The bridge rejected the request and said why."""

    def __init__(self, description: str):
        super().__init__(f"bridge error: {description}")
        self.description = description


class RegistrationError(BridgeError):
    """Registration was refused, typically because the link button was not pressed."""

    def __init__(self, description: str):
        super().__init__(description)
        self.args = (f"registration failed: {description}",)


class ValidationError(HueyError):
    """Invalid input caught before any request was made."""


class ConfigError(HueyError):
    """The config file exists but cannot be read."""
