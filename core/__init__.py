"""Core functionality for huey.

This package contains:
- client: BridgeClient for the bridge's local REST API
- errors: Error types raised by the client and configuration layer
- config: Configuration file handling
- auth: First-run bridge registration
- log: Logging helpers
"""
