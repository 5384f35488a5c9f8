"""CLI command modules.

This package contains:
- lights: Light commands (lights, light)
- groups: Room and zone commands (groups, group, group-create)
- scenes: Scene commands (scenes, scene, scene-create)
- setup: Setup and help commands (help, configure, setup)
- helpers: Shared client construction and error reporting
"""
