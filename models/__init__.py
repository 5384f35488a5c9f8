"""Data models and utility functions.

This package contains:
- types: Light, Group, Scene, Session and state-change values
- utils: Utility functions (id sorting, group status, name lookups, etc.)
"""
