"""Utility functions for huey.

This module contains helper functions used across the application:
- numeric_id / sort_by_numeric_id: Natural ordering for bridge-assigned ids
- group_status: Human-readable aggregate state of a group
- create_name_lookup: Build ID-to-name mappings for resources
- parse_light_ids: Parse a comma-separated list of light ids
- clean_name: Validate a name before it is sent to the bridge
- similarity_score: Canonical fuzzy string matching algorithm
- find_similar_strings: Find similar strings using fuzzy matching
"""

from typing import TypeVar

from core.errors import ValidationError
from models.types import Group

T = TypeVar('T')

# The bridge rejects longer names
MAX_NAME_LENGTH = 32


def numeric_id(resource_id: str) -> int:
    """Interpret a bridge id as a number for ordering.

    Ids that are not numbers sort as 0, i.e. before every real light or group.
    """
    try:
        return int(resource_id)
    except (TypeError, ValueError):
        return 0


def sort_by_numeric_id(resources: list[T]) -> list[T]:
    """Sort resources with an ``id`` attribute by numeric id ascending.

    "10" comes after "2", unlike a plain string sort. The sort is stable, so
    items whose ids compare equal keep the order they arrived in.
    """
    return sorted(resources, key=lambda r: numeric_id(r.id))


def group_status(group: Group) -> str:
    """Describe a group's aggregate state: 'all on', 'some on' or 'all off'."""
    if group.all_on:
        return 'all on'
    if group.any_on:
        return 'some on'
    return 'all off'


def create_name_lookup(resources: list) -> dict[str, str]:
    """Create a lookup dict mapping resource IDs to names.

    Args:
        resources: Lights, groups or scenes

    Returns:
        Dict mapping resource ID to name
    """
    return {r.id: r.name for r in resources}


def parse_light_ids(value: str) -> list[str]:
    """Split '1, 2,3' into ['1', '2', '3'], dropping empty entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(',') if part.strip()]


def clean_name(name: str) -> str:
    """Strip a user-supplied name and check it before it is sent to the bridge.

    Raises:
        ValidationError: The name is empty or longer than MAX_NAME_LENGTH
    """
    name = name.strip()
    if not name:
        raise ValidationError("name cannot be empty")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"name cannot be longer than {MAX_NAME_LENGTH} characters")
    return name


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    This is the canonical implementation used throughout the application
    for fuzzy matching (command typo suggestions).

    Args:
        s1: First string to compare
        s2: Second string to compare

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    if s1_lower == s2_lower:
        return 100

    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0


def find_similar_strings(target: str, candidates: list[str], limit: int = 5) -> list[str]:
    """Find similar strings using simple similarity scoring.

    Args:
        target: The string to match against
        candidates: List of candidate strings to search
        limit: Maximum number of results to return

    Returns:
        List of similar strings, sorted by similarity score (most similar first)
    """
    scored = [(candidate, similarity_score(target, candidate)) for candidate in candidates]

    filtered = [(c, s) for c, s in scored if s > 0]
    sorted_matches = sorted(filtered, key=lambda x: x[1], reverse=True)

    return [c for c, s in sorted_matches[:limit]]
