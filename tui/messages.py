"""Events delivered to the interactive session.

A KeyPress comes from the terminal; everything else is the completion of an
Operation that ran against the bridge. Each Operation yields exactly one of
these, either its success message or OperationFailed.
"""

from dataclasses import dataclass

from models.types import Group, Light, Scene


@dataclass(frozen=True)
class KeyPress:
    """A normalised key name: 'up', 'enter', 'space', 'shift+tab', 'a', ..."""
    key: str


@dataclass(frozen=True)
class LightsLoaded:
    lights: list[Light]
    seq: int = 0


@dataclass(frozen=True)
class GroupsLoaded:
    groups: list[Group]
    seq: int = 0


@dataclass(frozen=True)
class ScenesLoaded:
    scenes: list[Scene]
    seq: int = 0


@dataclass(frozen=True)
class LightToggled:
    light_id: str
    on: bool


@dataclass(frozen=True)
class GroupToggled:
    group_id: str
    on: bool


@dataclass(frozen=True)
class LightRenamed:
    light_id: str
    name: str


@dataclass(frozen=True)
class GroupRenamed:
    group_id: str
    name: str


@dataclass(frozen=True)
class GroupCreated:
    group: Group


@dataclass(frozen=True)
class GroupDeleted:
    group_id: str


@dataclass(frozen=True)
class SceneActivated:
    scene_id: str
    name: str


@dataclass(frozen=True)
class SceneCreated:
    scene: Scene


@dataclass(frozen=True)
class SceneDeleted:
    scene_id: str


@dataclass(frozen=True)
class OperationFailed:
    error: Exception
