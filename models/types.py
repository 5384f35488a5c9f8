"""Type definitions for huey.

This module provides the value types shared by the bridge client, the
interactive session and the CLI commands. Bridge wire objects are decoded
into these once, in core.client, so nothing else touches raw JSON.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Session:
    """Bridge address and credential for an authenticated client."""
    bridge_address: str
    credential: str


@dataclass
class Light:
    """A light as reported by the bridge."""
    id: str
    name: str
    on: bool = False
    brightness: int = 0
    hue: int = 0
    saturation: int = 0
    type: str = ''

    @classmethod
    def from_wire(cls, light_id: str, data: dict) -> 'Light':
        """Build a Light from a bridge light object."""
        state = data.get('state') or {}
        return cls(
            id=light_id,
            name=data.get('name', ''),
            on=bool(state.get('on', False)),
            brightness=state.get('bri', 0) or 0,
            hue=state.get('hue', 0) or 0,
            saturation=state.get('sat', 0) or 0,
            type=data.get('type', ''),
        )


@dataclass
class Group:
    """A room, zone or other group of lights.

    all_on/any_on are computed by the bridge from the member lights.
    """
    id: str
    name: str
    type: str = ''
    light_ids: list[str] = field(default_factory=list)
    all_on: bool = False
    any_on: bool = False

    @classmethod
    def from_wire(cls, group_id: str, data: dict) -> 'Group':
        """Build a Group from a bridge group object."""
        state = data.get('state') or {}
        return cls(
            id=group_id,
            name=data.get('name', ''),
            type=data.get('type', ''),
            light_ids=list(data.get('lights') or []),
            all_on=bool(state.get('all_on', False)),
            any_on=bool(state.get('any_on', False)),
        )


@dataclass
class Scene:
    """A stored scene. group_id may be empty or refer to a deleted group."""
    id: str
    name: str
    group_id: str = ''
    type: str = ''

    @classmethod
    def from_wire(cls, scene_id: str, data: dict) -> 'Scene':
        """Build a Scene from a bridge scene object."""
        return cls(
            id=scene_id,
            name=data.get('name', ''),
            group_id=data.get('group') or '',
            type=data.get('type', ''),
        )


@dataclass(frozen=True)
class LightState:
    """Partial light state. Fields left as None are not sent."""
    on: bool | None = None
    brightness: int | None = None
    hue: int | None = None
    saturation: int | None = None

    def to_wire(self) -> dict:
        """Serialise to a bridge state body, omitting unset fields."""
        wire = {'on': self.on, 'bri': self.brightness, 'hue': self.hue, 'sat': self.saturation}
        return {key: value for key, value in wire.items() if value is not None}


@dataclass(frozen=True)
class GroupAction:
    """Partial group action. Fields left as None are not sent."""
    on: bool | None = None

    def to_wire(self) -> dict:
        """Serialise to a bridge action body, omitting unset fields."""
        return {'on': self.on} if self.on is not None else {}
