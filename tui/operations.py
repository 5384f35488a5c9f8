"""Pending bridge operations requested by the interactive session.

The session never calls the bridge itself. It returns these descriptors from
update(); the host runs each one off the UI thread with run_operation() and
feeds the resulting message back into the session.
"""

from dataclasses import dataclass

from core.client import BridgeClient
from core.errors import HueyError
from models.types import Group, GroupAction, LightState, Scene
from tui.messages import (
    GroupCreated,
    GroupDeleted,
    GroupRenamed,
    GroupsLoaded,
    GroupToggled,
    LightRenamed,
    LightsLoaded,
    LightToggled,
    OperationFailed,
    SceneActivated,
    SceneCreated,
    SceneDeleted,
    ScenesLoaded,
)


@dataclass(frozen=True)
class LoadLights:
    seq: int

    def run(self, client: BridgeClient):
        return LightsLoaded(client.list_lights(), self.seq)


@dataclass(frozen=True)
class LoadGroups:
    seq: int

    def run(self, client: BridgeClient):
        return GroupsLoaded(client.list_groups(), self.seq)


@dataclass(frozen=True)
class LoadScenes:
    seq: int

    def run(self, client: BridgeClient):
        return ScenesLoaded(client.list_scenes(), self.seq)


@dataclass(frozen=True)
class SetLightOn:
    light_id: str
    on: bool

    def run(self, client: BridgeClient):
        client.set_light_state(self.light_id, LightState(on=self.on))
        return LightToggled(self.light_id, self.on)


@dataclass(frozen=True)
class SetGroupOn:
    group_id: str
    on: bool

    def run(self, client: BridgeClient):
        client.set_group_state(self.group_id, GroupAction(on=self.on))
        return GroupToggled(self.group_id, self.on)


@dataclass(frozen=True)
class RenameLight:
    light_id: str
    name: str

    def run(self, client: BridgeClient):
        client.rename_light(self.light_id, self.name)
        return LightRenamed(self.light_id, self.name)


@dataclass(frozen=True)
class RenameGroup:
    group_id: str
    name: str

    def run(self, client: BridgeClient):
        client.rename_group(self.group_id, self.name)
        return GroupRenamed(self.group_id, self.name)


@dataclass(frozen=True)
class CreateGroup:
    name: str
    group_type: str
    light_ids: tuple[str, ...]

    def run(self, client: BridgeClient):
        group_id = client.create_group(self.name, self.group_type, list(self.light_ids))
        # The bridge computes all_on/any_on; False/False holds until the next load
        return GroupCreated(Group(
            id=group_id,
            name=self.name,
            type=self.group_type,
            light_ids=list(self.light_ids),
            all_on=False,
            any_on=False,
        ))


@dataclass(frozen=True)
class DeleteGroup:
    group_id: str

    def run(self, client: BridgeClient):
        client.delete_group(self.group_id)
        return GroupDeleted(self.group_id)


@dataclass(frozen=True)
class ActivateScene:
    scene_id: str
    name: str

    def run(self, client: BridgeClient):
        client.activate_scene(self.scene_id)
        return SceneActivated(self.scene_id, self.name)


@dataclass(frozen=True)
class CreateScene:
    name: str
    group_id: str

    def run(self, client: BridgeClient):
        scene_id = client.create_scene(self.name, self.group_id)
        return SceneCreated(Scene(id=scene_id, name=self.name, group_id=self.group_id, type='GroupScene'))


@dataclass(frozen=True)
class DeleteScene:
    scene_id: str

    def run(self, client: BridgeClient):
        client.delete_scene(self.scene_id)
        return SceneDeleted(self.scene_id)


Operation = (LoadLights | LoadGroups | LoadScenes | SetLightOn | SetGroupOn | RenameLight
             | RenameGroup | CreateGroup | DeleteGroup | ActivateScene | CreateScene | DeleteScene)


def run_operation(operation: Operation, client: BridgeClient):
    """Run one operation and return exactly one completion message.

    Bridge, transport and protocol errors become OperationFailed so they can
    be shown in the UI; anything else is a bug and propagates.
    """
    try:
        return operation.run(client)
    except HueyError as e:
        return OperationFailed(e)
