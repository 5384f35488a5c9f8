"""InteractiveSession: the state machine behind the terminal UI.

The session holds the last-known snapshot of lights, groups and scenes, one
cursor per collection, the active tab and the current interaction mode. It
is driven one event at a time through update(), which mutates the snapshot
and returns the operations the host should start next. It never talks to
the bridge and never blocks.

Optimistic updates are always two-phase: the local patch is applied inside
update(), and the load that reconciles bridge-computed state (group any_on /
all_on, lights changed by a scene) is returned from the same call. The load
is never skipped.

Loads are stamped with a per-collection sequence number. A load result older
than the newest data already applied to that collection (including a local
patch) is dropped, so a slow response cannot roll back a later one.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Generic, TypeVar

from core.errors import ValidationError
from models.types import Group, Light, Scene
from models.utils import MAX_NAME_LENGTH
from tui import keys
from tui.messages import (
    GroupCreated,
    GroupDeleted,
    GroupRenamed,
    GroupsLoaded,
    GroupToggled,
    KeyPress,
    LightRenamed,
    LightsLoaded,
    LightToggled,
    OperationFailed,
    SceneActivated,
    SceneCreated,
    SceneDeleted,
    ScenesLoaded,
)
from tui.operations import (
    ActivateScene,
    CreateGroup,
    CreateScene,
    DeleteGroup,
    DeleteScene,
    LoadGroups,
    LoadLights,
    LoadScenes,
    Operation,
    RenameGroup,
    RenameLight,
    SetGroupOn,
    SetLightOn,
)


T = TypeVar('T', Light, Group, Scene)


class Tab(Enum):
    LIGHTS = 'Lights'
    GROUPS = 'Groups'
    SCENES = 'Scenes'


TAB_ORDER = [Tab.LIGHTS, Tab.GROUPS, Tab.SCENES]


# Interaction modes. Each carries only the fields it needs.

@dataclass(frozen=True)
class Normal:
    pass


@dataclass(frozen=True)
class Rename:
    target_id: str
    tab: Tab
    text: str = ''


@dataclass(frozen=True)
class GroupInfo:
    group_id: str


@dataclass(frozen=True)
class DeleteConfirm:
    group_id: str
    name: str


@dataclass(frozen=True)
class DeleteSceneConfirm:
    scene_id: str
    name: str


@dataclass(frozen=True)
class CreateGroupType:
    pass


@dataclass(frozen=True)
class CreateGroupName:
    group_type: str
    text: str = ''


@dataclass(frozen=True)
class CreateGroupLights:
    group_type: str
    name: str
    cursor: int = 0
    selected: frozenset[str] = frozenset()


@dataclass(frozen=True)
class CreateSceneGroup:
    cursor: int = 0


@dataclass(frozen=True)
class CreateSceneName:
    group_id: str
    text: str = ''


@dataclass(frozen=True)
class Quit:
    pass


Mode = (Normal | Rename | GroupInfo | DeleteConfirm | DeleteSceneConfirm | CreateGroupType
        | CreateGroupName | CreateGroupLights | CreateSceneGroup | CreateSceneName | Quit)

TEXT_MODES = (Rename, CreateGroupName, CreateSceneName)


def clamp(index: int, length: int) -> int:
    """Clamp index into [0, length - 1], or 0 for an empty collection."""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


@dataclass
class Collection(Generic[T]):
    """One independently loaded collection with its cursor.

    loaded distinguishes "not fetched yet" from "fetched and empty".
    """
    items: list[T] = field(default_factory=list)
    loaded: bool = False
    cursor: int = 0
    requested: int = 0
    applied: int = 0

    def selected(self) -> T | None:
        if not self.items:
            return None
        return self.items[self.cursor]

    def index_of(self, item_id: str) -> int | None:
        for i, item in enumerate(self.items):
            if item.id == item_id:
                return i
        return None

    def find(self, item_id: str) -> T | None:
        index = self.index_of(item_id)
        return self.items[index] if index is not None else None

    def move(self, delta: int):
        self.cursor = clamp(self.cursor + delta, len(self.items))

    def next_seq(self) -> int:
        self.requested += 1
        return self.requested

    def accept(self, seq: int) -> bool:
        """Record a load result; False if it is older than what is shown."""
        if seq < self.applied:
            return False
        self.applied = seq
        return True

    def touch(self):
        """Mark a local patch as newer than every load still in flight."""
        self.applied = self.requested + 1

    def replace_items(self, items: list[T]):
        self.items = list(items)
        self.loaded = True
        self.cursor = clamp(self.cursor, len(self.items))

    def append(self, item: T):
        self.items.append(item)
        self.cursor = len(self.items) - 1

    def remove(self, item_id: str) -> bool:
        index = self.index_of(item_id)
        if index is None:
            return False
        del self.items[index]
        self.cursor = clamp(self.cursor, len(self.items))
        return True


class InteractiveSession:
    """Single-threaded state machine for the lights/groups/scenes browser."""

    def __init__(self):
        self.lights: Collection[Light] = Collection()
        self.groups: Collection[Group] = Collection()
        self.scenes: Collection[Scene] = Collection()
        self.tab = Tab.LIGHTS
        self.mode: Mode = Normal()
        self.last_error: Exception | None = None
        self.last_status: str | None = None

    @property
    def quitting(self) -> bool:
        return isinstance(self.mode, Quit)

    def collection(self, tab: Tab) -> Collection:
        return {Tab.LIGHTS: self.lights, Tab.GROUPS: self.groups, Tab.SCENES: self.scenes}[tab]

    @property
    def active(self) -> Collection:
        return self.collection(self.tab)

    def load(self, tab: Tab) -> Operation:
        """Return a stamped load operation for one collection."""
        seq = self.collection(tab).next_seq()
        if tab is Tab.LIGHTS:
            return LoadLights(seq)
        if tab is Tab.GROUPS:
            return LoadGroups(seq)
        return LoadScenes(seq)

    def start(self) -> list[Operation]:
        """Operations to run when the session opens: fetch everything."""
        return [self.load(tab) for tab in TAB_ORDER]

    # Dispatch

    def update(self, event) -> list[Operation]:
        """Apply one event and return the operations to start next."""
        if isinstance(event, KeyPress):
            return self._handle_key(event.key)

        if isinstance(event, OperationFailed):
            self.last_error = event.error
            return []

        handler = self._message_handlers.get(type(event))
        if handler is None:
            return []
        self.last_error = None
        return handler(self, event)

    def _fail(self, message: str) -> list[Operation]:
        self.last_error = ValidationError(message)
        return []

    # Completion messages

    def _on_lights_loaded(self, msg: LightsLoaded) -> list[Operation]:
        if self.lights.accept(msg.seq):
            self.lights.replace_items(msg.lights)
            self._clamp_mode_cursors()
        return []

    def _on_groups_loaded(self, msg: GroupsLoaded) -> list[Operation]:
        if self.groups.accept(msg.seq):
            self.groups.replace_items(msg.groups)
            self._clamp_mode_cursors()
        return []

    def _on_scenes_loaded(self, msg: ScenesLoaded) -> list[Operation]:
        if self.scenes.accept(msg.seq):
            self.scenes.replace_items(msg.scenes)
        return []

    def _on_light_toggled(self, msg: LightToggled) -> list[Operation]:
        light = self.lights.find(msg.light_id)
        if light is not None:
            light.on = msg.on
            self.lights.touch()
        # Group aggregates changed on the bridge
        return [self.load(Tab.GROUPS)]

    def _on_group_toggled(self, msg: GroupToggled) -> list[Operation]:
        group = self.groups.find(msg.group_id)
        if group is not None:
            # Provisional until the bridge reports the real aggregates
            group.all_on = msg.on
            group.any_on = msg.on
            self.groups.touch()
        return [self.load(Tab.LIGHTS)]

    def _on_light_renamed(self, msg: LightRenamed) -> list[Operation]:
        light = self.lights.find(msg.light_id)
        if light is not None:
            light.name = msg.name
            self.lights.touch()
        self.last_status = f'Renamed light to "{msg.name}"'
        return []

    def _on_group_renamed(self, msg: GroupRenamed) -> list[Operation]:
        group = self.groups.find(msg.group_id)
        if group is not None:
            group.name = msg.name
            self.groups.touch()
        self.last_status = f'Renamed group to "{msg.name}"'
        return []

    def _on_group_created(self, msg: GroupCreated) -> list[Operation]:
        self.groups.append(msg.group)
        self.groups.touch()
        self.last_status = f'Created {msg.group.type.lower()} "{msg.group.name}"'
        return [self.load(Tab.GROUPS)]

    def _on_group_deleted(self, msg: GroupDeleted) -> list[Operation]:
        if self.groups.remove(msg.group_id):
            self.groups.touch()
        self.last_status = 'Group deleted'
        return []

    def _on_scene_activated(self, msg: SceneActivated) -> list[Operation]:
        self.last_status = f'Activated scene "{msg.name}"'
        return [self.load(Tab.LIGHTS), self.load(Tab.GROUPS)]

    def _on_scene_created(self, msg: SceneCreated) -> list[Operation]:
        self.scenes.append(msg.scene)
        self.scenes.touch()
        self.last_status = f'Created scene "{msg.scene.name}"'
        return [self.load(Tab.SCENES)]

    def _on_scene_deleted(self, msg: SceneDeleted) -> list[Operation]:
        if self.scenes.remove(msg.scene_id):
            self.scenes.touch()
        self.last_status = 'Scene deleted'
        return []

    _message_handlers = {
        LightsLoaded: _on_lights_loaded,
        GroupsLoaded: _on_groups_loaded,
        ScenesLoaded: _on_scenes_loaded,
        LightToggled: _on_light_toggled,
        GroupToggled: _on_group_toggled,
        LightRenamed: _on_light_renamed,
        GroupRenamed: _on_group_renamed,
        GroupCreated: _on_group_created,
        GroupDeleted: _on_group_deleted,
        SceneActivated: _on_scene_activated,
        SceneCreated: _on_scene_created,
        SceneDeleted: _on_scene_deleted,
    }

    def _clamp_mode_cursors(self):
        """Keep wizard cursors inside collections that were just reloaded."""
        mode = self.mode
        if isinstance(mode, CreateGroupLights):
            self.mode = replace(mode, cursor=clamp(mode.cursor, len(self.lights.items)))
        elif isinstance(mode, CreateSceneGroup):
            self.mode = replace(mode, cursor=clamp(mode.cursor, len(self.groups.items)))

    # Keys

    def _handle_key(self, key: str) -> list[Operation]:
        mode = self.mode
        if isinstance(mode, Quit):
            return []
        if isinstance(mode, Normal):
            return self._key_normal(key)
        if isinstance(mode, TEXT_MODES):
            return self._key_text(mode, key)
        if isinstance(mode, GroupInfo):
            if keys.BACK.matches(key):
                self.mode = Normal()
            return []
        if isinstance(mode, (DeleteConfirm, DeleteSceneConfirm)):
            return self._key_delete_confirm(mode, key)
        if isinstance(mode, CreateGroupType):
            return self._key_create_group_type(key)
        if isinstance(mode, CreateGroupLights):
            return self._key_create_group_lights(mode, key)
        if isinstance(mode, CreateSceneGroup):
            return self._key_create_scene_group(mode, key)
        return []

    def _key_normal(self, key: str) -> list[Operation]:
        if keys.QUIT.matches(key):
            self.mode = Quit()
            return []

        if keys.TAB_NEXT.matches(key) or keys.TAB_PREV.matches(key):
            step = 1 if keys.TAB_NEXT.matches(key) else -1
            index = TAB_ORDER.index(self.tab)
            self.tab = TAB_ORDER[(index + step) % len(TAB_ORDER)]
            return [self.load(self.tab)]

        if keys.REFRESH.matches(key):
            return self.start()

        if keys.UP.matches(key):
            self.active.move(-1)
            return []
        if keys.DOWN.matches(key):
            self.active.move(1)
            return []

        if keys.ADD.matches(key):
            if self.tab is Tab.GROUPS:
                self.mode = CreateGroupType()
            elif self.tab is Tab.SCENES:
                self.mode = CreateSceneGroup(cursor=0)
            return []

        selected = self.active.selected()
        if selected is None:
            return []

        if keys.TOGGLE.matches(key):
            return self._toggle(selected)

        if keys.RENAME.matches(key) and self.tab in (Tab.LIGHTS, Tab.GROUPS):
            self.mode = Rename(target_id=selected.id, tab=self.tab, text=selected.name[:MAX_NAME_LENGTH])
            return []

        if keys.DELETE.matches(key):
            if self.tab is Tab.GROUPS:
                self.mode = DeleteConfirm(group_id=selected.id, name=selected.name)
            elif self.tab is Tab.SCENES:
                self.mode = DeleteSceneConfirm(scene_id=selected.id, name=selected.name)
            return []

        if keys.INFO.matches(key) and self.tab is Tab.GROUPS:
            self.mode = GroupInfo(group_id=selected.id)
            return []

        return []

    def _toggle(self, selected) -> list[Operation]:
        if self.tab is Tab.LIGHTS:
            return [SetLightOn(selected.id, not selected.on)]
        if self.tab is Tab.GROUPS:
            # Any light on turns the whole group off, otherwise all on
            return [SetGroupOn(selected.id, not selected.any_on)]
        return [ActivateScene(selected.id, selected.name)]

    def _key_text(self, mode, key: str) -> list[Operation]:
        if keys.CANCEL.matches(key):
            self.mode = Normal()
            return []

        if keys.CONFIRM.matches(key):
            return self._submit_text(mode)

        if keys.BACKSPACE.matches(key):
            self.mode = replace(mode, text=mode.text[:-1])
            return []

        char = keys.text_character(key)
        if char is not None and len(mode.text) < MAX_NAME_LENGTH:
            self.mode = replace(mode, text=mode.text + char)
        return []

    def _submit_text(self, mode) -> list[Operation]:
        name = mode.text.strip()
        if not name:
            return self._fail('name cannot be empty')

        if isinstance(mode, Rename):
            self.mode = Normal()
            if mode.tab is Tab.LIGHTS:
                return [RenameLight(mode.target_id, name)]
            return [RenameGroup(mode.target_id, name)]

        if isinstance(mode, CreateGroupName):
            self.mode = CreateGroupLights(group_type=mode.group_type, name=name)
            return []

        self.mode = Normal()
        return [CreateScene(name, mode.group_id)]

    def _key_delete_confirm(self, mode, key: str) -> list[Operation]:
        if keys.YES.matches(key):
            self.mode = Normal()
            if isinstance(mode, DeleteConfirm):
                return [DeleteGroup(mode.group_id)]
            return [DeleteScene(mode.scene_id)]
        if keys.NO.matches(key):
            self.mode = Normal()
        return []

    def _key_create_group_type(self, key: str) -> list[Operation]:
        if keys.ROOM.matches(key):
            self.mode = CreateGroupName(group_type='Room')
        elif keys.ZONE.matches(key):
            self.mode = CreateGroupName(group_type='Zone')
        else:
            self.mode = Normal()
        return []

    def _key_create_group_lights(self, mode: CreateGroupLights, key: str) -> list[Operation]:
        lights = self.lights.items

        if keys.CANCEL.matches(key):
            self.mode = Normal()
        elif keys.UP.matches(key):
            self.mode = replace(mode, cursor=clamp(mode.cursor - 1, len(lights)))
        elif keys.DOWN.matches(key):
            self.mode = replace(mode, cursor=clamp(mode.cursor + 1, len(lights)))
        elif keys.SELECT.matches(key) and lights:
            light_id = lights[mode.cursor].id
            self.mode = replace(mode, selected=mode.selected ^ {light_id})
        elif keys.CONFIRM.matches(key):
            self.mode = Normal()
            light_ids = tuple(light.id for light in lights if light.id in mode.selected)
            return [CreateGroup(mode.name, mode.group_type, light_ids)]
        return []

    def _key_create_scene_group(self, mode: CreateSceneGroup, key: str) -> list[Operation]:
        groups = self.groups.items

        if keys.CANCEL.matches(key):
            self.mode = Normal()
        elif keys.UP.matches(key):
            self.mode = replace(mode, cursor=clamp(mode.cursor - 1, len(groups)))
        elif keys.DOWN.matches(key):
            self.mode = replace(mode, cursor=clamp(mode.cursor + 1, len(groups)))
        elif keys.CONFIRM.matches(key):
            if not groups:
                return self._fail('no group to capture a scene from')
            self.mode = CreateSceneName(group_id=groups[mode.cursor].id)
        return []
