"""BridgeClient for the Hue bridge's local REST API.

This module contains the client that handles all communication with the
bridge over the v1 API (http://<bridge>/api). The bridge is inconsistent about
response shapes:

- GET on a collection returns a map of id -> object
- GET on a single resource returns a plain object
- PUT/POST/DELETE return a one-element array of {"success": ...}
- Any failure returns a one-element array of {"error": {"description": ...}}
  with HTTP status 200

so every response goes through the same two phases: check_error() first, then
decode the payload into the shape the caller expected.
"""

import requests

from core.errors import BridgeError, ProtocolError, RegistrationError, TransportError
from core.log import get_logger
from models.types import Group, GroupAction, Light, LightState, Scene, Session
from models.utils import sort_by_numeric_id

DEFAULT_TIMEOUT = 10

# Group 0 is the bridge's implicit group containing every light
ALL_LIGHTS_GROUP = '0'

logger = get_logger(__name__)


def check_error(payload) -> str | None:
    """Return the bridge error description in a decoded response, if any.

    Bridge errors look like [{"error": {"type": 1, "address": "/...",
    "description": "..."}}]. Anything that is not an array of objects (a map
    from a GET, for instance) is payload, not an error.

    Args:
        payload: Decoded JSON response body

    Returns:
        The error description verbatim, or None
    """
    if not isinstance(payload, list) or not payload:
        return None

    first = payload[0]
    if not isinstance(first, dict):
        return None

    error = first.get('error')
    if isinstance(error, dict):
        return str(error.get('description', ''))
    return None


class BridgeClient:
    """Stateless request/response wrapper around one bridge.

    Holds only the immutable Session and a requests.Session, so a single
    instance can serve several in-flight calls from worker threads.
    """

    def __init__(self, session: Session, timeout: float = DEFAULT_TIMEOUT,
                 http: requests.Session | None = None):
        """Initialise BridgeClient.

        Args:
            session: Bridge address and credential (credential may be empty
                when only register() will be called)
            timeout: Per-request timeout in seconds
            http: Optional requests.Session to use instead of a new one
        """
        self.session = session
        self.timeout = timeout
        self.http = http or requests.Session()

    @property
    def base_url(self) -> str:
        return f"http://{self.session.bridge_address}/api"

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{self.session.credential}{path}"

    def _masked(self, url: str) -> str:
        if self.session.credential:
            return url.replace(self.session.credential, '***')
        return url

    def _request(self, method: str, url: str, data: dict | None = None):
        """Send a request and return the decoded JSON body.

        Raises:
            TransportError: The bridge could not be reached
            ProtocolError: The body is not JSON
        """
        logger.debug("%s %s %s", method, self._masked(url), data if data is not None else '')
        try:
            response = self.http.request(method, url, json=data, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"cannot reach bridge at {self.session.bridge_address}: {e}") from e

        logger.debug("-> HTTP %s", response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise ProtocolError(
                f"invalid JSON from bridge (HTTP {response.status_code}): {response.text[:200]!r}"
            ) from e

    def _call(self, method: str, path: str, data: dict | None = None):
        """Request a resource path and raise BridgeError on an error envelope."""
        payload = self._request(method, self._url(path), data)
        description = check_error(payload)
        if description is not None:
            logger.warning("Bridge rejected %s %s: %s", method, path, description)
            raise BridgeError(description)
        return payload

    @staticmethod
    def _expect_map(payload, what: str) -> dict:
        if not isinstance(payload, dict):
            raise ProtocolError(f"expected a map of {what}, got {type(payload).__name__}")
        for key, value in payload.items():
            if not isinstance(value, dict):
                raise ProtocolError(f"unexpected {what} entry for id {key!r}")
        return payload

    @staticmethod
    def _expect_object(payload, what: str) -> dict:
        if not isinstance(payload, dict):
            raise ProtocolError(f"expected a {what} object, got {type(payload).__name__}")
        return payload

    @staticmethod
    def _created_id(payload, what: str) -> str:
        """Extract the new id from [{"success": {"id": "..."}}]."""
        try:
            return str(payload[0]['success']['id'])
        except (IndexError, KeyError, TypeError) as e:
            raise ProtocolError(f"unexpected response creating {what}: {payload!r}") from e

    # Registration

    def register(self, device_label: str) -> str:
        """Create a new credential on the bridge.

        The bridge only accepts this within 30 seconds of its link button
        being pressed.

        Args:
            device_label: devicetype string, "app_name#device_name"

        Returns:
            The new credential ("username" in bridge terms)

        Raises:
            RegistrationError: The bridge refused, e.g. "link button not pressed"
        """
        payload = self._request('POST', self.base_url, {'devicetype': device_label})

        if not isinstance(payload, list):
            raise ProtocolError(f"unexpected registration response: {payload!r}")
        if not payload:
            raise ProtocolError("empty response from bridge")

        description = check_error(payload)
        if description is not None:
            logger.warning("Registration refused: %s", description)
            raise RegistrationError(description)

        try:
            return str(payload[0]['success']['username'])
        except (KeyError, TypeError) as e:
            raise ProtocolError(f"unexpected registration response: {payload!r}") from e

    # Lights

    def list_lights(self) -> list[Light]:
        """Get all lights, ordered by numeric id."""
        lights_map = self._expect_map(self._call('GET', '/lights'), 'lights')
        lights = [Light.from_wire(light_id, data) for light_id, data in lights_map.items()]
        return sort_by_numeric_id(lights)

    def get_light(self, light_id: str) -> Light:
        """Get a single light."""
        data = self._expect_object(self._call('GET', f'/lights/{light_id}'), 'light')
        return Light.from_wire(light_id, data)

    def set_light_state(self, light_id: str, state: LightState):
        """Change a light's state. Only the fields set on state are sent."""
        self._call('PUT', f'/lights/{light_id}/state', state.to_wire())

    def rename_light(self, light_id: str, name: str):
        self._call('PUT', f'/lights/{light_id}', {'name': name})

    # Groups

    def list_groups(self) -> list[Group]:
        """Get all groups, ordered by numeric id."""
        groups_map = self._expect_map(self._call('GET', '/groups'), 'groups')
        groups = [Group.from_wire(group_id, data) for group_id, data in groups_map.items()]
        return sort_by_numeric_id(groups)

    def get_group(self, group_id: str) -> Group:
        """Get a single group."""
        data = self._expect_object(self._call('GET', f'/groups/{group_id}'), 'group')
        return Group.from_wire(group_id, data)

    def set_group_state(self, group_id: str, action: GroupAction):
        """Apply an action to every light in a group."""
        self._call('PUT', f'/groups/{group_id}/action', action.to_wire())

    def rename_group(self, group_id: str, name: str):
        self._call('PUT', f'/groups/{group_id}', {'name': name})

    def create_group(self, name: str, group_type: str, light_ids: list[str]) -> str:
        """Create a group and return its bridge-assigned id.

        Args:
            name: Group name
            group_type: Bridge group type, "Room" or "Zone"
            light_ids: Member light ids
        """
        payload = self._call('POST', '/groups', {
            'name': name,
            'type': group_type,
            'lights': list(light_ids),
        })
        return self._created_id(payload, 'group')

    def delete_group(self, group_id: str):
        self._call('DELETE', f'/groups/{group_id}')

    # Scenes

    def list_scenes(self) -> list[Scene]:
        """Get all scenes, ordered by name then id."""
        scenes_map = self._expect_map(self._call('GET', '/scenes'), 'scenes')
        scenes = [Scene.from_wire(scene_id, data) for scene_id, data in scenes_map.items()]
        return sorted(scenes, key=lambda s: (s.name.lower(), s.id))

    def get_scene(self, scene_id: str) -> Scene:
        """Get a single scene."""
        data = self._expect_object(self._call('GET', f'/scenes/{scene_id}'), 'scene')
        return Scene.from_wire(scene_id, data)

    def activate_scene(self, scene_id: str):
        """Recall a scene on its lights."""
        self._call('PUT', f'/groups/{ALL_LIGHTS_GROUP}/action', {'scene': scene_id})

    def create_scene(self, name: str, group_id: str) -> str:
        """Create a scene capturing the group's current light states.

        Returns:
            The bridge-assigned scene id
        """
        payload = self._call('POST', '/scenes', {
            'name': name,
            'type': 'GroupScene',
            'group': group_id,
        })
        return self._created_id(payload, 'scene')

    def delete_scene(self, scene_id: str):
        self._call('DELETE', f'/scenes/{scene_id}')
