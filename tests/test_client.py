"""
Tests for BridgeClient and bridge response handling.

The mock HTTP session stands in for requests.Session, so these tests check
exactly which method, URL and JSON body reach the bridge and how each
response shape is decoded.
"""

import pytest
import requests

from core.client import BridgeClient, check_error
from core.errors import BridgeError, ProtocolError, RegistrationError, TransportError
from models.types import GroupAction, LightState, Session

BASE = 'http://192.168.1.2/api/abc123'


class TestCheckError:
    """Test error envelope detection."""

    def test_error_envelope_returns_description(self):
        payload = [{'error': {'type': 101, 'address': '/', 'description': 'link button not pressed'}}]
        assert check_error(payload) == 'link button not pressed'

    def test_success_envelope_is_not_error(self):
        assert check_error([{'success': {'/lights/1/state/on': True}}]) is None

    def test_map_is_not_error(self):
        assert check_error({'1': {'name': 'Hall'}}) is None

    def test_empty_list_is_not_error(self):
        assert check_error([]) is None

    def test_list_of_non_objects_is_not_error(self):
        assert check_error(['error']) is None

    def test_only_first_element_is_inspected(self):
        payload = [{'success': {}}, {'error': {'description': 'later'}}]
        assert check_error(payload) is None


class TestLights:
    """Test light queries and commands."""

    def test_list_lights_sorted_numerically(self, client, respond, lights_payload):
        respond(lights_payload)

        lights = client.list_lights()

        assert [light.id for light in lights] == ['1', '2', '3']
        assert lights[0].name == 'Hall'
        assert lights[0].on is False
        assert lights[0].hue == 8000
        assert lights[1].brightness == 200

    def test_list_lights_ten_after_two(self, client, respond):
        respond({
            '10': {'name': 'Ten', 'state': {'on': False}},
            '2': {'name': 'Two', 'state': {'on': False}},
            '1': {'name': 'One', 'state': {'on': False}},
        })

        assert [light.id for light in client.list_lights()] == ['1', '2', '10']

    def test_non_numeric_ids_sort_first(self, client, respond):
        respond({
            '3': {'name': 'Three', 'state': {}},
            'x': {'name': 'Odd', 'state': {}},
        })

        assert [light.id for light in client.list_lights()] == ['x', '3']

    def test_list_lights_request(self, client, respond):
        request = respond({})

        assert client.list_lights() == []
        request.assert_called_once_with('GET', f'{BASE}/lights', json=None, timeout=10)

    def test_get_light(self, client, respond):
        respond({'name': 'Hall', 'type': 'Extended color light', 'state': {'on': True, 'bri': 77}})

        light = client.get_light('1')

        assert light.id == '1'
        assert light.on is True
        assert light.brightness == 77

    def test_turn_on_sends_only_on(self, client, respond):
        request = respond([{'success': {'/lights/1/state/on': True}}])

        client.set_light_state('1', LightState(on=True))

        request.assert_called_once_with('PUT', f'{BASE}/lights/1/state', json={'on': True}, timeout=10)

    def test_set_brightness_and_colour(self, client, respond):
        request = respond([{'success': {}}])

        client.set_light_state('2', LightState(brightness=100, hue=2000, saturation=50))

        assert request.call_args.kwargs['json'] == {'bri': 100, 'hue': 2000, 'sat': 50}

    def test_rename_light(self, client, respond):
        request = respond([{'success': {'/lights/1/name': 'Porch'}}])

        client.rename_light('1', 'Porch')

        request.assert_called_once_with('PUT', f'{BASE}/lights/1', json={'name': 'Porch'}, timeout=10)

    def test_bridge_error_raised(self, client, respond):
        respond([{'error': {'type': 3, 'address': '/lights/99', 'description': 'resource, /lights/99, not available'}}])

        with pytest.raises(BridgeError) as exc_info:
            client.get_light('99')

        assert exc_info.value.description == 'resource, /lights/99, not available'
        assert str(exc_info.value) == 'bridge error: resource, /lights/99, not available'

    def test_unexpected_collection_shape(self, client, respond):
        respond([{'success': {}}])

        with pytest.raises(ProtocolError):
            client.list_lights()


class TestGroups:
    """Test group queries and commands."""

    def test_list_groups_sorted_numerically(self, client, respond):
        respond({
            '10': {'name': 'Ten', 'type': 'Zone', 'lights': []},
            '2': {'name': 'Two', 'type': 'Room', 'lights': ['1']},
            '1': {'name': 'One', 'type': 'Room', 'lights': ['2', '3'],
                  'state': {'all_on': True, 'any_on': True}},
        })

        groups = client.list_groups()

        assert [group.id for group in groups] == ['1', '2', '10']
        assert groups[0].light_ids == ['2', '3']
        assert groups[0].all_on is True
        assert groups[2].any_on is False

    def test_group_off_sends_only_on(self, client, respond):
        request = respond([{'success': {'/groups/1/action/on': False}}])

        client.set_group_state('1', GroupAction(on=False))

        request.assert_called_once_with('PUT', f'{BASE}/groups/1/action', json={'on': False}, timeout=10)

    def test_create_group_returns_id(self, client, respond):
        request = respond([{'success': {'id': '7'}}])

        group_id = client.create_group('Office', 'Zone', ['3', '4'])

        assert group_id == '7'
        request.assert_called_once_with(
            'POST', f'{BASE}/groups',
            json={'name': 'Office', 'type': 'Zone', 'lights': ['3', '4']},
            timeout=10,
        )

    def test_create_group_without_id(self, client, respond):
        respond([{'success': {}}])

        with pytest.raises(ProtocolError):
            client.create_group('Office', 'Zone', [])

    def test_delete_group(self, client, respond):
        request = respond([{'success': '/groups/7 deleted'}])

        client.delete_group('7')

        request.assert_called_once_with('DELETE', f'{BASE}/groups/7', json=None, timeout=10)

    def test_rename_group(self, client, respond):
        request = respond([{'success': {}}])

        client.rename_group('2', 'Study')

        assert request.call_args.args == ('PUT', f'{BASE}/groups/2')
        assert request.call_args.kwargs['json'] == {'name': 'Study'}


class TestScenes:
    """Test scene queries and commands."""

    def test_list_scenes_sorted_by_name(self, client, respond, scenes_payload):
        respond(scenes_payload)

        scenes = client.list_scenes()

        assert [scene.name for scene in scenes] == ['Bright', 'Dim', 'relax']
        assert scenes[1].group_id == ''
        assert scenes[2].group_id == '1'

    def test_activate_scene_uses_all_lights_group(self, client, respond):
        request = respond([{'success': {'/groups/0/action/scene': 'abc'}}])

        client.activate_scene('abc')

        request.assert_called_once_with('PUT', f'{BASE}/groups/0/action', json={'scene': 'abc'}, timeout=10)

    def test_create_scene_returns_id(self, client, respond):
        request = respond([{'success': {'id': 'newScene01'}}])

        scene_id = client.create_scene('Movie', '1')

        assert scene_id == 'newScene01'
        assert request.call_args.kwargs['json'] == {'name': 'Movie', 'type': 'GroupScene', 'group': '1'}

    def test_delete_scene(self, client, respond):
        request = respond([{'success': '/scenes/abc deleted'}])

        client.delete_scene('abc')

        assert request.call_args.args == ('DELETE', f'{BASE}/scenes/abc')


class TestRegister:
    """Test link-button registration."""

    def test_register_returns_username(self, respond, http):
        request = respond([{'success': {'username': 'newcred'}}])
        client = BridgeClient(Session('192.168.1.2', ''), http=http)

        assert client.register('huey#host') == 'newcred'
        request.assert_called_once_with(
            'POST', 'http://192.168.1.2/api', json={'devicetype': 'huey#host'}, timeout=10
        )

    def test_register_link_button_not_pressed(self, respond, http):
        respond([{'error': {'type': 101, 'address': '', 'description': 'link button not pressed'}}])
        client = BridgeClient(Session('192.168.1.2', ''), http=http)

        with pytest.raises(RegistrationError) as exc_info:
            client.register('huey#host')

        assert exc_info.value.description == 'link button not pressed'
        assert 'link button not pressed' in str(exc_info.value)

    def test_register_empty_response(self, respond, http):
        respond([])
        client = BridgeClient(Session('192.168.1.2', ''), http=http)

        with pytest.raises(ProtocolError):
            client.register('huey#host')

    def test_register_non_list_response(self, respond, http):
        respond({'unexpected': True})
        client = BridgeClient(Session('192.168.1.2', ''), http=http)

        with pytest.raises(ProtocolError):
            client.register('huey#host')


class TestTransport:
    """Test failures below the bridge API."""

    def test_connection_error_becomes_transport_error(self, client, http):
        http.request.side_effect = requests.exceptions.ConnectionError('refused')

        with pytest.raises(TransportError) as exc_info:
            client.list_lights()

        assert '192.168.1.2' in str(exc_info.value)

    def test_timeout_becomes_transport_error(self, client, http):
        http.request.side_effect = requests.exceptions.Timeout()

        with pytest.raises(TransportError):
            client.list_groups()

    def test_invalid_json_becomes_protocol_error(self, client, respond):
        respond(None, status_code=502)
        client.http.request.return_value.json.side_effect = ValueError('no json')

        with pytest.raises(ProtocolError) as exc_info:
            client.list_scenes()

        assert '502' in str(exc_info.value)

    def test_credential_masked_in_logs(self, client, respond, caplog):
        respond({})

        with caplog.at_level('DEBUG', logger='huey'):
            client.list_lights()

        assert 'abc123' not in caplog.text
        assert '/api/***/lights' in caplog.text
