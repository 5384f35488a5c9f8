"""Pytest configuration and fixtures for huey tests."""

import pytest
from pathlib import Path
from unittest.mock import MagicMock

from core.client import BridgeClient
from models.types import Group, Light, Scene, Session
from tui.messages import GroupsLoaded, LightsLoaded, ScenesLoaded
from tui.operations import LoadGroups, LoadLights
from tui.session import InteractiveSession


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def hue_session():
    """Return a Session for a fake bridge."""
    return Session(bridge_address='192.168.1.2', credential='abc123')


def make_response(payload, status_code=200):
    """Build a mock requests.Response whose json() returns payload."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = repr(payload)
    return response


@pytest.fixture
def http():
    """Return a mock requests.Session; set http.request.return_value per test."""
    return MagicMock()


@pytest.fixture
def respond(http):
    """Return a function that makes the mock bridge answer with payload."""
    def _respond(payload, status_code=200):
        http.request.return_value = make_response(payload, status_code)
        return http.request
    return _respond


@pytest.fixture
def client(hue_session, http):
    """Return a BridgeClient talking to the mock HTTP session."""
    return BridgeClient(hue_session, http=http)


@pytest.fixture
def lights_payload():
    """Wire payload for GET /lights."""
    return {
        '2': {'name': 'Desk', 'type': 'Dimmable light',
              'state': {'on': True, 'bri': 200, 'hue': 0, 'sat': 0}},
        '1': {'name': 'Hall', 'type': 'Extended color light',
              'state': {'on': False, 'bri': 10, 'hue': 8000, 'sat': 120}},
        '3': {'name': 'Lamp', 'type': 'Dimmable light',
              'state': {'on': False, 'bri': 0}},
    }


@pytest.fixture
def groups_payload():
    """Wire payload for GET /groups."""
    return {
        '1': {'name': 'Living', 'type': 'Room', 'lights': ['1', '2'],
              'state': {'all_on': False, 'any_on': True}},
        '2': {'name': 'Office', 'type': 'Zone', 'lights': ['3'],
              'state': {'all_on': False, 'any_on': False}},
    }


@pytest.fixture
def scenes_payload():
    """Wire payload for GET /scenes."""
    return {
        'xyz': {'name': 'relax', 'type': 'GroupScene', 'group': '1'},
        'abc': {'name': 'Bright', 'type': 'GroupScene', 'group': '9'},
        'def': {'name': 'Dim', 'type': 'LightScene'},
    }


@pytest.fixture
def sample_lights():
    return [
        Light(id='1', name='Hall', on=False, type='Extended color light'),
        Light(id='2', name='Desk', on=True, brightness=200, type='Dimmable light'),
        Light(id='3', name='Lamp', on=False, type='Dimmable light'),
    ]


@pytest.fixture
def sample_groups():
    return [
        Group(id='1', name='Living', type='Room', light_ids=['1', '2'], all_on=False, any_on=True),
        Group(id='2', name='Office', type='Zone', light_ids=['3'], all_on=False, any_on=False),
    ]


@pytest.fixture
def sample_scenes():
    return [
        Scene(id='abc', name='Bright', group_id='1', type='GroupScene'),
        Scene(id='def', name='Dim', group_id='', type='LightScene'),
    ]


@pytest.fixture
def loaded_session(sample_lights, sample_groups, sample_scenes):
    """Return an InteractiveSession with every collection loaded."""
    session = InteractiveSession()
    for op in session.start():
        if isinstance(op, LoadLights):
            session.update(LightsLoaded(sample_lights, op.seq))
        elif isinstance(op, LoadGroups):
            session.update(GroupsLoaded(sample_groups, op.seq))
        else:
            session.update(ScenesLoaded(sample_scenes, op.seq))
    return session
