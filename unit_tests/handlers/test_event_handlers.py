import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest
from unittest.mock import Mock, patch
from auth import CallerIdentity
from handlers import HANDLERS
from handlers.event_handlers import (
    handle_create_event,
    handle_delete_event,
    handle_get_event_details,
    handle_get_user_events,
    handle_sync_user,
    handle_update_event
)

@pytest.fixture
def caller():
    return CallerIdentity(user_id='user_alice')

@pytest.fixture
def session():
    return Mock()

def test_handlers_registered():
    assert set(HANDLERS) == {
        'create_event',
        'get_user_events',
        'update_event',
        'delete_event',
        'get_event_details',
        'sync_user'
    }

def test_handle_create_event(caller, session):
    """Platform is passed separately from the event data"""
    with patch('handlers.event_handlers.events.create_event', return_value={'id': 'evt-1'}) as mock_create:
        result = handle_create_event(
            {'title': 'Meeting', 'duration': 30, 'platform': 'Google'},
            caller,
            session
        )

    assert result == {'statusCode': 201, 'body': {'id': 'evt-1'}}
    mock_create.assert_called_once_with(
        {'title': 'Meeting', 'duration': 30},
        caller,
        session,
        platform_name='Google'
    )

def test_handle_create_event_default_platform(caller, session):
    with patch('handlers.event_handlers.events.create_event', return_value={}) as mock_create:
        handle_create_event({'title': 'Meeting', 'duration': 30}, caller, session)

    assert mock_create.call_args.kwargs == {}

def test_handle_get_user_events(caller, session):
    listing = {'events': [], 'username': 'alice'}
    with patch('handlers.event_handlers.events.get_user_events', return_value=listing):
        result = handle_get_user_events({}, caller, session)

    assert result == {'statusCode': 200, 'body': listing}

def test_handle_update_event_requires_id(caller, session):
    result = handle_update_event({'title': 'Meeting', 'duration': 30}, caller, session)

    assert result['statusCode'] == 400
    assert result['body'] == 'Event id is required'

def test_handle_update_event(caller, session):
    with patch('handlers.event_handlers.events.update_event', return_value={'id': 'evt-1'}) as mock_update:
        result = handle_update_event({'event_id': 'evt-1', 'title': 'New', 'duration': 60}, caller, session)

    assert result['statusCode'] == 200
    mock_update.assert_called_once_with('evt-1', {'title': 'New', 'duration': 60}, caller, session)

def test_handle_delete_event_requires_id(caller, session):
    result = handle_delete_event({}, caller, session)

    assert result['statusCode'] == 400
    assert result['body'] == 'Event id is required'

def test_handle_delete_event(caller, session):
    with patch('handlers.event_handlers.events.delete_event',
               return_value={'success': True, 'google_calendar_deleted': False}) as mock_delete:
        result = handle_delete_event({'event_id': 'evt-1'}, caller, session)

    assert result['statusCode'] == 200
    assert result['body']['success'] is True
    mock_delete.assert_called_once_with('evt-1', caller, session)

def test_handle_get_event_details_requires_args(session):
    result = handle_get_event_details({'username': 'alice'}, CallerIdentity(user_id=None), session)

    assert result['statusCode'] == 400
    assert result['body'] == 'Username and event id are required'

def test_handle_get_event_details_not_found(session):
    with patch('handlers.event_handlers.events.get_event_details', return_value=None):
        result = handle_get_event_details(
            {'username': 'alice', 'event_id': 'missing'},
            CallerIdentity(user_id=None),
            session
        )

    assert result == {'statusCode': 404, 'body': 'Event not found'}

def test_handle_get_event_details_found(session):
    details = {'id': 'evt-1', 'user': {'name': 'Alice', 'email': 'alice@example.com', 'image_url': None}}
    with patch('handlers.event_handlers.events.get_event_details', return_value=details) as mock_details:
        result = handle_get_event_details(
            {'username': 'alice', 'event_id': 'evt-1'},
            CallerIdentity(user_id=None),
            session
        )

    assert result == {'statusCode': 200, 'body': details}
    mock_details.assert_called_once_with('alice', 'evt-1', session)

@pytest.mark.parametrize('created,status_code', [(True, 201), (False, 200)])
def test_handle_sync_user(caller, session, created, status_code):
    mirrored = {'id': 'u1', 'clerk_user_id': 'user_alice', 'username': 'alice', 'created': created}
    with patch('handlers.event_handlers.users.mirror_user', return_value=mirrored):
        result = handle_sync_user({'id': 'user_alice', 'email': 'alice@example.com'}, caller, session)

    assert result['statusCode'] == status_code
    assert result['body'] == mirrored
