import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
import requests
from unittest.mock import Mock, patch
from auth import CallerIdentity, build_credentials, caller_from_event, get_oauth_access_token
from constants import CLERK_API_URL, GOOGLE_OAUTH_PROVIDER

def mock_response(payload):
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response

def test_caller_from_authorizer_claims():
    event = {'requestContext': {'authorizer': {'claims': {'sub': 'user_2abc'}}}}
    caller = caller_from_event(event)
    assert caller == CallerIdentity(user_id='user_2abc')
    assert caller.is_authenticated

def test_caller_from_http_api_jwt_claims():
    event = {'requestContext': {'authorizer': {'jwt': {'claims': {'sub': 'user_2jwt'}, 'scopes': None}}}}
    assert caller_from_event(event).user_id == 'user_2jwt'

def test_caller_from_principal_id():
    event = {'requestContext': {'authorizer': {'principalId': 'user_2def'}}}
    assert caller_from_event(event).user_id == 'user_2def'

def test_caller_from_direct_invocation():
    assert caller_from_event({'operation': 'get_user_events', 'user_id': 'user_2ghi'}).user_id == 'user_2ghi'

def test_anonymous_caller():
    caller = caller_from_event({'operation': 'get_event_details'})
    assert caller.user_id is None
    assert not caller.is_authenticated

def test_get_token_without_secret_key():
    """No Clerk secret means sync is unavailable, not an error"""
    with patch('auth.CLERK_SECRET_KEY', None), patch('auth.requests.get') as mock_get:
        assert get_oauth_access_token('user_2abc') is None
    mock_get.assert_not_called()

def test_get_token_returns_first_token():
    with patch('auth.CLERK_SECRET_KEY', 'sk_test_123'), \
         patch('auth.requests.get', return_value=mock_response([{'token': 'ya29.first'}, {'token': 'ya29.second'}])) as mock_get:
        assert get_oauth_access_token('user_2abc') == 'ya29.first'

    url = mock_get.call_args[0][0]
    assert url == f'{CLERK_API_URL}/users/user_2abc/oauth_access_tokens/{GOOGLE_OAUTH_PROVIDER}'
    assert mock_get.call_args.kwargs['headers'] == {'Authorization': 'Bearer sk_test_123'}

def test_get_token_from_wrapped_response():
    with patch('auth.CLERK_SECRET_KEY', 'sk_test_123'), \
         patch('auth.requests.get', return_value=mock_response({'data': [{'token': 'ya29.wrapped'}]})):
        assert get_oauth_access_token('user_2abc') == 'ya29.wrapped'

def test_get_token_when_provider_not_connected():
    with patch('auth.CLERK_SECRET_KEY', 'sk_test_123'), \
         patch('auth.requests.get', return_value=mock_response([])):
        assert get_oauth_access_token('user_2abc') is None

def test_get_token_http_error_propagates():
    response = mock_response([])
    response.raise_for_status.side_effect = requests.HTTPError('401 Client Error')
    with patch('auth.CLERK_SECRET_KEY', 'sk_test_123'), \
         patch('auth.requests.get', return_value=response):
        with pytest.raises(requests.HTTPError):
            get_oauth_access_token('user_2abc')

def test_build_credentials():
    creds = build_credentials('ya29.token')
    assert creds.token == 'ya29.token'

def test_build_credentials_requires_token():
    with pytest.raises(ValueError):
        build_credentials(None)
