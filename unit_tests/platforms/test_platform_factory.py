import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest
from unittest.mock import Mock, patch
from platforms.platform_factory import PlatformFactory
from platforms.base_platform import CalendarPlatform
from platforms.google_calendar import GoogleCalendarPlatform

@pytest.fixture(autouse=True)
def mock_service():
    """Mock Google Calendar dependencies"""
    with patch('platforms.google_calendar.build_credentials', return_value=None) as mock_creds, \
         patch('platforms.google_calendar.build', return_value=Mock()):
        yield mock_creds

def test_get_platform_google(mock_service):
    """Test getting Google Calendar platform"""
    platform = PlatformFactory.get_platform('google', access_token='ya29.token')

    # Assert correct type
    assert isinstance(platform, CalendarPlatform)
    assert isinstance(platform, GoogleCalendarPlatform)
    mock_service.assert_called_once_with('ya29.token')

def test_get_platform_case_insensitive():
    """Test that platform name is case insensitive"""
    platform1 = PlatformFactory.get_platform('GOOGLE', access_token='t')
    platform2 = PlatformFactory.get_platform('Google', access_token='t')
    platform3 = PlatformFactory.get_platform('google', access_token='t')

    # Assert all variations work
    assert all(isinstance(p, GoogleCalendarPlatform) for p in [platform1, platform2, platform3])

def test_get_platform_unsupported():
    """Test error handling for unsupported platform"""
    with pytest.raises(ValueError) as exc_info:
        PlatformFactory.get_platform('outlook')

    # Assert error message contains supported platforms
    error_msg = str(exc_info.value)
    assert 'Unsupported platform: outlook' in error_msg
    assert 'Supported platforms are: google' in error_msg

def test_get_platform_empty_string():
    """Test error handling for empty platform name"""
    with pytest.raises(ValueError) as exc_info:
        PlatformFactory.get_platform('')

    error_msg = str(exc_info.value)
    assert 'Unsupported platform: ' in error_msg
    assert 'Supported platforms are: google' in error_msg

def test_get_platform_none():
    """Test error handling for None platform name"""
    with pytest.raises(ValueError) as exc_info:
        PlatformFactory.get_platform(None)

    error_msg = str(exc_info.value)
    assert 'Unsupported platform: None' in error_msg
    assert 'Supported platforms are: google' in error_msg

def test_platform_registration():
    """Test that platforms are properly registered"""
    platforms = PlatformFactory._platforms

    assert 'google' in platforms
    assert platforms['google'] == GoogleCalendarPlatform

    # Assert all registered platforms inherit from CalendarPlatform
    assert all(issubclass(platform, CalendarPlatform) for platform in platforms.values())
