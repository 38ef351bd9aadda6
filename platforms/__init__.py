from .base_platform import CalendarPlatform, SyncResult, SyncStatus
from .google_calendar import GoogleCalendarPlatform
from .platform_factory import PlatformFactory

__all__ = [
    'CalendarPlatform',
    'SyncResult',
    'SyncStatus',
    'GoogleCalendarPlatform',
    'PlatformFactory'
]
