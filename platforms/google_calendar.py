from datetime import datetime
from typing import Optional
import logging
import pytz
from googleapiclient.discovery import build
from .base_platform import CalendarPlatform, SyncResult
from constants import CALENDAR_ID
from auth import build_credentials

logger = logging.getLogger(__name__)


class GoogleCalendarPlatform(CalendarPlatform):
    def __init__(self, access_token: Optional[str] = None, test_mode=False):
        """Initialize the platform

        Args:
            access_token: Google OAuth access token for the event owner
            test_mode: If True, skip building the API client (for unit tests)
        """
        super().__init__()
        self.service = None
        if not test_mode:
            creds = build_credentials(access_token)
            self.service = build('calendar', 'v3', credentials=creds, cache_discovery=False)

    def _parse_datetime(self, dt_str: str) -> datetime:
        """
        Helper method to convert a Google datetime string to an aware UTC datetime.
        Handles both UTC ('Z') and offset timezone formats (e.g., '-04:00')
        """
        if dt_str.endswith('Z'):
            dt_str = dt_str.replace('Z', '+00:00')
        parsed = datetime.fromisoformat(dt_str)
        if parsed.tzinfo is None:
            parsed = pytz.utc.localize(parsed)
        return parsed.astimezone(pytz.UTC)

    def _format_datetime_for_google(self, dt: datetime) -> str:
        """Helper method to format an aware datetime for Google Calendar API (in UTC)"""
        return dt.astimezone(pytz.UTC).strftime('%Y-%m-%dT%H:%M:%S.000Z')

    def _event_body(self, event_data: dict, start_time: datetime, end_time: datetime, extended: dict) -> dict:
        return {
            'summary': event_data['title'],
            'description': event_data.get('description') or '',
            'start': {
                'dateTime': self._format_datetime_for_google(start_time),
            },
            'end': {
                'dateTime': self._format_datetime_for_google(end_time),
            },
            'extendedProperties': {
                'private': extended
            }
        }

    def create_event(self, event_data: dict, owner: dict, start_time: Optional[datetime] = None) -> SyncResult:
        """
        Insert the event type into the owner's primary calendar.

        Args:
            event_data: Dict with title, description, duration, is_private and optional id
            owner: Dict with the owner's email and name
            start_time: Optional start time, defaults to one hour from now

        Returns:
            SyncResult with google_event_id and google_event_link on success
        """
        try:
            start, end = self._event_window(event_data['duration'], start_time)
            body = self._event_body(
                event_data,
                start,
                end,
                self._extended_properties(
                    event_data.get('id'),
                    event_data.get('is_private', True),
                    created_by=owner.get('email')
                )
            )

            created = self.service.events().insert(
                calendarId=CALENDAR_ID,
                body=body
            ).execute()

            logger.info("Created Google Calendar event %s", created.get('id'))
            return SyncResult.synced(created.get('id'), created.get('htmlLink'))

        except Exception as e:
            logger.error("Error creating Google Calendar event: %s", str(e))
            return SyncResult.degraded(str(e))

    def update_event(self, google_event_id: str, event_data: dict) -> SyncResult:
        """
        Update the remote copy of an event type, keeping its start time.

        Args:
            google_event_id: String id of the remote event
            event_data: Dict with title, description, duration, is_private and id

        Returns:
            SyncResult with google_event_id and google_event_link on success
        """
        try:
            existing = self.service.events().get(
                calendarId=CALENDAR_ID,
                eventId=google_event_id
            ).execute()

            existing_start = self._parse_datetime(existing['start']['dateTime'])
            start, end = self._event_window(event_data['duration'], existing_start)
            body = self._event_body(
                event_data,
                start,
                end,
                self._extended_properties(event_data.get('id'), event_data.get('is_private', True))
            )

            updated = self.service.events().update(
                calendarId=CALENDAR_ID,
                eventId=google_event_id,
                body=body
            ).execute()

            logger.info("Updated Google Calendar event %s", google_event_id)
            return SyncResult.synced(updated.get('id'), updated.get('htmlLink'))

        except Exception as e:
            logger.error("Error updating Google Calendar event: %s", str(e))
            return SyncResult.degraded(str(e))

    def delete_event(self, google_event_id: str) -> SyncResult:
        """
        Delete the remote copy of an event type.

        Args:
            google_event_id: String id of the remote event

        Returns:
            SyncResult
        """
        try:
            self.service.events().delete(
                calendarId=CALENDAR_ID,
                eventId=google_event_id
            ).execute()

            logger.info("Deleted Google Calendar event %s", google_event_id)
            return SyncResult.synced(google_event_id)

        except Exception as e:
            logger.error("Error deleting Google Calendar event: %s", str(e))
            return SyncResult.degraded(str(e))
