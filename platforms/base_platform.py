from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Optional, Tuple
from constants import DEFAULT_START_OFFSET_HOURS, SCHEDULING_APP_ID
import pytz


class SyncStatus(Enum):
    SYNCED = 'synced'
    DEGRADED = 'degraded'  # The calendar call was attempted and failed
    SKIPPED = 'skipped'    # No calendar call was made (e.g. no token)


@dataclass(frozen=True)
class SyncResult:
    """Outcome of a calendar sync call. Advisory only: never blocks the local operation."""
    status: SyncStatus
    google_event_id: Optional[str] = None
    google_event_link: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status is SyncStatus.SYNCED

    @classmethod
    def synced(cls, google_event_id: Optional[str] = None, google_event_link: Optional[str] = None) -> 'SyncResult':
        return cls(SyncStatus.SYNCED, google_event_id=google_event_id, google_event_link=google_event_link)

    @classmethod
    def degraded(cls, error: str) -> 'SyncResult':
        return cls(SyncStatus.DEGRADED, error=error)

    @classmethod
    def skipped(cls, reason: str) -> 'SyncResult':
        return cls(SyncStatus.SKIPPED, error=reason)


class CalendarPlatform(ABC):
    """Base class for all external calendar integrations"""

    def __init__(self):
        self.timezone = pytz.UTC

    def _now(self) -> datetime:
        return datetime.now(self.timezone)

    def _event_window(self, duration: int, start_time: Optional[datetime] = None) -> Tuple[datetime, datetime]:
        """
        Compute the start and end of a synced event.

        Event types carry no schedule of their own, so unless a start time is
        given the event is placed DEFAULT_START_OFFSET_HOURS from now.

        Args:
            duration: Integer minutes for the event
            start_time: Optional timezone-aware start time

        Returns:
            (start, end) tuple of timezone-aware datetimes
        """
        if start_time is None:
            start_time = self._now() + timedelta(hours=DEFAULT_START_OFFSET_HOURS)
        elif start_time.tzinfo is None:
            start_time = self.timezone.localize(start_time)
        end_time = start_time + timedelta(minutes=duration)
        return start_time, end_time

    def _extended_properties(self, event_id: Optional[str], is_private: bool, created_by: Optional[str] = None) -> Dict[str, str]:
        """Private metadata used to recognise events written by this app"""
        properties = {
            'eventId': event_id or 'pending',  # Remote copy is created before the local row
            'isPrivate': str(bool(is_private)).lower(),
            'schedulingAppId': SCHEDULING_APP_ID
        }
        if created_by:
            properties['createdBy'] = created_by
        return properties

    @abstractmethod
    def create_event(self, event_data: dict, owner: dict, start_time: Optional[datetime] = None) -> SyncResult:
        """
        Create a calendar event for an event type.

        Args:
            event_data: Dict with title, description, duration, is_private and optional id
            owner: Dict with the owner's email and name
            start_time: Optional start time, defaults to one hour from now

        Returns:
            SyncResult with the remote id and link on success
        """
        pass

    @abstractmethod
    def update_event(self, google_event_id: str, event_data: dict) -> SyncResult:
        """
        Update an existing calendar event, keeping its start time.

        Args:
            google_event_id: String id of the remote event
            event_data: Dict with title, description, duration, is_private and id

        Returns:
            SyncResult with the remote id and link on success
        """
        pass

    @abstractmethod
    def delete_event(self, google_event_id: str) -> SyncResult:
        """
        Delete a calendar event.

        Args:
            google_event_id: String id of the remote event

        Returns:
            SyncResult
        """
        pass
