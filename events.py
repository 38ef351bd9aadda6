"""
Event type lifecycle: create, list, update, delete and public lookup.

Every operation that acts on behalf of a user takes an explicit
CallerIdentity. Google Calendar sync is best effort: its outcome is
reported through the google_calendar_integrated flag and never decides
whether the local operation succeeds.
"""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from auth import CallerIdentity, get_oauth_access_token
from constants import APP_BASE_URL, DEFAULT_PLATFORM
from db import queries
from db.models import Event, User
from db.schemas import EventDetails, EventRead, EventSummary, EventUpdate, parse_event_input
from errors import EventNotFoundError, UnauthenticatedError, UserNotFoundError
from platforms import CalendarPlatform, PlatformFactory, SyncResult

logger = logging.getLogger(__name__)


def build_event_link(username: str, event_id: str, base_url: str = APP_BASE_URL) -> str:
    """Public booking URL for an event type"""
    return f"{base_url.rstrip('/')}/{username}/{event_id}"


def _require_user(caller: CallerIdentity, session: Session) -> User:
    if caller is None or not caller.is_authenticated:
        raise UnauthenticatedError()

    user = queries.find_user_by_auth_id(session, caller.user_id)
    if not user:
        raise UserNotFoundError()
    return user


def _require_owned_event(event_id: str, user: User, session: Session) -> Event:
    event = queries.find_event_by_id(session, event_id) if event_id else None
    if not event or event.user_id != user.id:
        raise EventNotFoundError()
    return event


def _get_calendar_platform(caller: CallerIdentity, platform_name: str) -> Optional[CalendarPlatform]:
    """Platform authenticated as the caller, or None when they have no calendar token"""
    token = get_oauth_access_token(caller.user_id)
    if not token:
        return None
    return PlatformFactory.get_platform(platform_name, access_token=token)


def _serialize(event: Event) -> Dict[str, Any]:
    return EventRead.model_validate(event).model_dump(mode='json')


def create_event(data: Dict[str, Any], caller: CallerIdentity, session: Session,
                 platform_name: str = DEFAULT_PLATFORM) -> Dict[str, Any]:
    """
    Create an event type for the caller.

    Args:
        data: Dict with title, description, duration and is_private (or isPrivate)
        caller: Identity of the requesting user
        session: Database session
        platform_name: Calendar platform to sync to

    Returns:
        Dict with the stored event fields plus google_calendar_integrated

    Raises:
        UnauthenticatedError: If the caller is anonymous
        EventValidationError: If the data is invalid
        UserNotFoundError: If the caller has no local user record
    """
    if caller is None or not caller.is_authenticated:
        raise UnauthenticatedError()

    validated = parse_event_input(data)
    user = _require_user(caller, session)
    fields = validated.model_dump()

    sync = SyncResult.skipped('Google Calendar not connected')
    try:
        platform = _get_calendar_platform(caller, platform_name)
        if platform is not None:
            sync = platform.create_event(fields, {'email': user.email, 'name': user.name})
        else:
            logger.info("No Google Calendar token for user %s, skipping sync", user.id)
    except Exception as e:
        # Continue with event creation even if Google Calendar fails
        logger.error("Error with Google Calendar integration: %s", str(e))
        sync = SyncResult.degraded(str(e))

    if sync.success:
        fields['google_event_id'] = sync.google_event_id
        fields['google_event_link'] = sync.google_event_link

    event = queries.create_event(session, user_id=user.id, **fields)
    logger.info("Created event %s for user %s (sync: %s)", event.id, user.id, sync.status.value)

    result = _serialize(event)
    result['google_calendar_integrated'] = sync.success
    return result


def get_user_events(caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    List the caller's event types, newest first, with booking counts.

    Returns:
        Dict with:
            events: List of event dicts with booking_count and link
            username: The caller's public handle
    """
    user = _require_user(caller, session)

    events = []
    for event, booking_count in queries.find_events_by_owner(session, user.id):
        summary = EventSummary.model_validate(event)
        summary.booking_count = booking_count
        if user.username:
            summary.link = build_event_link(user.username, event.id)
        events.append(summary.model_dump(mode='json'))

    return {'events': events, 'username': user.username}


def update_event(event_id: str, data: Dict[str, Any], caller: CallerIdentity, session: Session,
                 platform_name: str = DEFAULT_PLATFORM) -> Dict[str, Any]:
    """
    Update one of the caller's event types and its calendar copy if it has one.

    Only the fields present in data are changed; the calendar copy is
    rewritten from the resulting stored values.

    Raises:
        UnauthenticatedError: If the caller is anonymous
        EventValidationError: If the data is invalid
        UserNotFoundError: If the caller has no local user record
        EventNotFoundError: If the event does not exist or belongs to someone else
    """
    if caller is None or not caller.is_authenticated:
        raise UnauthenticatedError()

    validated = parse_event_input(data, schema=EventUpdate)
    user = _require_user(caller, session)
    event = _require_owned_event(event_id, user, session)

    for key, value in validated.model_dump(exclude_unset=True).items():
        setattr(event, key, value)

    sync = SyncResult.skipped('Event has no Google Calendar copy')
    if event.google_event_id:
        try:
            platform = _get_calendar_platform(caller, platform_name)
            if platform is not None:
                sync = platform.update_event(
                    event.google_event_id,
                    {
                        'id': event.id,
                        'title': event.title,
                        'description': event.description,
                        'duration': event.duration,
                        'is_private': event.is_private
                    }
                )
            else:
                sync = SyncResult.skipped('Google Calendar not connected')
        except Exception as e:
            logger.error("Error updating Google Calendar event: %s", str(e))
            sync = SyncResult.degraded(str(e))

    if sync.success and sync.google_event_link:
        event.google_event_link = sync.google_event_link

    session.flush()
    session.refresh(event)
    logger.info("Updated event %s (sync: %s)", event.id, sync.status.value)

    result = _serialize(event)
    result['google_calendar_integrated'] = sync.success
    return result


def delete_event(event_id: str, caller: CallerIdentity, session: Session,
                 platform_name: str = DEFAULT_PLATFORM) -> Dict[str, Any]:
    """
    Delete one of the caller's event types.

    The Google Calendar copy, if any, is removed first on a best effort
    basis; the local row is deleted regardless of the outcome.

    Returns:
        Dict with:
            success: True
            google_calendar_deleted: Whether a calendar copy was removed

    Raises:
        UnauthenticatedError: If the caller is anonymous
        UserNotFoundError: If the caller has no local user record
        EventNotFoundError: If the event does not exist or belongs to someone else
    """
    user = _require_user(caller, session)
    event = _require_owned_event(event_id, user, session)

    sync = SyncResult.skipped('Event has no Google Calendar copy')
    if event.google_event_id:
        try:
            platform = _get_calendar_platform(caller, platform_name)
            if platform is not None:
                sync = platform.delete_event(event.google_event_id)
        except Exception as e:
            # Continue with deletion even if Google Calendar fails
            logger.error("Error deleting Google Calendar event: %s", str(e))
            sync = SyncResult.degraded(str(e))

    queries.delete_event(session, event)
    logger.info("Deleted event %s for user %s", event_id, user.id)

    return {'success': True, 'google_calendar_deleted': sync.success}


def get_event_details(username: str, event_id: str, session: Session) -> Optional[Dict[str, Any]]:
    """Public view of an event type and its owner, or None if there is no such pair"""
    if not username or not event_id:
        return None

    event = queries.find_event_by_owner_handle(session, username, event_id)
    if event is None:
        return None
    return EventDetails.model_validate(event).model_dump(mode='json')
