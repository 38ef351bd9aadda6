from typing import Any, Dict
from sqlalchemy.orm import Session
from auth import CallerIdentity
import events
import users

def handle_create_event(args: Dict[str, Any], caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    Handle creating an event type.

    Args:
        args: Dict containing:
            - title: String, event title
            - description: String (optional), event description
            - duration: Integer, event length in minutes
            - is_private: Boolean (optional), defaults to True
            - platform: String (optional), calendar platform to sync to
        caller: Identity of the requesting user
        session: Database session

    Returns:
        Dict containing:
            - statusCode: Integer HTTP status code
            - body: Dict with the created event and google_calendar_integrated,
              the advisory googleCalendarIntegrated flag in snake_case like
              every other response key
    """
    data = {k: v for k, v in args.items() if k != 'platform'}
    kwargs = {'platform_name': args['platform']} if args.get('platform') else {}
    result = events.create_event(data, caller, session, **kwargs)

    return {
        'statusCode': 201,
        'body': result
    }

def handle_get_user_events(args: Dict[str, Any], caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    Handle listing the caller's event types.

    Returns:
        Dict containing:
            - statusCode: Integer HTTP status code
            - body: Dict containing:
                - events: List of events, newest first, each with booking_count and link
                - username: String, the caller's public handle
    """
    return {
        'statusCode': 200,
        'body': events.get_user_events(caller, session)
    }

def handle_update_event(args: Dict[str, Any], caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    Handle updating an event type.

    Args:
        args: Dict containing:
            - event_id: String, id of the event to update
            - title, description, duration, is_private (optional): only the
              keys present are changed
        caller: Identity of the requesting user
        session: Database session
    """
    event_id = args.get('event_id')
    if not event_id:
        return {
            'statusCode': 400,
            'body': 'Event id is required'
        }

    data = {k: v for k, v in args.items() if k not in ('event_id', 'platform')}
    kwargs = {'platform_name': args['platform']} if args.get('platform') else {}
    result = events.update_event(event_id, data, caller, session, **kwargs)

    return {
        'statusCode': 200,
        'body': result
    }

def handle_delete_event(args: Dict[str, Any], caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    Handle deleting an event type.

    Args:
        args: Dict containing:
            - event_id: String, id of the event to delete
        caller: Identity of the requesting user
        session: Database session

    Returns:
        Dict containing:
            - statusCode: Integer HTTP status code
            - body: Dict containing:
                - success: Boolean
                - google_calendar_deleted: Boolean, whether the calendar copy was removed
    """
    event_id = args.get('event_id')
    if not event_id:
        return {
            'statusCode': 400,
            'body': 'Event id is required'
        }

    kwargs = {'platform_name': args['platform']} if args.get('platform') else {}
    return {
        'statusCode': 200,
        'body': events.delete_event(event_id, caller, session, **kwargs)
    }

def handle_get_event_details(args: Dict[str, Any], caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    Handle the public lookup of an event type. No authentication is required.

    Args:
        args: Dict containing:
            - username: String, the owner's public handle
            - event_id: String, id of the event
    """
    username = args.get('username')
    event_id = args.get('event_id')

    if not all([username, event_id]):
        return {
            'statusCode': 400,
            'body': 'Username and event id are required'
        }

    details = events.get_event_details(username, event_id, session)
    if details is None:
        return {
            'statusCode': 404,
            'body': 'Event not found'
        }

    return {
        'statusCode': 200,
        'body': details
    }

def handle_sync_user(args: Dict[str, Any], caller: CallerIdentity, session: Session) -> Dict[str, Any]:
    """
    Handle mirroring an identity provider user into local storage.

    Args:
        args: Dict containing the provider profile (id, email, username,
            first_name, last_name, image_url)
    """
    result = users.mirror_user(args, session)

    return {
        'statusCode': 201 if result['created'] else 200,
        'body': result
    }
