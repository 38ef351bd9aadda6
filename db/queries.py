"""
Record operations used by the event lifecycle.

Each function works on a caller-supplied Session and never commits;
transaction boundaries belong to the caller (see session_scope).
"""
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from .models import Booking, Event, User


def find_user_by_auth_id(session: Session, clerk_user_id: str) -> Optional[User]:
    return session.query(User).filter(User.clerk_user_id == clerk_user_id).first()


def find_events_by_owner(session: Session, user_id: str) -> List[Tuple[Event, int]]:
    """
    Get all events owned by a user, newest first, with their booking counts.

    Returns:
        List of (Event, booking_count) tuples
    """
    booking_count = func.count(Booking.id).label('booking_count')
    rows = (
        session.query(Event, booking_count)
        .outerjoin(Booking, Booking.event_id == Event.id)
        .filter(Event.user_id == user_id)
        .group_by(Event.id)
        .order_by(Event.created_at.desc(), Event.id.desc())
        .all()
    )
    return [(event, count) for event, count in rows]


def create_event(session: Session, **fields) -> Event:
    event = Event(**fields)
    session.add(event)
    session.flush()
    session.refresh(event)
    return event


def find_event_by_id(session: Session, event_id: str) -> Optional[Event]:
    return session.get(Event, event_id)


def find_event_by_owner_handle(session: Session, username: str, event_id: str) -> Optional[Event]:
    return (
        session.query(Event)
        .join(User, Event.user_id == User.id)
        .options(joinedload(Event.user))
        .filter(Event.id == event_id, User.username == username)
        .first()
    )


def delete_event(session: Session, event: Event) -> None:
    session.delete(event)
    session.flush()


def upsert_user(session: Session, clerk_user_id: str, **fields) -> User:
    user = find_user_by_auth_id(session, clerk_user_id)
    if user is None:
        user = User(clerk_user_id=clerk_user_id, **fields)
        session.add(user)
    else:
        for key, value in fields.items():
            setattr(user, key, value)
    session.flush()
    session.refresh(user)
    return user
