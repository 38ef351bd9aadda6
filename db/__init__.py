from .database import Base, SessionLocal, engine, init_db, session_scope
from .models import Booking, Event, User

__all__ = [
    'Base',
    'SessionLocal',
    'engine',
    'init_db',
    'session_scope',
    'Booking',
    'Event',
    'User'
]
