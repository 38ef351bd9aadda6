import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from unittest.mock import patch
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from db.database import Base
from db.models import User
from auth import CallerIdentity

@pytest.fixture
def engine():
    """In-memory SQLite database shared by every session of a test"""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def session(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def make_user(session):
    """Create and flush a local user mirrored from the identity provider"""
    def _make_user(username='alice', name='Alice Example', clerk_user_id=None):
        user = User(
            clerk_user_id=clerk_user_id or f'user_{username}',
            email=f'{username}@example.com',
            name=name,
            username=username,
            image_url=f'https://img.example.com/{username}.png'
        )
        session.add(user)
        session.flush()
        return user
    return _make_user

@pytest.fixture
def alice(make_user):
    return make_user('alice')

@pytest.fixture
def bob(make_user):
    return make_user('bob', name='Bob Example')

@pytest.fixture
def caller(alice):
    return CallerIdentity(user_id=alice.clerk_user_id)

@pytest.fixture
def no_calendar_token():
    """The caller has not connected Google Calendar"""
    with patch('events.get_oauth_access_token', return_value=None) as mock_token:
        yield mock_token
