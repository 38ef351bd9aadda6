# constants.py
import os

from dotenv import load_dotenv

load_dotenv()

# Calendar Settings
CALENDAR_ID = 'primary'  # Events are always written to the owner's primary calendar
SCHEDULING_APP_ID = 'mnn-schedulo'  # Tag stored on every synced event

# Time Settings
# Placeholder start for synced events: one hour from now
DEFAULT_START_OFFSET_HOURS = 1

# API Scopes
GOOGLE_CALENDAR_SCOPES = [
    'https://www.googleapis.com/auth/calendar',
    'https://www.googleapis.com/auth/calendar.events'
]

# Identity provider
GOOGLE_OAUTH_PROVIDER = 'oauth_google'
CLERK_SECRET_KEY = os.getenv('CLERK_SECRET_KEY')
CLERK_API_URL = os.getenv('CLERK_API_URL', 'https://api.clerk.com/v1')
CLERK_API_TIMEOUT = int(os.getenv('CLERK_API_TIMEOUT', '10'))

# Platform
DEFAULT_PLATFORM = os.getenv('CALENDAR_PLATFORM', 'google')

# Storage
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///./events.db')

# Public booking links
APP_BASE_URL = os.getenv('APP_BASE_URL', 'http://localhost:3000')

# Validation limits
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
