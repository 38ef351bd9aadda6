class EventError(Exception):
    """Base class for errors surfaced to the caller of an event operation"""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(EventError):
    """Caller has no valid session"""

    status_code = 401

    def __init__(self, message: str = 'Unauthorized'):
        super().__init__(message)


class UserNotFoundError(EventError):
    """Caller is authenticated but has no local user record"""

    status_code = 404

    def __init__(self, message: str = 'User not found'):
        super().__init__(message)


class EventNotFoundError(EventError):
    """Event does not exist or is not owned by the caller"""

    status_code = 404

    def __init__(self, message: str = 'Event not found or unauthorized'):
        super().__init__(message)


class EventValidationError(EventError, ValueError):
    """Input failed validation"""

    status_code = 400

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []
