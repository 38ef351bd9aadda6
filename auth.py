from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import requests
from google.oauth2.credentials import Credentials
from constants import (
    CLERK_API_TIMEOUT,
    CLERK_API_URL,
    CLERK_SECRET_KEY,
    GOOGLE_CALENDAR_SCOPES,
    GOOGLE_OAUTH_PROVIDER
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallerIdentity:
    """The identity-provider user id of whoever made the request (None when anonymous)"""
    user_id: Optional[str]

    @property
    def is_authenticated(self) -> bool:
        return bool(self.user_id)


def caller_from_event(event: Dict[str, Any]) -> CallerIdentity:
    """
    Resolve the caller from a Lambda event.

    API Gateway authorizers put the Clerk subject in requestContext; direct
    invocations pass it as 'user_id'.
    """
    authorizer = (event.get('requestContext') or {}).get('authorizer') or {}
    # REST API authorizers put claims at the top level, HTTP API JWT authorizers under 'jwt'
    claims = authorizer.get('claims') or (authorizer.get('jwt') or {}).get('claims') or {}
    user_id = claims.get('sub') or authorizer.get('principalId') or event.get('user_id')
    return CallerIdentity(user_id=user_id)


def get_oauth_access_token(user_id: str, provider: str = GOOGLE_OAUTH_PROVIDER) -> Optional[str]:
    """Exchange a Clerk user id for the user's OAuth access token.

    Returns:
        The first access token Clerk holds for the provider, or None if the
        user has not connected it or no Clerk secret key is configured.

    Raises:
        requests.HTTPError: If the Clerk API rejects the request
    """
    if not CLERK_SECRET_KEY:
        logger.info("CLERK_SECRET_KEY is not set, calendar sync unavailable")
        return None

    response = requests.get(
        f"{CLERK_API_URL}/users/{user_id}/oauth_access_tokens/{provider}",
        headers={'Authorization': f'Bearer {CLERK_SECRET_KEY}'},
        timeout=CLERK_API_TIMEOUT
    )
    response.raise_for_status()

    tokens = response.json()
    # Newer Clerk API versions wrap the list in {'data': [...]}
    if isinstance(tokens, dict):
        tokens = tokens.get('data') or []
    if not tokens:
        return None
    return tokens[0].get('token')


def build_credentials(access_token: Optional[str]) -> Credentials:
    """Gets Google credentials for a bearer access token.

    Returns:
        Credentials, the credentials wrapping the token.
    """
    if not access_token:
        raise ValueError('An access token is required to call Google Calendar')
    return Credentials(token=access_token, scopes=GOOGLE_CALENDAR_SCOPES)
