import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from db import queries
from db.schemas import parse_user_profile

logger = logging.getLogger(__name__)


def mirror_user(profile: Dict[str, Any], session: Session) -> Dict[str, Any]:
    """
    Create or refresh the local copy of an identity provider user.

    Args:
        profile: Dict with id, email and optional username, name (or
            first_name/last_name) and image_url
        session: Database session

    Returns:
        Dict with the local user id, username and whether it was created
    """
    parsed = parse_user_profile(profile)
    existing = queries.find_user_by_auth_id(session, parsed.id)

    user = queries.upsert_user(
        session,
        parsed.id,
        email=parsed.email,
        name=parsed.full_name,
        username=parsed.username,
        image_url=parsed.image_url
    )
    logger.info("Mirrored user %s (%s)", user.id, 'updated' if existing else 'created')

    return {
        'id': user.id,
        'clerk_user_id': user.clerk_user_id,
        'username': user.username,
        'created': existing is None
    }
