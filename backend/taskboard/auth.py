"""
Bearer authentication dependency for FastAPI.

Verifies the access token on each request and resolves it to a User row.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.database import get_session
from taskboard.exceptions import UnauthorizedError
from taskboard.logging_config import get_logger
from taskboard.models import User
from taskboard.security import TokenError, decode_access_token

logger = get_logger(__name__)

# auto_error=False so a missing header goes through our own 401 shape
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Verify the bearer token and return the authenticated user.

    Raises:
        UnauthorizedError: If the header is missing or malformed, the token is
            invalid or expired, or its subject no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Not authenticated")

    try:
        user_id = decode_access_token(credentials.credentials)
    except TokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        raise UnauthorizedError(str(e)) from e

    user = await session.get(User, user_id)
    if user is None:
        logger.warning(f"Token subject {user_id} does not match any user")
        raise UnauthorizedError("Invalid authentication token")

    logger.debug(f"Authenticated user: {user.id} ({user.email})")
    return user
