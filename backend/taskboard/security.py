"""
Password hashing and bearer token helpers.

Passwords are stored as bcrypt hashes. Access tokens are HS256 JWTs whose
subject is the user id.
"""

import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from taskboard.config import DEFAULT_JWT_SECRET, Settings, get_settings
from taskboard.logging_config import get_logger

logger = get_logger(__name__)


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


def check_jwt_secret(settings: Settings) -> None:
    """
    Refuse to sign tokens with the built-in placeholder secret.

    With debug enabled the placeholder is tolerated but logged.

    Raises:
        RuntimeError: If the placeholder is configured and debug is off.
    """
    if settings.jwt_secret != DEFAULT_JWT_SECRET:
        return
    if not settings.debug:
        raise RuntimeError("TASKBOARD_JWT_SECRET must be set outside debug mode")
    logger.warning("Using the default JWT secret; set TASKBOARD_JWT_SECRET before deploying")


def hash_password(password: str) -> str:
    """Return a bcrypt hash suitable for storage."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored hash; False on any mismatch."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(user_id: uuid.UUID, expires_delta: timedelta | None = None) -> str:
    """Issue a signed token for the given user."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify a token and return the user id it was issued for.

    Raises:
        TokenError: If the token is expired, badly signed, or has no usable subject.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid authentication token") from e

    try:
        return uuid.UUID(payload["sub"])
    except (TypeError, ValueError) as e:
        raise TokenError("Invalid token subject") from e
