"""Password hashing and bearer tokens for ClipVox accounts."""
import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from app.config import settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a secret
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    """Hash a password with a fresh bcrypt salt."""
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against a stored bcrypt hash.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("ascii"))
    except ValueError as e:
        logger.error(f"Stored password hash is unusable: {e}")
        return False


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Issue a signed token whose ``sub`` claim is the user id."""
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes)
    claims = {
        "sub": str(subject),
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + lifetime).timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Claims of a valid, unexpired token, or None."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
