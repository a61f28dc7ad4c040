"""Password hashing and JWT creation/verification for authentication."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from ebookshare.core.config import Settings
from ebookshare.core.errors import InvalidToken

# Bcrypt cost (rounds) used when no settings are passed.
BCRYPT_ROUNDS = 8

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128
EMAIL_MAX_LEN = 255


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Fresh salt on every call."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Never raises on mismatch."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """Create a JWT access token with sub (user id), iat and exp."""
    issued_at = now or datetime.now(UTC)
    expire = issued_at + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": expire,
    }
    return jwt.encode(
        payload,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """
    Decode and validate JWT; return payload (sub, exp, iat).
    Raises jwt.PyJWTError on invalid or expired token.
    """
    return jwt.decode(
        token,
        settings.JWT_SECRET.get_secret_value(),
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["sub", "exp"]},
    )


def verify_access_token(token: str, settings: Settings) -> int:
    """
    Return the user id bound to the token, or raise InvalidToken.

    Purely cryptographic: a user deleted after issuance keeps a valid token until exp.
    """
    try:
        payload = decode_access_token(token, settings)
    except jwt.PyJWTError as e:
        raise InvalidToken("Unauthorized!") from e
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidToken("Unauthorized!") from e
