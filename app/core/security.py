"""Password hashing and JWT creation/verification for authentication."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt

from app.core.config import settings

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

# Min/max lengths for name and password validation.
NAME_MIN_LEN = 1
NAME_MAX_LEN = 255
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 128
# bcrypt only reads the first 72 bytes; longer passwords are rejected, never truncated.
PASSWORD_MAX_BYTES = 72

TOKEN_TYPE_ACCESS = "access"
TOKEN_TYPE_REFRESH = "refresh"


def hash_password(plain_password: str) -> str:
    """
    Hash a plain-text password for storage. Do not store plain passwords.
    Raises ValueError for passwords over PASSWORD_MAX_BYTES UTF-8 bytes.
    """
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Over-long passwords never match."""
    pw_bytes = plain_password.encode("utf-8")
    if len(pw_bytes) > PASSWORD_MAX_BYTES:
        return False
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def sign_token(claims: dict[str, Any], secret: str, ttl: timedelta) -> str:
    """Sign claims into a JWT with iat=now and exp=now+ttl."""
    now = datetime.now(UTC)
    payload = dict(claims)
    payload["iat"] = now
    payload["exp"] = now + ttl
    return jwt.encode(payload, secret, algorithm=settings.JWT_ALGORITHM)


def verify_token(token: str, secret: str) -> dict[str, Any]:
    """
    Verify signature and expiry; return the claims.
    Raises jwt.InvalidTokenError on a bad signature, malformed or expired token.
    """
    return jwt.decode(
        token,
        secret,
        algorithms=[settings.JWT_ALGORITHM],
        options={"require": ["exp", "iat", "sub"]},
    )


def _secret() -> str:
    return settings.JWT_SECRET.get_secret_value()


def create_access_token(sub: int, role: str) -> str:
    """Create a short-lived access token carrying user id and role."""
    return sign_token(
        {"sub": str(sub), "role": role, "type": TOKEN_TYPE_ACCESS},
        _secret(),
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(sub: int) -> str:
    """Create a long-lived refresh token. jti keeps tokens issued in the same second distinct."""
    return sign_token(
        {"sub": str(sub), "type": TOKEN_TYPE_REFRESH, "jti": uuid.uuid4().hex},
        _secret(),
        timedelta(minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES),
    )


def _decode_typed(token: str, expected_type: str) -> dict[str, Any]:
    payload = verify_token(token, _secret())
    if payload.get("type") != expected_type:
        raise jwt.InvalidTokenError(f"Expected a {expected_type} token")
    return payload


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate an access token; return payload (sub, role, type, exp, iat).
    Raises jwt.InvalidTokenError on invalid, expired or non-access tokens.
    """
    return _decode_typed(token, TOKEN_TYPE_ACCESS)


def decode_refresh_token(token: str) -> dict[str, Any]:
    """Decode and validate a refresh token. Raises jwt.InvalidTokenError."""
    return _decode_typed(token, TOKEN_TYPE_REFRESH)


def token_expiry(payload: dict[str, Any]) -> datetime:
    """Return the exp claim of a decoded payload as an aware datetime."""
    return datetime.fromtimestamp(payload["exp"], tz=UTC)
