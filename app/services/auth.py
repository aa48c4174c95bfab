"""Registration, login, token refresh and logout on top of the credential store and token registry."""

import logging
from dataclasses import dataclass

import jwt
from sqlalchemy.orm import Session

from app.core.security import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    hash_password,
    token_expiry,
    verify_password,
)
from app.models.user import User
from app.services.credential_store import UserStore
from app.services.token_registry import RefreshTokenRegistry

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both failure paths cost one bcrypt check.
_DUMMY_HASH = hash_password("timing-equalization-dummy")


class AuthServiceError(Exception):
    """Base class for auth failures; message is safe to return to the client."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCredentialsError(AuthServiceError):
    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InvalidRefreshTokenError(AuthServiceError):
    def __init__(self) -> None:
        super().__init__("Invalid refresh token")


@dataclass
class LoginResult:
    access_token: str
    refresh_token: str
    user: User


def register_user(db: Session, name: str, email: str, password: str) -> User:
    """Create an account. No tokens are issued; the client logs in separately."""
    user = UserStore(db).create(name=name, email=email, password=password)
    logger.info("Registered user id=%s", user.id)
    return user


def login(db: Session, registry: RefreshTokenRegistry, email: str, password: str) -> LoginResult:
    """
    Check credentials and mint an access/refresh token pair.

    Unknown email and wrong password raise the same InvalidCredentialsError.
    """
    user = UserStore(db).get_by_email(email)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        logger.warning("Login failed: unknown email")
        raise InvalidCredentialsError()
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: bad password for user id=%s", user.id)
        raise InvalidCredentialsError()

    access_token = create_access_token(sub=user.id, role=user.role.value)
    refresh_token = create_refresh_token(sub=user.id)
    registry.put(refresh_token, user.id, token_expiry(decode_refresh_token(refresh_token)))
    logger.info("Login: user id=%s", user.id)
    return LoginResult(access_token=access_token, refresh_token=refresh_token, user=user)


def refresh_access_token(db: Session, registry: RefreshTokenRegistry, refresh_token: object) -> str:
    """
    Mint a new access token from a registered refresh token.

    The refresh token itself is not rotated. The new access token carries the
    user's current role from the store.
    """
    if not isinstance(refresh_token, str):
        logger.info("Refresh rejected: token is not a string")
        raise InvalidRefreshTokenError()
    try:
        payload = decode_refresh_token(refresh_token)
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, TypeError, ValueError) as e:
        logger.info("Refresh rejected: token failed verification")
        raise InvalidRefreshTokenError() from e

    stored_user_id = registry.get(refresh_token)
    if stored_user_id is None or stored_user_id != user_id:
        logger.info("Refresh rejected: token not registered for user id=%s", user_id)
        raise InvalidRefreshTokenError()

    user = UserStore(db).get_by_id(user_id)
    if user is None:
        registry.delete(refresh_token)
        logger.info("Refresh rejected: user id=%s no longer exists", user_id)
        raise InvalidRefreshTokenError()

    return create_access_token(sub=user.id, role=user.role.value)


def logout(registry: RefreshTokenRegistry, refresh_token: object) -> None:
    """Revoke a refresh token. Idempotent; unknown, missing or non-string tokens are ignored."""
    if isinstance(refresh_token, str) and refresh_token:
        registry.delete(refresh_token)
        logger.info("Logout: refresh token revoked")
