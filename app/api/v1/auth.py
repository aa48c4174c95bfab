"""Auth routes (register, login, refresh, logout, profile) and the get_current_user gate."""

import json
from typing import Annotated, Any

import jwt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import decode_access_token
from app.models.user import UserRole
from app.schemas.auth import (
    AccessTokenResponse,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    PublicUser,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
)
from app.services import auth as auth_service
from app.services.credential_store import EmailInUseError, UserStore
from app.services.token_registry import RefreshTokenRegistry, get_refresh_registry

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer access token and return the identity in its claims.

    The credential store is not queried; role or account changes apply once the
    access token expires.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise _unauthorized("Invalid or expired token")
    try:
        return CurrentUser(id=int(payload["sub"]), role=UserRole(payload.get("role")))
    except (KeyError, TypeError, ValueError):
        raise _unauthorized("Invalid token payload")


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """Create an account. Does not log the user in; call /auth/login afterwards."""
    try:
        user = auth_service.register_user(db, body.name, body.email, body.password)
    except EmailInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    return RegisterResponse(
        message="Registration successful. Please login to continue.",
        user=PublicUser.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    registry: Annotated[RefreshTokenRegistry, Depends(get_refresh_registry)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns an access token and a refresh token.
    Include the access token in the Authorization header as: Bearer <token>
    """
    try:
        result = auth_service.login(db, registry, body.email, body.password)
    except auth_service.InvalidCredentialsError as e:
        raise _unauthorized(e.message) from e
    return LoginResponse(
        token=result.access_token,
        refresh_token=result.refresh_token,
        user=PublicUser.model_validate(result.user),
    )


# Clients send {"refreshToken": "..."}; anything else is read leniently instead of 422.
_REFRESH_TOKEN_BODY = {
    "requestBody": {
        "required": False,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "properties": {"refreshToken": {"type": "string"}},
                }
            }
        },
    }
}


async def refresh_token_from_body(request: Request) -> Any:
    """
    Dependency: the raw refreshToken value from a JSON object body.

    Empty, non-JSON and non-object bodies give None. The value is not type-checked
    here; the refresh and logout handlers decide what a non-string means.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(data, dict):
        return None
    return data.get("refreshToken", data.get("refresh_token"))


@router.post("/refresh", response_model=AccessTokenResponse, openapi_extra=_REFRESH_TOKEN_BODY)
def refresh(
    db: Annotated[Session, Depends(get_db)],
    registry: Annotated[RefreshTokenRegistry, Depends(get_refresh_registry)],
    refresh_token: Annotated[Any, Depends(refresh_token_from_body)],
) -> AccessTokenResponse:
    """Exchange a registered refresh token for a new access token."""
    if refresh_token is None or refresh_token == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing refresh token",
        )
    try:
        token = auth_service.refresh_access_token(db, registry, refresh_token)
    except auth_service.InvalidRefreshTokenError as e:
        raise _unauthorized(e.message) from e
    return AccessTokenResponse(token=token)


@router.post("/logout", response_model=MessageResponse, openapi_extra=_REFRESH_TOKEN_BODY)
def logout(
    registry: Annotated[RefreshTokenRegistry, Depends(get_refresh_registry)],
    refresh_token: Annotated[Any, Depends(refresh_token_from_body)],
) -> MessageResponse:
    """Revoke a refresh token. Always succeeds, whatever the body holds."""
    auth_service.logout(registry, refresh_token)
    return MessageResponse(message="Logged out")


@router.get("/profile", response_model=ProfileResponse)
def profile(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ProfileResponse:
    """Return the authenticated user's id, name, email and role."""
    user = UserStore(db).get_by_id(current_user.id)
    if user is None:
        raise _unauthorized("User not found")
    return ProfileResponse(user=UserProfile.model_validate(user))
