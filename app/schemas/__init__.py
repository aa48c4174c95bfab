"""Pydantic request/response schemas."""

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
    UsersListResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.location import (
    LocationCreate,
    LocationOut,
    LocationUpdate,
    StoreCreate,
    StoreOut,
    StoreUpdate,
)

__all__ = [
    "AccessTokenResponse",
    "CurrentUser",
    "HealthResponse",
    "LocationCreate",
    "LocationOut",
    "LocationUpdate",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ProfileResponse",
    "PublicUser",
    "RegisterRequest",
    "RegisterResponse",
    "StoreCreate",
    "StoreOut",
    "StoreUpdate",
    "UserProfile",
    "UsersListResponse",
]
