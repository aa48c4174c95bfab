"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.core.security import (
    NAME_MAX_LEN,
    NAME_MIN_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.models.user import UserRole


class RegisterRequest(BaseModel):
    """New account details."""

    name: str = Field(..., min_length=NAME_MIN_LEN, max_length=NAME_MAX_LEN, description="Display name")
    email: EmailStr = Field(..., description="Unique email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: EmailStr = Field(..., description="Email")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")


class PublicUser(BaseModel):
    """User fields safe to return after register/login (no password, no role)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str


class UserProfile(BaseModel):
    """Non-sensitive user attributes for profile and user listing."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole


class RegisterResponse(BaseModel):
    message: str
    user: PublicUser


class LoginResponse(BaseModel):
    """Access and refresh tokens returned after successful login."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., alias="refreshToken", description="JWT refresh token")
    user: PublicUser


class AccessTokenResponse(BaseModel):
    token: str = Field(..., description="New JWT access token")


class MessageResponse(BaseModel):
    message: str


class ProfileResponse(BaseModel):
    user: UserProfile


class UsersListResponse(BaseModel):
    """Response for GET /users."""

    users: list[UserProfile]


class CurrentUser(BaseModel):
    """Authenticated identity taken from access token claims."""

    id: int
    role: UserRole
