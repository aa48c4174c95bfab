"""Request/response schemas for location and store endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _require_text(v: str | None) -> str:
    """Reject blank or explicit null values for required text columns."""
    if v is None or not v.strip():
        raise ValueError("must be a non-empty string")
    return v.strip()


class LocationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., description="Free-text description")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _require_text(v)


class LocationUpdate(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: str | None) -> str:
        return _require_text(v)


class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class StoreCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    location_id: int | None = Field(default=None, description="Existing location id")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _require_text(v)


class StoreUpdate(BaseModel):
    """Partial update; only fields present in the body are applied. location_id=null detaches."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    location_id: int | None = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: str | None) -> str:
        return _require_text(v)


class StoreOut(BaseModel):
    """Store with its nested location (null when detached)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    location_id: int | None = None
    location: LocationOut | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
