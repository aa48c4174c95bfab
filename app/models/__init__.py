"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.location import Location, Store
from app.models.user import User, UserRole

__all__ = ["Base", "Location", "Store", "User", "UserRole"]
