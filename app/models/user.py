"""ORM model for application users (auth and RBAC)."""

import enum

from sqlalchemy import Column, Enum, Integer, String

from app.models.base import Base, TimestampMixin


class UserRole(str, enum.Enum):
    """Closed set of roles; anything else is rejected before it reaches the database."""

    USER = "user"
    ADMIN = "admin"


class User(TimestampMixin, Base):
    """
    User account for JWT authentication and role-based access control.

    password_hash is only ever written through UserStore, which hashes on save.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(
            UserRole,
            name="user_role",
            values_callable=lambda roles: [r.value for r in roles],
            validate_strings=True,
        ),
        nullable=False,
        default=UserRole.USER,
    )
