"""User persistence with an explicit pre-save hook that hashes passwords on write."""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


class EmailInUseError(Exception):
    """Raised when a user with the same email already exists."""

    def __init__(self, message: str = "Email already in use") -> None:
        self.message = message
        super().__init__(message)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserStore:
    """
    Credential Store over a SQLAlchemy session.

    All writes go through prepare_changes(), which turns a plaintext "password"
    into "password_hash". On update the hash is recomputed only when the new
    password differs from the stored one.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == normalize_email(email)).first()

    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.id).all()

    def prepare_changes(self, changes: dict[str, Any], user: User | None = None) -> dict[str, Any]:
        """Pre-save hook: hash password if present and changed; coerce role and email."""
        prepared = dict(changes)
        if "password" in prepared:
            plain = prepared.pop("password")
            if user is None or not verify_password(plain, user.password_hash):
                prepared["password_hash"] = hash_password(plain)
        if "email" in prepared:
            prepared["email"] = normalize_email(prepared["email"])
        if "role" in prepared:
            prepared["role"] = UserRole(prepared["role"])
        return prepared

    def create(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Insert a user. Raises EmailInUseError if the email is taken (also on a racing insert)."""
        if self.get_by_email(email) is not None:
            raise EmailInUseError()
        fields = self.prepare_changes(
            {"name": name, "email": email, "password": password, "role": role}
        )
        user = User(**fields)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailInUseError() from e
        self.db.refresh(user)
        return user

    def update(self, user: User, **changes: Any) -> User:
        """
        Apply changes to an existing user through the pre-save hook. This is the
        write path for profile and password updates, not yet exposed over HTTP.
        """
        for key, value in self.prepare_changes(changes, user=user).items():
            setattr(user, key, value)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise EmailInUseError() from e
        self.db.refresh(user)
        return user
