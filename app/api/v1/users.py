"""User listing for authenticated callers."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser, UserProfile, UsersListResponse
from app.services.credential_store import UserStore

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """List all users (id, name, email, role); no passwords."""
    users = UserStore(db).list_users()
    return UsersListResponse(users=[UserProfile.model_validate(u) for u in users])
