"""CRUD endpoints for locations. All routes require a valid access token."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models import Location
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.location import LocationCreate, LocationOut, LocationUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])


def _get_or_404(db: Session, location_id: int) -> Location:
    location = db.get(Location, location_id)
    if location is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Location not found")
    return location


@router.post("", response_model=LocationOut, status_code=status.HTTP_201_CREATED)
def create_location(
    body: LocationCreate,
    db: Annotated[Session, Depends(get_db)],
) -> Location:
    location = Location(**body.model_dump())
    db.add(location)
    db.commit()
    db.refresh(location)
    logger.info("Created location id=%s", location.id)
    return location


@router.get("", response_model=list[LocationOut])
def list_locations(db: Annotated[Session, Depends(get_db)]) -> list[Location]:
    return db.query(Location).order_by(Location.id).all()


@router.get("/{location_id}", response_model=LocationOut)
def get_location(location_id: int, db: Annotated[Session, Depends(get_db)]) -> Location:
    return _get_or_404(db, location_id)


@router.put("/{location_id}", response_model=LocationOut)
def update_location(
    location_id: int,
    body: LocationUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Location:
    """Apply only the fields present in the body."""
    location = _get_or_404(db, location_id)
    for key, value in body.model_dump(exclude_unset=True).items():
        setattr(location, key, value)
    db.commit()
    db.refresh(location)
    return location


@router.delete("/{location_id}", response_model=MessageResponse)
def delete_location(
    location_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    """Delete a location; its stores stay, with location_id cleared."""
    location = _get_or_404(db, location_id)
    db.delete(location)
    db.commit()
    logger.info("Deleted location id=%s by user id=%s", location_id, user.id)
    return MessageResponse(message="Location deleted")
