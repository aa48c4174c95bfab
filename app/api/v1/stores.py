"""CRUD endpoints for stores. Responses embed the store's location."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models import Location, Store
from app.schemas.auth import CurrentUser, MessageResponse
from app.schemas.location import StoreCreate, StoreOut, StoreUpdate

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_user)])


def _get_or_404(db: Session, store_id: int) -> Store:
    store = db.get(Store, store_id)
    if store is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Store not found")
    return store


def _check_location(db: Session, location_id: int | None) -> None:
    if location_id is not None and db.get(Location, location_id) is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"location_id {location_id} does not reference an existing location.",
        )


@router.post("", response_model=StoreOut, status_code=status.HTTP_201_CREATED)
def create_store(
    body: StoreCreate,
    db: Annotated[Session, Depends(get_db)],
) -> Store:
    _check_location(db, body.location_id)
    store = Store(**body.model_dump())
    db.add(store)
    db.commit()
    db.refresh(store)
    logger.info("Created store id=%s", store.id)
    return store


@router.get("", response_model=list[StoreOut])
def list_stores(db: Annotated[Session, Depends(get_db)]) -> list[Store]:
    return db.query(Store).order_by(Store.id).all()


@router.get("/{store_id}", response_model=StoreOut)
def get_store(store_id: int, db: Annotated[Session, Depends(get_db)]) -> Store:
    return _get_or_404(db, store_id)


@router.put("/{store_id}", response_model=StoreOut)
def update_store(
    store_id: int,
    body: StoreUpdate,
    db: Annotated[Session, Depends(get_db)],
) -> Store:
    """Apply only the fields present in the body; location_id=null detaches the store."""
    store = _get_or_404(db, store_id)
    changes = body.model_dump(exclude_unset=True)
    if "location_id" in changes:
        _check_location(db, changes["location_id"])
    for key, value in changes.items():
        setattr(store, key, value)
    db.commit()
    db.refresh(store)
    return store


@router.delete("/{store_id}", response_model=MessageResponse)
def delete_store(
    store_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> MessageResponse:
    store = _get_or_404(db, store_id)
    db.delete(store)
    db.commit()
    logger.info("Deleted store id=%s by user id=%s", store_id, user.id)
    return MessageResponse(message="Store deleted")
