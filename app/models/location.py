"""ORM models for locations and the stores that belong to them."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base, TimestampMixin


class Location(TimestampMixin, Base):
    """A physical location; has many stores."""

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    # Deleting a location detaches its stores (location_id set to NULL).
    stores = relationship("Store", back_populates="location")


class Store(TimestampMixin, Base):
    """A store, optionally placed at a location."""

    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    location_id = Column(
        Integer,
        ForeignKey("locations.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    location = relationship("Location", back_populates="stores", lazy="joined")
