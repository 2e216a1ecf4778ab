"""Typed read projections returned by the property store.

Each store operation returns exactly one of the shapes below, so call sites
never depend on which related rows a particular query happened to load:

* ``PropertyWithRooms`` -- search and detail. Rooms carry only bookings,
  blocks and peak rates that overlap the requested stay window; canceled
  bookings are never included.
* ``PropertyCalendar`` -- month calendar. Rooms with ``quantity > 0`` and the
  records overlapping the requested month.
* ``OwnedProperty`` / ``OwnedRoom`` -- owner listings, no availability data.
* ``CategorySnapshot`` -- category listing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Tuple
from uuid import UUID

from shared.domain.base import Projection

CANCELED_STATUS = "canceled"


@dataclass(frozen=True)
class BookingSnapshot(Projection):
    check_in: date
    check_out: date
    status: str = "confirmed"

    @property
    def is_canceled(self) -> bool:
        return self.status == CANCELED_STATUS


@dataclass(frozen=True)
class UnavailabilitySnapshot(Projection):
    start_date: date
    end_date: date
    reason: str = ""


@dataclass(frozen=True)
class PeakRateSnapshot(Projection):
    start_date: date
    end_date: date
    price: Decimal

    def covers(self, day: date) -> bool:
        """Closed interval containment: start_date <= day <= end_date."""
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "price": self.price,
        }


@dataclass(frozen=True)
class RoomSnapshot(Projection):
    name: str
    price: Decimal
    max_guests: int
    quantity: int
    description: str = ""
    picture: Optional[str] = None
    bookings: Tuple[BookingSnapshot, ...] = ()
    unavailabilities: Tuple[UnavailabilitySnapshot, ...] = ()
    peak_rates: Tuple[PeakRateSnapshot, ...] = ()


@dataclass(frozen=True)
class PictureSnapshot(Projection):
    file_path: str
    is_main: bool = False

    def to_dict(self) -> dict:
        return {"id": self.id, "file_path": self.file_path, "is_main": self.is_main}


@dataclass(frozen=True)
class CitySnapshot(Projection):
    name: str
    type: str = ""

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "type": self.type}


@dataclass(frozen=True)
class CategorySnapshot(Projection):
    name: str
    tenant_id: Optional[UUID] = None

    @property
    def is_global(self) -> bool:
        return self.tenant_id is None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "tenant_id": str(self.tenant_id) if self.tenant_id else None,
        }


@dataclass(frozen=True)
class PropertyWithRooms(Projection):
    name: str
    location: str = ""
    description: str = ""
    city: Optional[CitySnapshot] = None
    category: Optional[CategorySnapshot] = None
    pictures: Tuple[PictureSnapshot, ...] = ()
    rooms: Tuple[RoomSnapshot, ...] = ()
    tenant_id: Optional[UUID] = None

    @property
    def main_picture(self) -> Optional[str]:
        """File path of the first picture flagged ``is_main``."""
        for picture in self.pictures:
            if picture.is_main:
                return picture.file_path
        return None

    @property
    def category_name(self) -> Optional[str]:
        return self.category.name if self.category else None


@dataclass(frozen=True)
class PropertyCalendar(Projection):
    name: str
    rooms: Tuple[RoomSnapshot, ...] = ()


@dataclass(frozen=True)
class OwnedRoom(Projection):
    property_id: int
    name: str
    price: Decimal
    max_guests: int
    quantity: int
    description: str = ""
    picture: Optional[str] = None
    property_name: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "property_id": self.property_id,
            "property_name": self.property_name,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "max_guests": self.max_guests,
            "quantity": self.quantity,
            "picture": self.picture,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True)
class OwnedProperty(Projection):
    name: str
    description: str
    location: str
    tenant_id: Optional[UUID] = None
    category: Optional[CategorySnapshot] = None
    city: Optional[CitySnapshot] = None
    pictures: Tuple[PictureSnapshot, ...] = ()
    rooms: Tuple[OwnedRoom, ...] = ()
    room_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
            "category": (
                {"id": self.category.id, "name": self.category.name} if self.category else None
            ),
            "city": self.city.to_dict() if self.city else None,
            "pictures": [picture.to_dict() for picture in self.pictures],
            "rooms": [room.to_dict() for room in self.rooms],
            "room_count": self.room_count,
        }


@dataclass(frozen=True)
class PropertyFields:
    """Validated owner input for creating or updating a property.

    ``None`` means "not supplied"; on update only supplied fields change.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    category_id: Optional[int] = None
    city_id: Optional[int] = None

    def supplied(self) -> dict:
        return {key: value for key, value in self.__dict__.items() if value is not None}


@dataclass(frozen=True)
class RoomFields:
    """Validated owner input for creating a room."""

    property_id: int
    name: str
    description: str
    price: Decimal
    max_guests: int
    quantity: int = 1
    picture: Optional[str] = field(default=None)
