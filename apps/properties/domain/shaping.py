"""
Result Shaper

Output records for search/detail, sorting, pagination and calendar
response shaping. Everything here is pure and works on already-resolved data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic, List, Optional, Sequence, Tuple, TypeVar

from shared.domain.value_objects import DateRange

from .availability import RoomAvailability, expand_calendar
from .exceptions import PageOutOfRange
from .projections import CitySnapshot, PictureSnapshot, PropertyCalendar, RoomSnapshot

SORT_KEYS = ("name", "price")
SORT_ORDERS = ("asc", "desc")

T = TypeVar("T")


@dataclass(frozen=True)
class ProcessedRoom:
    room: RoomSnapshot
    availability: RoomAvailability
    window: DateRange

    @property
    def price(self) -> Decimal:
        return self.availability.price

    def to_dict(self) -> dict:
        return {
            "id": self.room.id,
            "name": self.room.name,
            "description": self.room.description,
            "picture": self.room.picture,
            "max_guests": self.room.max_guests,
            "quantity": self.room.quantity,
            "base_price": self.room.price,
            "price": self.availability.price,
            "total_price": self.availability.total_price,
            "availability": self.availability.to_dict(self.window),
            "peak_season_rates": [rate.to_dict() for rate in self.availability.peak_rates],
        }


@dataclass(frozen=True)
class ProcessedProperty:
    id: int
    name: str
    location: str
    category_name: Optional[str]
    main_picture: Optional[str]
    available_rooms: Tuple[ProcessedRoom, ...]
    description: str = ""
    city: Optional[CitySnapshot] = None
    pictures: Tuple[PictureSnapshot, ...] = ()

    @property
    def lowest_price(self) -> Decimal:
        """Representative price: the cheapest eligible room."""
        return min(room.price for room in self.available_rooms)

    @property
    def total_available_rooms(self) -> int:
        return len(self.available_rooms)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "category_name": self.category_name,
            "main_picture": self.main_picture,
            "lowest_price": self.lowest_price,
            "available_rooms": [room.to_dict() for room in self.available_rooms],
            "total_available_rooms": self.total_available_rooms,
        }

    def to_detail_dict(self) -> dict:
        data = self.to_dict()
        data["description"] = self.description
        data["city"] = self.city.to_dict() if self.city else None
        data["pictures"] = [picture.to_dict() for picture in self.pictures]
        return data


@dataclass(frozen=True)
class Pagination:
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    @property
    def offset(self) -> int:
        return (self.current_page - 1) * self.items_per_page

    def to_dict(self) -> dict:
        return {
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_items": self.total_items,
            "items_per_page": self.items_per_page,
            "has_next_page": self.has_next_page,
            "has_previous_page": self.has_previous_page,
        }


@dataclass(frozen=True)
class PaginatedResult(Generic[T]):
    data: List[T] = field(default_factory=list)
    pagination: Optional[Pagination] = None

    @property
    def is_empty(self) -> bool:
        return not self.data


def build_pagination(total_items: int, page: int, page_size: int) -> Pagination:
    """
    Pagination metadata for ``total_items``.

    Raises PageOutOfRange when ``page`` is past the last page. An empty
    result set (zero pages) is never checked against ``page``.
    """
    total_pages = math.ceil(total_items / page_size) if total_items else 0
    if total_pages > 0 and page > total_pages:
        raise PageOutOfRange(page, total_pages)
    return Pagination(
        current_page=page,
        total_pages=total_pages,
        total_items=total_items,
        items_per_page=page_size,
    )


def paginate(items: Sequence[T], page: int, page_size: int) -> PaginatedResult[T]:
    pagination = build_pagination(len(items), page, page_size)
    start = pagination.offset
    return PaginatedResult(data=list(items[start:start + page_size]), pagination=pagination)


def sort_properties(
    properties: Sequence[ProcessedProperty],
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
) -> List[ProcessedProperty]:
    """
    Sort by ``name`` or by representative ``price``.

    Without ``sort_by`` the input order is kept as is.
    """
    if not sort_by:
        return list(properties)
    if sort_by not in SORT_KEYS:
        raise ValueError(f"Unsupported sort key: {sort_by}")

    reverse = sort_order == "desc"
    if sort_by == "price":
        return sorted(properties, key=lambda prop: prop.lowest_price, reverse=reverse)
    return sorted(properties, key=lambda prop: (prop.name.casefold(), prop.name), reverse=reverse)


def shape_calendar(prop: PropertyCalendar, year: int, month: int) -> dict:
    """Calendar payload: property identity, the requested month and per-room days."""
    return {
        "property_id": prop.id,
        "property_name": prop.name,
        "year": year,
        "month": month,
        "rooms": [
            {
                "room_id": room.id,
                "room_name": room.name,
                "base_price": room.price,
                "quantity": room.quantity,
                "max_guests": room.max_guests,
                "days": [day.to_dict() for day in expand_calendar(room, year, month)],
            }
            for room in prop.rooms
        ],
    }
