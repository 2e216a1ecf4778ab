"""
Property Store

The store is the only place that talks to the database. The query service
and command handler receive a store instance in their constructor; tests
pass an in-memory double implementing the same interface.

Every read returns a typed projection from ``apps.properties.domain.projections``.
Nested room records are pre-filtered to the requested window:
- bookings: non-canceled, check_in < window.end AND check_out > window.start
- unavailability: start_date < window.end AND end_date > window.start
- peak rates: start_date <= window.end AND end_date >= window.start
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from django.db import IntegrityError, transaction  # type: ignore
from django.db.models import Case, Count, IntegerField, Prefetch, Q, Value, When  # type: ignore

from apps.bookings.models import Booking
from shared.domain.value_objects import DateRange

from ..domain.exceptions import InvalidReference
from ..domain.predicates import SearchPredicate
from ..domain.projections import (
    BookingSnapshot,
    CategorySnapshot,
    CitySnapshot,
    OwnedProperty,
    OwnedRoom,
    PeakRateSnapshot,
    PictureSnapshot,
    PropertyCalendar,
    PropertyFields,
    PropertyWithRooms,
    RoomFields,
    RoomSnapshot,
    UnavailabilitySnapshot,
)
from ..filters import PropertySearchFilterSet
from ..models import (
    PeakSeasonRate,
    Property,
    PropertyCategory,
    PropertyPicture,
    Room,
    RoomUnavailability,
)

logger = logging.getLogger(__name__)


class PropertyStore(ABC):
    """Store collaborator used by the property query and command layers."""

    @abstractmethod
    def find_properties_matching(self, predicate: SearchPredicate) -> List[PropertyWithRooms]:
        """Properties matching the predicate with eligible rooms and window records."""

    @abstractmethod
    def find_property_by_id(
        self, property_id: int, window: DateRange, guests: int
    ) -> Optional[PropertyWithRooms]:
        """One property with eligible rooms and window records, or None."""

    @abstractmethod
    def find_property_for_calendar(
        self, property_id: int, year: int, month: int
    ) -> Optional[PropertyCalendar]:
        """One property with rooms (quantity > 0) and records of the month, or None."""

    @abstractmethod
    def find_categories(self, tenant_id: Optional[UUID]) -> List[CategorySnapshot]:
        """Global categories first, then the tenant's own; by id inside each group."""

    @abstractmethod
    def find_owned_properties(
        self, tenant_id: UUID, offset: int, limit: int
    ) -> Tuple[List[OwnedProperty], int]:
        """A page of the tenant's properties (newest first) and the total count."""

    @abstractmethod
    def find_owned_property(self, tenant_id: UUID, property_id: int) -> Optional[OwnedProperty]:
        """The tenant's property by id, or None if missing or owned by someone else."""

    @abstractmethod
    def find_owned_rooms(
        self, tenant_id: UUID, offset: int, limit: int
    ) -> Tuple[List[OwnedRoom], int]:
        """A page of rooms across the tenant's properties (newest first) and the total count."""

    @abstractmethod
    def insert_property(self, fields: PropertyFields, tenant_id: UUID) -> OwnedProperty:
        """Insert a property owned by the tenant."""

    @abstractmethod
    def update_property(
        self, tenant_id: UUID, property_id: int, fields: PropertyFields
    ) -> Optional[OwnedProperty]:
        """Update supplied fields; None if the tenant does not own the property."""

    @abstractmethod
    def insert_room(self, fields: RoomFields) -> OwnedRoom:
        """Insert a room into an existing property."""


# ----- ORM row -> projection --------------------------------------------------


def _city(city) -> Optional[CitySnapshot]:  # type: ignore
    if city is None:
        return None
    return CitySnapshot(id=city.id, name=city.name, type=city.type)


def _category(category) -> Optional[CategorySnapshot]:  # type: ignore
    if category is None:
        return None
    return CategorySnapshot(id=category.id, name=category.name, tenant_id=category.tenant_id)


def _pictures(prop: Property) -> Tuple[PictureSnapshot, ...]:
    return tuple(
        PictureSnapshot(id=picture.id, file_path=picture.file_path, is_main=picture.is_main)
        for picture in prop.pictures.all()
    )


def _room(room: Room) -> RoomSnapshot:
    return RoomSnapshot(
        id=room.id,
        name=room.name,
        description=room.description,
        price=room.price,
        max_guests=room.max_guests,
        quantity=room.quantity,
        picture=room.picture,
        bookings=tuple(
            BookingSnapshot(
                id=booking.id,
                check_in=booking.check_in,
                check_out=booking.check_out,
                status=booking.status,
            )
            for booking in room.bookings.all()
        ),
        unavailabilities=tuple(
            UnavailabilitySnapshot(
                id=block.id,
                start_date=block.start_date,
                end_date=block.end_date,
                reason=block.reason,
            )
            for block in room.unavailabilities.all()
        ),
        peak_rates=tuple(
            PeakRateSnapshot(
                id=rate.id,
                start_date=rate.start_date,
                end_date=rate.end_date,
                price=rate.price,
            )
            for rate in room.peak_season_rates.all()
        ),
    )


def _owned_room(room: Room, property_name: str = "") -> OwnedRoom:
    return OwnedRoom(
        id=room.id,
        property_id=room.property_id,
        property_name=property_name,
        name=room.name,
        description=room.description,
        price=room.price,
        max_guests=room.max_guests,
        quantity=room.quantity,
        picture=room.picture,
        created_at=room.created_at,
        updated_at=room.updated_at,
    )


def _owned_property(prop: Property) -> OwnedProperty:
    rooms = tuple(_owned_room(room, prop.name) for room in prop.rooms.all())
    return OwnedProperty(
        id=prop.id,
        tenant_id=prop.tenant_id,
        name=prop.name,
        description=prop.description,
        location=prop.location,
        category=_category(prop.category),
        city=_city(prop.city),
        pictures=_pictures(prop),
        rooms=rooms,
        room_count=getattr(prop, "room_count", len(rooms)),
        created_at=prop.created_at,
        updated_at=prop.updated_at,
    )


def _property_with_rooms(prop: Property) -> PropertyWithRooms:
    return PropertyWithRooms(
        id=prop.id,
        tenant_id=prop.tenant_id,
        name=prop.name,
        description=prop.description,
        location=prop.location,
        city=_city(prop.city),
        category=_category(prop.category),
        pictures=_pictures(prop),
        rooms=tuple(_room(room) for room in prop.rooms.all()),
    )


# ----- Django implementation ---------------------------------------------------


class DjangoPropertyStore(PropertyStore):
    """PropertyStore backed by the Django ORM."""

    @staticmethod
    def _window_records(window: DateRange) -> List[Prefetch]:
        return [
            Prefetch(
                "bookings",
                queryset=Booking.objects.exclude(status=Booking.Status.CANCELED)
                .filter(check_in__lt=window.end_date, check_out__gt=window.start_date)
                .order_by("id"),
            ),
            Prefetch(
                "unavailabilities",
                queryset=RoomUnavailability.objects.filter(
                    start_date__lt=window.end_date,
                    end_date__gt=window.start_date,
                ).order_by("id"),
            ),
            Prefetch(
                "peak_season_rates",
                queryset=PeakSeasonRate.objects.filter(
                    start_date__lte=window.end_date,
                    end_date__gte=window.start_date,
                ).order_by("id"),
            ),
        ]

    def _eligible_rooms(self, window: DateRange, guests: int) -> Prefetch:
        rooms = (
            Room.objects.filter(max_guests__gte=guests, quantity__gt=0)
            .prefetch_related(*self._window_records(window))
            .order_by("id")
        )
        return Prefetch("rooms", queryset=rooms)

    def find_properties_matching(self, predicate: SearchPredicate) -> List[PropertyWithRooms]:
        base = Property.objects.select_related("city", "category").prefetch_related(
            Prefetch("pictures", queryset=PropertyPicture.objects.filter(is_main=True)),
            self._eligible_rooms(predicate.window, predicate.guests),
        )
        queryset = PropertySearchFilterSet.for_predicate(predicate, queryset=base).qs.order_by("id")
        properties = [_property_with_rooms(prop) for prop in queryset]
        logger.debug(f"Store matched {len(properties)} properties for city {predicate.city_id}")
        return properties

    def find_property_by_id(
        self, property_id: int, window: DateRange, guests: int
    ) -> Optional[PropertyWithRooms]:
        prop = (
            Property.objects.select_related("city", "category")
            .prefetch_related(
                Prefetch("pictures", queryset=PropertyPicture.objects.order_by("-is_main", "id")),
                self._eligible_rooms(window, guests),
            )
            .filter(pk=property_id)
            .first()
        )
        return _property_with_rooms(prop) if prop else None

    def find_property_for_calendar(
        self, property_id: int, year: int, month: int
    ) -> Optional[PropertyCalendar]:
        month_range = DateRange.for_month(year, month)
        rooms = (
            Room.objects.filter(quantity__gt=0)
            .prefetch_related(*self._window_records(month_range))
            .order_by("id")
        )
        prop = (
            Property.objects.only("id", "name")
            .prefetch_related(Prefetch("rooms", queryset=rooms))
            .filter(pk=property_id)
            .first()
        )
        if prop is None:
            return None
        return PropertyCalendar(
            id=prop.id,
            name=prop.name,
            rooms=tuple(_room(room) for room in prop.rooms.all()),
        )

    def find_categories(self, tenant_id: Optional[UUID]) -> List[CategorySnapshot]:
        visible = Q(tenant__isnull=True)
        if tenant_id is not None:
            visible |= Q(tenant_id=tenant_id)
        queryset = (
            PropertyCategory.objects.filter(visible)
            .annotate(
                is_private=Case(
                    When(tenant__isnull=True, then=Value(0)),
                    default=Value(1),
                    output_field=IntegerField(),
                )
            )
            .order_by("is_private", "id")
        )
        return [_category(category) for category in queryset]

    def _owned_queryset(self, tenant_id: UUID):  # type: ignore
        return (
            Property.objects.filter(tenant_id=tenant_id)
            .select_related("city", "category")
            .prefetch_related(
                Prefetch("pictures", queryset=PropertyPicture.objects.order_by("-is_main", "id")),
                Prefetch("rooms", queryset=Room.objects.order_by("id")),
            )
            .annotate(room_count=Count("rooms", distinct=True))
        )

    def find_owned_properties(
        self, tenant_id: UUID, offset: int, limit: int
    ) -> Tuple[List[OwnedProperty], int]:
        total = Property.objects.filter(tenant_id=tenant_id).count()
        page = self._owned_queryset(tenant_id).order_by("-created_at", "-id")[offset:offset + limit]
        return [_owned_property(prop) for prop in page], total

    def find_owned_property(self, tenant_id: UUID, property_id: int) -> Optional[OwnedProperty]:
        prop = self._owned_queryset(tenant_id).filter(pk=property_id).first()
        return _owned_property(prop) if prop else None

    def find_owned_rooms(
        self, tenant_id: UUID, offset: int, limit: int
    ) -> Tuple[List[OwnedRoom], int]:
        queryset = Room.objects.filter(property__tenant_id=tenant_id).select_related("property")
        total = queryset.count()
        page = queryset.order_by("-created_at", "-id")[offset:offset + limit]
        return [_owned_room(room, room.property.name) for room in page], total

    def insert_property(self, fields: PropertyFields, tenant_id: UUID) -> OwnedProperty:
        try:
            with transaction.atomic():
                prop = Property.objects.create(tenant_id=tenant_id, **fields.supplied())
        except IntegrityError as exc:
            raise InvalidReference("Category or city does not exist") from exc
        return self.find_owned_property(tenant_id, prop.pk)

    def update_property(
        self, tenant_id: UUID, property_id: int, fields: PropertyFields
    ) -> Optional[OwnedProperty]:
        prop = Property.objects.filter(tenant_id=tenant_id, pk=property_id).first()
        if prop is None:
            return None
        changes = fields.supplied()
        for attr, value in changes.items():
            setattr(prop, attr, value)
        try:
            with transaction.atomic():
                prop.save(update_fields=[*changes.keys(), "updated_at"])
        except IntegrityError as exc:
            raise InvalidReference("Category or city does not exist") from exc
        return self.find_owned_property(tenant_id, property_id)

    def insert_room(self, fields: RoomFields) -> OwnedRoom:
        room = Room.objects.create(
            property_id=fields.property_id,
            name=fields.name,
            description=fields.description,
            price=fields.price,
            max_guests=fields.max_guests,
            quantity=fields.quantity,
            picture=fields.picture,
        )
        room = Room.objects.select_related("property").get(pk=room.pk)
        return _owned_room(room, room.property.name)
