"""In-memory property store used by application-layer tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from itertools import count
from typing import Dict, List, Optional

from django.db import OperationalError  # type: ignore

from apps.properties.domain.predicates import SearchPredicate
from apps.properties.domain.projections import (
    CategorySnapshot,
    OwnedProperty,
    OwnedRoom,
    PropertyCalendar,
    PropertyFields,
    PropertyWithRooms,
    RoomFields,
)
from apps.properties.infrastructure.store import PropertyStore


class InMemoryPropertyStore(PropertyStore):
    """
    Keeps projections in plain lists.

    With ``apply_predicate=False`` every stored property is returned by a
    search, so callers can check what the query service drops on its own.
    """

    def __init__(self, properties=(), categories=(), owned=(), apply_predicate: bool = True):
        self.properties: List[PropertyWithRooms] = list(properties)
        self.categories: List[CategorySnapshot] = list(categories)
        self.owned: List[OwnedProperty] = list(owned)
        self.rooms: List[OwnedRoom] = [room for prop in self.owned for room in prop.rooms]
        self.apply_predicate = apply_predicate
        self._ids = count(1000)

    def _by_id(self, property_id: int) -> Optional[PropertyWithRooms]:
        return next((prop for prop in self.properties if prop.id == property_id), None)

    def find_properties_matching(self, predicate: SearchPredicate) -> List[PropertyWithRooms]:
        if not self.apply_predicate:
            return list(self.properties)
        return [prop for prop in self.properties if predicate.matches(prop)]

    def find_property_by_id(self, property_id, window, guests):  # type: ignore
        return self._by_id(property_id)

    def find_property_for_calendar(self, property_id, year, month):  # type: ignore
        prop = self._by_id(property_id)
        if prop is None:
            return None
        rooms = tuple(room for room in prop.rooms if room.quantity > 0)
        return PropertyCalendar(id=prop.id, name=prop.name, rooms=rooms)

    def find_categories(self, tenant_id):  # type: ignore
        visible = [c for c in self.categories if c.is_global or c.tenant_id == tenant_id]
        return sorted(visible, key=lambda c: (not c.is_global, c.id))

    def _owned_by(self, tenant_id) -> List[OwnedProperty]:  # type: ignore
        owned = [prop for prop in self.owned if prop.tenant_id == tenant_id]
        return sorted(owned, key=lambda prop: (prop.created_at, prop.id), reverse=True)

    def find_owned_properties(self, tenant_id, offset, limit):  # type: ignore
        owned = self._owned_by(tenant_id)
        return owned[offset:offset + limit], len(owned)

    def find_owned_property(self, tenant_id, property_id):  # type: ignore
        return next((prop for prop in self._owned_by(tenant_id) if prop.id == property_id), None)

    def find_owned_rooms(self, tenant_id, offset, limit):  # type: ignore
        mine = {prop.id for prop in self._owned_by(tenant_id)}
        rooms = [room for room in reversed(self.rooms) if room.property_id in mine]
        return rooms[offset:offset + limit], len(rooms)

    def insert_property(self, fields: PropertyFields, tenant_id) -> OwnedProperty:  # type: ignore
        values: Dict = fields.supplied()
        prop = OwnedProperty(
            id=next(self._ids),
            tenant_id=tenant_id,
            name=values["name"],
            description=values["description"],
            location=values["location"],
            created_at=datetime.now(timezone.utc),
        )
        self.owned.append(prop)
        return prop

    def update_property(self, tenant_id, property_id, fields):  # type: ignore
        prop = self.find_owned_property(tenant_id, property_id)
        if prop is None:
            return None
        values = {k: v for k, v in fields.supplied().items() if k in ("name", "description", "location")}
        updated = replace(prop, **values)
        self.owned[self.owned.index(prop)] = updated
        return updated

    def insert_room(self, fields: RoomFields) -> OwnedRoom:
        room = OwnedRoom(
            id=next(self._ids),
            property_id=fields.property_id,
            name=fields.name,
            description=fields.description,
            price=fields.price,
            max_guests=fields.max_guests,
            quantity=fields.quantity,
            picture=fields.picture,
        )
        self.rooms.append(room)
        return room


class FailingPropertyStore(InMemoryPropertyStore):
    """Every read fails the way a lost database connection would."""

    def find_properties_matching(self, predicate):  # type: ignore
        raise OperationalError("connection lost")
