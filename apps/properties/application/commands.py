"""
Property Command Handlers

Owner-facing writes. Referenced category/city ids are only checked for
being well-formed upstream; whether they exist is left to the store.

Commands:
- create_property: Insert a property owned by the caller
- update_property: Change supplied fields of an owned property
- create_room: Add a room to an owned property
"""

from typing import Optional
from uuid import UUID
import logging

from apps.properties.domain.exceptions import AuthenticationRequired, PropertyNotFound
from apps.properties.domain.projections import OwnedProperty, OwnedRoom, PropertyFields, RoomFields

logger = logging.getLogger(__name__)


class PropertyCommandHandler:

    def __init__(self, store):
        self.store = store

    def create_property(self, tenant_id: Optional[UUID], fields: PropertyFields) -> OwnedProperty:
        if tenant_id is None:
            raise AuthenticationRequired()

        prop = self.store.insert_property(fields, tenant_id)
        logger.info(f"Tenant {tenant_id} created property {prop.id}")
        return prop

    def update_property(
        self, tenant_id: Optional[UUID], property_id: int, fields: PropertyFields
    ) -> OwnedProperty:
        """
        Raises:
            PropertyNotFound: the property is missing or owned by another tenant
        """
        if tenant_id is None:
            raise AuthenticationRequired()

        prop = self.store.update_property(tenant_id, property_id, fields)
        if prop is None:
            raise PropertyNotFound(property_id)

        logger.info(
            f"Tenant {tenant_id} updated property {property_id}: {', '.join(sorted(fields.supplied()))}"
        )
        return prop

    def create_room(self, tenant_id: Optional[UUID], fields: RoomFields) -> OwnedRoom:
        if tenant_id is None:
            raise AuthenticationRequired()

        # Rooms can only be added to the caller's own properties
        if self.store.find_owned_property(tenant_id, fields.property_id) is None:
            raise PropertyNotFound(fields.property_id)

        room = self.store.insert_room(fields)
        logger.info(f"Tenant {tenant_id} created room {room.id} in property {fields.property_id}")
        return room
