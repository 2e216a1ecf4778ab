"""Integration tests for the tenant-facing property management endpoints."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.properties.models import City, Property, PropertyCategory, Room
from apps.users.models import User


class OwnerEndpointTests(APITestCase):
    def setUp(self) -> None:
        self.tenant = User.objects.create_user(
            email="tenant@example.com",
            password="TenantPass123",
            role=User.RoleChoices.TENANT,
        )
        self.other_tenant = User.objects.create_user(
            email="rival@example.com",
            password="RivalPass123",
            role=User.RoleChoices.TENANT,
        )
        self.guest = User.objects.create_user(email="guest@example.com", password="GuestPass123")
        self.city = City.objects.create(name="Denpasar")
        self.category = PropertyCategory.objects.create(name="Villa")

    def make_property(self, owner: User, name: str = "Beach House") -> Property:
        return Property.objects.create(
            tenant=owner,
            name=name,
            description="Right on the beach",
            location="Kuta",
            city=self.city,
        )

    def test_anonymous_caller_is_rejected(self) -> None:
        response = self.client.get(reverse("owned-property-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["code"], "not_authenticated")
        self.assertIn("message", response.data)
        self.assertIn("Bearer", response["WWW-Authenticate"])

    def test_invalid_token_is_not_authenticated(self) -> None:
        self.client.credentials(HTTP_AUTHORIZATION="Bearer not-a-real-token")
        response = self.client.get(reverse("owned-room-list"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "not_authenticated")

    def test_guest_cannot_manage_properties(self) -> None:
        self.client.force_authenticate(self.guest)
        response = self.client.post(reverse("owned-property-list"), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(response.data["success"])
        self.assertEqual(response.data["code"], "forbidden")
        self.assertEqual(response.data["message"], "Only tenants can manage properties.")

    def test_token_login_grants_access(self) -> None:
        token = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "tenant@example.com", "password": "TenantPass123"},
            format="json",
        )
        self.assertEqual(token.status_code, status.HTTP_200_OK, token.data)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.data['access']}")
        response = self.client.get(reverse("owned-property-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["code"], "empty_result")

    def test_create_property(self) -> None:
        self.client.force_authenticate(self.tenant)
        payload = {
            "name": "  Hillside Retreat  ",
            "description": "Quiet villa with rice field views",
            "location": "Ubud",
            "city_id": self.city.id,
            "category_id": self.category.id,
        }
        response = self.client.post(reverse("owned-property-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["data"]["name"], "Hillside Retreat")
        self.assertEqual(response.data["data"]["category"]["name"], "Villa")
        self.assertTrue(Property.objects.filter(tenant=self.tenant, name="Hillside Retreat").exists())

    def test_create_property_validates_lengths(self) -> None:
        self.client.force_authenticate(self.tenant)
        payload = {"name": "ab", "description": "short", "location": "  x ", "city_id": 0}
        response = self.client.post(reverse("owned-property-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("name", "description", "location", "city_id"):
            self.assertIn(field, response.data["errors"])

    def test_owned_listing_is_paginated_newest_first(self) -> None:
        props = [self.make_property(self.tenant, f"House {i}") for i in range(6)]
        self.make_property(self.other_tenant, "Not mine")
        self.client.force_authenticate(self.tenant)

        first = self.client.get(reverse("owned-property-list"))
        self.assertEqual(first.status_code, status.HTTP_200_OK)
        self.assertEqual([p["id"] for p in first.data["data"]], [p.id for p in reversed(props)][:5])
        self.assertEqual(first.data["pagination"]["total_pages"], 2)

        second = self.client.get(reverse("owned-property-list"), {"page": 2})
        self.assertEqual([p["id"] for p in second.data["data"]], [props[0].id])

        beyond = self.client.get(reverse("owned-property-list"), {"page": 3})
        self.assertEqual(beyond.status_code, status.HTTP_400_BAD_REQUEST)

    def test_owned_detail(self) -> None:
        prop = self.make_property(self.tenant)
        Room.objects.create(property=prop, name="Suite", description="Ocean suite", price=Decimal("300"))
        self.client.force_authenticate(self.tenant)

        response = self.client.get(reverse("owned-property-detail", args=[prop.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["room_count"], 1)

        self.client.force_authenticate(self.other_tenant)
        response = self.client.get(reverse("owned-property-detail", args=[prop.id]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update_property(self) -> None:
        prop = self.make_property(self.tenant)
        self.client.force_authenticate(self.tenant)

        response = self.client.patch(
            reverse("owned-property-detail", args=[prop.id]),
            {"location": "Seminyak"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        prop.refresh_from_db()
        self.assertEqual(prop.location, "Seminyak")
        self.assertEqual(prop.name, "Beach House")

    def test_update_requires_a_field(self) -> None:
        prop = self.make_property(self.tenant)
        self.client.force_authenticate(self.tenant)
        response = self.client.patch(reverse("owned-property-detail", args=[prop.id]), {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_foreign_property_is_not_found(self) -> None:
        prop = self.make_property(self.other_tenant)
        self.client.force_authenticate(self.tenant)
        response = self.client.patch(
            reverse("owned-property-detail", args=[prop.id]),
            {"name": "Taken over"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        prop.refresh_from_db()
        self.assertEqual(prop.name, "Beach House")

    def room_payload(self, property_id: int, **overrides) -> dict:  # type: ignore
        payload = {
            "property_id": property_id,
            "name": "Garden Room",
            "description": "Ground floor room facing the garden",
            "price": "120.00",
            "max_guests": 2,
        }
        payload.update(overrides)
        return payload

    def test_create_room_and_list_rooms(self) -> None:
        prop = self.make_property(self.tenant)
        self.client.force_authenticate(self.tenant)

        response = self.client.post(reverse("owned-room-list"), self.room_payload(prop.id), format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["data"]["quantity"], 1)
        self.assertEqual(response.data["data"]["property_name"], "Beach House")

        listing = self.client.get(reverse("owned-room-list"))
        self.assertEqual(listing.status_code, status.HTTP_200_OK)
        self.assertEqual(listing.data["pagination"]["total_items"], 1)

    def test_create_room_validates_bounds(self) -> None:
        prop = self.make_property(self.tenant)
        self.client.force_authenticate(self.tenant)
        payload = self.room_payload(prop.id, price="0", max_guests=51, quantity=101, name="A")
        response = self.client.post(reverse("owned-room-list"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        for field in ("price", "max_guests", "quantity", "name"):
            self.assertIn(field, response.data["errors"])

    def test_room_on_foreign_property_is_not_found(self) -> None:
        prop = self.make_property(self.other_tenant)
        self.client.force_authenticate(self.tenant)
        response = self.client.post(reverse("owned-room-list"), self.room_payload(prop.id), format="json")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Room.objects.filter(property=prop).exists())
