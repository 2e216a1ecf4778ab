"""Integration tests for the public property endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from unittest import mock

from django.test import override_settings
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.properties.models import City, PeakSeasonRate, Property, PropertyCategory, Room, RoomUnavailability
from apps.properties.tests.fakes import FailingPropertyStore
from apps.properties.views import PropertySearchView
from apps.users.models import User


class PropertyEndpointTests(APITestCase):
    def setUp(self) -> None:
        self.tenant = User.objects.create_user(
            email="tenant@example.com",
            password="TenantPass123",
            role=User.RoleChoices.TENANT,
        )
        self.city = City.objects.create(name="Yogyakarta")
        self.villa = PropertyCategory.objects.create(name="Villa")
        self.check_in = timezone.localdate() + timedelta(days=10)
        self.check_out = self.check_in + timedelta(days=2)

    def make_property(self, name: str, price: str = "100.00", max_guests: int = 2, **kwargs) -> Property:  # type: ignore
        prop = Property.objects.create(
            tenant=self.tenant,
            name=name,
            description="Quiet place near the palace",
            location="Jalan Malioboro",
            city=self.city,
            **kwargs,
        )
        Room.objects.create(
            property=prop,
            name="Standard",
            description="Standard double room",
            price=Decimal(price),
            max_guests=max_guests,
            quantity=1,
        )
        return prop

    def search_params(self, **overrides) -> dict:  # type: ignore
        params = {
            "city_id": self.city.id,
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "guests": 2,
        }
        params.update(overrides)
        return params

    # ----- search -----

    def test_search_returns_envelope_with_pagination(self) -> None:
        cheap = self.make_property("Cheap Stay", price="80.00", category=self.villa)
        self.make_property("Dear Stay", price="200.00")

        response = self.client.get(reverse("property-search"), self.search_params(sort_by="price"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["data"][0]["id"], cheap.id)
        self.assertEqual(response.data["categories"], ["Villa"])
        self.assertEqual(response.data["pagination"]["total_items"], 2)
        room = response.data["data"][0]["available_rooms"][0]
        self.assertEqual(room["price"], Decimal("80.00"))
        self.assertEqual(room["total_price"], Decimal("160.00"))
        self.assertEqual(room["availability"]["nights"], 2)

    def test_search_surfaces_peak_rates_and_date_conflicts(self) -> None:
        prop = self.make_property("Seasonal")
        room = prop.rooms.get()
        PeakSeasonRate.objects.create(room=room, start_date=self.check_in, end_date=self.check_in, price=Decimal("150"))
        Booking.objects.create(room=room, check_in=self.check_in, check_out=self.check_out, status=Booking.Status.CONFIRMED)

        response = self.client.get(reverse("property-search"), self.search_params())
        room_data = response.data["data"][0]["available_rooms"][0]
        self.assertEqual(room_data["price"], Decimal("150"))
        self.assertEqual(len(room_data["peak_season_rates"]), 1)
        self.assertFalse(room_data["availability"]["is_date_free"])

    def test_search_without_matches_is_empty_result(self) -> None:
        response = self.client.get(reverse("property-search"), self.search_params(guests=5, page=3))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["code"], "empty_result")
        self.assertEqual(response.data["data"], [])

    def test_search_page_out_of_range(self) -> None:
        self.make_property("Only One")
        response = self.client.get(reverse("property-search"), self.search_params(page=2))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "page_out_of_range")
        self.assertEqual(response.data["message"], "Page 2 is not available. Total pages: 1")

    def test_search_requires_mandatory_params(self) -> None:
        response = self.client.get(reverse("property-search"), {"guests": 2})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "validation_error")
        for field in ("city_id", "check_in", "check_out"):
            self.assertIn(field, response.data["errors"])

    def test_search_rejects_reversed_dates(self) -> None:
        params = self.search_params(check_in=self.check_out.isoformat(), check_out=self.check_in.isoformat())
        response = self.client.get(reverse("property-search"), params)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("check_out", response.data["errors"])

    def test_search_rejects_past_check_in(self) -> None:
        yesterday = timezone.localdate() - timedelta(days=1)
        response = self.client.get(reverse("property-search"), self.search_params(check_in=yesterday.isoformat()))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("check_in", response.data["errors"])

    def test_search_rejects_unknown_sort(self) -> None:
        response = self.client.get(reverse("property-search"), self.search_params(sort_by="rating"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("sort_by", response.data["errors"])

    def test_store_failure_is_a_server_error(self) -> None:
        with mock.patch.object(PropertySearchView, "store_class", FailingPropertyStore):
            response = self.client.get(reverse("property-search"), self.search_params())
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["code"], "server_error")
        self.assertNotIn("connection lost", response.data["message"])

    # ----- detail -----

    def detail_params(self, property_id: int, **overrides) -> dict:  # type: ignore
        params = {
            "property_id": property_id,
            "check_in": self.check_in.isoformat(),
            "check_out": self.check_out.isoformat(),
            "guests": 2,
        }
        params.update(overrides)
        return params

    def test_detail(self) -> None:
        prop = self.make_property("Detailed")
        response = self.client.get(reverse("property-detail"), self.detail_params(prop.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["data"]["description"], "Quiet place near the palace")
        self.assertEqual(response.data["data"]["city"]["name"], "Yogyakarta")

    def test_detail_not_found(self) -> None:
        response = self.client.get(reverse("property-detail"), self.detail_params(9999))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "not_found")

    def test_detail_without_eligible_rooms(self) -> None:
        prop = self.make_property("Small", max_guests=1)
        response = self.client.get(reverse("property-detail"), self.detail_params(prop.id))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["code"], "no_available_rooms")
        self.assertFalse(response.data["success"])

    def test_detail_rejects_non_positive_ids(self) -> None:
        response = self.client.get(reverse("property-detail"), self.detail_params(0, guests=0))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("property_id", response.data["errors"])
        self.assertIn("guests", response.data["errors"])

    # ----- calendar -----

    def test_calendar(self) -> None:
        prop = self.make_property("Calendar")
        room = prop.rooms.get()
        RoomUnavailability.objects.create(
            room=room,
            start_date=date(2025, 2, 10),
            end_date=date(2025, 2, 12),
        )
        url = reverse("property-calendar", args=[prop.id])
        response = self.client.get(url, {"year": 2025, "month": 2})
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        days = response.data["data"]["rooms"][0]["days"]
        self.assertEqual(len(days), 28)
        self.assertTrue(days[9]["is_blocked"])
        self.assertFalse(days[8]["is_blocked"])

    def test_calendar_not_found(self) -> None:
        response = self.client.get(reverse("property-calendar", args=[9999]), {"year": 2025, "month": 2})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    @override_settings(CALENDAR_MIN_YEAR=2020, CALENDAR_MAX_YEAR=2030)
    def test_calendar_validates_year_and_month(self) -> None:
        prop = self.make_property("Calendar")
        response = self.client.get(reverse("property-calendar", args=[prop.id]), {"year": 2019, "month": 13})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("year", response.data["errors"])
        self.assertIn("month", response.data["errors"])

    # ----- categories -----

    def test_categories_for_tenant(self) -> None:
        own = PropertyCategory.objects.create(name="Glamping", tenant=self.tenant)
        response = self.client.get(reverse("property-categories"), {"tenant_id": str(self.tenant.id)})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([c["id"] for c in response.data["data"]], [self.villa.id, own.id])

    def test_categories_reject_malformed_tenant(self) -> None:
        response = self.client.get(reverse("property-categories"), {"tenant_id": "not-a-uuid"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("tenant_id", response.data["errors"])
