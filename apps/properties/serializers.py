"""Serializers for the properties domain.

Most serializers here only validate query parameters or owner input and turn
them into the criteria / field objects of the application layer. Output is
rendered from the projections themselves.
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.utils import timezone  # type: ignore
from rest_framework import serializers  # type: ignore

from .application.queries import CalendarCriteria, DetailCriteria, SearchCriteria
from .domain.projections import PropertyFields, RoomFields
from .domain.shaping import SORT_KEYS, SORT_ORDERS


class StayDatesMixin:
    """Shared check-in / check-out rules."""

    def validate_check_in(self, value):  # type: ignore
        if value < timezone.localdate():
            raise serializers.ValidationError("Check-in date cannot be in the past.")
        return value

    def validate(self, attrs):  # type: ignore
        attrs = super().validate(attrs)  # type: ignore[misc]
        if attrs["check_in"] >= attrs["check_out"]:
            raise serializers.ValidationError({"check_out": "Check-out date must be after check-in date."})
        return attrs


class PageParamsSerializer(serializers.Serializer):
    page = serializers.IntegerField(min_value=1, default=1)


class SearchParamsSerializer(StayDatesMixin, serializers.Serializer):
    city_id = serializers.IntegerField(min_value=1)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = serializers.IntegerField(min_value=1)
    page = serializers.IntegerField(min_value=1, default=1)
    property_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    category_name = serializers.CharField(required=False, allow_blank=True, max_length=255)
    sort_by = serializers.ChoiceField(choices=SORT_KEYS, required=False)
    sort_order = serializers.ChoiceField(choices=SORT_ORDERS, default="asc")

    def to_criteria(self) -> SearchCriteria:
        data = self.validated_data
        return SearchCriteria(
            city_id=data["city_id"],
            check_in=data["check_in"],
            check_out=data["check_out"],
            guests=data["guests"],
            page=data["page"],
            property_name=data.get("property_name") or None,
            category_name=data.get("category_name") or None,
            sort_by=data.get("sort_by"),
            sort_order=data["sort_order"],
        )


class DetailParamsSerializer(StayDatesMixin, serializers.Serializer):
    property_id = serializers.IntegerField(min_value=1)
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    guests = serializers.IntegerField(min_value=1)

    def to_criteria(self) -> DetailCriteria:
        return DetailCriteria(**self.validated_data)


class CalendarParamsSerializer(serializers.Serializer):
    property_id = serializers.IntegerField(min_value=1)
    year = serializers.IntegerField()
    month = serializers.IntegerField(min_value=1, max_value=12)

    def validate_year(self, value: int) -> int:
        low, high = settings.CALENDAR_MIN_YEAR, settings.CALENDAR_MAX_YEAR
        if not low <= value <= high:
            raise serializers.ValidationError(f"Year must be between {low} and {high}.")
        return value

    def to_criteria(self) -> CalendarCriteria:
        return CalendarCriteria(**self.validated_data)


class CategoryParamsSerializer(serializers.Serializer):
    tenant_id = serializers.UUIDField(required=False, allow_null=True)


class PropertyWriteSerializer(serializers.Serializer):
    """Create payload. Whitespace is trimmed before the length checks."""

    name = serializers.CharField(min_length=3, max_length=255)
    description = serializers.CharField(min_length=10)
    location = serializers.CharField(min_length=3, max_length=255)
    category_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    city_id = serializers.IntegerField(min_value=1, required=False, allow_null=True)

    def to_fields(self) -> PropertyFields:
        return PropertyFields(**self.validated_data)


class PropertyUpdateSerializer(PropertyWriteSerializer):
    """Partial update; every field is optional but one is required."""

    def __init__(self, *args, **kwargs):  # type: ignore
        kwargs.setdefault("partial", True)
        super().__init__(*args, **kwargs)

    def validate(self, attrs):  # type: ignore
        if not any(value is not None for value in attrs.values()):
            raise serializers.ValidationError("At least one field must be provided.")
        return attrs


class RoomWriteSerializer(serializers.Serializer):
    property_id = serializers.IntegerField(min_value=1)
    name = serializers.CharField(min_length=2, max_length=100)
    description = serializers.CharField(min_length=10, max_length=1000)
    price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.01"))
    max_guests = serializers.IntegerField(min_value=1, max_value=50)
    quantity = serializers.IntegerField(min_value=1, max_value=100, default=1)
    picture = serializers.CharField(required=False, allow_null=True, allow_blank=True, max_length=255)

    def to_fields(self) -> RoomFields:
        data = dict(self.validated_data)
        data["picture"] = data.get("picture") or None
        return RoomFields(**data)
