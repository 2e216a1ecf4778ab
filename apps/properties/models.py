"""Property domain models.

Properties are owned by a tenant and offer one or more room types. Each room
type has a quantity of identical units, owner-declared unavailability blocks
and peak season rates overriding its base nightly price.
"""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class City(models.Model):
    """Lookup of cities properties are located in."""

    class CityType(models.TextChoices):
        CITY = "city", _("City")
        REGENCY = "regency", _("Regency")

    name = models.CharField(max_length=100)
    type = models.CharField(max_length=20, choices=CityType.choices, default=CityType.CITY)

    class Meta:
        verbose_name = _("City")
        verbose_name_plural = _("Cities")
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class PropertyCategory(models.Model):
    """Property category; a category without a tenant is global."""

    name = models.CharField(max_length=100)
    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="property_categories",
        help_text=_("Tenant owning a private category; empty for global categories."),
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Property category")
        verbose_name_plural = _("Property categories")
        ordering = ["id"]

    def __str__(self) -> str:
        return self.name


class Property(models.Model):
    """Lodging property owned by a tenant."""

    tenant = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="properties",
    )
    name = models.CharField(max_length=255)
    description = models.TextField()
    location = models.CharField(max_length=255)
    city = models.ForeignKey(
        City,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="properties",
    )
    category = models.ForeignKey(
        PropertyCategory,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="properties",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Property")
        verbose_name_plural = _("Properties")
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["city"], name="properties__city_id_6c8d52_idx"),
            models.Index(fields=["tenant", "-created_at"], name="properties__tenant__0f3a1b_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class PropertyPicture(models.Model):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="pictures")
    file_path = models.CharField(max_length=500)
    is_main = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Property picture")
        verbose_name_plural = _("Property pictures")
        ordering = ["-is_main", "id"]

    def __str__(self) -> str:
        return f"{self.property.name} [{self.file_path}]"


class Room(models.Model):
    """Room type: ``quantity`` identical units at base nightly ``price``."""

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="rooms")
    name = models.CharField(max_length=100)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(0)],
        help_text=_("Base nightly rate."),
    )
    max_guests = models.PositiveSmallIntegerField(default=1)
    quantity = models.PositiveSmallIntegerField(
        default=1,
        help_text=_("Number of identical units; 0 means the room is never offered."),
    )
    picture = models.CharField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
        ordering = ["id"]
        indexes = [
            models.Index(fields=["property", "max_guests", "quantity"], name="properties__propert_4e2c9a_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.property.name}: {self.name}"


class RoomUnavailability(models.Model):
    """Owner-declared block-out (maintenance, manual hold)."""

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="unavailabilities")
    start_date = models.DateField()
    end_date = models.DateField()
    reason = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Room unavailability")
        verbose_name_plural = _("Room unavailabilities")
        ordering = ["start_date", "id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="room_unavailability_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date"], name="properties__room_id_9b71de_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room}: {self.start_date} - {self.end_date}"


class PeakSeasonRate(models.Model):
    """Date-ranged price overriding the room base price."""

    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="peak_season_rates")
    start_date = models.DateField()
    end_date = models.DateField()
    price = models.DecimalField(max_digits=12, decimal_places=2, validators=[MinValueValidator(0)])
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Peak season rate")
        verbose_name_plural = _("Peak season rates")
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(end_date__gte=models.F("start_date")),
                name="peak_season_rate_valid_date_range",
            ),
        ]
        indexes = [
            models.Index(fields=["room", "start_date", "end_date"], name="properties__room_id_2d5f80_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.room}: {self.start_date} - {self.end_date} @ {self.price}"
