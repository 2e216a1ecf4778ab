"""Admin registrations for properties domain."""

from __future__ import annotations

from django.contrib import admin

from .models import City, PeakSeasonRate, Property, PropertyCategory, PropertyPicture, Room, RoomUnavailability


@admin.register(City)
class CityAdmin(admin.ModelAdmin):
    list_display = ("name", "type")
    list_filter = ("type",)
    search_fields = ("name",)


@admin.register(PropertyCategory)
class PropertyCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "tenant", "created_at")
    search_fields = ("name", "tenant__email")


class PropertyPictureInline(admin.TabularInline):
    model = PropertyPicture
    extra = 0
    fields = ("file_path", "is_main")


class RoomInline(admin.TabularInline):
    model = Room
    extra = 0
    fields = ("name", "price", "max_guests", "quantity")


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "city", "category", "tenant", "created_at")
    list_filter = ("city", "category")
    search_fields = ("name", "location", "tenant__email")
    inlines = (PropertyPictureInline, RoomInline)
    readonly_fields = ("created_at", "updated_at")


class RoomUnavailabilityInline(admin.TabularInline):
    model = RoomUnavailability
    extra = 0
    fields = ("start_date", "end_date", "reason")


class PeakSeasonRateInline(admin.TabularInline):
    model = PeakSeasonRate
    extra = 0
    fields = ("start_date", "end_date", "price")


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("name", "property", "price", "max_guests", "quantity")
    search_fields = ("name", "property__name")
    inlines = (RoomUnavailabilityInline, PeakSeasonRateInline)
    readonly_fields = ("created_at", "updated_at")
