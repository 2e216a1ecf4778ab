"""URL routing for the properties domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    OwnedPropertyDetailView,
    OwnedPropertyListView,
    OwnedRoomListView,
    PropertyCalendarView,
    PropertyCategoryListView,
    PropertyDetailView,
    PropertySearchView,
)

urlpatterns = [
    # Guest-facing search
    path("search/", PropertySearchView.as_view(), name="property-search"),
    path("detail/", PropertyDetailView.as_view(), name="property-detail"),
    path("<int:property_id>/calendar/", PropertyCalendarView.as_view(), name="property-calendar"),
    path("categories/", PropertyCategoryListView.as_view(), name="property-categories"),
    # Tenant management
    path("my-properties/", OwnedPropertyListView.as_view(), name="owned-property-list"),
    path("my-properties/<int:property_id>/", OwnedPropertyDetailView.as_view(), name="owned-property-detail"),
    path("my-rooms/", OwnedRoomListView.as_view(), name="owned-room-list"),
]
