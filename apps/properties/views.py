"""Property API views."""

from __future__ import annotations

import logging

from django.conf import settings  # type: ignore
from django.db import DatabaseError  # type: ignore
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema  # type: ignore
from rest_framework import exceptions, permissions, serializers  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import IsTenant

from . import responses
from .application.commands import PropertyCommandHandler
from .application.queries import PropertyQueryService
from .domain.exceptions import AuthenticationRequired, PropertyQueryError
from .infrastructure.store import DjangoPropertyStore
from .serializers import (
    CalendarParamsSerializer,
    CategoryParamsSerializer,
    DetailParamsSerializer,
    PageParamsSerializer,
    PropertyUpdateSerializer,
    PropertyWriteSerializer,
    RoomWriteSerializer,
    SearchParamsSerializer,
)

logger = logging.getLogger(__name__)


class PropertyAPIView(APIView):
    """
    Base view for property endpoints.

    Builds the application services around ``store_class`` and renders
    domain outcomes and every request failure (authentication, permission,
    validation, store) as the tagged envelope from ``responses``.
    """

    store_class = DjangoPropertyStore
    permission_classes = [permissions.AllowAny]

    def get_store(self):  # type: ignore
        return self.store_class()

    def get_query_service(self) -> PropertyQueryService:
        return PropertyQueryService(
            self.get_store(),
            search_page_size=settings.PROPERTY_SEARCH_PAGE_SIZE,
            owned_page_size=settings.OWNED_PROPERTIES_PAGE_SIZE,
            rooms_page_size=settings.OWNED_ROOMS_PAGE_SIZE,
        )

    def get_command_handler(self) -> PropertyCommandHandler:
        return PropertyCommandHandler(self.get_store())

    def tenant_id(self):  # type: ignore
        user = self.request.user
        return user.id if user and user.is_authenticated else None

    def handle_exception(self, exc):  # type: ignore
        if isinstance(exc, PropertyQueryError):
            return responses.from_query_error(exc)
        if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
            response = responses.from_query_error(AuthenticationRequired(str(exc.default_detail)))
            auth_header = self.get_authenticate_header(self.request)
            if auth_header:
                response['WWW-Authenticate'] = auth_header
            return response
        if isinstance(exc, exceptions.PermissionDenied):
            return responses.forbidden(str(exc.detail))
        if isinstance(exc, serializers.ValidationError):
            return responses.validation_failed(exc.detail)
        if isinstance(exc, DatabaseError):
            logger.error(f"Store failure in {self.__class__.__name__}: {exc}", exc_info=True)
            return responses.server_error()
        return super().handle_exception(exc)


class OwnerAPIView(PropertyAPIView):
    permission_classes = [IsTenant]


# ----- public endpoints ---------------------------------------------------------


@extend_schema(
    tags=["properties"],
    summary="Search properties with eligible rooms for a stay",
    parameters=[SearchParamsSerializer],
    responses={
        200: OpenApiResponse(description="A page of properties or an empty result"),
        400: OpenApiResponse(description="Validation error or page out of range"),
    },
)
class PropertySearchView(PropertyAPIView):

    def get(self, request):  # type: ignore
        params = SearchParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        page = self.get_query_service().search_page(params.to_criteria())
        return responses.ok(
            "Properties found",
            data=[prop.to_dict() for prop in page.result.data],
            categories=list(page.categories),
            pagination=page.result.pagination.to_dict(),
        )


@extend_schema(
    tags=["properties"],
    summary="Property detail with eligible rooms for a stay",
    parameters=[DetailParamsSerializer],
    responses={
        200: OpenApiResponse(description="Property detail, or a no-available-rooms signal"),
        404: OpenApiResponse(description="Property not found"),
    },
)
class PropertyDetailView(PropertyAPIView):

    def get(self, request):  # type: ignore
        params = DetailParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        prop = self.get_query_service().detail(params.to_criteria())
        return responses.ok("Property found", data=prop.to_detail_dict())


@extend_schema(
    tags=["properties"],
    summary="Per-day room availability for one month",
    parameters=[
        OpenApiParameter("year", type=int, location=OpenApiParameter.QUERY, required=True),
        OpenApiParameter("month", type=int, location=OpenApiParameter.QUERY, required=True),
    ],
    responses={200: OpenApiResponse(description="Calendar"), 404: OpenApiResponse(description="Property not found")},
)
class PropertyCalendarView(PropertyAPIView):

    def get(self, request, property_id):  # type: ignore
        params = CalendarParamsSerializer(data={**request.query_params.dict(), "property_id": property_id})
        params.is_valid(raise_exception=True)

        calendar = self.get_query_service().calendar(params.to_criteria())
        return responses.ok("Calendar loaded", data=calendar)


@extend_schema(
    tags=["properties"],
    summary="Global categories and a tenant's private categories",
    parameters=[CategoryParamsSerializer],
    responses={200: OpenApiResponse(description="Categories")},
)
class PropertyCategoryListView(PropertyAPIView):

    def get(self, request):  # type: ignore
        params = CategoryParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        categories = self.get_query_service().categories(params.validated_data.get("tenant_id"))
        if not categories:
            return responses.envelope(True, "empty_result", "No categories found", data=[])
        return responses.ok("Categories found", data=[category.to_dict() for category in categories])


# ----- owner endpoints ----------------------------------------------------------


class OwnedPropertyListView(OwnerAPIView):

    @extend_schema(
        tags=["owner"],
        summary="Properties owned by the caller, newest first",
        parameters=[PageParamsSerializer],
        responses={200: OpenApiResponse(description="A page of owned properties")},
    )
    def get(self, request):  # type: ignore
        params = PageParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        result = self.get_query_service().list_owned(self.tenant_id(), params.validated_data["page"])
        return responses.ok(
            "Properties found",
            data=[prop.to_dict() for prop in result.data],
            pagination=result.pagination.to_dict(),
        )

    @extend_schema(
        tags=["owner"],
        summary="Create a property",
        request=PropertyWriteSerializer,
        responses={201: OpenApiResponse(description="Created property")},
    )
    def post(self, request):  # type: ignore
        payload = PropertyWriteSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        prop = self.get_command_handler().create_property(self.tenant_id(), payload.to_fields())
        return responses.created("Property created", data=prop.to_dict())


class OwnedPropertyDetailView(OwnerAPIView):

    @extend_schema(
        tags=["owner"],
        summary="One owned property with rooms and pictures",
        responses={200: OpenApiResponse(description="Owned property"), 404: OpenApiResponse(description="Not found")},
    )
    def get(self, request, property_id):  # type: ignore
        prop = self.get_query_service().owned_detail(self.tenant_id(), property_id)
        return responses.ok("Property found", data=prop.to_dict())

    @extend_schema(
        tags=["owner"],
        summary="Update supplied fields of an owned property",
        request=PropertyUpdateSerializer,
        responses={200: OpenApiResponse(description="Updated property"), 404: OpenApiResponse(description="Not found")},
    )
    def patch(self, request, property_id):  # type: ignore
        payload = PropertyUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        prop = self.get_command_handler().update_property(self.tenant_id(), property_id, payload.to_fields())
        return responses.ok("Property updated", data=prop.to_dict())


class OwnedRoomListView(OwnerAPIView):

    @extend_schema(
        tags=["owner"],
        summary="Rooms across the caller's properties, newest first",
        parameters=[PageParamsSerializer],
        responses={200: OpenApiResponse(description="A page of owned rooms")},
    )
    def get(self, request):  # type: ignore
        params = PageParamsSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)

        result = self.get_query_service().list_owned_rooms(self.tenant_id(), params.validated_data["page"])
        return responses.ok(
            "Rooms found",
            data=[room.to_dict() for room in result.data],
            pagination=result.pagination.to_dict(),
        )

    @extend_schema(
        tags=["owner"],
        summary="Add a room to an owned property",
        request=RoomWriteSerializer,
        responses={201: OpenApiResponse(description="Created room"), 404: OpenApiResponse(description="Not found")},
    )
    def post(self, request):  # type: ignore
        payload = RoomWriteSerializer(data=request.data)
        payload.is_valid(raise_exception=True)

        room = self.get_command_handler().create_room(self.tenant_id(), payload.to_fields())
        return responses.created("Room created", data=room.to_dict())
