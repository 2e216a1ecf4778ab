"""Permission classes for owner-facing endpoints."""

from __future__ import annotations

from rest_framework import permissions  # type: ignore


class IsTenant(permissions.BasePermission):
    """
    Allows access only to authenticated users with the tenant role.

    Staff and superusers are let through as well.
    """

    message = "Only tenants can manage properties."

    def has_permission(self, request, view) -> bool:  # type: ignore
        user = request.user
        if not user or not user.is_authenticated:
            return False
        if getattr(user, "is_staff", False) or getattr(user, "is_superuser", False):
            return True
        return hasattr(user, "is_tenant") and user.is_tenant()
