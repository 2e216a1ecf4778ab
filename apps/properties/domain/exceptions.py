"""Errors raised by the property query and command layers.

Views translate each of these into a tagged response; none of them is a
server error.
"""

from __future__ import annotations


class PropertyQueryError(Exception):
    """Base class for expected, caller-facing outcomes."""

    code = "error"


class PropertyNotFound(PropertyQueryError):
    code = "not_found"

    def __init__(self, property_id: int):
        self.property_id = property_id
        super().__init__(f"Property {property_id} not found")


class NoAvailableRooms(PropertyQueryError):
    """The property exists but none of its rooms is eligible."""

    code = "no_available_rooms"

    def __init__(self, property_id: int):
        self.property_id = property_id
        super().__init__(f"Property {property_id} has no available rooms for the requested stay")


class EmptyResult(PropertyQueryError):
    """The query succeeded but nothing matched."""

    code = "empty_result"

    def __init__(self, page: int, page_size: int, message: str = "No properties match the search"):
        self.page = page
        self.page_size = page_size
        super().__init__(message)


class PageOutOfRange(PropertyQueryError):
    code = "page_out_of_range"

    def __init__(self, page: int, total_pages: int):
        self.page = page
        self.total_pages = total_pages
        super().__init__(f"Page {page} is not available. Total pages: {total_pages}")


class AuthenticationRequired(PropertyQueryError):
    code = "not_authenticated"

    def __init__(self, message: str = "User is not authenticated"):
        super().__init__(message)


class InvalidReference(PropertyQueryError):
    """The store rejected a write because a referenced row does not exist."""

    code = "invalid_reference"
