"""Tagged response envelope used by every property endpoint.

Every body carries ``success``, ``code`` and ``message``; payload keys are
merged in at the top level.
"""

from __future__ import annotations

from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore

from .domain.exceptions import PropertyQueryError

ERROR_STATUS = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "no_available_rooms": status.HTTP_200_OK,
    "empty_result": status.HTTP_200_OK,
    "page_out_of_range": status.HTTP_400_BAD_REQUEST,
    "not_authenticated": status.HTTP_401_UNAUTHORIZED,
    "invalid_reference": status.HTTP_400_BAD_REQUEST,
    "forbidden": status.HTTP_403_FORBIDDEN,
}


def envelope(success: bool, code: str, message: str, status_code: int = status.HTTP_200_OK, **payload) -> Response:
    body = {"success": success, "code": code, "message": message}
    body.update(payload)
    return Response(body, status=status_code)


def ok(message: str, status_code: int = status.HTTP_200_OK, **payload) -> Response:
    return envelope(True, "ok", message, status_code, **payload)


def created(message: str, **payload) -> Response:
    return envelope(True, "created", message, status.HTTP_201_CREATED, **payload)


def from_query_error(exc: PropertyQueryError) -> Response:
    """
    Render an expected outcome of the query/command layer.

    Empty results keep ``success`` true and carry an empty ``data`` list so
    clients can tell them apart from not-found.
    """
    code = exc.code
    status_code = ERROR_STATUS.get(code, status.HTTP_400_BAD_REQUEST)
    payload = {}
    if code == "empty_result":
        payload = {"data": [], "pagination": None}
    elif code == "page_out_of_range":
        payload = {"total_pages": exc.total_pages}  # type: ignore[attr-defined]
    elif code == "no_available_rooms":
        payload = {"data": None}
    return envelope(code == "empty_result", code, str(exc), status_code, **payload)


def validation_failed(errors) -> Response:  # type: ignore
    return envelope(
        False,
        "validation_error",
        "Invalid request parameters",
        status.HTTP_400_BAD_REQUEST,
        errors=errors,
    )


def server_error() -> Response:
    return envelope(
        False,
        "server_error",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def forbidden(message: str) -> Response:
    return envelope(False, "forbidden", message, status.HTTP_403_FORBIDDEN)
