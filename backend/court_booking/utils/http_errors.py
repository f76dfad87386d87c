"""
Translate BookingError kinds into HTTP errors.

Response body: {"detail": {"kind": "<ErrorKind>", "message": "<reason>"}}
"""

from fastapi import HTTPException

from court_booking.errors import BookingError, ErrorKind

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.PAST_DATE: 400,
    ErrorKind.PAST_TIME: 400,
    ErrorKind.OUTSIDE_OPERATING_HOURS: 400,
    ErrorKind.PERMISSION_DENIED: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.SLOT_CONFLICT: 409,
    ErrorKind.MAINTENANCE_BLOCK: 409,
    ErrorKind.INVALID_TRANSITION: 409,
    ErrorKind.STORAGE_FAILURE: 503,
}


def to_http_exception(exc: BookingError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND.get(exc.kind, 400),
        detail={"kind": exc.kind.value, "message": exc.message},
    )
