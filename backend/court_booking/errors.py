"""
Booking error taxonomy

Every rejection raised by the scheduling core is a BookingError carrying:
- kind: an ErrorKind tag callers can branch on without parsing messages
- a human-readable reason (str(exc))

Rule violations are never retried here. StorageError always chains the
underlying driver exception via ``raise ... from``.
"""

from datetime import date, time
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    PAST_DATE = "PAST_DATE"
    PAST_TIME = "PAST_TIME"
    OUTSIDE_OPERATING_HOURS = "OUTSIDE_OPERATING_HOURS"
    SLOT_CONFLICT = "SLOT_CONFLICT"
    MAINTENANCE_BLOCK = "MAINTENANCE_BLOCK"
    NOT_FOUND = "NOT_FOUND"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    STORAGE_FAILURE = "STORAGE_FAILURE"


class BookingError(Exception):
    """Base exception for booking rejections"""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(BookingError):
    """A required field is missing, blank or malformed"""

    kind = ErrorKind.INVALID_INPUT


class PastDateError(BookingError):
    kind = ErrorKind.PAST_DATE

    def __init__(self, requested: date, message: Optional[str] = None):
        super().__init__(message or f"cannot book a court for a past date ({requested.isoformat()})")
        self.requested = requested


class PastTimeError(BookingError):
    kind = ErrorKind.PAST_TIME

    def __init__(self, requested: time, message: Optional[str] = None):
        super().__init__(message or f"cannot book a court for a time already passed today ({requested:%H:%M})")
        self.requested = requested


class OutsideOperatingHoursError(BookingError):
    kind = ErrorKind.OUTSIDE_OPERATING_HOURS

    def __init__(self, requested: time, opening: time, closing: time):
        super().__init__(
            f"booking time {requested:%H:%M} is outside operating hours ({opening:%H:%M}-{closing:%H:%M})"
        )
        self.requested = requested
        self.opening = opening
        self.closing = closing


class SlotConflictError(BookingError):
    """The exact (court, date, start time) slot is already reserved"""

    kind = ErrorKind.SLOT_CONFLICT

    def __init__(self, court_id: int, day: date, start_time: time, court_name: Optional[str] = None):
        label = court_name or f"court {court_id}"
        super().__init__(f"{label} already booked on {day.isoformat()} at {start_time:%H:%M}")
        self.court_id = court_id
        self.court_name = court_name
        self.day = day
        self.start_time = start_time


class MaintenanceBlockError(BookingError):
    kind = ErrorKind.MAINTENANCE_BLOCK

    def __init__(self, window_id: int, court_id: int, day: date):
        super().__init__(
            f"court {court_id} is under maintenance on {day.isoformat()} (maintenance window {window_id})"
        )
        self.window_id = window_id
        self.court_id = court_id
        self.day = day


class NotFoundError(BookingError):
    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(BookingError):
    """Maintenance window cannot move from its current status to the requested one"""

    kind = ErrorKind.INVALID_TRANSITION

    def __init__(self, window_id: int, current: str, target: str):
        super().__init__(f"maintenance window {window_id} is {current} and cannot become {target}")
        self.window_id = window_id
        self.current = current
        self.target = target


class PermissionDeniedError(BookingError):
    """The member's role does not allow the requested action"""

    kind = ErrorKind.PERMISSION_DENIED

    def __init__(self, member_id: int, role: Optional[str], action: str):
        super().__init__(f"member {member_id} with role {role} cannot {action}")
        self.member_id = member_id
        self.role = role
        self.action = action


class StorageError(BookingError):
    """Wraps an underlying persistence failure with operation context"""

    kind = ErrorKind.STORAGE_FAILURE

    def __init__(self, operation: str, cause: Exception, **context):
        details = ", ".join(f"{k}={v}" for k, v in context.items())
        suffix = f" ({details})" if details else ""
        super().__init__(f"storage failure during {operation}{suffix}: {cause}")
        self.operation = operation
        self.context = context
        self.cause = cause
