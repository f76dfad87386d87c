from court_booking.models.court import Court
from court_booking.models.maintenance_window import MaintenanceStatus, MaintenanceWindow
from court_booking.models.member import Member, MemberRole
from court_booking.models.reservation import Reservation

__all__ = [
    "Court",
    "Member",
    "MemberRole",
    "Reservation",
    "MaintenanceStatus",
    "MaintenanceWindow",
]
