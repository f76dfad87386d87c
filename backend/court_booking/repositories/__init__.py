"""
Repositories

Thin, session-backed stores. Each one:
- Takes an explicitly constructed SQLModel Session (no module-level state)
- Returns model instances or plain values, never HTTP objects
- Wraps driver failures in StorageError with the operation name and keys
"""

from court_booking.repositories.court_repository import CourtRepository
from court_booking.repositories.maintenance_repository import MaintenanceRepository
from court_booking.repositories.member_repository import MemberRepository
from court_booking.repositories.reservation_repository import ReservationRepository

__all__ = [
    "CourtRepository",
    "MaintenanceRepository",
    "MemberRepository",
    "ReservationRepository",
]
