from datetime import date, time
from typing import Optional

from court_booking.models.reservation import Reservation
from court_booking.repositories.reservation_repository import ReservationRepository


class ConflictResolver:
    """
    Detects an existing reservation on the exact same slot.

    Reservations carry no duration, so two bookings conflict only when their
    start times are equal; there is no overlap window or grace period.
    """

    def __init__(self, repository: ReservationRepository):
        self.repository = repository

    def conflicting_reservation(self, day: date, start_time: time, court_id: int) -> Optional[Reservation]:
        for existing in self.repository.list_by_date_and_court(day, court_id):
            if existing.start_time == start_time:
                return existing
        return None

    def has_conflict(self, day: date, start_time: time, court_id: int) -> bool:
        return self.conflicting_reservation(day, start_time, court_id) is not None
