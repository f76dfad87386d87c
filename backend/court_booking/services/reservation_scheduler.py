"""
Reservation Scheduler: create/cancel reservations and answer availability

Create pipeline (first failure wins, steps 1-5 only read):
1. Required fields present         -> InvalidInputError
2. Temporal slot rules             -> PastDateError / OutsideOperatingHoursError / PastTimeError
3. Court and member exist          -> NotFoundError
4. Maintenance guard               -> MaintenanceBlockError
5. Conflict resolver               -> SlotConflictError
6. Insert via ReservationRepository

The check-then-insert sequence is not atomic across concurrent requests. The
reservation table's (court_id, date, start_time) unique constraint is the
authoritative guard; the repository turns a violation into SlotConflictError,
so callers see the same rejection either way.
"""

import logging
from datetime import date, datetime, time
from typing import List, Optional

from sqlmodel import Session

from court_booking.errors import (
    InvalidInputError,
    MaintenanceBlockError,
    NotFoundError,
    SlotConflictError,
)
from court_booking.models.court import Court
from court_booking.models.reservation import Reservation
from court_booking.repositories.court_repository import CourtRepository
from court_booking.repositories.maintenance_repository import MaintenanceRepository
from court_booking.repositories.member_repository import MemberRepository
from court_booking.repositories.reservation_repository import ReservationRepository
from court_booking.services.conflict_resolver import ConflictResolver
from court_booking.services.maintenance_guard import MaintenanceGuard
from court_booking.services.slot_rules import Clock, OperatingHours, SlotRuleValidator

logger = logging.getLogger(__name__)


def _require_id(value: Optional[int], label: str) -> int:
    if value is None or value <= 0:
        raise InvalidInputError(f"{label} must be a positive id")
    return value


class ReservationScheduler:
    def __init__(
        self,
        reservations: ReservationRepository,
        courts: CourtRepository,
        members: MemberRepository,
        guard: MaintenanceGuard,
        resolver: ConflictResolver,
        validator: SlotRuleValidator,
    ):
        self.reservations = reservations
        self.courts = courts
        self.members = members
        self.guard = guard
        self.resolver = resolver
        self.validator = validator

    @classmethod
    def for_session(
        cls,
        session: Session,
        now: Clock = datetime.now,
        hours: Optional[OperatingHours] = None,
        completed_windows_block: Optional[bool] = None,
    ) -> "ReservationScheduler":
        """Wire a scheduler with session-backed repositories."""
        reservations = ReservationRepository(session)
        return cls(
            reservations=reservations,
            courts=CourtRepository(session),
            members=MemberRepository(session),
            guard=MaintenanceGuard(MaintenanceRepository(session), completed_windows_block=completed_windows_block),
            resolver=ConflictResolver(reservations),
            validator=SlotRuleValidator(hours=hours, now=now),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, day: date, start_time: time, court_id: int, member_id: int) -> int:
        """
        Book ``court_id`` for ``member_id`` on ``day`` at ``start_time``.

        Returns:
            The new reservation id

        Raises:
            InvalidInputError, PastDateError, OutsideOperatingHoursError,
            PastTimeError, NotFoundError, MaintenanceBlockError,
            SlotConflictError, StorageError
        """
        missing = [
            label
            for label, value in (("date", day), ("start_time", start_time), ("court", court_id), ("member", member_id))
            if value is None
        ]
        if missing:
            raise InvalidInputError(f"missing required reservation fields: {', '.join(missing)}")
        _require_id(court_id, "court")
        _require_id(member_id, "member")

        self.validator.validate(day, start_time)

        court = self._get_court(court_id)
        if self.members.get_by_id(member_id) is None:
            raise NotFoundError("member", member_id)

        window = self.guard.blocking_window(day, court_id)
        if window is not None:
            logger.warning("Reservation rejected: court %s on %s blocked by window %s", court_id, day, window.id)
            raise MaintenanceBlockError(window.id, court_id, day)

        if self.resolver.has_conflict(day, start_time, court_id):
            logger.warning("Reservation rejected: court %s already booked on %s at %s", court_id, day, start_time)
            raise SlotConflictError(court_id, day, start_time, court_name=court.name)

        reservation_id = self.reservations.insert(
            Reservation(date=day, start_time=start_time, court_id=court_id, member_id=member_id)
        )
        logger.info(
            "Reservation %s created: court %s on %s at %s for member %s",
            reservation_id,
            court_id,
            day,
            start_time,
            member_id,
        )
        return reservation_id

    def cancel(self, reservation_id: int) -> bool:
        _require_id(reservation_id, "reservation")
        if self.reservations.get_by_id(reservation_id) is None:
            raise NotFoundError("reservation", reservation_id)

        deleted = self.reservations.delete(reservation_id)
        logger.info("Reservation %s cancelled", reservation_id)
        return deleted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, reservation_id: int) -> Reservation:
        _require_id(reservation_id, "reservation")
        reservation = self.reservations.get_by_id(reservation_id)
        if reservation is None:
            raise NotFoundError("reservation", reservation_id)
        return reservation

    def list_all(self) -> List[Reservation]:
        return self.reservations.list_all()

    def list_for_date(self, day: date) -> List[Reservation]:
        if day is None:
            raise InvalidInputError("date is required")
        self.validator.validate_date(day)
        return self.reservations.list_by_date(day)

    def list_for_court(self, court_id: int) -> List[Reservation]:
        return self.reservations.list_by_court(_require_id(court_id, "court"))

    def list_for_member(self, member_id: int) -> List[Reservation]:
        return self.reservations.list_by_member(_require_id(member_id, "member"))

    def list_for_date_and_court(self, day: date, court_id: int) -> List[Reservation]:
        if day is None:
            raise InvalidInputError("date is required")
        _require_id(court_id, "court")
        self.validator.validate_date(day)
        return self.reservations.list_by_date_and_court(day, court_id)

    def is_available(self, day: date, start_time: time, court_id: int) -> bool:
        """
        Dry run of ``create`` without writing.

        Returns False when the slot is outside operating hours, blocked by
        maintenance, or already reserved. Raises only on malformed input,
        unknown court, past date or past time.
        """
        if day is None or start_time is None:
            raise InvalidInputError("date and start_time are required")
        _require_id(court_id, "court")

        self.validator.validate_not_past(day, start_time)
        self._get_court(court_id)

        if not self.validator.within_operating_hours(start_time):
            return False
        if self.guard.is_blocked(day, court_id):
            return False
        return not self.resolver.has_conflict(day, start_time, court_id)

    def _get_court(self, court_id: int) -> Court:
        court = self.courts.get_by_id(court_id)
        if court is None:
            raise NotFoundError("court", court_id)
        return court
