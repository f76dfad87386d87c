"""
Maintenance window lifecycle

    IN_PROGRESS --complete--> COMPLETED   (terminal)
    IN_PROGRESS --cancel----> CANCELLED   (terminal)

Opening or completing a window displaces every reservation on the court that
falls inside the window's span, in the same commit as the window change.
Displaced reservations are returned to the caller; telling the affected
members is the caller's job.

Only technicians and admins can be assigned to a window.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from sqlmodel import Session

from court_booking.errors import (
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    PastDateError,
    PermissionDeniedError,
)
from court_booking.models.maintenance_window import MaintenanceStatus, MaintenanceWindow
from court_booking.models.member import MemberRole
from court_booking.models.reservation import Reservation
from court_booking.repositories.court_repository import CourtRepository
from court_booking.repositories.maintenance_repository import MaintenanceRepository
from court_booking.repositories.member_repository import MemberRepository
from court_booking.repositories.reservation_repository import ReservationRepository
from court_booking.services.slot_rules import Clock

logger = logging.getLogger(__name__)


@dataclass
class MaintenanceOutcome:
    window: MaintenanceWindow
    displaced: List[Reservation] = field(default_factory=list)


class MaintenanceService:
    def __init__(
        self,
        windows: MaintenanceRepository,
        reservations: ReservationRepository,
        courts: CourtRepository,
        members: MemberRepository,
        now: Clock = datetime.now,
    ):
        self.windows = windows
        self.reservations = reservations
        self.courts = courts
        self.members = members
        self.now = now

    @classmethod
    def for_session(cls, session: Session, now: Clock = datetime.now) -> "MaintenanceService":
        return cls(
            windows=MaintenanceRepository(session),
            reservations=ReservationRepository(session),
            courts=CourtRepository(session),
            members=MemberRepository(session),
            now=now,
        )

    def get(self, window_id: int) -> MaintenanceWindow:
        if window_id is None or window_id <= 0:
            raise InvalidInputError("maintenance window must be a positive id")
        window = self.windows.get_by_id(window_id)
        if window is None:
            raise NotFoundError("maintenance window", window_id)
        return window

    def list_all(self) -> List[MaintenanceWindow]:
        return self.windows.list_all()

    def list_for_court(self, court_id: int) -> List[MaintenanceWindow]:
        if court_id is None or court_id <= 0:
            raise InvalidInputError("court must be a positive id")
        return self.windows.list_windows_for_court(court_id)

    def open_window(
        self,
        court_id: int,
        technician_id: int,
        start_date: date,
        description: str,
        end_date: Optional[date] = None,
    ) -> MaintenanceOutcome:
        """Create an IN_PROGRESS window and clear the reservations it covers."""
        if court_id is None or technician_id is None or start_date is None:
            raise InvalidInputError("court, technician and start date are required")
        if description is None or not description.strip():
            raise InvalidInputError("maintenance description is required")
        if start_date < self.now().date():
            raise PastDateError(start_date, "cannot schedule maintenance for a past date")
        if end_date is not None and end_date < start_date:
            raise InvalidInputError("maintenance end date must not be before its start date")

        if self.courts.get_by_id(court_id) is None:
            raise NotFoundError("court", court_id)
        technician = self.members.get_by_id(technician_id)
        if technician is None:
            raise NotFoundError("technician", technician_id)
        if not MemberRole.can_manage_maintenance(technician.role):
            raise PermissionDeniedError(technician_id, technician.role, "manage maintenance")

        window = MaintenanceWindow(
            court_id=court_id,
            technician_id=technician_id,
            start_date=start_date,
            end_date=end_date,
            description=description.strip(),
            status=MaintenanceStatus.IN_PROGRESS,
        )
        displaced = self._save_displacing(window)
        logger.info("Maintenance window %s opened on court %s from %s", window.id, court_id, start_date)
        return MaintenanceOutcome(window=window, displaced=displaced)

    def complete_window(self, window_id: int, end_date: Optional[date] = None) -> MaintenanceOutcome:
        """
        Mark an IN_PROGRESS window COMPLETED.

        End date resolution: explicit argument, else the window's own end date,
        else today (never earlier than the start date).
        """
        window = self.get(window_id)
        self._require_in_progress(window, MaintenanceStatus.COMPLETED)

        today = self.now().date()
        if end_date is not None and end_date < today:
            raise PastDateError(end_date, "maintenance end date cannot be in the past")
        resolved_end = end_date or window.end_date or max(today, window.start_date)
        if resolved_end < window.start_date:
            raise InvalidInputError("maintenance end date must not be before its start date")

        window.end_date = resolved_end
        window.status = MaintenanceStatus.COMPLETED
        displaced = self._save_displacing(window)
        logger.info("Maintenance window %s completed, span %s..%s", window.id, window.start_date, window.end_date)
        return MaintenanceOutcome(window=window, displaced=displaced)

    def cancel_window(self, window_id: int) -> MaintenanceWindow:
        window = self.get(window_id)
        self._require_in_progress(window, MaintenanceStatus.CANCELLED)

        window.status = MaintenanceStatus.CANCELLED
        window = self.windows.save(window)
        logger.info("Maintenance window %s cancelled", window.id)
        return window

    def _require_in_progress(self, window: MaintenanceWindow, target: MaintenanceStatus) -> None:
        current = MaintenanceStatus(window.status)
        if current.is_terminal:
            raise InvalidTransitionError(window.id, current.value, target.value)

    def _save_displacing(self, window: MaintenanceWindow) -> List[Reservation]:
        """Persist the window and delete the reservations it covers in one commit."""
        self.windows.stage(window)
        displaced = self.reservations.delete_in_range(
            window.court_id, window.start_date, window.end_date or window.start_date
        )
        self.windows.commit(window)
        for reservation in displaced:
            logger.info(
                "Reservation %s (member %s, %s %s) displaced by maintenance window %s",
                reservation.id,
                reservation.member_id,
                reservation.date,
                reservation.start_time,
                window.id,
            )
        return displaced
