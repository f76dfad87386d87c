from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import and_, or_
from sqlmodel import Session, col, select

from court_booking.models.maintenance_window import MaintenanceStatus, MaintenanceWindow
from court_booking.repositories.base import storage_operation


class MaintenanceRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, window_id: int) -> Optional[MaintenanceWindow]:
        with storage_operation(self.session, "get_maintenance_window", window_id=window_id):
            return self.session.get(MaintenanceWindow, window_id)

    def list_all(self) -> List[MaintenanceWindow]:
        with storage_operation(self.session, "list_maintenance_windows"):
            return list(
                self.session.exec(
                    select(MaintenanceWindow).order_by(col(MaintenanceWindow.start_date).desc(), MaintenanceWindow.id)
                ).all()
            )

    def list_windows_for_court(self, court_id: int) -> List[MaintenanceWindow]:
        with storage_operation(self.session, "list_maintenance_windows_for_court", court_id=court_id):
            return list(
                self.session.exec(
                    select(MaintenanceWindow)
                    .where(MaintenanceWindow.court_id == court_id)
                    .order_by(col(MaintenanceWindow.start_date).desc(), MaintenanceWindow.id)
                ).all()
            )

    def find_blocking_window(
        self, court_id: int, day: date, statuses: Iterable[MaintenanceStatus]
    ) -> Optional[MaintenanceWindow]:
        """
        Return the first window on ``court_id`` with a status in ``statuses``
        whose span covers ``day``.

        Span rules:
        - no end date: covers only its start date
        - with end date: covers start_date <= day <= end_date
        """
        status_values = [MaintenanceStatus(s).value for s in statuses]
        if not status_values:
            return None

        query = (
            select(MaintenanceWindow)
            .where(
                MaintenanceWindow.court_id == court_id,
                col(MaintenanceWindow.status).in_(status_values),
                or_(
                    and_(col(MaintenanceWindow.end_date).is_(None), MaintenanceWindow.start_date == day),
                    and_(MaintenanceWindow.start_date <= day, MaintenanceWindow.end_date >= day),
                ),
            )
            .order_by(MaintenanceWindow.start_date, MaintenanceWindow.id)
        )
        with storage_operation(self.session, "find_blocking_window", court_id=court_id, date=day):
            return self.session.exec(query).first()

    def save(self, window: MaintenanceWindow) -> MaintenanceWindow:
        with storage_operation(self.session, "save_maintenance_window", window_id=window.id, court_id=window.court_id):
            self.session.add(window)
            self.session.commit()
            self.session.refresh(window)
        return window

    def stage(self, window: MaintenanceWindow) -> MaintenanceWindow:
        """Flush ``window`` without committing so it can share a transaction."""
        with storage_operation(self.session, "stage_maintenance_window", window_id=window.id, court_id=window.court_id):
            self.session.add(window)
            self.session.flush()
        return window

    def commit(self, window: MaintenanceWindow) -> MaintenanceWindow:
        with storage_operation(self.session, "commit_maintenance_window", window_id=window.id):
            self.session.commit()
            self.session.refresh(window)
        return window
