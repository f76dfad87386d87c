"""
Maintenance blocking rule.

A court/date is blocked when a maintenance window on that court covers the
date and its status is in the blocking set:
- IN_PROGRESS always blocks
- COMPLETED blocks while the completed_windows_block policy is on (default,
  see settings.COMPLETED_MAINTENANCE_BLOCKS)
- CANCELLED never blocks
"""

from datetime import date
from typing import Optional, Tuple

from court_booking import settings
from court_booking.models.maintenance_window import MaintenanceStatus, MaintenanceWindow
from court_booking.repositories.maintenance_repository import MaintenanceRepository


def blocking_statuses(completed_windows_block: bool) -> Tuple[MaintenanceStatus, ...]:
    if completed_windows_block:
        return (MaintenanceStatus.IN_PROGRESS, MaintenanceStatus.COMPLETED)
    return (MaintenanceStatus.IN_PROGRESS,)


class MaintenanceGuard:
    def __init__(self, repository: MaintenanceRepository, completed_windows_block: Optional[bool] = None):
        self.repository = repository
        if completed_windows_block is None:
            completed_windows_block = settings.COMPLETED_MAINTENANCE_BLOCKS
        self.completed_windows_block = completed_windows_block

    @property
    def statuses(self) -> Tuple[MaintenanceStatus, ...]:
        return blocking_statuses(self.completed_windows_block)

    def blocking_window(self, day: date, court_id: int) -> Optional[MaintenanceWindow]:
        """First window blocking ``court_id`` on ``day``, or None."""
        return self.repository.find_blocking_window(court_id, day, self.statuses)

    def is_blocked(self, day: date, court_id: int) -> bool:
        return self.blocking_window(day, court_id) is not None
