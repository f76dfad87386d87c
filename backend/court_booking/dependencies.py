"""
FastAPI dependency providers.

Services are built per request from the request's Session; tests override
get_session and get_clock through app.dependency_overrides.
"""

from datetime import datetime

from fastapi import Depends
from sqlmodel import Session

from court_booking.database import get_session
from court_booking.repositories.court_repository import CourtRepository
from court_booking.services.court_directory import CourtDirectory
from court_booking.services.maintenance_service import MaintenanceService
from court_booking.services.reservation_scheduler import ReservationScheduler
from court_booking.services.slot_rules import Clock


def get_clock() -> Clock:
    return datetime.now


def get_scheduler(
    session: Session = Depends(get_session), clock: Clock = Depends(get_clock)
) -> ReservationScheduler:
    return ReservationScheduler.for_session(session, now=clock)


def get_court_directory(session: Session = Depends(get_session)) -> CourtDirectory:
    return CourtDirectory(CourtRepository(session))


def get_maintenance_service(
    session: Session = Depends(get_session), clock: Clock = Depends(get_clock)
) -> MaintenanceService:
    return MaintenanceService.for_session(session, now=clock)
