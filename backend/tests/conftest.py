from datetime import date, datetime, timedelta
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, create_engine
from sqlmodel.pool import StaticPool

from court_booking.database import enable_sqlite_foreign_keys, get_session, init_db
from court_booking.dependencies import get_clock
from court_booking.main import app
from court_booking.models import Court, MaintenanceStatus, MaintenanceWindow, Member
from court_booking.services.reservation_scheduler import ReservationScheduler

# ============================================================================
# Frozen clock: every time-dependent component in tests sees this instant
# ============================================================================
FIXED_NOW = datetime(2026, 6, 1, 12, 0)
TODAY = FIXED_NOW.date()
YESTERDAY = TODAY - timedelta(days=1)
TOMORROW = TODAY + timedelta(days=1)


def frozen_clock() -> datetime:
    return FIXED_NOW


# ============================================================================
# Database: fresh in-memory SQLite per test
# ============================================================================
# StaticPool keeps the single :memory: connection so every session in the
# test sees the same tables.


@pytest.fixture(name="engine")
def engine_fixture():
    engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    enable_sqlite_foreign_keys(engine)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session: Session):
    """Test client sharing the test session and the frozen clock"""

    def get_session_override():
        return session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_clock] = lambda: frozen_clock
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


# ============================================================================
# Seed data
# ============================================================================


@pytest.fixture
def courts(session: Session):
    """Three courts: Campo 1 (clay, open), Campo 2 (hard, covered), Campo 3 (clay, covered)"""
    seeded = [
        Court(name="Campo 1", surface="clay", is_covered=False),
        Court(name="Campo 2", surface="hard", is_covered=True),
        Court(name="Campo 3", surface="Clay", is_covered=True),
    ]
    for court in seeded:
        session.add(court)
    session.commit()
    for court in seeded:
        session.refresh(court)
    return seeded


@pytest.fixture
def members(session: Session):
    """Two club members and one technician"""
    seeded = [
        Member(first_name="Anna", last_name="Rossi", email="anna@example.com"),
        Member(first_name="Marco", last_name="Bianchi", email="marco@example.com"),
        Member(first_name="Luca", last_name="Verdi", email="luca@example.com", role="TECHNICIAN"),
    ]
    for member in seeded:
        session.add(member)
    session.commit()
    for member in seeded:
        session.refresh(member)
    return seeded


@pytest.fixture
def technician(members):
    return members[2]


@pytest.fixture
def scheduler(session: Session) -> ReservationScheduler:
    return ReservationScheduler.for_session(session, now=frozen_clock)


@pytest.fixture
def add_window(session: Session, technician):
    """Insert a maintenance window directly, bypassing the lifecycle service"""

    def _add(
        court: Court,
        start_date: date,
        end_date: Optional[date] = None,
        status: MaintenanceStatus = MaintenanceStatus.IN_PROGRESS,
    ) -> MaintenanceWindow:
        window = MaintenanceWindow(
            court_id=court.id,
            technician_id=technician.id,
            start_date=start_date,
            end_date=end_date,
            description="Resurfacing",
            status=status,
        )
        session.add(window)
        session.commit()
        session.refresh(window)
        return window

    return _add
