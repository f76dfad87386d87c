"""
Tests for the maintenance window lifecycle

- IN_PROGRESS -> COMPLETED / CANCELLED; both terminal
- Opening and completing displace reservations inside the span
- Completing resolves a missing end date
"""

from datetime import time, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from court_booking.errors import (
    ErrorKind,
    InvalidInputError,
    InvalidTransitionError,
    MaintenanceBlockError,
    NotFoundError,
    PastDateError,
    PermissionDeniedError,
    StorageError,
)
from court_booking.models import MaintenanceStatus
from court_booking.services.maintenance_service import MaintenanceService
from tests.conftest import TODAY, TOMORROW, YESTERDAY, frozen_clock


@pytest.fixture
def service(session):
    return MaintenanceService.for_session(session, now=frozen_clock)


def test_open_window_starts_in_progress(service, courts, technician):
    outcome = service.open_window(courts[0].id, technician.id, TOMORROW, "  Net replacement ")

    window = outcome.window
    assert window.id is not None
    assert window.status == MaintenanceStatus.IN_PROGRESS
    assert window.end_date is None
    assert window.description == "Net replacement"
    assert outcome.displaced == []


def test_open_window_displaces_reservations_on_start_date(service, scheduler, courts, members, technician):
    campo = courts[0]
    displaced_id = scheduler.create(TOMORROW, time(10, 0), campo.id, members[0].id)
    kept_other_day = scheduler.create(TOMORROW + timedelta(days=1), time(10, 0), campo.id, members[0].id)
    kept_other_court = scheduler.create(TOMORROW, time(10, 0), courts[1].id, members[1].id)

    outcome = service.open_window(campo.id, technician.id, TOMORROW, "Line painting")

    assert [r.id for r in outcome.displaced] == [displaced_id]
    remaining = {r.id for r in scheduler.list_all()}
    assert remaining == {kept_other_day, kept_other_court}


def test_open_window_with_end_date_displaces_whole_span(service, scheduler, courts, members, technician):
    campo = courts[0]
    for offset in range(4):
        scheduler.create(TOMORROW + timedelta(days=offset), time(9, 0), campo.id, members[0].id)

    outcome = service.open_window(campo.id, technician.id, TOMORROW, "Resurfacing", TOMORROW + timedelta(days=2))

    assert len(outcome.displaced) == 3
    assert len(scheduler.list_for_court(campo.id)) == 1


def test_open_window_blocks_new_bookings(service, scheduler, courts, members, technician):
    campo = courts[0]
    service.open_window(campo.id, technician.id, TOMORROW, "Resurfacing")

    with pytest.raises(MaintenanceBlockError):
        scheduler.create(TOMORROW, time(10, 0), campo.id, members[0].id)


def test_open_window_validation(service, courts, technician):
    campo = courts[0]

    with pytest.raises(PastDateError):
        service.open_window(campo.id, technician.id, YESTERDAY, "Late")
    with pytest.raises(InvalidInputError):
        service.open_window(campo.id, technician.id, TOMORROW, "   ")
    with pytest.raises(InvalidInputError):
        service.open_window(campo.id, technician.id, TOMORROW, "Backwards", end_date=TODAY)
    with pytest.raises(InvalidInputError):
        service.open_window(None, technician.id, TOMORROW, "No court")
    with pytest.raises(NotFoundError):
        service.open_window(999, technician.id, TOMORROW, "Ghost court")
    with pytest.raises(NotFoundError):
        service.open_window(campo.id, 999, TOMORROW, "Ghost technician")


def test_complete_with_explicit_end_date(service, scheduler, courts, members, technician):
    campo = courts[0]
    window = service.open_window(campo.id, technician.id, TOMORROW, "Drainage").window
    inside = scheduler.create(TOMORROW + timedelta(days=2), time(10, 0), campo.id, members[0].id)
    outside = scheduler.create(TOMORROW + timedelta(days=5), time(10, 0), campo.id, members[0].id)

    outcome = service.complete_window(window.id, end_date=TOMORROW + timedelta(days=3))

    assert outcome.window.status == MaintenanceStatus.COMPLETED
    assert outcome.window.end_date == TOMORROW + timedelta(days=3)
    assert [r.id for r in outcome.displaced] == [inside]
    assert [r.id for r in scheduler.list_all()] == [outside]


def test_complete_without_end_date_keeps_existing_span(service, courts, technician):
    window = service.open_window(courts[0].id, technician.id, TOMORROW, "Fence", TOMORROW + timedelta(days=1)).window

    completed = service.complete_window(window.id).window

    assert completed.end_date == TOMORROW + timedelta(days=1)


def test_complete_single_day_window_defaults_end_date(service, courts, technician):
    window = service.open_window(courts[0].id, technician.id, TODAY, "Lights").window

    completed = service.complete_window(window.id).window

    assert completed.end_date == TODAY


def test_complete_rejects_past_end_date(service, courts, technician):
    window = service.open_window(courts[0].id, technician.id, TODAY, "Lights").window

    with pytest.raises(PastDateError):
        service.complete_window(window.id, end_date=YESTERDAY)


def test_cancel_window(service, scheduler, courts, members, technician):
    campo = courts[0]
    window = service.open_window(campo.id, technician.id, TOMORROW, "Postponed").window

    cancelled = service.cancel_window(window.id)

    assert cancelled.status == MaintenanceStatus.CANCELLED
    assert scheduler.create(TOMORROW, time(10, 0), campo.id, members[0].id) > 0


@pytest.mark.parametrize("first", ["complete", "cancel"])
@pytest.mark.parametrize("second", ["complete", "cancel"])
def test_terminal_statuses_reject_further_transitions(service, courts, technician, first, second):
    window = service.open_window(courts[0].id, technician.id, TOMORROW, "Once only").window
    transitions = {
        "complete": lambda: service.complete_window(window.id),
        "cancel": lambda: service.cancel_window(window.id),
    }

    transitions[first]()
    with pytest.raises(InvalidTransitionError) as exc_info:
        transitions[second]()

    assert exc_info.value.kind == ErrorKind.INVALID_TRANSITION


def test_unknown_window(service):
    with pytest.raises(NotFoundError):
        service.complete_window(404)
    with pytest.raises(NotFoundError):
        service.cancel_window(404)
    with pytest.raises(InvalidInputError):
        service.get(0)


def test_list_for_court_newest_first(service, courts, technician):
    campo = courts[0]
    service.open_window(campo.id, technician.id, TOMORROW, "First")
    service.open_window(campo.id, technician.id, TOMORROW + timedelta(days=7), "Second")
    service.open_window(courts[1].id, technician.id, TOMORROW, "Elsewhere")

    windows = service.list_for_court(campo.id)

    assert [w.description for w in windows] == ["Second", "First"]
    assert len(service.list_all()) == 3


def test_open_window_requires_technician_or_admin(service, session, courts, members):
    with pytest.raises(PermissionDeniedError) as exc_info:
        service.open_window(courts[0].id, members[0].id, TOMORROW, "Not my job")
    assert exc_info.value.kind == ErrorKind.PERMISSION_DENIED
    assert service.list_all() == []

    admin = members[1]
    admin.role = "ADMIN"
    session.add(admin)
    session.commit()

    assert service.open_window(courts[0].id, admin.id, TOMORROW, "Club admin on duty").window.id > 0


def _fail_second_delete(session, monkeypatch):
    real_delete = session.delete
    calls = []

    def flaky_delete(instance):
        calls.append(instance)
        if len(calls) == 2:
            raise OperationalError("DELETE", {}, Exception("database is locked"))
        return real_delete(instance)

    monkeypatch.setattr(session, "delete", flaky_delete)


def test_failed_displacement_leaves_nothing_opened(
    service, scheduler, session, courts, members, technician, monkeypatch
):
    campo = courts[0]
    first = scheduler.create(TOMORROW, time(9, 0), campo.id, members[0].id)
    second = scheduler.create(TOMORROW, time(10, 0), campo.id, members[1].id)
    _fail_second_delete(session, monkeypatch)

    with pytest.raises(StorageError):
        service.open_window(campo.id, technician.id, TOMORROW, "Resurfacing")

    assert service.list_all() == []
    assert [r.id for r in scheduler.list_all()] == [first, second]


def test_failed_displacement_leaves_window_in_progress(
    service, scheduler, session, courts, members, technician, monkeypatch
):
    campo = courts[0]
    window = service.open_window(campo.id, technician.id, TOMORROW, "Drainage").window
    booked = [
        scheduler.create(TOMORROW + timedelta(days=offset), time(10, 0), campo.id, members[0].id)
        for offset in (1, 2)
    ]
    _fail_second_delete(session, monkeypatch)

    with pytest.raises(StorageError):
        service.complete_window(window.id, end_date=TOMORROW + timedelta(days=2))

    reloaded = service.get(window.id)
    assert MaintenanceStatus(reloaded.status) == MaintenanceStatus.IN_PROGRESS
    assert reloaded.end_date is None
    assert [r.id for r in scheduler.list_all()] == booked
