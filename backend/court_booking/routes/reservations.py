from datetime import date, datetime, time
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, ConfigDict

from court_booking.dependencies import get_scheduler
from court_booking.errors import BookingError
from court_booking.services.reservation_scheduler import ReservationScheduler
from court_booking.utils.http_errors import to_http_exception

router = APIRouter()


class ReservationCreate(BaseModel):
    date: date
    start_time: time
    court_id: int
    member_id: int


class ReservationResponse(BaseModel):
    id: int
    date: date
    start_time: time
    court_id: int
    member_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReservationCreated(BaseModel):
    id: int


class AvailabilityResponse(BaseModel):
    court_id: int
    date: date
    start_time: time
    available: bool


@router.post("/reservations", response_model=ReservationCreated, status_code=201)
def create_reservation(payload: ReservationCreate, scheduler: ReservationScheduler = Depends(get_scheduler)):
    """Book a court slot for a member"""
    try:
        reservation_id = scheduler.create(payload.date, payload.start_time, payload.court_id, payload.member_id)
    except BookingError as e:
        raise to_http_exception(e)
    return ReservationCreated(id=reservation_id)


@router.get("/reservations", response_model=List[ReservationResponse])
def list_reservations(
    date: Optional[date] = None,
    court_id: Optional[int] = None,
    member_id: Optional[int] = None,
    scheduler: ReservationScheduler = Depends(get_scheduler),
):
    """
    List reservations.

    Filters: date + court_id, date, court_id or member_id (exactly one
    combination). Without filters every reservation is returned.
    """
    try:
        if member_id is not None:
            if date is not None or court_id is not None:
                raise HTTPException(status_code=400, detail="member_id cannot be combined with other filters")
            return scheduler.list_for_member(member_id)
        if date is not None and court_id is not None:
            return scheduler.list_for_date_and_court(date, court_id)
        if date is not None:
            return scheduler.list_for_date(date)
        if court_id is not None:
            return scheduler.list_for_court(court_id)
        return scheduler.list_all()
    except BookingError as e:
        raise to_http_exception(e)


@router.get("/reservations/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: int, scheduler: ReservationScheduler = Depends(get_scheduler)):
    try:
        return scheduler.get(reservation_id)
    except BookingError as e:
        raise to_http_exception(e)


@router.delete("/reservations/{reservation_id}")
def cancel_reservation(reservation_id: int, scheduler: ReservationScheduler = Depends(get_scheduler)):
    """Cancel a reservation"""
    try:
        scheduler.cancel(reservation_id)
    except BookingError as e:
        raise to_http_exception(e)
    return {"message": "Reservation cancelled successfully"}


@router.get("/courts/{court_id}/availability", response_model=AvailabilityResponse)
def get_availability(
    court_id: int,
    day: date = Query(alias="date"),
    start_time: time = Query(),
    scheduler: ReservationScheduler = Depends(get_scheduler),
):
    """Check whether a slot can be booked right now"""
    try:
        available = scheduler.is_available(day, start_time, court_id)
    except BookingError as e:
        raise to_http_exception(e)
    return AvailabilityResponse(court_id=court_id, date=day, start_time=start_time, available=available)
