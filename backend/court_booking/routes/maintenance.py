from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, field_validator

from court_booking.dependencies import get_maintenance_service
from court_booking.errors import BookingError
from court_booking.models.maintenance_window import MaintenanceStatus
from court_booking.routes.reservations import ReservationResponse
from court_booking.services.maintenance_service import MaintenanceOutcome, MaintenanceService
from court_booking.utils.http_errors import to_http_exception

router = APIRouter()


class MaintenanceCreate(BaseModel):
    technician_id: int
    start_date: date
    end_date: Optional[date] = None
    description: str

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        if not v or not v.strip():
            raise ValueError("description is required")
        return v.strip()


class MaintenanceComplete(BaseModel):
    end_date: Optional[date] = None


class MaintenanceWindowResponse(BaseModel):
    id: int
    court_id: int
    technician_id: int
    start_date: date
    end_date: Optional[date]
    description: str
    status: MaintenanceStatus
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MaintenanceOutcomeResponse(BaseModel):
    window: MaintenanceWindowResponse
    displaced_reservations: List[ReservationResponse]


def _outcome_response(outcome: MaintenanceOutcome) -> MaintenanceOutcomeResponse:
    return MaintenanceOutcomeResponse(
        window=MaintenanceWindowResponse.model_validate(outcome.window),
        displaced_reservations=[ReservationResponse.model_validate(r) for r in outcome.displaced],
    )


@router.get("/courts/{court_id}/maintenance", response_model=List[MaintenanceWindowResponse])
def list_court_maintenance(court_id: int, service: MaintenanceService = Depends(get_maintenance_service)):
    """Maintenance windows for a court, newest first"""
    try:
        return service.list_for_court(court_id)
    except BookingError as e:
        raise to_http_exception(e)


@router.post("/courts/{court_id}/maintenance", response_model=MaintenanceOutcomeResponse, status_code=201)
def open_maintenance(
    court_id: int, payload: MaintenanceCreate, service: MaintenanceService = Depends(get_maintenance_service)
):
    """Open a maintenance window; reservations inside its span are displaced"""
    try:
        outcome = service.open_window(
            court_id=court_id,
            technician_id=payload.technician_id,
            start_date=payload.start_date,
            description=payload.description,
            end_date=payload.end_date,
        )
    except BookingError as e:
        raise to_http_exception(e)
    return _outcome_response(outcome)


@router.post("/maintenance/{window_id}/complete", response_model=MaintenanceOutcomeResponse)
def complete_maintenance(
    window_id: int,
    payload: Optional[MaintenanceComplete] = None,
    service: MaintenanceService = Depends(get_maintenance_service),
):
    try:
        outcome = service.complete_window(window_id, end_date=payload.end_date if payload else None)
    except BookingError as e:
        raise to_http_exception(e)
    return _outcome_response(outcome)


@router.post("/maintenance/{window_id}/cancel", response_model=MaintenanceWindowResponse)
def cancel_maintenance(window_id: int, service: MaintenanceService = Depends(get_maintenance_service)):
    try:
        return service.cancel_window(window_id)
    except BookingError as e:
        raise to_http_exception(e)
