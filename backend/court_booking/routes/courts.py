from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from court_booking.dependencies import get_court_directory
from court_booking.errors import BookingError
from court_booking.services.court_directory import CourtDirectory
from court_booking.utils.http_errors import to_http_exception

router = APIRouter()


class CourtResponse(BaseModel):
    id: int
    name: str
    surface: str
    is_covered: bool

    model_config = ConfigDict(from_attributes=True)


@router.get("/courts", response_model=List[CourtResponse])
def list_courts(
    covered: Optional[bool] = None,
    surface: Optional[str] = None,
    directory: CourtDirectory = Depends(get_court_directory),
):
    """List courts, optionally filtered by covered flag and/or surface type"""
    try:
        if surface is not None:
            courts = directory.list_by_surface(surface)
        elif covered:
            courts = directory.list_covered()
        else:
            courts = directory.list_courts()
    except BookingError as e:
        raise to_http_exception(e)

    if covered is not None:
        courts = [c for c in courts if c.is_covered == covered]
    return courts


@router.get("/courts/{court_id}", response_model=CourtResponse)
def get_court(court_id: int, directory: CourtDirectory = Depends(get_court_directory)):
    try:
        return directory.get_court(court_id)
    except BookingError as e:
        raise to_http_exception(e)
