from typing import List, Optional

from court_booking.errors import InvalidInputError, NotFoundError
from court_booking.models.court import Court
from court_booking.repositories.court_repository import CourtRepository


class CourtDirectory:
    """Read-only lookups over the club's courts"""

    def __init__(self, repository: CourtRepository):
        self.repository = repository

    def list_courts(self) -> List[Court]:
        return self.repository.list_all()

    def get_court(self, court_id: Optional[int]) -> Court:
        if court_id is None or court_id <= 0:
            raise InvalidInputError("court must be a positive id")
        court = self.repository.get_by_id(court_id)
        if court is None:
            raise NotFoundError("court", court_id)
        return court

    def list_covered(self) -> List[Court]:
        return self.repository.list_covered()

    def list_by_surface(self, surface: Optional[str]) -> List[Court]:
        if surface is None or not surface.strip():
            raise InvalidInputError("surface is required")
        return self.repository.list_by_surface(surface.strip())
