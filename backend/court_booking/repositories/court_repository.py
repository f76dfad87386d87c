from typing import List, Optional

from sqlmodel import Session, func, select

from court_booking.models.court import Court
from court_booking.repositories.base import storage_operation


class CourtRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, court_id: int) -> Optional[Court]:
        with storage_operation(self.session, "get_court", court_id=court_id):
            return self.session.get(Court, court_id)

    def list_all(self) -> List[Court]:
        with storage_operation(self.session, "list_courts"):
            return list(self.session.exec(select(Court).order_by(Court.name)).all())

    def list_covered(self) -> List[Court]:
        with storage_operation(self.session, "list_covered_courts"):
            return list(self.session.exec(select(Court).where(Court.is_covered == True).order_by(Court.name)).all())

    def list_by_surface(self, surface: str) -> List[Court]:
        with storage_operation(self.session, "list_courts_by_surface", surface=surface):
            return list(
                self.session.exec(
                    select(Court).where(func.lower(Court.surface) == surface.lower()).order_by(Court.name)
                ).all()
            )
