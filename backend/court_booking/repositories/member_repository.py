from typing import Optional

from sqlmodel import Session

from court_booking.models.member import Member
from court_booking.repositories.base import storage_operation


class MemberRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, member_id: int) -> Optional[Member]:
        with storage_operation(self.session, "get_member", member_id=member_id):
            return self.session.get(Member, member_id)
