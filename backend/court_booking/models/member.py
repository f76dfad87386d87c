from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from court_booking.models.reservation import Reservation


class MemberRole(str, Enum):
    MEMBER = "MEMBER"
    TECHNICIAN = "TECHNICIAN"
    ADMIN = "ADMIN"

    @classmethod
    def can_manage_maintenance(cls, role: Optional[str]) -> bool:
        return role in (cls.TECHNICIAN.value, cls.ADMIN.value)


class Member(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    first_name: str
    last_name: str
    email: str = Field(index=True, unique=True)
    role: str = Field(default=MemberRole.MEMBER.value, max_length=20)

    # Relationships
    reservations: List["Reservation"] = Relationship(back_populates="member")
