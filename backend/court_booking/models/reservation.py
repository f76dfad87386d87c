from datetime import date, datetime, time, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Index
from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from court_booking.models.court import Court
    from court_booking.models.member import Member

SLOT_UNIQUE_CONSTRAINT = "uq_reservation_court_slot"


class Reservation(SQLModel, table=True):
    # At most one reservation per (court, date, start time); the service-level
    # conflict check is only an early rejection in front of this constraint.
    __table_args__ = (
        SAUniqueConstraint("court_id", "date", "start_time", name=SLOT_UNIQUE_CONSTRAINT),
        Index("ix_reservation_date", "date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    date: date
    start_time: time
    court_id: int = Field(foreign_key="court.id", index=True)
    member_id: int = Field(foreign_key="member.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    court: "Court" = Relationship(back_populates="reservations")
    member: "Member" = Relationship(back_populates="reservations")
