from datetime import date, datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from court_booking.models.court import Court


class MaintenanceStatus(str, Enum):
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not MaintenanceStatus.IN_PROGRESS


class MaintenanceWindow(SQLModel, table=True):
    __tablename__ = "maintenancewindow"

    id: Optional[int] = Field(default=None, primary_key=True)
    court_id: int = Field(foreign_key="court.id", index=True)
    technician_id: int = Field(foreign_key="member.id")
    start_date: date
    end_date: Optional[date] = Field(default=None)  # None means a single-day window
    description: str
    status: MaintenanceStatus = Field(default=MaintenanceStatus.IN_PROGRESS, sa_column=Column(String, nullable=False))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_column_kwargs={"onupdate": lambda: datetime.now(timezone.utc)},
    )

    # Relationship
    court: "Court" = Relationship(back_populates="maintenance_windows")
