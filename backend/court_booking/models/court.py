from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from court_booking.models.maintenance_window import MaintenanceWindow
    from court_booking.models.reservation import Reservation


class Court(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True)
    surface: str  # free-text category, e.g. "clay", "hard", "grass"
    is_covered: bool = Field(default=False)

    # Relationships
    reservations: List["Reservation"] = Relationship(back_populates="court")
    maintenance_windows: List["MaintenanceWindow"] = Relationship(back_populates="court")
