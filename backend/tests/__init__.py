# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from court_booking.models.court import Court  # noqa: F401
from court_booking.models.maintenance_window import MaintenanceWindow  # noqa: F401
from court_booking.models.member import Member  # noqa: F401
from court_booking.models.reservation import Reservation  # noqa: F401
