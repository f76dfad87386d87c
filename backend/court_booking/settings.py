"""
Runtime configuration read from the environment.

A .env file next to the working directory is loaded automatically (if present).
"""

import os
from datetime import time

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_time(name: str, default: str) -> time:
    return time.fromisoformat(os.getenv(name, default))


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./court_booking.db")
SQL_ECHO = _env_flag("SQL_ECHO", "false")

# Operating hours; both bounds are bookable start times
OPENING_TIME = _env_time("OPENING_TIME", "08:00")
CLOSING_TIME = _env_time("CLOSING_TIME", "22:00")

# Whether a COMPLETED maintenance window keeps blocking dates inside its recorded span.
# CANCELLED windows never block regardless of this switch.
COMPLETED_MAINTENANCE_BLOCKS = _env_flag("COMPLETED_MAINTENANCE_BLOCKS", "true")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
