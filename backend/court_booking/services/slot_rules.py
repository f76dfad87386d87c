"""
Temporal booking rules for a requested (date, start time) slot.

Checked in this order, first failure wins:
1. date before today               -> PastDateError
2. time outside operating hours    -> OutsideOperatingHoursError
3. date is today and time passed   -> PastTimeError

Bookings are point-in-time slots; both operating-hour bounds are valid start times.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Optional

from court_booking import settings
from court_booking.errors import OutsideOperatingHoursError, PastDateError, PastTimeError

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class OperatingHours:
    opening: time
    closing: time

    def contains(self, start_time: time) -> bool:
        return self.opening <= start_time <= self.closing


def default_operating_hours() -> OperatingHours:
    return OperatingHours(opening=settings.OPENING_TIME, closing=settings.CLOSING_TIME)


def check_not_past_date(day: date, now: datetime) -> None:
    if day < now.date():
        raise PastDateError(day)


def check_not_past_time(day: date, start_time: time, now: datetime) -> None:
    if day == now.date() and start_time < now.time():
        raise PastTimeError(start_time)


def check_slot_rules(day: date, start_time: time, now: datetime, hours: OperatingHours) -> None:
    """Raise the first temporal rule the slot violates. No I/O."""
    check_not_past_date(day, now)
    if not hours.contains(start_time):
        raise OutsideOperatingHoursError(start_time, hours.opening, hours.closing)
    check_not_past_time(day, start_time, now)


class SlotRuleValidator:
    """Binds the slot rules to a clock and a set of operating hours."""

    def __init__(self, hours: Optional[OperatingHours] = None, now: Clock = datetime.now):
        self.hours = hours or default_operating_hours()
        self.now = now

    def validate(self, day: date, start_time: time) -> None:
        check_slot_rules(day, start_time, self.now(), self.hours)

    def validate_date(self, day: date) -> None:
        check_not_past_date(day, self.now())

    def validate_not_past(self, day: date, start_time: time) -> None:
        now = self.now()
        check_not_past_date(day, now)
        check_not_past_time(day, start_time, now)

    def within_operating_hours(self, start_time: time) -> bool:
        return self.hours.contains(start_time)
