# dentalcare/modules/appointments/working_hours.py
"""Bookable hours of the clinic.

Appointments may be booked Saturday through Wednesday, from 08:00 up to but not
including 18:00, judged on the clinic's wall clock.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from dentalcare.common.config import settings
from dentalcare.common.errors import InvalidSchedule

# datetime.weekday(): Monday is 0, Sunday is 6
SATURDAY, SUNDAY, MONDAY, TUESDAY, WEDNESDAY = 5, 6, 0, 1, 2
WORKING_DAYS = frozenset({SATURDAY, SUNDAY, MONDAY, TUESDAY, WEDNESDAY})
OPENING_HOUR = 8
CLOSING_HOUR = 18

CLOSED_DAY_MESSAGE = "Appointments can only be booked from Saturday to Wednesday"
CLOSED_HOUR_MESSAGE = "Appointments can only be booked between 8 AM and 6 PM"


@dataclass(frozen=True)
class ScheduleCheck:
    valid: bool
    reason: Optional[str] = None


def clinic_zone(tz_name: Optional[str] = None) -> ZoneInfo:
    return ZoneInfo(tz_name or settings.CLINIC_TIMEZONE)


def to_clinic_time(value: datetime, tz_name: Optional[str] = None) -> datetime:
    """Naive clinic wall-clock time for ``value``.

    Naive input is already clinic time; aware input is converted first.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(clinic_zone(tz_name)).replace(tzinfo=None)


def check_appointment_time(value: datetime, tz_name: Optional[str] = None) -> ScheduleCheck:
    local = to_clinic_time(value, tz_name)
    if local.weekday() not in WORKING_DAYS:
        return ScheduleCheck(valid=False, reason=CLOSED_DAY_MESSAGE)
    if not OPENING_HOUR <= local.hour < CLOSING_HOUR:
        return ScheduleCheck(valid=False, reason=CLOSED_HOUR_MESSAGE)
    return ScheduleCheck(valid=True)


def ensure_bookable(value: datetime, tz_name: Optional[str] = None) -> datetime:
    """Validate ``value`` and return it as clinic wall-clock time for storage."""
    check = check_appointment_time(value, tz_name)
    if not check.valid:
        raise InvalidSchedule(check.reason)
    return to_clinic_time(value, tz_name)


def clinic_today(tz_name: Optional[str] = None) -> date:
    return datetime.now(clinic_zone(tz_name)).date()


def clinic_day_window(day: date) -> Tuple[datetime, datetime]:
    """Start of ``day`` (inclusive) and start of the next day (exclusive)."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)
