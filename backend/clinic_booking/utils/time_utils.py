# clinic_booking/utils/time_utils.py
"""
Time parsing and formatting helpers

Doctor schedules arrive as 12-hour strings ("9:00AM"); slots and bookings
use canonical zero-padded 24-hour "HH:MM" strings and "YYYY-MM-DD" dates.
"""
import re
from datetime import datetime, date, timedelta
from typing import List, Optional, Tuple
import pytz
from clinic_booking.utils.exceptions import InvalidTimeFormat

# Sunday-first, matching the weekday index used by the schedule feed
DAYS_OF_WEEK = [
    'sunday',
    'monday',
    'tuesday',
    'wednesday',
    'thursday',
    'friday',
    'saturday',
]

_SHORT_WEEKDAYS = ['Sun', 'Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat']
_SHORT_MONTHS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
                 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']

TIME_12H_PATTERN = re.compile(r'^\s*(\d{1,2}):(\d{2})(AM|PM)\s*$', re.IGNORECASE)


def parse_time(text: str) -> Tuple[int, int]:
    """Parse a 12-hour "h:mmAM/PM" string into (hours, minutes) on a 24-hour clock"""
    if not isinstance(text, str):
        raise InvalidTimeFormat(text)

    match = TIME_12H_PATTERN.match(text)
    if not match:
        raise InvalidTimeFormat(text)

    hours = int(match.group(1))
    minutes = int(match.group(2))
    meridiem = match.group(3).upper()

    if meridiem == 'PM' and hours != 12:
        hours += 12
    elif meridiem == 'AM' and hours == 12:
        hours = 0

    return hours, minutes


def time_to_minutes(text: str) -> int:
    """Minutes since midnight for a 12-hour time string"""
    hours, minutes = parse_time(text)
    return hours * 60 + minutes


def format_time(hours: int, minutes: int) -> str:
    """Format as zero-padded "HH:MM"; range is the caller's responsibility"""
    return f"{hours:02d}:{minutes:02d}"


def format_time_display(time_24h: str) -> str:
    """Convert "HH:MM" to "h:mm AM/PM" for display"""
    hour, minute = map(int, time_24h.split(':'))
    period = 'PM' if hour >= 12 else 'AM'
    hour_12 = hour % 12 or 12
    return f"{hour_12}:{minute:02d} {period}"


def format_date(day: date) -> str:
    return day.strftime('%Y-%m-%d')


def format_date_display(date_str: str) -> str:
    """Format "YYYY-MM-DD" as e.g. "Wed, Jan 15" """
    day = datetime.strptime(date_str, '%Y-%m-%d').date()
    weekday = _SHORT_WEEKDAYS[(day.weekday() + 1) % 7]
    return f"{weekday}, {_SHORT_MONTHS[day.month - 1]} {day.day}"


def get_day_of_week(day: date) -> str:
    """Lowercase weekday name for a calendar date"""
    # date.weekday() is Monday=0; shift to the Sunday-first index
    return DAYS_OF_WEEK[(day.weekday() + 1) % 7]


def get_timezone(tz_name: Optional[str] = None):
    """Resolve the clinic wall-clock timezone"""
    if tz_name is None:
        from clinic_booking.config import Config
        tz_name = Config.TIMEZONE
    return pytz.timezone(tz_name)


def local_now(tz_name: Optional[str] = None) -> datetime:
    """Current naive wall-clock time in the clinic timezone"""
    return datetime.now(get_timezone(tz_name)).replace(tzinfo=None)


def get_today(tz_name: Optional[str] = None) -> date:
    return local_now(tz_name).date()


def get_next_days(count: int, today: Optional[date] = None) -> List[date]:
    """Return `count` consecutive dates starting with today (day 0)"""
    if today is None:
        today = get_today()
    return [today + timedelta(days=offset) for offset in range(count)]


def is_booking_past(date_str: str, start_time: str, now: Optional[datetime] = None) -> bool:
    """True when date + startTime lies before the current wall-clock time"""
    if now is None:
        now = local_now()
    starts_at = datetime.strptime(f"{date_str} {start_time}", '%Y-%m-%d %H:%M')
    return starts_at < now
