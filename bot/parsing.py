"""
Free-text admin command grammar.

Recognized shapes (English and Russian):
- "show schedule" / "покажи расписание"
- "schedule for this|next week from 10 to 22"
  / "расписание на эту|следующую неделю с 10 до 22"
- "book friday at 15:00 for 3 hours"
  / "в пятницу бронь на 15:00 на 3 часа"

Weekday names are mapped to Weekday here and nowhere else.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from utils.datetime_utils import Weekday
from utils.exceptions import InvalidHourRangeError
from utils.validation import validate_hour_range, validate_hours

_SCHEDULE_PATTERNS = [
    re.compile(
        r"schedule\s+for\s+(this|next)\s+week(?:\s*,?\s*all\s+days)?"
        r"\s+from\s+(\d+)\s+(?:to|till|until)\s+(\d+)",
        re.IGNORECASE,
    ),
    re.compile(
        r"расписание\s+на\s+(эту|следующую)\s+неделю(?:\s*,?\s*все\s+дни)?"
        r"\s+с\s+(\d+)\s+до\s+(\d+)",
        re.IGNORECASE,
    ),
]

_BOOKING_PATTERNS = [
    re.compile(
        r"book\s+(?:on\s+)?([a-z]+)\s+at\s+(\d+):(\d+)\s+for\s+(\d+)\s+hours?",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:в|на)\s+([а-яё]+)\s+бронь\s+на\s+(\d+):(\d+)\s+на\s+(\d+)\s+час",
        re.IGNORECASE,
    ),
]

_NEXT_WEEK_WORDS = {"next", "следующую"}

# Russian names are listed in every grammatical case an admin might type
WEEKDAY_NAMES = {
    "monday": Weekday.MONDAY,
    "tuesday": Weekday.TUESDAY,
    "wednesday": Weekday.WEDNESDAY,
    "thursday": Weekday.THURSDAY,
    "friday": Weekday.FRIDAY,
    "saturday": Weekday.SATURDAY,
    "sunday": Weekday.SUNDAY,
    "понедельник": Weekday.MONDAY,
    "понедельника": Weekday.MONDAY,
    "понедельнику": Weekday.MONDAY,
    "понедельником": Weekday.MONDAY,
    "вторник": Weekday.TUESDAY,
    "вторника": Weekday.TUESDAY,
    "вторнику": Weekday.TUESDAY,
    "вторником": Weekday.TUESDAY,
    "среда": Weekday.WEDNESDAY,
    "среды": Weekday.WEDNESDAY,
    "среде": Weekday.WEDNESDAY,
    "среду": Weekday.WEDNESDAY,
    "средой": Weekday.WEDNESDAY,
    "четверг": Weekday.THURSDAY,
    "четверга": Weekday.THURSDAY,
    "четвергу": Weekday.THURSDAY,
    "четвергом": Weekday.THURSDAY,
    "пятница": Weekday.FRIDAY,
    "пятницы": Weekday.FRIDAY,
    "пятнице": Weekday.FRIDAY,
    "пятницу": Weekday.FRIDAY,
    "пятницей": Weekday.FRIDAY,
    "суббота": Weekday.SATURDAY,
    "субботы": Weekday.SATURDAY,
    "субботе": Weekday.SATURDAY,
    "субботу": Weekday.SATURDAY,
    "субботой": Weekday.SATURDAY,
    "воскресенье": Weekday.SUNDAY,
    "воскресенья": Weekday.SUNDAY,
    "воскресенью": Weekday.SUNDAY,
    "воскресеньем": Weekday.SUNDAY,
}

_FULL_NAMES = [
    ("monday", Weekday.MONDAY),
    ("tuesday", Weekday.TUESDAY),
    ("wednesday", Weekday.WEDNESDAY),
    ("thursday", Weekday.THURSDAY),
    ("friday", Weekday.FRIDAY),
    ("saturday", Weekday.SATURDAY),
    ("sunday", Weekday.SUNDAY),
    ("понедельник", Weekday.MONDAY),
    ("вторник", Weekday.TUESDAY),
    ("среда", Weekday.WEDNESDAY),
    ("четверг", Weekday.THURSDAY),
    ("пятница", Weekday.FRIDAY),
    ("суббота", Weekday.SATURDAY),
    ("воскресенье", Weekday.SUNDAY),
]


@dataclass
class ScheduleCommand:
    """Build a week of hourly slots."""

    next_week: bool
    start_hour: int
    end_hour: int


@dataclass
class BookingCommand:
    """Book a range of hours on the next given weekday."""

    day_name: str
    weekday: Optional[Weekday]
    hour: int
    duration: int


def resolve_weekday(name: str) -> Optional[Weekday]:
    """
    Map a typed weekday name to Weekday.

    Falls back to prefix matching ("fri", "пят").
    """
    lower = name.strip().lower()
    if not lower:
        return None
    if lower in WEEKDAY_NAMES:
        return WEEKDAY_NAMES[lower]
    for full_name, weekday in _FULL_NAMES:
        if full_name.startswith(lower):
            return weekday
    return None


def is_show_command(text: str) -> bool:
    lower = text.lower()
    return ("покажи" in lower and "расписание" in lower) or (
        "show" in lower and "schedule" in lower
    )


def parse_schedule_command(text: str) -> Optional[ScheduleCommand]:
    """
    Parse a week-building command.

    Returns:
        ScheduleCommand, or None if the text is not this command

    Raises:
        InvalidHourRangeError: If the command matched but the hours are invalid
    """
    for pattern in _SCHEDULE_PATTERNS:
        match = pattern.search(text)
        if match:
            start_hour, end_hour = int(match.group(2)), int(match.group(3))
            validate_hour_range(start_hour, end_hour)
            return ScheduleCommand(
                next_week=match.group(1).lower() in _NEXT_WEEK_WORDS,
                start_hour=start_hour,
                end_hour=end_hour,
            )
    return None


def parse_booking_command(text: str) -> Optional[BookingCommand]:
    """
    Parse a range-booking command. Only whole hours are accepted.

    Returns:
        BookingCommand (weekday is None for an unknown day name), or None
        if the text is not this command

    Raises:
        InvalidHourRangeError: If the time or duration is invalid
    """
    for pattern in _BOOKING_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue

        day_name = match.group(1)
        hour, minutes, duration = (int(match.group(i)) for i in (2, 3, 4))
        if minutes != 0:
            raise InvalidHourRangeError("Bookings start on the hour (HH:00)")
        if duration < 1:
            raise InvalidHourRangeError("Duration must be at least 1 hour")
        validate_hour_range(hour, hour + duration)

        return BookingCommand(
            day_name=day_name,
            weekday=resolve_weekday(day_name),
            hour=hour,
            duration=duration,
        )
    return None


def parse_hours(text: str) -> List[int]:
    """
    Parse an hour list typed by the admin.

    Accepts "10 11 14", "10,11,14", or a range "10-14" (end excluded).

    Raises:
        InvalidHourRangeError: If nothing parses or an hour is out of range
    """
    cleaned = text.strip()
    range_match = re.fullmatch(r"(\d{1,2})\s*-\s*(\d{1,2})", cleaned)
    if range_match:
        start_hour, end_hour = int(range_match.group(1)), int(range_match.group(2))
        validate_hour_range(start_hour, end_hour)
        return list(range(start_hour, end_hour))

    parts = [p for p in re.split(r"[\s,;]+", cleaned) if p]
    if not parts or not all(p.isdigit() for p in parts):
        raise InvalidHourRangeError(
            "Send hours like <code>10 11 14</code> or a range <code>10-14</code>"
        )
    return validate_hours(int(p) for p in parts)
