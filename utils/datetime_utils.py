"""
Datetime utilities for slot arithmetic.

Slots use naive local time ("2026-03-15T14:00:00") so the hours an admin
types match what the browser shows. Strings carrying an offset or a
trailing 'Z' are still accepted and compared in UTC.
"""

from datetime import date, datetime, timedelta, timezone
from enum import IntEnum
from typing import List, Optional


class Weekday(IntEnum):
    """Day of week, numbered like date.weekday()."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


_SHORT_NAMES = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC datetime with timezone info
    """
    return datetime.now(timezone.utc)


def to_iso_utc(moment: datetime) -> str:
    """Format as UTC with millisecond precision and a Z suffix, e.g. 2026-03-10T12:00:00.000Z."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def parse_slot_datetime(value: str) -> datetime:
    """
    Parse a slot datetime string.

    Naive strings stay naive (local time). A 'Z' suffix is normalized to
    '+00:00' so older clients sending UTC strings still parse.

    Raises:
        ValueError: If the string is not an ISO datetime
    """
    normalized = value.replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as e:
        raise ValueError(f"Invalid datetime string: {value}") from e


def is_after(value: str, moment: datetime) -> bool:
    """Return True if slot datetime `value` is strictly later than `moment`."""
    return _comparable(parse_slot_datetime(value), moment) > _normalize(moment)


def is_before(value: str, moment: datetime) -> bool:
    """Return True if slot datetime `value` is strictly earlier than `moment`."""
    return _comparable(parse_slot_datetime(value), moment) < _normalize(moment)


def _normalize(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(timezone.utc)


def _comparable(dt: datetime, moment: datetime) -> datetime:
    # Aware vs naive: treat the naive side as local time
    if dt.tzinfo is None and moment.tzinfo is not None:
        return dt.astimezone().astimezone(timezone.utc)
    if dt.tzinfo is not None and moment.tzinfo is None:
        return dt.astimezone().replace(tzinfo=None)
    return _normalize(dt)


def to_date_key(d: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return d.strftime("%Y-%m-%d")


def date_key_of(slot_datetime: str) -> str:
    """Return the date-key part of a slot datetime string."""
    return slot_datetime.split("T")[0]


def slot_datetime(date_key: str, hour: int) -> str:
    """Build the local slot datetime for `hour` on `date_key`."""
    return f"{date_key}T{hour:02d}:00:00"


def next_weekday(weekday: Weekday, today: Optional[date] = None) -> date:
    """
    Resolve the next occurrence of `weekday`.

    Today never counts: asking for today's weekday returns the same day
    next week.
    """
    today = today or date.today()
    days_until = int(weekday) - today.weekday()
    if days_until <= 0:
        days_until += 7
    return today + timedelta(days=days_until)


def week_dates(
    start: date, skip: Optional[Weekday] = None, days: int = 7
) -> List[date]:
    """Return `days` consecutive dates from `start`, without the `skip` weekday."""
    result = []
    for offset in range(days):
        d = start + timedelta(days=offset)
        if skip is not None and d.weekday() == skip:
            continue
        result.append(d)
    return result


def format_date_key(date_key: str) -> str:
    """Format a date-key for chat output, e.g. '15.03 (sun)'."""
    d = datetime.strptime(date_key, "%Y-%m-%d").date()
    return f"{d.day}.{d.month:02d} ({_SHORT_NAMES[d.weekday()]})"


def format_slot_time(value: str) -> str:
    """Return HH:MM for a slot datetime string."""
    return parse_slot_datetime(value).strftime("%H:%M")
