"""
Input validation utilities for admin commands and API inputs.
"""

import re
from datetime import datetime
from typing import Iterable, List, Optional

from utils.constants import HOURS_IN_DAY
from utils.exceptions import InvalidDateKeyError, InvalidHourRangeError

DATE_KEY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def is_date_key(value: Optional[str]) -> bool:
    """
    Check the YYYY-MM-DD shape used by the day-slots endpoint.

    Args:
        value: Candidate date-key

    Returns:
        True if the string matches the pattern, False otherwise
    """
    if not value or not isinstance(value, str):
        return False
    return bool(DATE_KEY_PATTERN.match(value))


def validate_date_key(value: str) -> str:
    """
    Validate that a date-key names a real calendar date.

    Raises:
        InvalidDateKeyError: If the shape or the date is wrong
    """
    if not is_date_key(value):
        raise InvalidDateKeyError(f"Date must be YYYY-MM-DD, got {value!r}")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise InvalidDateKeyError(f"Not a calendar date: {value}") from e
    return value


def validate_hour_range(start_hour: int, end_hour: int) -> None:
    """
    Validate a [start_hour, end_hour) range of whole hours.

    Raises:
        InvalidHourRangeError: If hours fall outside 0..24 or end <= start
    """
    if start_hour < 0 or start_hour >= HOURS_IN_DAY:
        raise InvalidHourRangeError(f"Start hour must be 0-23, got {start_hour}")
    if end_hour > HOURS_IN_DAY:
        raise InvalidHourRangeError(f"End hour must be at most 24, got {end_hour}")
    if end_hour <= start_hour:
        raise InvalidHourRangeError(
            f"End hour ({end_hour}) must be after start hour ({start_hour})"
        )


def validate_hours(hours: Iterable[int]) -> List[int]:
    """
    Validate individual hours and return them sorted without duplicates.

    Raises:
        InvalidHourRangeError: If any hour is outside 0..23 or none given
    """
    result = sorted(set(hours))
    if not result:
        raise InvalidHourRangeError("No hours given")
    for hour in result:
        if hour < 0 or hour >= HOURS_IN_DAY:
            raise InvalidHourRangeError(f"Hour must be 0-23, got {hour}")
    return result


def sanitize_text(text: str, max_length: Optional[int] = None) -> str:
    """
    Sanitize user input text.

    Args:
        text: Input text
        max_length: Optional maximum length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    # Remove control characters except newlines and tabs
    sanitized = re.sub(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]", "", str(text))

    sanitized = sanitized.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
