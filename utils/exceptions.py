"""
Custom exception classes for the sauna scheduling service.
Lookups that find nothing return None/False instead of raising; these
exceptions cover input that must be rejected before the store is touched.
"""


class ScheduleError(Exception):
    """Base exception for scheduling operations."""

    pass


class ValidationError(ScheduleError):
    """Raised when input validation fails."""

    pass


class InvalidHourRangeError(ValidationError):
    """Raised when an hour range is outside 0..24 or inverted."""

    pass


class InvalidDateKeyError(ValidationError):
    """Raised when a date-key is not a real YYYY-MM-DD date."""

    pass

