"""
Application-wide constants.
Centralizes magic numbers and fixed scheduling rules.
"""

from utils.datetime_utils import Weekday

# Schedule rules
DAY_OFF = Weekday.SUNDAY  # Skipped when a whole week is generated
DAYS_IN_WEEK = 7
HOURS_IN_DAY = 24
SCHEDULED_DAYS_LIMIT = 14  # Default for get_scheduled_days()

# Display formatting
ADMIN_DAYS_DISPLAY_LIMIT = 14  # Days listed in the interactive admin menu
BOOKING_NOTE = "Booking"  # Note put on slots booked from a bot command

# Validation limits
MAX_NAME_LENGTH = 100
MAX_COMMENT_LENGTH = 1000
MAX_GUESTS = 50
