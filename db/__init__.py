"""In-memory schedule and reservation storage."""

from .reservation_ledger import ReservationLedger
from .schedule_store import ScheduleStore

__all__ = ["ReservationLedger", "ScheduleStore"]
