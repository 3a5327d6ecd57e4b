"""
Scheduling workflows built on the schedule store.

Bulk day/week generation, range booking and the read projections used by
the web calendar (month grid, day timeline) and the admin bot (stats,
upcoming days). Hour arguments are not range-checked here; callers
validate them first (see utils.validation).
"""

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Iterable, List, Optional, Tuple

from db.schedule_store import ScheduleStore
from models.slot import ScheduleStats, SlotStatus, SlotView, TimeSlot
from utils.constants import DAY_OFF, DAYS_IN_WEEK, SCHEDULED_DAYS_LIMIT
from utils.datetime_utils import (
    Weekday,
    is_after,
    is_before,
    next_weekday,
    slot_datetime,
    to_date_key,
    week_dates,
)

logger = logging.getLogger(__name__)


class ScheduleService:
    """
    Slot lifecycle operations for one venue.

    `clock` returns "now"; it defaults to local naive time and is
    replaced in tests.
    """

    def __init__(
        self,
        store: ScheduleStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.store = store
        self._clock = clock or datetime.now

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    # ========== Generation ==========

    def add_day_slots(
        self, date_key: str, start_hour: int, end_hour: int
    ) -> List[TimeSlot]:
        """Upsert a 1-hour available slot for every hour in [start_hour, end_hour)."""
        slots = [
            self.store.add_slot(slot_datetime(date_key, hour), 1)
            for hour in range(start_hour, end_hour)
        ]
        logger.info(f"Day {date_key}: {len(slots)} slots set to available")
        return slots

    def add_missing_hours(self, date_key: str, hours: Iterable[int]) -> List[TimeSlot]:
        """
        Add available slots only for hours that have no slot yet.

        Existing slots keep their status, so booked hours stay booked.
        Reading the existing hours and adding the rest are two separate
        store calls; a concurrent identical request can upsert over a
        slot added here, which leaves the same result.
        """
        existing = {
            slot.datetime for slot in self.store.get_slots_for_date(date_key)
        }
        added = []
        for hour in sorted(set(hours)):
            dt = slot_datetime(date_key, hour)
            if dt in existing:
                continue
            added.append(self.store.add_slot(dt, 1))
        return added

    def build_week(
        self,
        start: date,
        start_hour: int,
        end_hour: int,
        skip: Optional[Weekday] = DAY_OFF,
    ) -> List[str]:
        """
        Fill seven consecutive days from `start` with hourly slots.

        Returns:
            Date-keys that received slots (the `skip` weekday excluded)
        """
        date_keys = []
        for d in week_dates(start, skip=skip, days=DAYS_IN_WEEK):
            date_key = to_date_key(d)
            self.add_day_slots(date_key, start_hour, end_hour)
            date_keys.append(date_key)
        return date_keys

    def build_week_from_today(
        self, start_hour: int, end_hour: int, next_week: bool = False
    ) -> List[str]:
        """Build this week (starting today) or next week (starting today + 7)."""
        start = self.today()
        if next_week:
            start += timedelta(days=DAYS_IN_WEEK)
        return self.build_week(start, start_hour, end_hour)

    # ========== Status changes ==========

    def book_range(
        self,
        date_key: str,
        start_hour: int,
        hours: int,
        note: Optional[str] = None,
    ) -> int:
        """
        Mark [start_hour, start_hour + hours) as booked.

        Hours without a slot are skipped, not created.

        Returns:
            Number of slots that existed and were booked
        """
        count = 0
        for hour in range(start_hour, start_hour + hours):
            slot = self.store.set_slot_status(
                slot_datetime(date_key, hour), SlotStatus.BOOKED, note
            )
            if slot is not None:
                count += 1

        if count < hours:
            logger.warning(
                f"Booked {count} of {hours} hours on {date_key} from {start_hour}:00"
            )
        return count

    def book_weekday(
        self,
        weekday: Weekday,
        start_hour: int,
        hours: int,
        note: Optional[str] = None,
    ) -> Tuple[str, int]:
        """Book a range on the next occurrence of `weekday` (never today)."""
        date_key = to_date_key(next_weekday(weekday, self.today()))
        return date_key, self.book_range(date_key, start_hour, hours, note)

    # ========== Store pass-throughs ==========

    def get_slots_for_date(self, date_key: str) -> List[TimeSlot]:
        return self.store.get_slots_for_date(date_key)

    def set_slot_status(
        self, datetime: str, status: SlotStatus, note: Optional[str] = None
    ) -> Optional[TimeSlot]:
        return self.store.set_slot_status(datetime, status, note)

    def remove_slot(self, datetime: str) -> bool:
        return self.store.remove_slot(datetime)

    def clear_day(self, date_key: str) -> int:
        count = self.store.clear_day(date_key)
        logger.info(f"Day {date_key} cleared: {count} slots removed")
        return count

    # ========== Projections ==========

    def get_available_date_keys(self) -> List[str]:
        """Dates with at least one future available slot, ascending."""
        now = self.now()
        return [
            date_key
            for date_key, slots in self.store.get_all_slots()
            if any(self._is_open(slot, now) for slot in slots)
        ]

    def get_available_slot_datetimes(self) -> List[str]:
        """Datetimes of every future available slot, ascending."""
        now = self.now()
        return [
            slot.datetime
            for _, slots in self.store.get_all_slots()
            for slot in slots
            if self._is_open(slot, now)
        ]

    def get_slots_for_date_full(self, date_key: str) -> List[SlotView]:
        """Every slot on a date with full detail, past ones included."""
        return [
            SlotView(
                datetime=slot.datetime,
                duration=slot.duration,
                status=slot.status,
                note=slot.note,
            )
            for slot in self.store.get_slots_for_date(date_key)
        ]

    def get_scheduled_days(self, limit: int = SCHEDULED_DAYS_LIMIT) -> List[str]:
        """Date-keys from today on that hold any slot, ascending, at most `limit`."""
        today = to_date_key(self.today())
        return [key for key in self.store.date_keys() if key >= today][:limit]

    def get_stats(self) -> ScheduleStats:
        """Count slots that have not started yet, by status."""
        now = self.now()
        stats = ScheduleStats()
        for _, slots in self.store.get_all_slots():
            for slot in slots:
                if is_before(slot.datetime, now):
                    continue
                stats.total += 1
                if slot.status == SlotStatus.AVAILABLE:
                    stats.available += 1
                elif slot.status == SlotStatus.BOOKED:
                    stats.booked += 1
                elif slot.status == SlotStatus.BLOCKED:
                    stats.blocked += 1
        return stats

    @staticmethod
    def _is_open(slot: TimeSlot, now: datetime) -> bool:
        return slot.status == SlotStatus.AVAILABLE and is_after(slot.datetime, now)
