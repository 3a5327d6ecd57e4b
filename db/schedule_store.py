"""
In-memory schedule store.

Owns the date-key -> slots mapping. Every read and write of schedule
state goes through ScheduleStore; callers get list copies of a bucket,
and the slot objects inside are to be treated as read-only.

Invariants kept after every operation:
- at most one slot per exact `datetime` inside a bucket
- buckets are sorted by `datetime`
- no empty bucket stays in the mapping
"""

import logging
import threading
from typing import Dict, List, Optional, Tuple

from models.slot import SlotStatus, TimeSlot
from utils.datetime_utils import date_key_of

logger = logging.getLogger(__name__)


class ScheduleStore:
    """
    Authoritative slot storage, one bucket per calendar date.

    Each public method runs under a re-entrant lock, so the store may be
    shared between the asyncio loop and worker threads.
    """

    def __init__(self):
        self._schedule: Dict[str, List[TimeSlot]] = {}
        self._lock = threading.RLock()

    # ========== Reads ==========

    def get_slots_for_date(self, date_key: str) -> List[TimeSlot]:
        """Get all slots on a date, empty list if none exist."""
        with self._lock:
            return list(self._schedule.get(date_key, []))

    def get_all_slots(self) -> List[Tuple[str, List[TimeSlot]]]:
        """Get every bucket as (date_key, slots), date-keys ascending."""
        with self._lock:
            return [
                (date_key, list(slots))
                for date_key, slots in sorted(self._schedule.items())
            ]

    def date_keys(self) -> List[str]:
        """Get date-keys that currently hold at least one slot, ascending."""
        with self._lock:
            return sorted(self._schedule)

    def get_slot(self, datetime: str) -> Optional[TimeSlot]:
        """Find a slot by exact datetime."""
        with self._lock:
            return self._find(datetime)

    # ========== Writes ==========

    def add_slot(
        self,
        datetime: str,
        duration: int = 1,
        status: SlotStatus = SlotStatus.AVAILABLE,
        note: Optional[str] = None,
    ) -> TimeSlot:
        """
        Insert a slot, or update it in place if the datetime already exists.

        On update, status and duration are overwritten; note only when given.
        """
        date_key = date_key_of(datetime)
        with self._lock:
            existing = self._find(datetime)
            if existing is not None:
                existing.status = status
                existing.duration = duration
                if note is not None:
                    existing.note = note
                logger.debug(f"Updated slot {datetime}: status={existing.status}")
                return existing

            slot = TimeSlot(datetime=datetime, duration=duration, status=status, note=note)
            bucket = self._schedule.setdefault(date_key, [])
            bucket.append(slot)
            bucket.sort(key=lambda s: s.datetime)
            logger.debug(f"Added slot {datetime}: status={slot.status}")
            return slot

    def remove_slot(self, datetime: str) -> bool:
        """Remove a slot; drop its bucket when it becomes empty."""
        date_key = date_key_of(datetime)
        with self._lock:
            bucket = self._schedule.get(date_key)
            if not bucket:
                return False

            for index, slot in enumerate(bucket):
                if slot.datetime == datetime:
                    del bucket[index]
                    break
            else:
                return False

            if not bucket:
                del self._schedule[date_key]
            logger.debug(f"Removed slot {datetime}")
            return True

    def set_slot_status(
        self, datetime: str, status: SlotStatus, note: Optional[str] = None
    ) -> Optional[TimeSlot]:
        """
        Change the status of an existing slot.

        Returns:
            The updated slot, or None if no slot has that datetime
        """
        with self._lock:
            slot = self._find(datetime)
            if slot is None:
                return None
            slot.status = status
            if note is not None:
                slot.note = note
            logger.debug(f"Slot {datetime} -> {status}")
            return slot

    def clear_day(self, date_key: str) -> int:
        """Delete a whole bucket, returning how many slots it held."""
        with self._lock:
            bucket = self._schedule.pop(date_key, None)
            if not bucket:
                return 0
            logger.debug(f"Cleared {len(bucket)} slots on {date_key}")
            return len(bucket)

    # ========== Helpers ==========

    def _find(self, datetime: str) -> Optional[TimeSlot]:
        for slot in self._schedule.get(date_key_of(datetime), []):
            if slot.datetime == datetime:
                return slot
        return None

    def slot_count(self) -> int:
        """Total number of slots across all dates."""
        with self._lock:
            return sum(len(slots) for slots in self._schedule.values())
