"""
In-memory reservation ledger.

Records guest booking requests and mirrors each one onto the schedule:
creating a reservation marks its slot booked, cancelling releases it.
The link is the `date` string; a reservation whose slot does not exist
is still recorded.
"""

import logging
import threading
from typing import List, Optional, Tuple

from db.schedule_store import ScheduleStore
from models.reservation import Reservation, ReservationStatus
from models.slot import SlotStatus
from utils.datetime_utils import utc_now

logger = logging.getLogger(__name__)


class ReservationLedger:
    """Reservation list with sequential, never reused ids."""

    def __init__(self, store: ScheduleStore):
        self.store = store
        self._reservations: List[Reservation] = []
        self._next_id = 1
        self._lock = threading.RLock()

    def create(
        self, name: str, date: str, guests: int = 1, comment: str = ""
    ) -> Reservation:
        """Create a confirmed reservation and mark its slot booked."""
        reservation, _ = self.create_and_report(name, date, guests, comment)
        return reservation

    def create_and_report(
        self, name: str, date: str, guests: int = 1, comment: str = ""
    ) -> Tuple[Reservation, int]:
        """
        Create a reservation and report how many slots it booked.

        Args:
            name: Guest name, also used as the slot note
            date: Slot datetime string
            guests: Number of guests
            comment: Free-text comment

        Returns:
            (reservation, slots_affected) where slots_affected is 0 when
            no slot matches `date`

        Raises:
            ValueError: If name or date is empty
        """
        if not name or not date:
            raise ValueError("name and date are required")

        with self._lock:
            reservation = Reservation(
                id=self._next_id,
                name=name,
                date=date,
                guests=guests,
                comment=comment,
                status=ReservationStatus.CONFIRMED,
                created_at=utc_now(),
            )
            self._next_id += 1
            self._reservations.append(reservation)

        slot = self.store.set_slot_status(date, SlotStatus.BOOKED, name)
        if slot is None:
            logger.warning(
                f"Reservation #{reservation.id} for {date} matches no slot"
            )
        logger.info(f"Reservation #{reservation.id} created: {name} at {date}")
        return reservation, 0 if slot is None else 1

    def list(self) -> List[Reservation]:
        """All reservations in creation order, cancelled ones included."""
        with self._lock:
            return list(self._reservations)

    def get_by_id(self, reservation_id: int) -> Optional[Reservation]:
        with self._lock:
            for reservation in self._reservations:
                if reservation.id == reservation_id:
                    return reservation
            return None

    def cancel(self, reservation_id: int) -> Optional[Reservation]:
        """
        Cancel a reservation and release its slot.

        Every cancel of a known id releases the slot, including a repeated
        one.

        Returns:
            The cancelled reservation, or None if the id is unknown
        """
        with self._lock:
            reservation = self.get_by_id(reservation_id)
            if reservation is None:
                return None
            reservation.status = ReservationStatus.CANCELLED

        self.store.set_slot_status(reservation.date, SlotStatus.AVAILABLE)
        logger.info(f"Reservation #{reservation.id} cancelled, {reservation.date} released")
        return reservation
