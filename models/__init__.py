"""Pydantic models for data validation and serialization."""

from .reservation import Reservation, ReservationCreate, ReservationStatus
from .slot import ScheduleStats, SlotStatus, SlotView, TimeSlot

__all__ = [
    "Reservation",
    "ReservationCreate",
    "ReservationStatus",
    "ScheduleStats",
    "SlotStatus",
    "SlotView",
    "TimeSlot",
]
