"""Slot models for bookable sauna hours."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SlotStatus(str, Enum):
    """Slot availability status."""

    AVAILABLE = "available"
    BOOKED = "booked"
    BLOCKED = "blocked"


class TimeSlot(BaseModel):
    """
    One bookable unit of time.

    `datetime` is kept as the exact string it was created with; it is the
    slot's identity inside its date bucket.
    """

    datetime: str = Field(..., description="Local ISO datetime, e.g. 2026-03-15T14:00:00")
    duration: int = Field(default=1, gt=0, description="Duration in hours")
    status: SlotStatus = SlotStatus.AVAILABLE
    note: Optional[str] = Field(default=None, description="Who or what occupies the slot")

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "datetime": "2026-03-15T14:00:00",
                "duration": 1,
                "status": "booked",
                "note": "Ann",
            }
        }

    @property
    def date_key(self) -> str:
        return self.datetime.split("T")[0]


class SlotView(BaseModel):
    """Detached read-only copy of a slot for the day timeline."""

    datetime: str
    duration: int
    status: SlotStatus
    note: Optional[str] = None

    class Config:
        use_enum_values = True
        frozen = True


class ScheduleStats(BaseModel):
    """Counts of upcoming slots by status."""

    total: int = 0
    available: int = 0
    booked: int = 0
    blocked: int = 0
