"""Reservation models for guest booking requests."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from utils.constants import MAX_COMMENT_LENGTH, MAX_GUESTS, MAX_NAME_LENGTH


class ReservationStatus(str, Enum):
    """Reservation status. The only transition is confirmed -> cancelled."""

    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Reservation(BaseModel):
    """Reservation model."""

    id: int = Field(..., ge=1)
    name: str
    date: str = Field(..., description="Slot datetime the guest asked for")
    guests: int = Field(default=1, ge=1)
    comment: str = ""
    status: ReservationStatus = ReservationStatus.CONFIRMED
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        use_enum_values = True
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": 1,
                "name": "Ann",
                "date": "2026-03-15T14:00:00",
                "guests": 2,
                "comment": "",
                "status": "confirmed",
                "createdAt": "2026-03-01T09:30:00+00:00",
            }
        }

    def to_json(self) -> dict:
        """Serialize with the public field names (createdAt)."""
        return self.model_dump(mode="json", by_alias=True)


class ReservationCreate(BaseModel):
    """Reservation creation model (POST body)."""

    name: str = Field(..., min_length=1, max_length=MAX_NAME_LENGTH)
    date: str = Field(..., min_length=1)
    guests: Optional[int] = Field(default=None, ge=1, le=MAX_GUESTS)
    comment: Optional[str] = Field(default=None, max_length=MAX_COMMENT_LENGTH)
