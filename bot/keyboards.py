"""
Inline keyboards for admin interactions.

Callback data uses "|" as separator because slot datetimes contain ":".
"""

from typing import List, Tuple

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from models.slot import SlotStatus, TimeSlot
from utils.datetime_utils import format_date_key, format_slot_time

# Callback data prefixes
CB_DAYS = "admin_days"
CB_DAY = "day|"
CB_SLOT = "slot|"
CB_STATUS = "status|"
CB_DELETE = "del|"
CB_CLEAR = "clear|"
CB_STANDARD = "std|"
CB_HOURS = "hours|"

STATUS_EMOJI = {
    SlotStatus.AVAILABLE.value: "🟢",
    SlotStatus.BOOKED.value: "🔴",
    SlotStatus.BLOCKED.value: "⛔",
}


def status_emoji(status) -> str:
    """Emoji for a slot status (enum or raw value)."""
    return STATUS_EMOJI.get(getattr(status, "value", status), "❓")


def get_start_keyboard() -> InlineKeyboardMarkup:
    """Get /start keyboard with command examples."""
    builder = InlineKeyboardBuilder()

    builder.row(
        InlineKeyboardButton(text="📅 Schedule example", callback_data="example_schedule"),
        InlineKeyboardButton(text="🔴 Booking example", callback_data="example_booking"),
    )
    builder.row(
        InlineKeyboardButton(text="📋 Show schedule", callback_data="example_show")
    )
    builder.row(
        InlineKeyboardButton(text="🛠 Manage days", callback_data=CB_DAYS)
    )

    return builder.as_markup()


def get_days_keyboard(days: List[Tuple[str, int]]) -> InlineKeyboardMarkup:
    """Get day list keyboard; each entry is (date_key, slot_count)."""
    builder = InlineKeyboardBuilder()

    for date_key, count in days:
        label = f"{format_date_key(date_key)} · {count}" if count else format_date_key(date_key)
        builder.row(
            InlineKeyboardButton(text=label, callback_data=f"{CB_DAY}{date_key}")
        )

    return builder.as_markup()


def get_day_keyboard(date_key: str, slots: List[TimeSlot]) -> InlineKeyboardMarkup:
    """Get keyboard for one day: a button per slot plus day actions."""
    builder = InlineKeyboardBuilder()

    for slot in slots:
        builder.button(
            text=f"{status_emoji(slot.status)} {format_slot_time(slot.datetime)}",
            callback_data=f"{CB_SLOT}{slot.datetime}",
        )
    builder.adjust(4)

    builder.row(
        InlineKeyboardButton(text="➕ Standard hours", callback_data=f"{CB_STANDARD}{date_key}"),
        InlineKeyboardButton(text="➕ Specific hours", callback_data=f"{CB_HOURS}{date_key}"),
    )
    if slots:
        builder.row(
            InlineKeyboardButton(text="🗑 Clear day", callback_data=f"{CB_CLEAR}{date_key}")
        )
    builder.row(InlineKeyboardButton(text="🔙 Days", callback_data=CB_DAYS))

    return builder.as_markup()


def get_slot_keyboard(slot: TimeSlot) -> InlineKeyboardMarkup:
    """Get keyboard for one slot: status changes and delete."""
    builder = InlineKeyboardBuilder()

    for status in SlotStatus:
        if status.value == getattr(slot.status, "value", slot.status):
            continue
        builder.button(
            text=f"{STATUS_EMOJI[status.value]} {status.value.capitalize()}",
            callback_data=f"{CB_STATUS}{slot.datetime}|{status.value}",
        )
    builder.adjust(2)

    builder.row(
        InlineKeyboardButton(text="❌ Delete slot", callback_data=f"{CB_DELETE}{slot.datetime}")
    )
    builder.row(
        InlineKeyboardButton(text="🔙 Back to day", callback_data=f"{CB_DAY}{slot.date_key}")
    )

    return builder.as_markup()
