"""
Admin panel handlers for per-day and per-slot schedule editing.
Accessible only to the configured admin chat.
"""

import html
import logging
from datetime import timedelta
from typing import List

from aiogram import F, Router
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from bot.handlers import ACCESS_DENIED_TEXT, is_admin_user, require_admin
from bot.keyboards import (
    CB_CLEAR,
    CB_DAY,
    CB_DAYS,
    CB_DELETE,
    CB_HOURS,
    CB_SLOT,
    CB_STANDARD,
    CB_STATUS,
    get_day_keyboard,
    get_days_keyboard,
    get_slot_keyboard,
    status_emoji,
)
from bot.parsing import parse_hours
from bot.states import AdminStates
from config import settings
from models.slot import SlotStatus, TimeSlot
from services.scheduling import ScheduleService
from utils.constants import ADMIN_DAYS_DISPLAY_LIMIT
from utils.datetime_utils import date_key_of, format_date_key, format_slot_time, to_date_key
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

admin_router = Router()


async def require_admin_callback(callback: CallbackQuery) -> bool:
    """Check admin access for a button press."""
    if not is_admin_user(callback.message.chat.id):
        await callback.answer(ACCESS_DENIED_TEXT, show_alert=True)
        return False
    return True


# ========== Rendering ==========


def render_day(date_key: str, slots: List[TimeSlot]) -> str:
    """Day timeline: one line per slot with status and note."""
    text = f"📅 <b>{format_date_key(date_key)}</b>\n\n"
    if not slots:
        return text + "No slots on this day."

    for slot in slots:
        line = f"{status_emoji(slot.status)} {format_slot_time(slot.datetime)}"
        if slot.duration != 1:
            line += f" ({slot.duration}h)"
        if slot.note:
            line += f" · {html.escape(slot.note)}"
        text += line + "\n"
    return text


def upcoming_days(schedule: ScheduleService, limit: int = ADMIN_DAYS_DISPLAY_LIMIT):
    """(date_key, slot_count) for the next `limit` calendar days, empty days included."""
    today = schedule.today()
    days = []
    for offset in range(limit):
        date_key = to_date_key(today + timedelta(days=offset))
        days.append((date_key, len(schedule.get_slots_for_date(date_key))))
    return days


async def show_day(message: Message, schedule: ScheduleService, date_key: str, edit: bool = True):
    slots = schedule.get_slots_for_date(date_key)
    text = render_day(date_key, slots)
    markup = get_day_keyboard(date_key, slots)
    if edit:
        await message.edit_text(text, reply_markup=markup)
    else:
        await message.answer(text, reply_markup=markup)


# ========== Day List ==========


@admin_router.message(Command("admin"))
async def cmd_admin(message: Message, state: FSMContext, schedule: ScheduleService):
    """Admin panel entry point: list upcoming days."""
    await state.clear()
    if not await require_admin(message):
        return

    await message.answer(
        "🛠 <b>Schedule management</b>\n\nPick a day:",
        reply_markup=get_days_keyboard(upcoming_days(schedule)),
    )


@admin_router.callback_query(F.data == CB_DAYS)
async def admin_days_menu(callback: CallbackQuery, state: FSMContext, schedule: ScheduleService):
    if not await require_admin_callback(callback):
        return

    await state.clear()
    await callback.message.edit_text(
        "🛠 <b>Schedule management</b>\n\nPick a day:",
        reply_markup=get_days_keyboard(upcoming_days(schedule)),
    )
    await callback.answer()


@admin_router.callback_query(F.data.startswith(CB_DAY))
async def admin_view_day(callback: CallbackQuery, schedule: ScheduleService):
    if not await require_admin_callback(callback):
        return

    date_key = callback.data[len(CB_DAY):]
    await show_day(callback.message, schedule, date_key)
    await callback.answer()


# ========== Single Slot ==========


@admin_router.callback_query(F.data.startswith(CB_SLOT))
async def admin_view_slot(callback: CallbackQuery, schedule: ScheduleService):
    if not await require_admin_callback(callback):
        return

    slot_dt = callback.data[len(CB_SLOT):]
    slot = schedule.store.get_slot(slot_dt)
    if slot is None:
        await callback.answer("Slot not found", show_alert=True)
        await show_day(callback.message, schedule, date_key_of(slot_dt))
        return

    note = f"\nNote: {html.escape(slot.note)}" if slot.note else ""
    await callback.message.edit_text(
        f"🕐 <b>{format_date_key(slot.date_key)} {format_slot_time(slot.datetime)}</b>\n"
        f"Status: {status_emoji(slot.status)} {getattr(slot.status, 'value', slot.status)}"
        f"{note}",
        reply_markup=get_slot_keyboard(slot),
    )
    await callback.answer()


@admin_router.callback_query(F.data.startswith(CB_STATUS))
async def admin_set_status(callback: CallbackQuery, schedule: ScheduleService):
    if not await require_admin_callback(callback):
        return

    slot_dt, _, status_value = callback.data[len(CB_STATUS):].rpartition("|")
    try:
        status = SlotStatus(status_value)
    except ValueError:
        await callback.answer("Invalid status", show_alert=True)
        return

    slot = schedule.set_slot_status(slot_dt, status)
    if slot is None:
        await callback.answer("Slot not found", show_alert=True)
    else:
        logger.info(f"Admin set {slot_dt} to {status.value}")
        await callback.answer(f"{format_slot_time(slot_dt)}: {status.value}")
    await show_day(callback.message, schedule, date_key_of(slot_dt))


@admin_router.callback_query(F.data.startswith(CB_DELETE))
async def admin_delete_slot(callback: CallbackQuery, schedule: ScheduleService):
    if not await require_admin_callback(callback):
        return

    slot_dt = callback.data[len(CB_DELETE):]
    if schedule.remove_slot(slot_dt):
        logger.info(f"Admin deleted slot {slot_dt}")
        await callback.answer("Slot deleted")
    else:
        await callback.answer("Slot not found", show_alert=True)
    await show_day(callback.message, schedule, date_key_of(slot_dt))


# ========== Whole Day ==========


@admin_router.callback_query(F.data.startswith(CB_CLEAR))
async def admin_clear_day(callback: CallbackQuery, schedule: ScheduleService):
    if not await require_admin_callback(callback):
        return

    date_key = callback.data[len(CB_CLEAR):]
    count = schedule.clear_day(date_key)
    await callback.answer(f"Removed {count} slots")
    await show_day(callback.message, schedule, date_key)


@admin_router.callback_query(F.data.startswith(CB_STANDARD))
async def admin_add_standard_hours(callback: CallbackQuery, schedule: ScheduleService):
    """Add the standard hour-set, keeping slots that already exist."""
    if not await require_admin_callback(callback):
        return

    date_key = callback.data[len(CB_STANDARD):]
    added = schedule.add_missing_hours(date_key, settings.standard_hours())
    await callback.answer(f"Added {len(added)} slots")
    await show_day(callback.message, schedule, date_key)


@admin_router.callback_query(F.data.startswith(CB_HOURS))
async def admin_ask_hours(callback: CallbackQuery, state: FSMContext):
    if not await require_admin_callback(callback):
        return

    date_key = callback.data[len(CB_HOURS):]
    await state.set_state(AdminStates.entering_hours)
    await state.update_data(date_key=date_key)
    await callback.message.answer(
        f"Which hours to add on {format_date_key(date_key)}?\n"
        "Send e.g. <code>10 11 14</code> or <code>10-14</code>."
    )
    await callback.answer()


@admin_router.message(StateFilter(AdminStates.entering_hours))
async def admin_enter_hours(message: Message, state: FSMContext, schedule: ScheduleService):
    if not await require_admin(message):
        await state.clear()
        return

    data = await state.get_data()
    date_key = data.get("date_key")
    if not date_key:
        await state.clear()
        await message.answer("Session expired, open the day again with /admin.")
        return

    try:
        hours = parse_hours(message.text or "")
    except ValidationError as e:
        await message.answer(f"❌ {e}")
        return

    added = schedule.add_missing_hours(date_key, hours)
    await state.clear()
    logger.info(f"Admin added {len(added)} slots on {date_key}")
    await message.answer(f"✅ Added {len(added)} slots.")
    await show_day(message, schedule, date_key, edit=False)


def register_admin_handlers(dp) -> None:
    """Register admin handlers with dispatcher."""
    dp.include_router(admin_router)
