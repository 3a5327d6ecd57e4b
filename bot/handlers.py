"""
Bot handlers for the sauna schedule admin bot.
Handles /start and the free-text schedule commands.
"""

import logging

from aiogram import F, Router
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from bot.keyboards import get_start_keyboard
from bot.parsing import (
    BookingCommand,
    ScheduleCommand,
    is_show_command,
    parse_booking_command,
    parse_schedule_command,
)
from config import settings
from models.slot import SlotStatus
from services.scheduling import ScheduleService
from utils.constants import BOOKING_NOTE
from utils.datetime_utils import format_date_key
from utils.exceptions import ValidationError

logger = logging.getLogger(__name__)

router = Router()

ACCESS_DENIED_TEXT = "⛔ Access denied. This bot is for the administrator only."

USAGE_TEXT = (
    "Command not recognized. Try:\n"
    "• <code>schedule for this week from 10 to 22</code>\n"
    "• <code>book friday at 15:00 for 3 hours</code>\n"
    "• <code>show schedule</code>"
)

HELP_TEXT = (
    "👋 Hi! I manage the sauna schedule.\n\n"
    "<b>📅 Schedule:</b>\n"
    "<code>schedule for this week from 10 to 22</code>\n"
    "<code>schedule for next week from 10 to 22</code>\n\n"
    "<b>🔴 Booking:</b>\n"
    "<code>book friday at 15:00 for 3 hours</code>\n"
    "<code>book monday at 10:00 for 2 hours</code>\n\n"
    "<b>📋 Show:</b>\n"
    "<code>show schedule</code>\n\n"
    "Russian commands work too, e.g. "
    "<code>расписание на эту неделю с 10 до 22</code>."
)


def is_admin_user(chat_id: int) -> bool:
    """Check if chat is the admin."""
    return settings.is_admin(chat_id)


async def require_admin(message: Message) -> bool:
    """Check admin access and send error if not admin."""
    if not is_admin_user(message.chat.id):
        logger.warning(f"Access denied for chat {message.chat.id}")
        await message.answer(ACCESS_DENIED_TEXT)
        return False
    return True


# ========== Rendering ==========


def render_schedule_overview(schedule: ScheduleService, limit: int) -> str:
    """Stats plus per-day counts for the next `limit` scheduled days."""
    stats = schedule.get_stats()
    days = schedule.get_scheduled_days(limit)

    text = (
        "📊 <b>Statistics:</b>\n\n"
        f"• Total slots: {stats.total}\n"
        f"• 🟢 Available: {stats.available}\n"
        f"• 🔴 Booked: {stats.booked}\n"
        f"• ⛔ Blocked: {stats.blocked}\n\n"
    )

    if not days:
        return text + (
            "The schedule is empty. Create one with:\n"
            "<code>schedule for this week from 10 to 22</code>"
        )

    text += "📅 <b>Upcoming days:</b>\n\n"
    for date_key in days:
        slots = schedule.get_slots_for_date(date_key)
        available = sum(1 for s in slots if s.status == SlotStatus.AVAILABLE)
        booked = sum(1 for s in slots if s.status == SlotStatus.BOOKED)
        text += f"{format_date_key(date_key)}: 🟢 {available} / 🔴 {booked}\n"
    return text


# ========== Start Command ==========


@router.message(Command("start"))
async def cmd_start(message: Message, state: FSMContext):
    """Handle /start command."""
    await state.clear()
    if not await require_admin(message):
        return

    await message.answer(HELP_TEXT, reply_markup=get_start_keyboard())


@router.callback_query(F.data == "example_schedule")
async def show_schedule_example(callback: CallbackQuery):
    await callback.answer()
    await callback.message.answer(
        "Send: <code>schedule for this week from 10 to 22</code>"
    )


@router.callback_query(F.data == "example_booking")
async def show_booking_example(callback: CallbackQuery):
    await callback.answer()
    await callback.message.answer(
        "Send: <code>book friday at 15:00 for 3 hours</code>"
    )


@router.callback_query(F.data == "example_show")
async def show_schedule_button(callback: CallbackQuery, schedule: ScheduleService):
    if not is_admin_user(callback.message.chat.id):
        await callback.answer(ACCESS_DENIED_TEXT, show_alert=True)
        return

    await callback.answer()
    await callback.message.answer(
        render_schedule_overview(schedule, settings.scheduled_days_limit)
    )


# ========== Text Commands ==========


@router.message(StateFilter(None), F.text)
async def handle_text(message: Message, schedule: ScheduleService):
    """Dispatch free-text admin commands."""
    if not await require_admin(message):
        return

    text = message.text.strip()

    try:
        if is_show_command(text):
            await handle_show_schedule(message, schedule)
            return

        schedule_cmd = parse_schedule_command(text)
        if schedule_cmd:
            await handle_schedule_command(message, schedule, schedule_cmd)
            return

        booking_cmd = parse_booking_command(text)
        if booking_cmd:
            await handle_booking_command(message, schedule, booking_cmd)
            return
    except ValidationError as e:
        await message.answer(f"❌ {e}")
        return

    await message.answer(USAGE_TEXT)


async def handle_show_schedule(message: Message, schedule: ScheduleService):
    await message.answer(
        render_schedule_overview(schedule, settings.scheduled_days_limit)
    )


async def handle_schedule_command(
    message: Message, schedule: ScheduleService, cmd: ScheduleCommand
):
    """Fill a week (day off skipped) with hourly available slots."""
    date_keys = schedule.build_week_from_today(
        cmd.start_hour, cmd.end_hour, next_week=cmd.next_week
    )
    total = len(date_keys) * (cmd.end_hour - cmd.start_hour)
    logger.info(
        f"Week built: {len(date_keys)} days, {cmd.start_hour}-{cmd.end_hour}, "
        f"{total} slots"
    )

    days_text = "\n".join(format_date_key(k) for k in date_keys)
    await message.answer(
        "✅ Schedule created!\n\n"
        f"Week: {'next' if cmd.next_week else 'this'}\n"
        f"Time: {cmd.start_hour}:00 - {cmd.end_hour}:00\n"
        f"Slots added: {total}\n\n"
        f"Days:\n{days_text}"
    )


async def handle_booking_command(
    message: Message, schedule: ScheduleService, cmd: BookingCommand
):
    """Book hours on the next occurrence of a weekday."""
    if cmd.weekday is None:
        await message.answer(f"❌ Unknown day of week: \"{cmd.day_name}\"")
        return

    date_key, count = schedule.book_weekday(
        cmd.weekday, cmd.hour, cmd.duration, BOOKING_NOTE
    )

    if count == 0:
        await message.answer(
            f"❌ Nothing was booked. Make sure slots exist on {format_date_key(date_key)}."
        )
        return

    await message.answer(
        "✅ Booking created!\n\n"
        f"Date: {format_date_key(date_key)}\n"
        f"Time: {cmd.hour}:00 - {cmd.hour + cmd.duration}:00\n"
        f"Slots booked: {count}"
        + (f" of {cmd.duration}" if count < cmd.duration else "")
    )


def register_handlers(dp) -> None:
    """Register handlers with dispatcher."""
    dp.include_router(router)
