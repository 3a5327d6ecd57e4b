"""
Unit tests for the admin day/slot editor.
"""

import pytest

from bot.admin_handlers import (
    admin_add_standard_hours,
    admin_ask_hours,
    admin_clear_day,
    admin_delete_slot,
    admin_enter_hours,
    admin_router,
    admin_set_status,
    admin_view_day,
    admin_view_slot,
    cmd_admin,
    render_day,
    upcoming_days,
)
from bot.states import AdminStates
from conftest import STRANGER_ID, make_callback, make_message
from models.slot import SlotStatus

DAY = "2026-03-12"


@pytest.fixture
def day_with_slots(schedule):
    schedule.add_day_slots(DAY, 10, 13)
    return DAY


def test_render_day_lists_slots(schedule, day_with_slots):
    schedule.set_slot_status(f"{DAY}T11:00:00", SlotStatus.BOOKED, "Ann & Bob")

    text = render_day(DAY, schedule.get_slots_for_date(DAY))

    assert "12.03 (thu)" in text
    assert "🟢 10:00" in text
    assert "🔴 11:00 · Ann &amp; Bob" in text


def test_render_empty_day():
    assert "No slots" in render_day(DAY, [])


def test_upcoming_days_include_empty_days(schedule, day_with_slots):
    days = upcoming_days(schedule, limit=14)

    assert len(days) == 14
    assert days[0] == ("2026-03-10", 0)
    assert (DAY, 3) in days


@pytest.mark.asyncio
async def test_cmd_admin_lists_days(admin_only, schedule, fsm_state):
    message = make_message("/admin")

    await cmd_admin(message, fsm_state, schedule)

    message.answer.assert_called_once()
    assert "Pick a day" in message.answer.call_args[0][0]


@pytest.mark.asyncio
async def test_cmd_admin_denied(admin_only, schedule, fsm_state):
    message = make_message("/admin", chat_id=STRANGER_ID)

    await cmd_admin(message, fsm_state, schedule)

    assert "denied" in message.answer.call_args[0][0].lower()


@pytest.mark.asyncio
async def test_view_day(admin_only, schedule, day_with_slots):
    callback = make_callback(f"day|{DAY}")

    await admin_view_day(callback, schedule)

    callback.message.edit_text.assert_called_once()
    assert "12.03 (thu)" in callback.message.edit_text.call_args[0][0]
    callback.answer.assert_called_once()


@pytest.mark.asyncio
async def test_view_missing_slot(admin_only, schedule, day_with_slots):
    callback = make_callback(f"slot|{DAY}T20:00:00")

    await admin_view_slot(callback, schedule)

    assert callback.answer.call_args.kwargs["show_alert"] is True


@pytest.mark.asyncio
async def test_set_status(admin_only, schedule, day_with_slots):
    callback = make_callback(f"status|{DAY}T10:00:00|blocked")

    await admin_set_status(callback, schedule)

    slot = schedule.store.get_slot(f"{DAY}T10:00:00")
    assert slot.status == SlotStatus.BLOCKED
    callback.message.edit_text.assert_called_once()


@pytest.mark.asyncio
async def test_set_invalid_status(admin_only, schedule, day_with_slots):
    callback = make_callback(f"status|{DAY}T10:00:00|gone")

    await admin_set_status(callback, schedule)

    assert callback.answer.call_args[0][0] == "Invalid status"
    assert schedule.store.get_slot(f"{DAY}T10:00:00").status == SlotStatus.AVAILABLE


@pytest.mark.asyncio
async def test_delete_slot(admin_only, schedule, day_with_slots):
    callback = make_callback(f"del|{DAY}T11:00:00")

    await admin_delete_slot(callback, schedule)

    assert schedule.store.get_slot(f"{DAY}T11:00:00") is None
    assert len(schedule.get_slots_for_date(DAY)) == 2


@pytest.mark.asyncio
async def test_clear_day(admin_only, schedule, day_with_slots):
    callback = make_callback(f"clear|{DAY}")

    await admin_clear_day(callback, schedule)

    assert schedule.get_slots_for_date(DAY) == []
    assert callback.answer.call_args[0][0] == "Removed 3 slots"


@pytest.mark.asyncio
async def test_standard_hours_keep_bookings(admin_only, schedule):
    schedule.add_day_slots(DAY, 10, 11)
    schedule.book_range(DAY, 10, 1, "Ann")
    callback = make_callback(f"std|{DAY}")

    await admin_add_standard_hours(callback, schedule)

    slots = schedule.get_slots_for_date(DAY)
    assert len(slots) == 12
    assert slots[0].status == SlotStatus.BOOKED
    assert slots[0].note == "Ann"
    assert callback.answer.call_args[0][0] == "Added 11 slots"


@pytest.mark.asyncio
async def test_callback_denied(admin_only, schedule, day_with_slots):
    callback = make_callback(f"clear|{DAY}", chat_id=STRANGER_ID)

    await admin_clear_day(callback, schedule)

    assert callback.answer.call_args.kwargs["show_alert"] is True
    assert len(schedule.get_slots_for_date(DAY)) == 3


class TestSpecificHours:
    @pytest.mark.asyncio
    async def test_hours_flow(self, admin_only, schedule, fsm_state, day_with_slots):
        callback = make_callback(f"hours|{DAY}")
        await admin_ask_hours(callback, fsm_state)

        assert await fsm_state.get_state() == AdminStates.entering_hours.state
        assert (await fsm_state.get_data())["date_key"] == DAY

        message = make_message("12-15")
        await admin_enter_hours(message, fsm_state, schedule)

        assert await fsm_state.get_state() is None
        assert message.answer.call_args_list[0][0][0] == "✅ Added 2 slots."
        hours = [s.datetime[11:13] for s in schedule.get_slots_for_date(DAY)]
        assert hours == ["10", "11", "12", "13", "14"]

    @pytest.mark.asyncio
    async def test_bad_hours_keep_state(self, admin_only, schedule, fsm_state):
        await fsm_state.set_state(AdminStates.entering_hours)
        await fsm_state.update_data(date_key=DAY)
        message = make_message("ten to noon")

        await admin_enter_hours(message, fsm_state, schedule)

        assert message.answer.call_args[0][0].startswith("❌")
        assert await fsm_state.get_state() == AdminStates.entering_hours.state
        assert schedule.get_slots_for_date(DAY) == []

    @pytest.mark.asyncio
    async def test_expired_session(self, admin_only, schedule, fsm_state):
        await fsm_state.set_state(AdminStates.entering_hours)
        message = make_message("10 11")

        await admin_enter_hours(message, fsm_state, schedule)

        assert "expired" in message.answer.call_args[0][0]
        assert await fsm_state.get_state() is None


class TestCallbackFilters:
    @pytest.mark.asyncio
    async def test_callback_without_data_matches_no_handler(self):
        callback = make_callback("")
        callback.data = None

        for handler in admin_router.callback_query.handlers:
            matched, _ = await handler.check(callback)
            assert not matched

    @pytest.mark.asyncio
    async def test_day_callback_routes_to_day_view(self):
        callback = make_callback(f"day|{DAY}")

        matched = [
            handler.callback
            for handler in admin_router.callback_query.handlers
            if (await handler.check(callback))[0]
        ]

        assert matched == [admin_view_day]
