"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage
from aiogram.types import CallbackQuery, Message

from config import settings
from db.reservation_ledger import ReservationLedger
from db.schedule_store import ScheduleStore
from services.scheduling import ScheduleService

# Tuesday noon; 2026-03-15 is the following Sunday
FIXED_NOW = datetime(2026, 3, 10, 12, 0, 0)
ADMIN_ID = 123456789
STRANGER_ID = 999999999


@pytest.fixture
def store():
    return ScheduleStore()


@pytest.fixture
def schedule(store):
    """Scheduling service with a frozen clock."""
    return ScheduleService(store, clock=lambda: FIXED_NOW)


@pytest.fixture
def ledger(store):
    return ReservationLedger(store)


@pytest.fixture
def admin_only():
    """Restrict admin commands to ADMIN_ID."""
    with patch.object(settings, "admin_chat_id", ADMIN_ID):
        yield settings


@pytest.fixture
def fsm_state():
    """Real FSM context backed by memory storage."""
    key = StorageKey(bot_id=1, chat_id=ADMIN_ID, user_id=ADMIN_ID)
    return FSMContext(storage=MemoryStorage(), key=key)


def make_message(text: str = "", chat_id: int = ADMIN_ID):
    """Create mock message."""
    message = MagicMock(spec=Message)
    message.text = text
    message.chat = MagicMock()
    message.chat.id = chat_id
    message.answer = AsyncMock()
    message.edit_text = AsyncMock()
    return message


def make_callback(data: str, chat_id: int = ADMIN_ID):
    """Create mock callback query."""
    callback = MagicMock(spec=CallbackQuery)
    callback.data = data
    callback.message = make_message(chat_id=chat_id)
    callback.answer = AsyncMock()
    return callback
