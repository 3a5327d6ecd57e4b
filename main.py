"""
Main entry point for the sauna scheduling service.
Serves the booking HTTP API and runs the Telegram admin bot (polling)
in one asyncio loop, sharing one in-memory schedule.
"""

import asyncio
import sys
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.fsm.storage.memory import MemoryStorage
from aiohttp import web

from api import create_app
from bot import register_admin_handlers, register_handlers
from config import settings
from db import ReservationLedger, ScheduleStore
from services import ScheduleService
from utils.logging_config import quiet_framework_loggers, setup_logging

# Root logger so library modules using logging.getLogger(__name__) are captured
logger = setup_logging(
    name="", log_level=settings.log_level, log_file="sauna.log", log_dir=settings.log_dir
)
if settings.log_level.upper() != "DEBUG":
    quiet_framework_loggers()

# Validate configuration
try:
    settings.validate_all_required()
except ValueError as e:
    logger.error(f"Configuration error: {e}")
    sys.exit(1)


def create_dispatcher(schedule: ScheduleService, ledger: ReservationLedger) -> Dispatcher:
    """
    Build the dispatcher with routers registered.

    `schedule` and `ledger` are passed as workflow data, so handlers
    receive them as keyword arguments.
    """
    dp = Dispatcher(storage=MemoryStorage(), schedule=schedule, ledger=ledger)
    register_admin_handlers(dp)
    register_handlers(dp)
    return dp


async def run_bot(dp: Dispatcher) -> Optional[Bot]:
    """Poll Telegram until stopped; returns None at once if no token is configured."""
    if not settings.bot_token:
        logger.warning("BOT_TOKEN not set, skipping Telegram bot")
        return None

    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    if not settings.admin_chat_id:
        logger.warning("ADMIN_CHAT_ID not set, every chat can manage the schedule")

    try:
        logger.info("Telegram bot is running in polling mode")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await bot.session.close()
        logger.info("Bot session closed")
    return bot


async def main() -> None:
    """Main async function: HTTP server plus bot polling."""
    store = ScheduleStore()
    schedule = ScheduleService(store)
    ledger = ReservationLedger(store)

    app = create_app(schedule, ledger)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host=settings.host, port=settings.port)

    try:
        await site.start()
        logger.info(f"HTTP API listening on http://{settings.host}:{settings.port}")

        dp = create_dispatcher(schedule, ledger)
        if await run_bot(dp) is None:
            # No bot: keep serving HTTP until interrupted
            await asyncio.Event().wait()

    except asyncio.CancelledError:
        logger.info("Service cancelled")
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        logger.info("Shutting down...")
        await runner.cleanup()
        logger.info("Shutdown complete")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        sys.exit(0)
